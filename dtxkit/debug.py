"""Per-thread file loggers and a readable stack trace."""

import os
import threading
import traceback
from typing import Optional

DEBUG = 0
INFO = 1
WARNING = 2
ERROR = 3
FATAL = 4


class FatalLogError(Exception):
    """Raised after a message at FATAL level or above has been written."""


def strip_basename(path: str) -> str:
    """Return the part of path after the last '/'."""
    return path.rpartition("/")[2]


def format_stack_trace(max_frames: int = 63) -> str:
    """Describe the caller's stack, innermost frame first."""
    if max_frames < 0:
        raise ValueError("max_frames must be non-negative")
    frames = traceback.extract_stack()[:-1]
    frames = frames[::-1][:max_frames]
    lines = ["stack trace:\n"]
    if not frames:
        lines.append("  <empty, possibly corrupt>\n")
    for frame in frames:
        lines.append(f"  {frame.filename} : {frame.name}+{frame.lineno}\n")
    return "".join(lines)


class ThreadLogger:
    """Appends messages to '<tid>_log.txt', one file per thread.

    The tid is a logical thread id; when omitted, the id of the calling
    physical thread is used.
    """

    def __init__(
        self,
        file: str,
        line: int,
        level: int,
        tid: Optional[int] = None,
        *,
        min_level: int = INFO,
        directory: str = ".",
    ):
        self.file = file
        self.line = line
        self.level = level
        self.tid = threading.get_ident() if tid is None else tid
        self.min_level = min_level
        self.directory = directory

    def log_path(self) -> str:
        return os.path.join(self.directory, f"{self.tid}_log.txt")

    def write(self, message: str) -> None:
        """Append the message if its level passes; raise after a fatal one."""
        if self.level < self.min_level:
            return
        record = f"[{strip_basename(self.file)}:{self.line}] {message}\n"
        with open(self.log_path(), "a", encoding="utf-8") as fh:
            fh.write(record)
        if self.level >= FATAL:
            raise FatalLogError(message)