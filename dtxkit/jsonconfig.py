"""Navigable, editable view of a JSON document used for node configuration."""

import copy
import json
import math

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


class ConfigError(Exception):
    """Raised for unreadable documents and for values of the wrong kind."""


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


_MISSING = _Missing()


def _strip_comments(text: str) -> str:
    """Replace // and /* */ comments outside string literals with blanks."""
    out = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        c = text[i]
        if in_string:
            out.append(c)
            if c == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if c == '"':
                in_string = False
            i += 1
        elif c == '"':
            in_string = True
            out.append(c)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            out.append(" ")
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ConfigError(f"unterminated comment (offset={i})")
            out.append(" ")
            i = end + 2
        else:
            out.append(c)
            i += 1
    return "".join(out)


def _parse_int(literal: str):
    value = int(literal)
    if _INT64_MIN <= value <= _UINT64_MAX:
        return value
    return float(literal)


def _reject_constant(name: str):
    raise ConfigError(f"invalid value {name}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _to_node(value):
    """Turn a Python value or JsonConfig into a detached document node."""
    if isinstance(value, JsonConfig):
        if not (value.is_array() or value.is_dict()):
            raise ConfigError(f"{value.path} is neither an array nor a dict")
        return copy.deepcopy(value._value)
    if isinstance(value, bool) or isinstance(value, str):
        return value
    if _is_int(value):
        if not _INT64_MIN <= value <= _UINT64_MAX:
            raise ConfigError(f"integer {value} does not fit in 64 bits")
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConfigError("non-finite numbers cannot be stored")
        return value
    if isinstance(value, (list, dict)):
        return copy.deepcopy(value)
    raise ConfigError(f"unsupported value type {type(value).__name__}")


class JsonConfig:
    """A position inside a JSON document; child views share the document."""

    def __init__(self, value=_MISSING, path: str = ""):
        self._value = value
        self._path = path

    def __repr__(self) -> str:
        return f"JsonConfig(path={self._path!r}, value={self._value!r})"

    @property
    def path(self) -> str:
        return self._path

    # Construction and serialisation

    @staticmethod
    def empty_array(path: str) -> "JsonConfig":
        return JsonConfig([], path)

    @staticmethod
    def empty_dict(path: str) -> "JsonConfig":
        return JsonConfig({}, path)

    @staticmethod
    def load(text: str, path: str) -> "JsonConfig":
        """Parse JSON text that may contain comments."""
        try:
            value = json.loads(
                _strip_comments(text),
                parse_int=_parse_int,
                parse_constant=_reject_constant,
            )
        except json.JSONDecodeError as exc:
            raise ConfigError(
                f"error parsing config: {exc.msg} (offset={exc.pos})"
            ) from exc
        return JsonConfig(value, path)

    @staticmethod
    def load_file(path: str) -> "JsonConfig":
        try:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            raise ConfigError(f"could not open {path}") from exc
        return JsonConfig.load(text, f"<{path}>")

    def dump(self) -> str:
        """Serialise the current value compactly."""
        self._require_exists()
        return json.dumps(self._value, separators=(",", ":"), ensure_ascii=False)

    def dump_file(self, path: str) -> None:
        text = self.dump()
        try:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as exc:
            raise ConfigError(f"could not open {path}") from exc

    # Type predicates

    def exists(self) -> bool:
        return self._value is not _MISSING

    def is_bool(self) -> bool:
        return isinstance(self._value, bool)

    def is_int64(self) -> bool:
        return _is_int(self._value) and _INT64_MIN <= self._value <= _INT64_MAX

    def is_uint64(self) -> bool:
        return _is_int(self._value) and 0 <= self._value <= _UINT64_MAX

    def is_double(self) -> bool:
        return isinstance(self._value, float)

    def is_str(self) -> bool:
        return isinstance(self._value, str)

    def is_array(self) -> bool:
        return isinstance(self._value, list)

    def is_dict(self) -> bool:
        return isinstance(self._value, dict)

    # Typed access

    def _require_exists(self) -> None:
        if not self.exists():
            raise ConfigError(f"{self._path} does not exist")

    def _typed(self, check, description: str, args):
        if len(args) > 1:
            raise TypeError("at most one default value may be given")
        if args and not self.exists():
            return args[0]
        self._require_exists()
        if not check():
            raise ConfigError(f"{self._path} is not {description}")
        return self._value

    def get_bool(self, *args) -> bool:
        return self._typed(self.is_bool, "a boolean value", args)

    def get_int64(self, *args) -> int:
        return self._typed(self.is_int64, "an Int64 number", args)

    def get_uint64(self, *args) -> int:
        return self._typed(self.is_uint64, "an Uint64 number", args)

    def get_double(self, *args) -> float:
        return self._typed(self.is_double, "a floating point number", args)

    def get_str(self, *args) -> str:
        return self._typed(self.is_str, "a string", args)

    # Containers

    def size(self) -> int:
        if not self.is_array():
            raise ConfigError(f"{self._path} is not an array")
        return len(self._value)

    def get(self, key) -> "JsonConfig":
        """Return the child at an array index (int) or dict key (str)."""
        if _is_int(key):
            if not self.is_array():
                raise ConfigError(f"{self._path} is not an array")
            child_path = f"{self._path}[{key}]"
            if not 0 <= key < len(self._value):
                return JsonConfig(_MISSING, child_path)
            return JsonConfig(self._value[key], child_path)
        if isinstance(key, str):
            child_path = f'{self._path}["{key}"]'
            if not self.exists():
                return JsonConfig(_MISSING, child_path)
            if not self.is_dict():
                raise ConfigError(f"{self._path} is not a dict")
            return JsonConfig(self._value.get(key, _MISSING), child_path)
        raise TypeError("key must be an int index or a str key")

    def keys(self) -> list:
        if not self.is_dict():
            raise ConfigError(f"{self._path} is not a dict")
        return list(self._value)

    def push_back(self, value) -> "JsonConfig":
        """Append a value to this array; returns self for chaining."""
        if not self.is_array():
            raise ConfigError(f"{self._path} is not an array")
        self._value.append(_to_node(value))
        return self

    def insert(self, key: str, value) -> "JsonConfig":
        """Add a member to this dict; returns self for chaining."""
        if not self.is_dict():
            raise ConfigError(f"{self._path} is not a dict")
        if not isinstance(key, str):
            raise TypeError("dict keys must be strings")
        self._value[key] = _to_node(value)
        return self