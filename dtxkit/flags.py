"""Compile-time switches of the transaction protocol, gathered as settings."""

import enum
from dataclasses import dataclass


class FlushMode(enum.IntEnum):
    """How remote persistency is guaranteed."""

    NONE = 0
    FULL = 1
    SELECTIVE = 2


@dataclass(frozen=True)
class ProtocolFlags:
    """Protocol and benchmark switches with their default settings."""

    # Largest data item: 8 smallbank, 40 tatp, 664 tpcc, 40 micro-benchmark.
    max_item_size: int = 664

    # Read and lock read-write data together.
    read_lock: bool = True
    # Commit remote replicas coalescently instead of separately.
    commit_together: bool = True
    # Read read-only data from backups.
    read_backup: bool = False
    rflush: FlushMode = FlushMode.SELECTIVE
    # Abort (rather than wait) when data is invisible.
    inv_abort: bool = True

    # Localized optimisations, only with coalescent commit.
    local_lock: bool = False
    local_validation: bool = False

    # Hash table for localized validation (tatp 5/4/10000000,
    # smallbank 2/1/100000, tpcc 11/72/100000).
    max_table_num: int = 11
    slot_per_bkt: int = 72
    num_bkt: int = 100000

    # Cache remote addresses locally.
    use_local_addr_cache: bool = False
    # Locks block reads instead of using visibility control.
    lock_refuse_read_ro: bool = False
    lock_refuse_read_rw: bool = False

    # Micro-benchmark switches: wait on locks, busily wait for visibility.
    lock_wait: bool = False
    inv_busy_wait: bool = False

    def __post_init__(self):
        for name in ("max_item_size", "max_table_num", "slot_per_bkt", "num_bkt"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        object.__setattr__(self, "rflush", FlushMode(self.rflush))


DEFAULT_FLAGS = ProtocolFlags()