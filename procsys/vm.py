"""Virtual memory tuning: buffer and cache management."""

from __future__ import annotations

import enum
import re

from .common import DEFAULT_ROOT, PathLike, read_value, sys_path, write_value

_INTEGER = re.compile(r"[+-]?[0-9]+")


class DropCache(enum.IntEnum):
    """What the kernel should drop when writing to ``vm/drop_caches``."""

    DEFAULT = 0
    PAGE_CACHE = 1
    INODES = 2
    ALL = 3
    DISABLE = 4

    def __str__(self) -> str:
        return str(int(self))

    @classmethod
    def parse(cls, s: str) -> "DropCache":
        """Parse the numeric form of a drop-cache value."""
        if not _INTEGER.fullmatch(s):
            raise ValueError("Fail to parse drop cache")
        try:
            return cls(int(s))
        except ValueError:
            raise ValueError("Unknown drop cache value") from None


def admin_reserve_kbytes(root: PathLike = DEFAULT_ROOT) -> int:
    """Free memory reserved for users with CAP_SYS_ADMIN, in kilobytes."""
    return read_value(sys_path("vm/admin_reserve_kbytes", root), int)


def set_admin_reserve_kbytes(kbytes: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the memory reserved for users with CAP_SYS_ADMIN, in kilobytes."""
    write_value(sys_path("vm/admin_reserve_kbytes", root), kbytes)


def compact_memory(root: PathLike = DEFAULT_ROOT) -> None:
    """Ask the kernel to compact all memory zones."""
    write_value(sys_path("vm/compact_memory", root), 1)


def drop_caches(drop: DropCache, root: PathLike = DEFAULT_ROOT) -> None:
    """Make the kernel drop clean caches, dentries and inodes from memory."""
    write_value(sys_path("vm/drop_caches", root), DropCache(drop))


def max_map_count(root: PathLike = DEFAULT_ROOT) -> int:
    """The maximum number of memory map areas a process may have."""
    return read_value(sys_path("vm/max_map_count", root), int)


def set_max_map_count(count: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the maximum number of memory map areas a process may have."""
    write_value(sys_path("vm/max_map_count", root), count)