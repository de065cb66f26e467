"""Kernel variables related to filesystems."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import List

from .common import DEFAULT_ROOT, PathLike, read_value, sys_path, write_value

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


def _fields(s: str, count: int) -> List[str]:
    fields = s.split()
    if len(fields) < count:
        raise ValueError(f"expected {count} fields, found {len(fields)}")
    return fields[:count]


def _unsigned(text: str, limit: int) -> int:
    if not _UNSIGNED.fullmatch(text) or int(text) > limit:
        raise ValueError(f"Failed to parse {text!r} as an unsigned integer")
    return int(text)


@dataclass(frozen=True)
class DEntryState:
    """Status of the directory cache."""

    nr_dentry: int
    nr_unused: int
    age_limit: timedelta
    want_pages: bool

    @classmethod
    def parse(cls, s: str) -> "DEntryState":
        """Parse the content of ``fs/dentry-state``."""
        nr_dentry, nr_unused, age, want = (
            _unsigned(text, _U32_MAX) for text in _fields(s, 4)
        )
        return cls(
            nr_dentry=nr_dentry,
            nr_unused=nr_unused,
            age_limit=timedelta(seconds=age),
            want_pages=want != 0,
        )


@dataclass(frozen=True)
class FileState:
    """Counts of file handles."""

    allocated: int
    free: int
    max: int

    @classmethod
    def parse(cls, s: str) -> "FileState":
        """Parse the content of ``fs/file-nr``."""
        allocated, free, maximum = (
            _unsigned(text, _U64_MAX) for text in _fields(s, 3)
        )
        return cls(allocated=allocated, free=free, max=maximum)


def dentry_state(root: PathLike = DEFAULT_ROOT) -> DEntryState:
    """The status of the directory cache."""
    return read_value(sys_path("fs/dentry-state", root), DEntryState.parse)


def file_max(root: PathLike = DEFAULT_ROOT) -> int:
    """The system-wide limit on the number of open files."""
    return read_value(sys_path("fs/file-max", root), int)


def set_file_max(max_files: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the system-wide limit on the number of open files."""
    write_value(sys_path("fs/file-max", root), max_files)


def file_nr(root: PathLike = DEFAULT_ROOT) -> FileState:
    """Allocated, free and maximum file handles."""
    return read_value(sys_path("fs/file-nr", root), FileState.parse)


def max_user_watches(root: PathLike = DEFAULT_ROOT) -> int:
    """Per-user limit on descriptors registered across all epoll instances."""
    return read_value(sys_path("fs/epoll/max_user_watches", root), int)


def set_max_user_watches(val: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the per-user limit on descriptors registered with epoll."""
    write_value(sys_path("fs/epoll/max_user_watches", root), val)