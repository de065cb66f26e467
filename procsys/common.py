"""Shared helpers for reading and writing kernel variables under /proc/sys."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, TypeVar, Union

T = TypeVar("T")
PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_ROOT = Path("/proc/sys")


class ProcError(Exception):
    """Base error for failures while accessing kernel variables."""

    def __init__(self, message: str, path: PathLike | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class NotFoundError(ProcError):
    """The requested kernel variable does not exist."""


class PermissionDeniedError(ProcError):
    """The kernel variable exists but access to it was refused."""


class InternalError(ProcError):
    """The content of a kernel variable could not be understood."""


def sys_path(relative: str, root: PathLike = DEFAULT_ROOT) -> Path:
    """Return the path of a kernel variable relative to the sysctl root."""
    return Path(root) / relative


@contextmanager
def _os_errors(path: PathLike) -> Iterator[None]:
    try:
        yield
    except FileNotFoundError as err:
        raise NotFoundError(f"{path} not found", path) from err
    except PermissionError as err:
        raise PermissionDeniedError(f"permission denied for {path}", path) from err
    except OSError as err:
        raise ProcError(f"I/O error on {path}: {err.strerror or err}", path) from err


def read_file(path: PathLike) -> str:
    """Read the whole content of a kernel variable file as text."""
    with _os_errors(path):
        return Path(path).read_text()


def read_value(path: PathLike, parser: Callable[[str], T] = str) -> T:
    """Read a kernel variable, strip surrounding whitespace and parse it."""
    text = read_file(path).strip()
    try:
        return parser(text)
    except ValueError as err:
        raise InternalError(f"Failed to parse {path}: {err}", path) from err


def write_value(path: PathLike, value: Any) -> None:
    """Write the textual form of ``value`` to a kernel variable file."""
    with _os_errors(path):
        with open(path, "w") as handle:
            handle.write(str(value))