"""Information about the kernel random number generator."""

from __future__ import annotations

from .common import (
    DEFAULT_ROOT,
    NotFoundError,
    PathLike,
    read_value,
    sys_path,
    write_value,
)


def _path(name: str, root: PathLike):
    return sys_path(f"kernel/random/{name}", root)


def entropy_avail(root: PathLike = DEFAULT_ROOT) -> int:
    """Available entropy, in bits."""
    return read_value(_path("entropy_avail", root), int)


def poolsize(root: PathLike = DEFAULT_ROOT) -> int:
    """Size of the entropy pool, in bits."""
    return read_value(_path("poolsize", root), int)


def read_wakeup_threshold(root: PathLike = DEFAULT_ROOT) -> int:
    """Entropy bits needed to wake readers of /dev/random.

    Falls back to ``write_wakeup_threshold`` when the read threshold
    file does not exist.
    """
    try:
        return read_value(_path("read_wakeup_threshold", root), int)
    except NotFoundError:
        return read_value(_path("write_wakeup_threshold", root), int)


def write_wakeup_threshold(new_value: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the entropy level below which writers to /dev/random are woken."""
    write_value(_path("write_wakeup_threshold", root), new_value)


def uuid(root: PathLike = DEFAULT_ROOT) -> str:
    """A freshly generated random UUID."""
    return read_value(_path("uuid", root))


def boot_id(root: PathLike = DEFAULT_ROOT) -> str:
    """The UUID generated at boot."""
    return read_value(_path("boot_id", root))