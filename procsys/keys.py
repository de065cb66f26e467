"""Limits of the in-kernel key management and retention facility."""

from __future__ import annotations

from .common import DEFAULT_ROOT, PathLike, read_value, sys_path, write_value


def _read(name: str, root: PathLike) -> int:
    return read_value(sys_path(f"kernel/keys/{name}", root), int)


def _write(name: str, value: int, root: PathLike) -> None:
    write_value(sys_path(f"kernel/keys/{name}", root), value)


def gc_delay(root: PathLike = DEFAULT_ROOT) -> int:
    """Seconds after which revoked and expired keys are garbage collected."""
    return _read("gc_delay", root)


def persistent_keyring_expiry(root: PathLike = DEFAULT_ROOT) -> int:
    """Seconds to which a persistent keyring's expiry timer is reset on access."""
    return _read("persistent_keyring_expiry", root)


def maxbytes(root: PathLike = DEFAULT_ROOT) -> int:
    """Maximum payload bytes a non-root user may hold in keys."""
    return _read("maxbytes", root)


def set_maxbytes(nbytes: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the maximum payload bytes a non-root user may hold in keys."""
    _write("maxbytes", nbytes, root)


def maxkeys(root: PathLike = DEFAULT_ROOT) -> int:
    """Maximum number of keys a non-root user may own."""
    return _read("maxkeys", root)


def set_maxkeys(keys: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the maximum number of keys a non-root user may own."""
    _write("maxkeys", keys, root)


def root_maxbytes(root: PathLike = DEFAULT_ROOT) -> int:
    """Maximum payload bytes the root user may hold in keys."""
    return _read("root_maxbytes", root)


def set_root_maxbytes(nbytes: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the maximum payload bytes the root user may hold in keys."""
    _write("root_maxbytes", nbytes, root)


def root_maxkeys(root: PathLike = DEFAULT_ROOT) -> int:
    """Maximum number of keys the root user may own."""
    return _read("root_maxkeys", root)


def set_root_maxkeys(keys: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the maximum number of keys the root user may own."""
    _write("root_maxkeys", keys, root)