"""Registered formats of the miscellaneous binary format handler."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from .common import (
    DEFAULT_ROOT,
    InternalError,
    NotFoundError,
    PathLike,
    PermissionDeniedError,
    ProcError,
    read_file,
    read_value,
    sys_path,
)

_HEX = re.compile(r"\+?[0-9A-Fa-f]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")
_PSEUDO_ENTRIES = frozenset({"status", "register"})


def enabled(root: PathLike = DEFAULT_ROOT) -> bool:
    """Whether the miscellaneous binary format system is enabled."""
    return read_value(sys_path("fs/binfmt_misc/status", root)) == "enabled"


def hex_to_bytes(hex_str: str) -> bytes:
    """Decode a string of two-digit hexadecimal numbers."""
    if len(hex_str) % 2:
        raise InternalError(f"Hex string {hex_str!r} has non-even length")
    pairs = [hex_str[start:start + 2] for start in range(0, len(hex_str), 2)]
    for pair in pairs:
        if not _HEX.fullmatch(pair):
            raise InternalError(f"Failed to parse {pair!r} as a hexadecimal byte")
    return bytes(int(pair, 16) for pair in pairs)


def _parse_offset(text: str) -> int:
    if not _UNSIGNED.fullmatch(text) or int(text) > 0xFF:
        raise InternalError(f"Failed to parse {text!r} as an offset")
    return int(text)


class BinFmtFlags(enum.IntFlag):
    """Flags that change how an interpreter is invoked."""

    P = 0x01
    """Preserve argv[0]."""
    O = 0x02  # noqa: E741
    """Pass an open descriptor of the binary instead of its path."""
    C = 0x04
    """Compute credentials from the binary rather than the interpreter."""
    F = 0x08
    """Open the interpreter as soon as the format is installed."""

    @classmethod
    def parse(cls, s: str) -> "BinFmtFlags":
        """Collect the flag letters in ``s``; other characters are ignored."""
        result = cls(0)
        for letter in s:
            if letter in cls.__members__:
                result |= cls[letter]
        return result


@dataclass(frozen=True)
class BinFmtExtension:
    """A format matched by file extension (without the period)."""

    extension: str


@dataclass(frozen=True)
class BinFmtMagic:
    """A format matched by a magic byte string at an offset."""

    offset: int = 0
    magic: bytes = b""
    mask: bytes = b""


BinFmtData = Union[BinFmtExtension, BinFmtMagic]


@dataclass
class BinFmtEntry:
    """A registered binary format."""

    name: str
    enabled: bool = False
    interpreter: str = ""
    flags: BinFmtFlags = BinFmtFlags(0)
    data: BinFmtData = field(default_factory=BinFmtMagic)

    @classmethod
    def from_string(cls, name: str, data: str) -> "BinFmtEntry":
        """Parse the content of a format's file."""
        is_enabled = False
        interpreter = ""
        extension = None
        offset = 0
        magic = b""
        mask = b""
        flags = BinFmtFlags(0)

        for line in data.splitlines():
            if line == "enabled":
                is_enabled = True
            elif line.startswith("interpreter "):
                interpreter = line[len("interpreter "):]
            elif line.startswith("flags:"):
                flags = BinFmtFlags.parse(line[len("flags:"):])
            elif line.startswith("extension ."):
                extension = line[len("extension ."):]
            elif line.startswith("offset "):
                offset = _parse_offset(line[len("offset "):])
            elif line.startswith("magic "):
                magic = hex_to_bytes(line[len("magic "):])
            elif line.startswith("mask "):
                mask = hex_to_bytes(line[len("mask "):])

        if magic and not mask:
            mask = b"\xff" * len(magic)

        entry_data: BinFmtData
        if extension is not None:
            entry_data = BinFmtExtension(extension)
        else:
            entry_data = BinFmtMagic(offset=offset, magic=magic, mask=mask)
        return cls(
            name=name,
            enabled=is_enabled,
            interpreter=interpreter,
            flags=flags,
            data=entry_data,
        )


def _directory_entries(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir())
    except FileNotFoundError as err:
        raise NotFoundError(f"{directory} not found", directory) from err
    except PermissionError as err:
        raise PermissionDeniedError(
            f"permission denied for {directory}", directory
        ) from err
    except OSError as err:
        raise ProcError(
            f"I/O error on {directory}: {err.strerror or err}", directory
        ) from err


def list_entries(root: PathLike = DEFAULT_ROOT) -> List[BinFmtEntry]:
    """All registered binary formats, sorted by name."""
    directory = sys_path("fs/binfmt_misc", root)
    return [
        BinFmtEntry.from_string(path.name, read_file(path))
        for path in _directory_entries(directory)
        if path.name not in _PSEUDO_ENTRIES
    ]