"""Global kernel information and tuning values."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .common import (
    DEFAULT_ROOT,
    PathLike,
    ProcError,
    read_value,
    sys_path,
    write_value,
)

THREADS_MIN = 20
"""The minimum value accepted by ``kernel/threads-max`` on Linux 4.1 or later."""

THREADS_MAX = 0x3FFF_FFFF
"""The maximum value accepted by ``kernel/threads-max`` on Linux 4.1 or later."""

_UNSIGNED = re.compile(r"\+?[0-9]+")
_DIGITS = frozenset("0123456789")


def _parse_unsigned(text: str, limit: int, message: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(message)
    number = int(text)
    if number > limit:
        raise ValueError(message)
    return number


@dataclass(frozen=True, order=True)
class Version:
    """A kernel version in major.minor.patch form."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, s: str) -> "Version":
        """Parse a version string; anything after the numeric part is ignored."""
        end = next(
            (pos for pos, ch in enumerate(s) if ch != "." and ch not in _DIGITS),
            len(s),
        )
        parts = s[:end].split(".")
        if len(parts) < 2:
            raise ValueError("Missing minor version component")
        if len(parts) < 3:
            raise ValueError("Missing patch version component")
        return cls(
            _parse_unsigned(parts[0], 0xFF, "Failed to parse major version"),
            _parse_unsigned(parts[1], 0xFF, "Failed to parse minor version"),
            _parse_unsigned(parts[2], 0xFFFF, "Failed to parse patch version"),
        )

    @classmethod
    def current(cls, root: PathLike = DEFAULT_ROOT) -> "Version":
        """The version of the running kernel, from ``kernel/osrelease``."""
        return read_value(sys_path("kernel/osrelease", root), cls.parse)


@dataclass(frozen=True)
class SemaphoreLimits:
    """System V semaphore limits from ``kernel/sem``."""

    semmsl: int
    semmns: int
    semopm: int
    semmni: int

    @classmethod
    def parse(cls, s: str) -> "SemaphoreLimits":
        """Parse the four whitespace-separated limits."""
        names = ("SEMMSL", "SEMMNS", "SEMOPM", "SEMMNI")
        fields = s.split()
        for position, name in enumerate(names):
            if position >= len(fields):
                raise ValueError(f"Missing {name}")
        values = [
            _parse_unsigned(text, 2**64 - 1, f"Failed to parse {name}")
            for name, text in zip(names, fields)
        ]
        return cls(*values)

    @classmethod
    def current(cls, root: PathLike = DEFAULT_ROOT) -> "SemaphoreLimits":
        """The semaphore limits of the running kernel."""
        return read_value(sys_path("kernel/sem", root), cls.parse)


class AllowedFunctions(enum.IntFlag):
    """SysRq functions that may be enabled individually."""

    ENABLE_CONTROL_LOG_LEVEL = 2
    ENABLE_CONTROL_KEYBOARD = 4
    ENABLE_DEBUGGING_DUMPS = 8
    ENABLE_SYNC_COMMAND = 16
    ENABLE_REMOUNT_READ_ONLY = 32
    ENABLE_SIGNALING_PROCESSES = 64
    ALLOW_REBOOT_POWEROFF = 128
    ALLOW_NICING_REAL_TIME_TASKS = 256


_ALL_FUNCTIONS = sum(int(member) for member in AllowedFunctions)


@dataclass(frozen=True)
class SysRq:
    """Which functions the SysRq key may invoke.

    ``SysRq()`` disables it entirely, ``SysRq(enable_all=True)`` enables every
    function, and ``SysRq(functions=...)`` allows a selection.
    """

    enable_all: bool = False
    functions: AllowedFunctions = AllowedFunctions(0)

    def to_number(self) -> int:
        """The numeric value understood by ``kernel/sysrq``."""
        return 1 if self.enable_all else int(self.functions)

    @classmethod
    def parse(cls, s: str) -> "SysRq":
        """Parse the numeric form of ``kernel/sysrq``."""
        number = _parse_unsigned(s, 0xFFFF, f"Failed to parse sysrq value {s!r}")
        if number == 0:
            return cls()
        if number == 1:
            return cls(enable_all=True)
        if number & ~_ALL_FUNCTIONS:
            raise ValueError("Invalid value")
        return cls(functions=AllowedFunctions(number))


def pid_max(root: PathLike = DEFAULT_ROOT) -> int:
    """The maximum process ID number."""
    return read_value(sys_path("kernel/pid_max", root), int)


def shmall(root: PathLike = DEFAULT_ROOT) -> int:
    """System-wide limit on the total number of pages of System V shared memory."""
    return read_value(sys_path("kernel/shmall", root), int)


def shmmax(root: PathLike = DEFAULT_ROOT) -> int:
    """Limit on the size of a System V shared memory segment."""
    return read_value(sys_path("kernel/shmmax", root), int)


def set_shmmax(new_value: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the limit on the size of a System V shared memory segment."""
    write_value(sys_path("kernel/shmmax", root), new_value)


def shmmni(root: PathLike = DEFAULT_ROOT) -> int:
    """System-wide maximum number of System V shared memory segments."""
    return read_value(sys_path("kernel/shmmni", root), int)


def sysrq(root: PathLike = DEFAULT_ROOT) -> SysRq:
    """Functions currently allowed to be invoked by the SysRq key."""
    return read_value(sys_path("kernel/sysrq", root), SysRq.parse)


def set_sysrq(new: SysRq, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the functions allowed to be invoked by the SysRq key."""
    write_value(sys_path("kernel/sysrq", root), new.to_number())


def threads_max(root: PathLike = DEFAULT_ROOT) -> int:
    """System-wide limit on the number of threads."""
    return read_value(sys_path("kernel/threads-max", root), int)


def set_threads_max(new_limit: int, root: PathLike = DEFAULT_ROOT) -> None:
    """Set the system-wide thread limit, checking the range on newer kernels."""
    kernel = Version.current(root)
    if (
        kernel.major >= 4
        and kernel.minor >= 1
        and not THREADS_MIN <= new_limit <= THREADS_MAX
    ):
        raise ProcError(
            f"{new_limit} is outside the THREADS_MIN..=THREADS_MAX range"
        )
    write_value(sys_path("kernel/threads-max", root), new_limit)