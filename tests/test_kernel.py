import pytest

from procsys.common import InternalError, NotFoundError, ProcError
from procsys.kernel import (
    THREADS_MAX,
    THREADS_MIN,
    AllowedFunctions,
    SemaphoreLimits,
    SysRq,
    Version,
    pid_max,
    set_shmmax,
    set_sysrq,
    set_threads_max,
    shmall,
    shmmax,
    shmmni,
    sysrq,
    threads_max,
)


@pytest.fixture
def root(tmp_path):
    (tmp_path / "kernel").mkdir()
    return tmp_path


def put(root, name, text):
    (root / "kernel" / name).write_text(text)


@pytest.mark.parametrize("text", ["3.16.0-6-amd64", "3.16.0", "3.16.0_1"])
def test_version_parse(text):
    assert Version.parse(text) == Version(3, 16, 0)


def test_version_ordering():
    assert Version(2, 6, 28) < Version(3, 0, 0)
    assert Version(4, 1, 0) > Version(4, 0, 255)
    assert Version(5, 4, 10) > Version(5, 4, 9)
    assert Version.parse("5.10.0") > Version.parse("5.9.16")


def test_version_str_round_trip():
    assert Version.parse(str(Version(3, 16, 0))) == Version(3, 16, 0)


def test_version_current(root):
    put(root, "osrelease", "3.16.0-6-amd64\n")
    assert Version.current(root) == Version(3, 16, 0)


def test_version_current_bad_content(root):
    put(root, "osrelease", "garbage\n")
    with pytest.raises(InternalError):
        Version.current(root)


def test_semaphore_limits_parse():
    limits = SemaphoreLimits.parse("32000\t1024000000\t500\t32000")
    assert limits == SemaphoreLimits(
        semmsl=32_000, semmns=1_024_000_000, semopm=500, semmni=32_000
    )


def test_semaphore_limits_missing():
    with pytest.raises(ValueError, match="^Missing SEMMNS$"):
        SemaphoreLimits.parse("1")


def test_semaphore_limits_bad_value():
    with pytest.raises(ValueError, match="^Failed to parse SEMMNS$"):
        SemaphoreLimits.parse("1 string 500 3200")


def test_semaphore_limits_current(root):
    put(root, "sem", "32000\t1024000000\t500\t32000\n")
    assert SemaphoreLimits.current(root).semmns == 1_024_000_000


def test_sysrq_parse_disable_and_enable():
    assert SysRq.parse("0") == SysRq()
    assert SysRq.parse("0").to_number() == 0
    assert SysRq.parse("1") == SysRq(enable_all=True)
    assert SysRq.parse("1").to_number() == 1


def test_sysrq_parse_functions():
    result = SysRq.parse("176")
    assert result.functions == (
        AllowedFunctions.ALLOW_REBOOT_POWEROFF
        | AllowedFunctions.ENABLE_REMOUNT_READ_ONLY
        | AllowedFunctions.ENABLE_SYNC_COMMAND
    )
    assert result.to_number() == 176


@pytest.mark.parametrize("text", ["3", "512", "abc", "70000"])
def test_sysrq_parse_invalid(text):
    with pytest.raises(ValueError):
        SysRq.parse(text)


def test_sysrq_read_and_write(root):
    put(root, "sysrq", "438\n")
    assert sysrq(root).to_number() == 438
    new = SysRq(functions=AllowedFunctions.ENABLE_SYNC_COMMAND)
    set_sysrq(new, root)
    assert sysrq(root) == new


def test_sysrq_invalid_file_content(root):
    put(root, "sysrq", "3\n")
    with pytest.raises(InternalError):
        sysrq(root)


def test_simple_readers(root):
    put(root, "pid_max", "4194304\n")
    put(root, "shmall", "18446744073692774399\n")
    put(root, "shmmni", "4096\n")
    put(root, "threads-max", "126742\n")
    assert pid_max(root) == 4194304
    assert shmall(root) == 18446744073692774399
    assert shmmni(root) == 4096
    assert threads_max(root) == 126742


def test_shmmax_round_trip(root):
    put(root, "shmmax", "18446744073692774399\n")
    assert shmmax(root) == 18446744073692774399
    set_shmmax(1048576, root)
    assert shmmax(root) == 1048576


def test_threads_max_bounds_on_new_kernel(root):
    put(root, "osrelease", "5.4.0-generic\n")
    put(root, "threads-max", "1000\n")
    with pytest.raises(ProcError, match="outside the THREADS_MIN..=THREADS_MAX"):
        set_threads_max(THREADS_MIN - 1, root)
    with pytest.raises(ProcError):
        set_threads_max(THREADS_MAX + 1, root)
    assert threads_max(root) == 1000
    set_threads_max(THREADS_MIN, root)
    assert threads_max(root) == THREADS_MIN


def test_threads_max_unchecked_when_minor_is_zero(root):
    put(root, "osrelease", "5.0.0\n")
    set_threads_max(5, root)
    assert threads_max(root) == 5


def test_missing_kernel_variable(tmp_path):
    with pytest.raises(NotFoundError):
        pid_max(tmp_path)