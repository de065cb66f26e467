from datetime import timedelta

import pytest

from procsys.common import InternalError, NotFoundError
from procsys.fs import (
    DEntryState,
    FileState,
    dentry_state,
    file_max,
    file_nr,
    max_user_watches,
    set_file_max,
    set_max_user_watches,
)


def _write(root, relative, text):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_dentry_state_parse():
    state = DEntryState.parse("12345\t6789\t45\t1\t0\t0")
    assert state == DEntryState(12345, 6789, timedelta(seconds=45), True)


def test_dentry_state_missing_field():
    with pytest.raises(ValueError):
        DEntryState.parse("1 2")


def test_dentry_state_from_file(tmp_path):
    _write(tmp_path, "fs/dentry-state", "100 50 45 0 0 0\n")
    state = dentry_state(tmp_path)
    assert state.nr_dentry == 100
    assert state.nr_unused == 50
    assert state.age_limit == timedelta(seconds=45)
    assert state.want_pages is False


def test_dentry_state_bad_file(tmp_path):
    _write(tmp_path, "fs/dentry-state", "100 abc 45 0\n")
    with pytest.raises(InternalError):
        dentry_state(tmp_path)


def test_file_state_parse_max_u64():
    state = FileState.parse("2048 0 18446744073709551615")
    assert state == FileState(allocated=2048, free=0, max=2**64 - 1)


def test_file_state_overflow():
    with pytest.raises(ValueError):
        FileState.parse("1 2 18446744073709551616")


def test_file_nr(tmp_path):
    _write(tmp_path, "fs/file-nr", "9024\t0\t9223372036854775807\n")
    assert file_nr(tmp_path) == FileState(9024, 0, 9223372036854775807)


def test_file_max_roundtrip(tmp_path):
    _write(tmp_path, "fs/file-max", "100\n")
    assert file_max(tmp_path) == 100
    set_file_max(4096, tmp_path)
    assert file_max(tmp_path) == 4096


def test_max_user_watches(tmp_path):
    path = _write(tmp_path, "fs/epoll/max_user_watches", "1621025\n")
    assert max_user_watches(tmp_path) == 1621025
    set_max_user_watches(8192, tmp_path)
    assert path.read_text() == "8192"


def test_max_user_watches_missing(tmp_path):
    with pytest.raises(NotFoundError):
        max_user_watches(tmp_path)