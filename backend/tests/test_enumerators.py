"""Tests for the POSIX and Windows enumeration variants."""

import errno
from unittest.mock import patch

import pytest

from portafs.platform import get_enumerator
from portafs.platform.base import EnumerationError, EnumerationState, os_error_code
from portafs.platform.posix import PosixEnumerator
from portafs.platform.windows import ERROR_FILE_NOT_FOUND, WindowsEnumerator


def _drain(enumerator, path):
    state = EnumerationState()
    names = []
    name = enumerator.open_first(state, path)
    while name is not None:
        names.append(name)
        name = enumerator.read_next(state)
    return names, state


class TestSelection:
    def test_explicit_posix(self):
        assert isinstance(get_enumerator("posix"), PosixEnumerator)

    def test_explicit_windows(self):
        assert isinstance(get_enumerator("windows"), WindowsEnumerator)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_enumerator("plan9")


class TestOsErrorCode:
    def test_errno(self):
        assert os_error_code(OSError(errno.EACCES, "denied")) == errno.EACCES

    def test_winerror_preferred(self):
        exc = OSError(errno.ENOENT, "missing")
        exc.winerror = 18
        assert os_error_code(exc) == 18


class TestPosixEnumerator:
    def test_lists_entries_and_dot_entries(self, sample_dir):
        names, state = _drain(PosixEnumerator(), str(sample_dir))
        assert sorted(names) == [".", "..", "a", "b", "sub"]
        assert state.handle is None

    def test_empty_directory_still_has_dot_entries(self, tmp_path):
        names, _ = _drain(PosixEnumerator(), str(tmp_path))
        assert names == [".", ".."]

    def test_open_missing_directory(self, tmp_path):
        missing = str(tmp_path / "nope")
        with pytest.raises(EnumerationError) as info:
            PosixEnumerator().open_first(EnumerationState(), missing)
        assert info.value.action == "open"
        assert info.value.code == errno.ENOENT
        assert str(info.value) == f"Can't open directory {missing}. Error code: {errno.ENOENT}"

    def test_open_regular_file(self, sample_dir):
        with pytest.raises(EnumerationError) as info:
            PosixEnumerator().open_first(EnumerationState(), str(sample_dir / "a"))
        assert info.value.code == errno.ENOTDIR

    def test_first_read_error_is_iteration_error(self, tmp_path, fake_handle):
        handle = fake_handle([], error=OSError(errno.EIO, "I/O error"))
        with patch("portafs.platform.posix.os.scandir", return_value=handle):
            with pytest.raises(EnumerationError) as info:
                PosixEnumerator().open_first(EnumerationState(), str(tmp_path))
        assert info.value.action == "iterate"
        assert info.value.code == errno.EIO

    def test_release_closes_handle_and_is_repeatable(self, sample_dir, fake_handle):
        enumerator = PosixEnumerator()
        state = EnumerationState()
        handle = fake_handle(["x", "y"])
        with patch("portafs.platform.posix.os.scandir", return_value=handle):
            assert enumerator.open_first(state, str(sample_dir)) == "x"

        enumerator.release(state)
        enumerator.release(state)
        assert handle.closed is True
        assert enumerator.read_next(state) is None


class TestWindowsEnumerator:
    def test_lists_same_entries(self, sample_dir):
        names, _ = _drain(WindowsEnumerator(), str(sample_dir))
        assert sorted(names) == [".", "..", "a", "b", "sub"]

    def test_file_not_found_on_directory_is_empty(self, tmp_path):
        error = FileNotFoundError(ERROR_FILE_NOT_FOUND, "no files")
        with patch("portafs.platform.windows.os.scandir", side_effect=error):
            state = EnumerationState()
            assert WindowsEnumerator().open_first(state, str(tmp_path)) is None
        assert state.handle is None

    def test_file_not_found_on_missing_path_fails(self, tmp_path):
        missing = str(tmp_path / "nope")
        with pytest.raises(EnumerationError) as info:
            WindowsEnumerator().open_first(EnumerationState(), missing)
        assert info.value.action == "open"
        assert info.value.code == ERROR_FILE_NOT_FOUND

    def test_other_error_on_directory_fails(self, tmp_path):
        error = PermissionError(errno.EACCES, "denied")
        with patch("portafs.platform.windows.os.scandir", side_effect=error):
            with pytest.raises(EnumerationError) as info:
                WindowsEnumerator().open_first(EnumerationState(), str(tmp_path))
        assert info.value.code == errno.EACCES

    def test_first_read_error_is_open_error(self, tmp_path, fake_handle):
        handle = fake_handle([], error=OSError(errno.EIO, "I/O error"))
        with patch("portafs.platform.windows.os.scandir", return_value=handle):
            with pytest.raises(EnumerationError) as info:
                WindowsEnumerator().open_first(EnumerationState(), str(tmp_path))
        assert info.value.action == "open"

    def test_drive_root_has_no_dot_entries(self, fake_handle):
        handle = fake_handle(["Windows"])
        with patch("portafs.platform.windows.os.scandir", return_value=handle), \
                patch("portafs.platform.windows._is_drive_root", return_value=True):
            names, _ = _drain(WindowsEnumerator(), "C:\\")
        assert names == ["Windows"]
