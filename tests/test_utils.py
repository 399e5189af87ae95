"""
Tests for the timecode conversion and directory helpers.
"""

import pytest

from srtkit.exceptions import FileSystemError
from srtkit.utils import ensure_dir_exists, timecode_to_milliseconds


class TestTimecodeToMilliseconds:
    """Test SRT timecode parsing."""

    def test_zero(self):
        assert timecode_to_milliseconds("00:00:00,000") == 0

    def test_full_timecode(self):
        assert timecode_to_milliseconds("01:01:01,123") == 3661123

    def test_minutes_and_millis(self):
        assert timecode_to_milliseconds("00:01:05,250") == 65250

    def test_single_digit_components(self):
        assert timecode_to_milliseconds("0:1:5,000") == 65000

    def test_out_of_range_minutes_accepted(self):
        # 75 minutes is simply 75 minutes
        assert timecode_to_milliseconds("0:75:00,000") == 75 * 60 * 1000

    def test_large_hours(self):
        assert timecode_to_milliseconds("100:00:00,000") == 360000000

    def test_surrounding_whitespace(self):
        assert timecode_to_milliseconds(" 00:00:01,500 ") == 1500

    def test_trailing_text_after_millis(self):
        assert timecode_to_milliseconds("00:00:02,000 X1:40 X2:600 Y1:20 Y2:50") == 2000

    def test_fields_read_from_leading_digits(self):
        assert timecode_to_milliseconds("00:00:01,5x0") == 1005
        assert timecode_to_milliseconds("00:00:01,000,000") == 1000

    @pytest.mark.parametrize("text", [
        "",
        None,
        "garbage",
        "00:00:01",
        "00:00,500",
        "1:2:3:4,000",
        "aa:00:00,000",
        "-1:00:00,000",
    ])
    def test_unusable_returns_none(self, text):
        assert timecode_to_milliseconds(text) is None


class TestEnsureDirExists:
    """Test directory creation."""

    def test_creates_nested_dirs(self, tmp_path):
        target = tmp_path / "a" / "b"
        ensure_dir_exists(str(target))
        assert target.is_dir()

    def test_existing_dir_is_fine(self, tmp_path):
        ensure_dir_exists(str(tmp_path))
        assert tmp_path.is_dir()

    def test_file_in_the_way(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("x")
        with pytest.raises(FileSystemError):
            ensure_dir_exists(str(blocker))

    def test_empty_path(self):
        with pytest.raises(ValueError):
            ensure_dir_exists("")
