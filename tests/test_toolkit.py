"""
Tests for file-level processing and variable table persistence.
"""

import json

import pytest

from srtkit.exceptions import FileSystemError, VariablesFileError
from srtkit.toolkit import SrtToolkit


@pytest.fixture
def toolkit():
    return SrtToolkit()


@pytest.fixture
def srt_file(tmp_path):
    path = tmp_path / "episode.srt"
    path.write_text(
        "5\r\n00:00:01,000 --> 00:00:03,000\r\nHello, {{user}}!\r\n\r\n"
        "9\r\n00:00:02,000 --> 00:00:04,000\r\nWelcome to {{place}}.\r\n",
        encoding="utf-8",
    )
    return path


class TestVariablesFile:
    """Test loading and saving the variable table."""

    def test_missing_file_is_empty_table(self, toolkit, tmp_path):
        assert toolkit.load_variables(str(tmp_path / "nope.json")) == {}

    def test_load_object(self, toolkit, tmp_path):
        path = tmp_path / "vars.json"
        path.write_text(json.dumps({"a": "1"}), encoding="utf-8")
        assert toolkit.load_variables(str(path)) == {"a": "1"}

    def test_invalid_json(self, toolkit, tmp_path):
        path = tmp_path / "vars.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(VariablesFileError):
            toolkit.load_variables(str(path))

    def test_non_object_root(self, toolkit, tmp_path):
        path = tmp_path / "vars.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(VariablesFileError):
            toolkit.load_variables(str(path))

    def test_save_keeps_unicode_and_order(self, toolkit, tmp_path):
        path = tmp_path / "out" / "vars.json"
        toolkit.save_variables(str(path), {"小茅棚": "我的世界", "b": ""})
        text = path.read_text(encoding="utf-8")
        assert "小茅棚" in text
        assert list(json.loads(text)) == ["小茅棚", "b"]

    def test_configured_indent(self, tmp_path):
        path = tmp_path / "vars.json"
        SrtToolkit({"json_indent": 4}).save_variables(str(path), {"a": "1"})
        assert path.read_text(encoding="utf-8") == '{\n    "a": "1"\n}'


class TestProcessFile:
    """Test normalizing SRT files on disk."""

    def test_overwrites_input_by_default(self, toolkit, srt_file):
        report = toolkit.process_file(str(srt_file))
        assert report.output_path == str(srt_file)
        content = srt_file.read_text(encoding="utf-8")
        assert content.startswith("1\n00:00:01,000 --> 00:00:03,000\n")
        assert "\r" not in content
        assert "\n2\n" in content

    def test_writes_to_output_path(self, toolkit, srt_file, tmp_path):
        output = tmp_path / "fixed" / "episode.srt"
        report = toolkit.process_file(str(srt_file), output_path=str(output))
        assert output.exists()
        assert report.result.segment_count == 2
        assert len(report.result.warnings) == 1  # overlap on segment 2

    def test_discovers_and_saves_variables(self, toolkit, srt_file, tmp_path):
        variables_path = tmp_path / "vars.json"
        report = toolkit.process_file(str(srt_file), variables_path=str(variables_path))
        saved = json.loads(variables_path.read_text(encoding="utf-8"))
        assert saved == {"user": "", "place": ""}
        assert report.result.new_count == 2

    def test_substitutes_from_file(self, toolkit, srt_file, tmp_path):
        variables_path = tmp_path / "vars.json"
        variables_path.write_text(json.dumps({"user": "Ada", "place": "London"}), encoding="utf-8")
        toolkit.process_file(str(srt_file), variables_path=str(variables_path))
        content = srt_file.read_text(encoding="utf-8")
        assert "Hello, Ada!" in content
        assert "Welcome to London." in content

    def test_configured_default_variables_file(self, srt_file, tmp_path):
        variables_path = tmp_path / "defaults.json"
        toolkit = SrtToolkit({"variables_file": str(variables_path)})
        toolkit.process_file(str(srt_file))
        assert variables_path.exists()

    def test_no_variables_file_leaves_placeholders(self, toolkit, srt_file):
        report = toolkit.process_file(str(srt_file))
        assert report.result.variables is None
        assert "{{user}}" in srt_file.read_text(encoding="utf-8")

    def test_missing_input(self, toolkit, tmp_path):
        with pytest.raises(FileNotFoundError):
            toolkit.process_file(str(tmp_path / "missing.srt"))

    def test_undecodable_input(self, toolkit, tmp_path):
        path = tmp_path / "latin1.srt"
        path.write_bytes("1\n00:00:01,000 --> 00:00:02,000\nCaf\u00e9".encode("latin-1"))
        with pytest.raises(FileSystemError):
            toolkit.process_file(str(path))


class TestSummary:
    """Test the console report."""

    def test_summary_with_variables(self, toolkit, srt_file, tmp_path):
        variables_path = tmp_path / "vars.json"
        report = toolkit.process_file(str(srt_file), variables_path=str(variables_path))
        lines = report.summary_lines()
        assert lines[0] == f"Formatted SRT file saved to {srt_file}"
        assert "Substituted 0 variables. Added 2 new variables to JSON." in lines
        assert "Warnings: there is unhandled variable placeholder in the output." in lines
        assert "Processed 2 segments." in lines
        assert any(line.startswith("- Segment 2: Overlaps") for line in lines)

    def test_summary_without_variables(self, toolkit, tmp_path):
        path = tmp_path / "clean.srt"
        path.write_text("1\n00:00:01,000 --> 00:00:02,000\nHi", encoding="utf-8")
        lines = toolkit.process_file(str(path)).summary_lines()
        assert lines == [f"Formatted SRT file saved to {path}", "", "Processed 1 segments."]
