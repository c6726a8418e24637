"""Tests for CLI formatting utilities."""

import json

from fheviz.cli._format import emit_json, json_envelope, print_table, table_lines, truncate


class TestTruncate:
    def test_short_value(self):
        assert truncate("hello", 10) == "hello"

    def test_long_value(self):
        result = truncate("x" * 300, 50)
        assert len(result) == 50
        assert result.endswith("…")


class TestJsonEnvelope:
    def test_structure(self):
        env = json_envelope("test.cmd", {"key": "value"})
        assert env["schema_version"] == 1
        assert env["command"] == "test.cmd"
        assert "generated_at" in env
        assert env["data"] == {"key": "value"}

    def test_emit_to_stdout(self, capsys):
        emit_json("ls", {"programs": {}})
        assert json.loads(capsys.readouterr().out)["command"] == "ls"

    def test_emit_to_file(self, tmp_path, capsys):
        target = tmp_path / "out.json"
        emit_json("render", {"nodes": []}, str(target))
        assert json.loads(target.read_text())["data"] == {"nodes": []}
        assert "Wrote render output" in capsys.readouterr().out


class TestTable:
    def test_layout(self):
        lines = table_lines(["Id", "Label"], [["0", "Add"], ["12", "Relinearize"]])
        assert len(lines) == 4  # header + rule + 2 rows
        assert "Label" in lines[0]
        assert "───" in lines[1]
        # Id column is right-aligned
        assert lines[2] == "   0  Add"
        assert lines[3] == "  12  Relinearize"

    def test_empty_rows(self):
        assert table_lines(["A", "B"], []) == []

    def test_print_cuts_long_tables(self, capsys):
        print_table(["Id"], [[str(i)] for i in range(5)], max_rows=2)
        out = capsys.readouterr().out
        assert out.splitlines()[2:4] == ["   0", "   1"]
        assert "3 more rows" in out
