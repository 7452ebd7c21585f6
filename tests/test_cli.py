"""Tests for the command-line interface."""

import json

import pytest

from palidict.cli import main


def run(capsys, *args):
    main(list(args))
    return capsys.readouterr().out


class TestCli:
    """Tests for palidict.cli.main."""

    def test_default_output(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "dhamma")
        assert out.splitlines() == [
            "Dhamma  [PED 0/0]",
            "Dhammā  [PED 1/0]",
            "Saddhamma  [PED 0/3]",
        ]

    def test_compound_breakdown(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "tathāgata")
        assert out.splitlines()[0] == "tathā | gata (āgata)"
        assert "  gata: Āgata  [PED 0/7]" in out.splitlines()

    def test_json(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "--json", "dhammacakka")
        data = json.loads(out)
        assert data["isCompound"] is True
        assert [part["base"] for part in data["breakdown"]] == ["dhamma", "cakka"]

    def test_simple(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "--simple", "--dict", "dppn", "abhaya")
        assert out.splitlines() == ["abhaya\tAbhaya\tDPPN\t1/0"]

    def test_detail(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "--detail", "akkha")
        assert "Akkha2 a die." in out

    def test_flags(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "--fuzzy", "--starts-with", "dhamma")
        assert out.splitlines() == ["Dhamma  [PED 0/0]", "Dhammā  [PED 1/0]"]

    def test_no_analyze(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "--no-analyze", "dhammassa")
        assert out.strip() == "No results for 'dhammassa'"

    def test_entry(self, capsys, data_path):
        out = run(capsys, "--data", str(data_path), "--entry", "PED", "0/4")
        lines = out.splitlines()
        assert lines[0] == "Akkha  [PED 0/4]"
        assert lines[1] == "<b>Akkha<sup>2</sup></b> a die."

    def test_unknown_entry_exits_1(self, capsys, data_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--data", str(data_path), "--entry", "PED", "9/9"])
        assert exc_info.value.code == 1
        assert "entry not found" in capsys.readouterr().err

    def test_blank_query_exits_1(self, data_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--data", str(data_path), "   "])
        assert exc_info.value.code == 1
