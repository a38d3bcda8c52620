import json

import pytest

from outline_scheduler import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda: None)


def test_heuristic_run_prints_json_and_writes_ics(tmp_path, capsys):
    outline = tmp_path / "outline.txt"
    outline.write_text("Course: CS 101\nQuiz 1 2026-01-20 5%\n", encoding="utf-8")
    ics_path = tmp_path / "schedule.ics"

    code = cli.main([str(outline), "--heuristic", "--ics", str(ics_path)])

    assert code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["courses"][0]["source"] == "outline.txt"
    assert result["events"][0]["type"] == "quiz"
    assert "SUMMARY:CS 101 - Quiz 1" in ics_path.read_text(encoding="utf-8").splitlines()


def test_missing_files_are_skipped(tmp_path):
    assert cli.main([str(tmp_path / "nope.txt"), "--heuristic"]) == 1


def test_no_events_skips_ics(tmp_path, capsys):
    notes = tmp_path / "notes.txt"
    notes.write_text("nothing dated here", encoding="utf-8")
    ics_path = tmp_path / "out.ics"

    assert cli.main([str(notes), "--heuristic", "--ics", str(ics_path)]) == 0
    assert json.loads(capsys.readouterr().out)["events"] == []
    assert not ics_path.exists()
