import json

from creditparse.core.case_store import storage
from scripts.batch_parse import main, run_batch

from tests.creditparse.fixtures.report_texts import EXPERIAN_REPORT, GARBAGE_TEXT


def _write_reports(directory):
    (directory / "a.txt").write_text(EXPERIAN_REPORT, encoding="utf-8")
    (directory / "b.txt").write_text(GARBAGE_TEXT, encoding="utf-8")
    (directory / "notes.md").write_text("ignored", encoding="utf-8")


def test_run_batch_waits_between_items_only(tmp_path):
    _write_reports(tmp_path)
    waits = []
    outcomes = run_batch(tmp_path, delay_ms=250, sleep=waits.append)
    assert outcomes == {"a": "ok", "b": "RECOVERY_EXHAUSTED"}
    assert waits == [0.25]


def test_zero_delay_never_sleeps(tmp_path):
    _write_reports(tmp_path)
    waits = []
    run_batch(tmp_path, delay_ms=0, sleep=waits.append)
    assert waits == []


def test_store_persists_successful_items(tmp_path, monkeypatch):
    reports = tmp_path / "reports"
    reports.mkdir()
    _write_reports(reports)
    cases = tmp_path / "cases"
    monkeypatch.setattr(storage, "CASESTORE_DIR", str(cases))

    run_batch(reports, delay_ms=0, store=True)
    assert sorted(p.name for p in cases.iterdir()) == ["a.json"]


def test_main_exit_code_reflects_failures(tmp_path, capsys):
    _write_reports(tmp_path)
    assert main([str(tmp_path), "--delay-ms", "0"]) == 1
    assert json.loads(capsys.readouterr().out)["b"] == "RECOVERY_EXHAUSTED"

    (tmp_path / "b.txt").unlink()
    assert main([str(tmp_path), "--delay-ms", "0"]) == 0
