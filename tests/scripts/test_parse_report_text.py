import json

import pytest

from creditparse.core.case_store import storage
from scripts import parse_report_text
from scripts.parse_report_text import (
    EXIT_NO_INPUT,
    EXIT_OK,
    EXIT_RECOVERY_EXHAUSTED,
    main,
)

from tests.creditparse.fixtures.report_texts import EXPERIAN_REPORT, GARBAGE_TEXT


@pytest.fixture
def report_file(tmp_path):
    path = tmp_path / "smith.txt"
    path.write_text(EXPERIAN_REPORT, encoding="utf-8")
    return path


def test_writes_json_output(report_file, tmp_path):
    out = tmp_path / "out.json"
    assert main([str(report_file), "--output", str(out)]) == EXIT_OK
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["bureau"] == "Experian"
    assert data["parsing_confidence"] == 100
    assert len(data["credit_accounts"]) == 2


def test_prints_json_to_stdout(report_file, capsys):
    assert main([str(report_file), "--bureau", "equifax"]) == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["bureau"] == "Equifax"


def test_empty_file_exit_code(tmp_path, capsys):
    path = tmp_path / "empty.txt"
    path.write_text("  \n", encoding="utf-8")
    assert main([str(path)]) == EXIT_NO_INPUT
    assert "NO_INPUT_TEXT" in capsys.readouterr().err


def test_unreadable_text_exit_code(tmp_path, capsys):
    path = tmp_path / "scan.txt"
    path.write_text(GARBAGE_TEXT, encoding="utf-8")
    assert main([str(path)]) == EXIT_RECOVERY_EXHAUSTED
    assert "scanned image" in capsys.readouterr().err


def test_store_uses_file_stem_as_report_id(report_file, tmp_path, monkeypatch):
    store = tmp_path / "cases"
    monkeypatch.setattr(storage, "CASESTORE_DIR", str(store))
    assert main([str(report_file), "--store", "--output", str(tmp_path / "o.json")]) == EXIT_OK
    assert (store / "smith.json").exists()


def test_store_failure_exit_code(report_file, tmp_path, monkeypatch, capsys):
    from creditparse.core.case_store.errors import IO_ERROR, CaseStoreError

    def failing_save(report_id, result):
        raise CaseStoreError(code=IO_ERROR, message="disk full")

    monkeypatch.setattr(parse_report_text, "save_parsing_result", failing_save)
    code = main([str(report_file), "--store", "--output", str(tmp_path / "o.json")])
    assert code == parse_report_text.EXIT_STORE_FAILED
    assert "IO_ERROR: disk full" in capsys.readouterr().err
