import pytest

from creditparse.core.case_store import (
    NOT_FOUND,
    VALIDATION_FAILED,
    CaseStoreError,
    load_report_case_json,
)
from creditparse.core.case_store import api, storage
from creditparse.core.case_store import telemetry as case_store_telemetry
from creditparse.core.logic.report_analysis.orchestrator import parse
from creditparse.core.telemetry import metrics

from tests.creditparse.fixtures.report_texts import EXPERIAN_REPORT, RECOVERABLE_TEXT


@pytest.fixture(autouse=True)
def store_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "CASESTORE_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def events():
    captured = []
    case_store_telemetry.set_emitter(lambda event, fields: captured.append((event, dict(fields))))
    return captured


def test_save_then_load(store_dir):
    case = api.save_parsing_result("rpt-1", parse(EXPERIAN_REPORT))

    assert case.version == 1
    assert (store_dir / "rpt-1.json").exists()
    loaded = api.load_report_case("rpt-1")
    assert loaded.bureau == "Experian"
    assert [a.creditor_name for a in loaded.credit_accounts] == ["ABC BANK", "LVNV FUNDING"]
    assert loaded.credit_accounts[0].model_extra["utilization_percentage"] == 50
    assert loaded.parsing_confidence == 100
    assert loaded.personal_info.ssn_partial == "***-**-1234"


def test_second_save_replaces_rows():
    api.save_parsing_result("rpt-2", parse(EXPERIAN_REPORT))
    case = api.save_parsing_result("rpt-2", parse(RECOVERABLE_TEXT))

    assert case.version == 2
    loaded = api.load_report_case("rpt-2")
    assert [a.account_number for a in loaded.credit_accounts] == ["55512"]
    assert loaded.negative_items == []
    assert loaded.credit_inquiries == []
    assert loaded.credit_scores == []
    assert metrics.snapshot()["counters"]["case_store.replace"] == 2


def test_replace_event_counts_rows(events):
    api.save_parsing_result("rpt-3", parse(EXPERIAN_REPORT))
    api.save_parsing_result("rpt-3", parse(RECOVERABLE_TEXT))

    replaces = [fields for event, fields in events if event == "case_store_replace"]
    assert replaces[0]["rows_deleted"] == 0
    assert replaces[0]["rows_inserted"] == 7
    assert replaces[1]["rows_deleted"] == 7
    assert replaces[1]["rows_inserted"] == 1
    assert replaces[1]["version"] == 2


def test_load_missing_raises_not_found(events):
    with pytest.raises(CaseStoreError) as excinfo:
        api.load_report_case("nope")
    assert excinfo.value.code == NOT_FOUND
    assert ("case_store_error", {"report_id": "nope", "code": NOT_FOUND, "where": "api"}) in events


def test_load_or_create_returns_empty_case():
    case = api.load_or_create_report_case("fresh")
    assert case.report_id == "fresh"
    assert case.version == 0
    assert case.credit_accounts == []


def test_corrupt_file_fails_validation(store_dir):
    (store_dir / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(CaseStoreError) as excinfo:
        api.load_report_case("bad")
    assert excinfo.value.code == VALIDATION_FAILED


def test_delete(store_dir):
    api.save_parsing_result("rpt-4", parse(EXPERIAN_REPORT))
    assert api.delete_report_case("rpt-4") is True
    assert api.delete_report_case("rpt-4") is False
    assert not (store_dir / "rpt-4.json").exists()


def test_load_report_case_json_rejects_bad_score():
    with pytest.raises(CaseStoreError) as excinfo:
        load_report_case_json(
            '{"report_id": "x", "credit_scores": [{"score_type": "FICO", "score_value": 900}]}'
        )
    assert excinfo.value.code == VALIDATION_FAILED


def test_emitter_failure_does_not_break_save():
    def broken(event, fields):
        raise RuntimeError("sink down")

    case_store_telemetry.set_emitter(broken)
    assert api.save_parsing_result("rpt-5", parse(EXPERIAN_REPORT)).version == 1
