"""Report-level persistence for parsing results.

Every save replaces the stored rows of each category wholesale: the old
rows are dropped and the new result's rows written, so consecutive parses
of one report never merge.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, List

from pydantic import ValidationError

from creditparse.core.models import ParsingResult
from creditparse.core.telemetry import metrics

from .errors import NOT_FOUND, VALIDATION_FAILED, CaseStoreError
from .models import ReportCase
from .storage import delete_report_case as _delete
from .storage import load_report_case as _load
from .storage import save_report_case as _save
from .telemetry import emit, timed

CATEGORIES = (
    "credit_accounts",
    "negative_items",
    "credit_inquiries",
    "credit_scores",
)

__all__ = [
    "CATEGORIES",
    "load_report_case",
    "save_parsing_result",
    "delete_report_case",
    "load_or_create_report_case",
]


def _emit_on_error(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        report_id = kwargs.get("report_id")
        if report_id is None and args:
            report_id = args[0]
        try:
            return fn(*args, **kwargs)
        except CaseStoreError as err:
            emit("case_store_error", report_id=report_id, code=err.code, where="api")
            raise

    return wrapper


@_emit_on_error
def load_report_case(report_id: str) -> ReportCase:
    """Load a stored report."""

    return _load(report_id)


def load_or_create_report_case(report_id: str) -> ReportCase:
    try:
        return _load(report_id)
    except CaseStoreError as err:
        if err.code != NOT_FOUND:
            raise
    return ReportCase(report_id=report_id)


@_emit_on_error
def delete_report_case(report_id: str) -> bool:
    return _delete(report_id)


@_emit_on_error
def save_parsing_result(report_id: str, result: ParsingResult) -> ReportCase:
    """Replace the stored records of ``report_id`` with ``result``.

    For each category the existing rows are deleted before the new rows are
    inserted. The case version is bumped once per save.
    """

    payload: Dict[str, Any] = result.to_dict()
    with timed("case_store_replace", report_id=report_id) as t:
        case = load_or_create_report_case(report_id)
        replaced: Dict[str, int] = {}
        for category in CATEGORIES:
            old_rows: List[Any] = getattr(case, category)
            replaced[category] = len(old_rows)
            setattr(case, category, [])

        try:
            fresh = ReportCase.model_validate(
                {
                    "report_id": report_id,
                    "version": case.version + 1,
                    "updated_at": datetime.now(timezone.utc),
                    **payload,
                }
            )
        except ValidationError as exc:
            raise CaseStoreError(code=VALIDATION_FAILED, message=str(exc)) from exc

        for category in CATEGORIES:
            setattr(case, category, getattr(fresh, category))
        case.personal_info = fresh.personal_info
        case.account_summary = fresh.account_summary
        case.parsing_confidence = fresh.parsing_confidence
        case.extraction_errors = fresh.extraction_errors
        case.bureau = fresh.bureau
        case.text_quality = fresh.text_quality
        case.version = fresh.version
        case.updated_at = fresh.updated_at

        _save(case)
        t.base["version"] = case.version
        t.base["rows_deleted"] = sum(replaced.values())
        t.base["rows_inserted"] = sum(len(getattr(case, c)) for c in CATEGORIES)

    metrics.increment("case_store.replace")
    return case
