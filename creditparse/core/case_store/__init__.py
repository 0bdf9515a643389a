"""Case Store models and helpers."""

from pydantic import ValidationError

from .errors import CaseStoreError, IO_ERROR, NOT_FOUND, VALIDATION_FAILED
from .models import (
    AccountRecord,
    InquiryRecord,
    NegativeItemRecord,
    PersonalInfoRecord,
    ReportCase,
    ScoreRecord,
)

__all__ = [
    "AccountRecord",
    "InquiryRecord",
    "NegativeItemRecord",
    "PersonalInfoRecord",
    "ReportCase",
    "ScoreRecord",
    "CaseStoreError",
    "NOT_FOUND",
    "VALIDATION_FAILED",
    "IO_ERROR",
    "load_report_case_json",
]


def load_report_case_json(data: str) -> ReportCase:
    """Parse a ReportCase from a JSON string.

    Raises:
        CaseStoreError: if validation fails.
    """

    try:
        return ReportCase.model_validate_json(data)
    except ValidationError as exc:
        raise CaseStoreError(code=VALIDATION_FAILED, message=str(exc)) from exc
