import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from creditparse.config import (
    CASESTORE_ATOMIC_WRITES,
    CASESTORE_DIR,
    CASESTORE_VALIDATE_ON_LOAD,
)

from .errors import IO_ERROR, NOT_FOUND, VALIDATION_FAILED, CaseStoreError
from .models import ReportCase
from .telemetry import emit, timed

__all__ = ["load_report_case", "save_report_case", "delete_report_case"]


def _report_path(report_id: str) -> Path:
    base = Path(CASESTORE_DIR)
    return base / f"{report_id}.json"


def load_report_case(report_id: str) -> ReportCase:
    """Load a ReportCase from disk."""
    path = _report_path(report_id)
    try:
        with timed("case_store_load", report_id=report_id) as t:
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    content = fh.read()
            except FileNotFoundError as exc:
                raise CaseStoreError(code=NOT_FOUND, message=str(exc)) from exc
            except OSError as exc:  # pragma: no cover
                raise CaseStoreError(code=IO_ERROR, message=str(exc)) from exc

            try:
                if CASESTORE_VALIDATE_ON_LOAD:
                    result = ReportCase.model_validate_json(content)
                else:
                    data: Any = json.loads(content)
                    if not isinstance(data, dict):
                        raise TypeError("ReportCase JSON must be an object")
                    result = ReportCase.model_construct(**data)
            except json.JSONDecodeError as exc:
                raise CaseStoreError(code=VALIDATION_FAILED, message=str(exc)) from exc
            except (ValidationError, TypeError) as exc:
                raise CaseStoreError(code=VALIDATION_FAILED, message=str(exc)) from exc

            t.base["file_bytes"] = path.stat().st_size
            return result
    except CaseStoreError as err:
        emit("case_store_error", report_id=report_id, code=err.code, where="storage")
        raise


def save_report_case(case: ReportCase) -> None:
    """Persist a ReportCase to disk."""
    path = _report_path(case.report_id)
    data = case.model_dump(mode="json")
    payload = json.dumps(data, ensure_ascii=False, separators=(",", ":"))

    try:
        with timed("case_store_save", report_id=case.report_id) as t:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:  # pragma: no cover
                raise CaseStoreError(code=IO_ERROR, message=str(exc)) from exc

            if CASESTORE_ATOMIC_WRITES:
                tmp = path.with_suffix(path.suffix + ".tmp")
                try:
                    with open(tmp, "w", encoding="utf-8") as fh:
                        fh.write(payload)
                    os.replace(tmp, path)
                except OSError as exc:  # pragma: no cover
                    if tmp.exists():
                        tmp.unlink()
                    raise CaseStoreError(code=IO_ERROR, message=str(exc)) from exc
            else:
                try:
                    with open(path, "w", encoding="utf-8") as fh:
                        fh.write(payload)
                except OSError as exc:  # pragma: no cover
                    raise CaseStoreError(code=IO_ERROR, message=str(exc)) from exc

            t.base["file_bytes"] = path.stat().st_size
    except CaseStoreError as err:
        emit("case_store_error", report_id=case.report_id, code=err.code, where="storage")
        raise


def delete_report_case(report_id: str) -> bool:
    """Remove a stored report; returns ``False`` when nothing was stored."""
    path = _report_path(report_id)
    try:
        with timed("case_store_delete", report_id=report_id):
            path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:  # pragma: no cover
        emit("case_store_error", report_id=report_id, code=IO_ERROR, where="storage")
        raise CaseStoreError(code=IO_ERROR, message=str(exc)) from exc
    return True
