"""Stored shape of one report's parsed records.

Each category is a list of loosely typed records; the parser's dataclasses
produce them through ``to_dict()``. Unknown keys are kept so derived values
such as ``utilization_percentage`` survive a round trip.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, conint


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PersonalInfoRecord(BaseModel):
    full_name: Optional[str] = None
    ssn_partial: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone_numbers: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class AccountRecord(BaseModel):
    creditor_name: str
    account_number: Optional[str] = None
    account_status: Optional[str] = None
    current_balance: Optional[float] = None
    credit_limit: Optional[float] = None
    is_negative: bool = False
    bureau_reporting: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class NegativeItemRecord(BaseModel):
    item_type: str
    creditor_name: str
    severity_score: conint(ge=1, le=10)

    model_config = ConfigDict(extra="allow")


class InquiryRecord(BaseModel):
    inquirer_name: str
    inquiry_date: str
    inquiry_type: str

    model_config = ConfigDict(extra="allow")


class ScoreRecord(BaseModel):
    score_type: str
    score_value: conint(ge=300, le=850)
    bureau: str = "Unknown"

    model_config = ConfigDict(extra="allow")


class ReportCase(BaseModel):
    report_id: str
    version: int = 0
    updated_at: datetime = Field(default_factory=_utcnow)
    bureau: str = "Unknown"
    text_quality: Optional[Dict[str, Any]] = None
    personal_info: PersonalInfoRecord = Field(default_factory=PersonalInfoRecord)
    credit_accounts: List[AccountRecord] = Field(default_factory=list)
    negative_items: List[NegativeItemRecord] = Field(default_factory=list)
    credit_inquiries: List[InquiryRecord] = Field(default_factory=list)
    credit_scores: List[ScoreRecord] = Field(default_factory=list)
    account_summary: Dict[str, Any] = Field(default_factory=dict)
    parsing_confidence: conint(ge=0, le=100) = 0
    extraction_errors: List[str] = Field(default_factory=list)


__all__ = [
    "AccountRecord",
    "InquiryRecord",
    "NegativeItemRecord",
    "PersonalInfoRecord",
    "ReportCase",
    "ScoreRecord",
]
