from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from creditparse.core.taxonomy.negative_taxonomy import NegativeItemType

from .bureau import Bureau

Amount = Union[int, float]

SCORE_MIN = 300
SCORE_MAX = 850


class QualityTier(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"
    recovery = "recovery"


class SectionName(str, Enum):
    personal_info = "personal_info"
    accounts = "accounts"
    inquiries = "inquiries"
    scores = "scores"
    negative_items = "negative_items"


class InquiryType(str, Enum):
    hard = "hard"
    soft = "soft"


class ScoreType(str, Enum):
    fico = "FICO"
    vantage = "VantageScore"
    generic = "Credit Score"


class PaymentHistoryStatus(str, Enum):
    current = "current"
    late_30 = "30"
    late_60 = "60"
    late_90 = "90"
    late_120 = "120+"
    no_data = "no_data"


LATE_STATUSES = (
    PaymentHistoryStatus.late_30,
    PaymentHistoryStatus.late_60,
    PaymentHistoryStatus.late_90,
    PaymentHistoryStatus.late_120,
)


def _plain(value: Any) -> Any:
    """Recursively replace enum members with their values."""

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass
class Address:
    """Postal address as printed on the report.

    ``full_address`` always holds the matched text; the other fields are a
    best-effort comma split of it.
    """

    full_address: str
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


@dataclass
class Employment:
    employer: str
    position: Optional[str] = None
    income: Optional[Amount] = None
    date_hired: Optional[str] = None


@dataclass
class PersonalInfo:
    """Consumer identification block.

    Attributes
    ----------
    full_name: Optional[str]
        Name exactly as matched, without the suffix.
    ssn_partial: Optional[str]
        Masked SSN; only the last four digits are ever retained.
    phone_numbers: List[str]
        De-duplicated in order of appearance.
    """

    full_name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    suffix: Optional[str] = None
    ssn_partial: Optional[str] = None
    date_of_birth: Optional[str] = None
    current_address: Optional[Address] = None
    previous_addresses: List[Address] = field(default_factory=list)
    phone_numbers: List[str] = field(default_factory=list)
    employment_current: Optional[Employment] = None
    employment_previous: List[Employment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CreditAccount:
    """One tradeline parsed from an account block.

    ``utilization_percentage`` and ``late_counts`` are derived on access and
    are never stored on the instance.
    """

    creditor_name: str
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    account_status: Optional[str] = None
    payment_status: Optional[str] = None
    responsibility_type: Optional[str] = None
    current_balance: Optional[Amount] = None
    credit_limit: Optional[Amount] = None
    high_credit: Optional[Amount] = None
    monthly_payment: Optional[Amount] = None
    past_due_amount: Optional[Amount] = None
    date_opened: Optional[str] = None
    date_closed: Optional[str] = None
    last_activity_date: Optional[str] = None
    last_payment_date: Optional[str] = None
    account_remarks: Optional[str] = None
    payment_history: Dict[str, PaymentHistoryStatus] = field(default_factory=dict)
    is_negative: bool = False
    bureau_reporting: List[Bureau] = field(default_factory=list)

    @property
    def utilization_percentage(self) -> Optional[int]:
        if self.current_balance is None or not self.credit_limit or self.credit_limit <= 0:
            return None
        return round(self.current_balance / self.credit_limit * 100)

    @property
    def late_counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in LATE_STATUSES}
        for status in self.payment_history.values():
            if status in LATE_STATUSES:
                counts[status.value] += 1
        return counts

    @property
    def reported_status(self) -> Optional[str]:
        """Account status, falling back to the payment status line."""
        return self.account_status or self.payment_status

    @property
    def is_closed(self) -> bool:
        status = (self.account_status or "").lower()
        return "closed" in status or self.date_closed is not None

    def to_dict(self) -> Dict[str, Any]:
        data = _plain(asdict(self))
        data["utilization_percentage"] = self.utilization_percentage
        data["late_counts"] = self.late_counts
        return data


@dataclass(frozen=True)
class NegativeItem:
    item_type: NegativeItemType
    creditor_name: str
    severity_score: int
    original_creditor: Optional[str] = None
    collection_agency: Optional[str] = None
    account_number: Optional[str] = None
    amount: Optional[Amount] = None
    date_occurred: Optional[str] = None
    date_reported: Optional[str] = None
    status: Optional[str] = None
    description: Optional[str] = None
    bureau_reporting: Tuple[Bureau, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class CreditInquiry:
    inquirer_name: str
    inquiry_date: str
    inquiry_type: InquiryType
    purpose: Optional[str] = None
    bureau: Optional[Bureau] = None

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class ScoreFactor:
    description: str
    impact: str = "neutral"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CreditScore:
    score_type: ScoreType
    score_value: int
    bureau: Bureau = Bureau.Unknown
    score_range_min: int = SCORE_MIN
    score_range_max: int = SCORE_MAX
    factors: List[ScoreFactor] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not SCORE_MIN <= self.score_value <= SCORE_MAX:
            raise ValueError(f"score {self.score_value} outside {SCORE_MIN}-{SCORE_MAX}")

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass
class AccountSummary:
    total_accounts: int = 0
    open_accounts: int = 0
    closed_accounts: int = 0
    negative_accounts: int = 0
    total_credit_limit: Amount = 0
    total_balance: Amount = 0
    available_credit: Amount = 0
    overall_utilization: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TextQuality:
    score: int
    tier: QualityTier

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "tier": self.tier.value}


@dataclass(frozen=True)
class ParsingResult:
    """Immutable outcome of one parse invocation.

    The category collections are tuples so the assembled result cannot be
    altered after the fact.
    """

    personal_info: PersonalInfo
    credit_accounts: Tuple[CreditAccount, ...]
    negative_items: Tuple[NegativeItem, ...]
    credit_inquiries: Tuple[CreditInquiry, ...]
    credit_scores: Tuple[CreditScore, ...]
    account_summary: AccountSummary
    parsing_confidence: int
    extraction_errors: Tuple[str, ...]
    bureau: Bureau = Bureau.Unknown
    text_quality: Optional[TextQuality] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bureau": self.bureau.value,
            "text_quality": self.text_quality.to_dict() if self.text_quality else None,
            "personal_info": self.personal_info.to_dict(),
            "credit_accounts": [a.to_dict() for a in self.credit_accounts],
            "negative_items": [n.to_dict() for n in self.negative_items],
            "credit_inquiries": [i.to_dict() for i in self.credit_inquiries],
            "credit_scores": [s.to_dict() for s in self.credit_scores],
            "account_summary": self.account_summary.to_dict(),
            "parsing_confidence": self.parsing_confidence,
            "extraction_errors": list(self.extraction_errors),
        }


__all__ = [
    "Address",
    "Amount",
    "AccountSummary",
    "CreditAccount",
    "CreditInquiry",
    "CreditScore",
    "Employment",
    "InquiryType",
    "NegativeItem",
    "ParsingResult",
    "PaymentHistoryStatus",
    "PersonalInfo",
    "QualityTier",
    "ScoreFactor",
    "ScoreType",
    "SectionName",
    "TextQuality",
    "SCORE_MIN",
    "SCORE_MAX",
]
