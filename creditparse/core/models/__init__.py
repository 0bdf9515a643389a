"""Typed data models for parsed credit reports."""

from .bureau import Bureau
from .report import (
    AccountSummary,
    Address,
    CreditAccount,
    CreditInquiry,
    CreditScore,
    Employment,
    InquiryType,
    NegativeItem,
    ParsingResult,
    PaymentHistoryStatus,
    PersonalInfo,
    QualityTier,
    ScoreFactor,
    ScoreType,
    SectionName,
    TextQuality,
)

__all__ = [
    "AccountSummary",
    "Address",
    "Bureau",
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
]
