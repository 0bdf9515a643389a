"""Taxonomy helpers for negative credit items."""

from .negative_taxonomy import (
    COLLECTION_SEVERITY,
    NegativeItemType,
    classify_negative_status,
    is_negative_status,
    severity_score,
)

__all__ = [
    "COLLECTION_SEVERITY",
    "NegativeItemType",
    "classify_negative_status",
    "is_negative_status",
    "severity_score",
]
