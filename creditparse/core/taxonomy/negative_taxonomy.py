"""Negative item taxonomy.

Single source of truth for the closed set of negative item types, the
ordered keyword checks that map an account status onto that set, and the
severity score attached to every derived negative item.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Sequence, Tuple


class NegativeItemType(str, Enum):
    collection = "collection"
    charge_off = "charge_off"
    late_payment = "late_payment"
    bankruptcy = "bankruptcy"
    foreclosure = "foreclosure"
    tax_lien = "tax_lien"
    judgment = "judgment"


# Checked in order; the first keyword contained in the status wins.
_CLASSIFICATION_ORDER: Tuple[Tuple[Tuple[str, ...], NegativeItemType], ...] = (
    (("collection",), NegativeItemType.collection),
    (("charge",), NegativeItemType.charge_off),
    (("late", "delinquen"), NegativeItemType.late_payment),
    (("bankrupt",), NegativeItemType.bankruptcy),
    (("foreclos",), NegativeItemType.foreclosure),
    (("lien",), NegativeItemType.tax_lien),
    (("judgment", "judgement"), NegativeItemType.judgment),
)

BASE_SEVERITY = 5
COLLECTION_SEVERITY = 7
MAX_SEVERITY = 10
MIN_SEVERITY = 1
PAST_DUE_SEVERITY_THRESHOLD = 1000


def classify_negative_status(status: Optional[str]) -> NegativeItemType:
    """Return the negative item type for an account ``status``.

    Statuses that match none of the keywords default to ``collection``; the
    caller only classifies statuses already flagged negative.
    """

    lowered = (status or "").lower()
    for keywords, item_type in _CLASSIFICATION_ORDER:
        if any(keyword in lowered for keyword in keywords):
            return item_type
    return NegativeItemType.collection


def severity_score(status: Optional[str], past_due_amount: Optional[float] = None) -> int:
    """Score how damaging a negative status is on a 1-10 scale."""

    lowered = (status or "").lower()
    score = BASE_SEVERITY
    if "collection" in lowered:
        score += 3
    if "charge" in lowered:
        score += 4
    if past_due_amount is not None and past_due_amount > PAST_DUE_SEVERITY_THRESHOLD:
        score += 2
    return max(MIN_SEVERITY, min(score, MAX_SEVERITY))


def is_negative_status(
    status: Optional[str], patterns: Optional[Sequence[re.Pattern[str]]] = None
) -> bool:
    """Return ``True`` when ``status`` contains a derogatory keyword.

    ``patterns`` defaults to the ``negative_status_patterns`` of the parser
    rulebook.
    """

    if not status:
        return False
    if patterns is None:
        from creditparse.policy.rules_loader import negative_status_patterns

        patterns = negative_status_patterns()
    return any(p.search(status) for p in patterns)


__all__ = [
    "NegativeItemType",
    "classify_negative_status",
    "severity_score",
    "is_negative_status",
    "COLLECTION_SEVERITY",
]
