"""Coverage-based confidence scoring for a parsed report."""

from __future__ import annotations

from typing import Sequence

from creditparse.core.models import CreditAccount, CreditScore, NegativeItem, PersonalInfo

PERSONAL_FIELD_POINTS = 5
ANY_ACCOUNT_POINTS = 10
BALANCE_POINTS = 10
OPEN_DATE_POINTS = 15
STATUS_POINTS = 15
NEGATIVE_ITEM_POINTS = 15
SCORE_POINTS = 10
MAX_CONFIDENCE = 100


def personal_info_points(info: PersonalInfo) -> int:
    present = [
        info.full_name,
        info.date_of_birth,
        info.current_address,
        info.ssn_partial,
        info.phone_numbers,
    ]
    return PERSONAL_FIELD_POINTS * sum(1 for value in present if value)


def account_points(accounts: Sequence[CreditAccount]) -> int:
    if not accounts:
        return 0
    points = ANY_ACCOUNT_POINTS
    if any(a.current_balance is not None for a in accounts):
        points += BALANCE_POINTS
    if any(a.date_opened for a in accounts):
        points += OPEN_DATE_POINTS
    if any(a.account_status for a in accounts):
        points += STATUS_POINTS
    return points


def compute_confidence(
    personal_info: PersonalInfo,
    accounts: Sequence[CreditAccount],
    negative_items: Sequence[NegativeItem],
    scores: Sequence[CreditScore],
) -> int:
    """Combine per-category coverage into one score.

    Personal info contributes up to 25 points, accounts up to 50, and any
    negative item or score a flat 15 or 10. The total is clamped to
    ``[0, 100]``. This measures how much was found, not whether it is right.
    """

    score = personal_info_points(personal_info) + account_points(accounts)
    if negative_items:
        score += NEGATIVE_ITEM_POINTS
    if scores:
        score += SCORE_POINTS
    if score < 0:
        return 0
    if score > MAX_CONFIDENCE:
        return MAX_CONFIDENCE
    return score


__all__ = ["compute_confidence", "personal_info_points", "account_points"]
