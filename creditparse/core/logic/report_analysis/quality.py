"""Text quality scoring and extraction tier selection."""

from __future__ import annotations

import re
from typing import Sequence

from creditparse.core.models import QualityTier, TextQuality
from creditparse.policy.rules_loader import load_rulebook

from .config import get_min_text_chars, get_tier_thresholds

READABLE_CHAR_RE = re.compile(r"[a-zA-Z0-9\s.,!?;:\-()]")

READABLE_WEIGHT = 40.0
KEYWORD_WEIGHT = 30.0
STRUCTURE_POINTS = 7.5

STRUCTURE_PATTERNS = (
    re.compile(r"\d{3}-?\d{2}-?\d{4}"),
    re.compile(r"account|acct", re.IGNORECASE),
    re.compile(r"\d{1,2}/\d{1,2}/\d{2,4}"),
    re.compile(r"\$\d+|\d+\.\d{2}"),
)


def score_text_quality(text: str, keywords: Sequence[str] | None = None) -> int:
    """Rate ``text`` from 0 to 100 for how parseable it looks.

    Up to 40 points come from the share of readable characters, up to 30
    from the share of credit-domain keywords present, and 7.5 points each
    from an SSN-shaped token, an account token, a date and a dollar amount.
    Text shorter than ``PARSER_MIN_TEXT_CHARS`` scores 0.
    """

    if not text or len(text) < get_min_text_chars():
        return 0

    if keywords is None:
        keywords = load_rulebook()["quality_keywords"]

    readable = len(READABLE_CHAR_RE.findall(text))
    score = readable / len(text) * READABLE_WEIGHT

    lowered = text.lower()
    if keywords:
        found = sum(1 for kw in keywords if kw.lower() in lowered)
        score += found / len(keywords) * KEYWORD_WEIGHT

    score += sum(STRUCTURE_POINTS for p in STRUCTURE_PATTERNS if p.search(text))

    return max(0, min(100, int(round(score))))


def select_tier(score: int) -> QualityTier:
    thresholds = get_tier_thresholds()
    if score >= thresholds.high:
        return QualityTier.high
    if score >= thresholds.medium:
        return QualityTier.medium
    if score >= thresholds.low:
        return QualityTier.low
    return QualityTier.recovery


def assess_text(text: str) -> TextQuality:
    score = score_text_quality(text)
    return TextQuality(score=score, tier=select_tier(score))


__all__ = ["score_text_quality", "select_tier", "assess_text"]
