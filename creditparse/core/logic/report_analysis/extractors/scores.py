"""Credit score extraction."""

from __future__ import annotations

import logging
from typing import List, Optional

from creditparse.core.models import Bureau, CreditScore, ScoreFactor, ScoreType
from creditparse.core.models.report import SCORE_MAX, SCORE_MIN

from ..patterns import NEGATIVE_FACTOR_RE, SCORE_FACTORS_HEADING_RE, SCORE_RE
from .tokens import BUREAU_NAME_RE, bureau_from_name

logger = logging.getLogger(__name__)

BUREAU_LOOKBACK_CHARS = 40
MAX_FACTORS = 10


def _score_type(label: str) -> ScoreType:
    lowered = label.lower()
    if "fico" in lowered:
        return ScoreType.fico
    if "vantage" in lowered:
        return ScoreType.vantage
    return ScoreType.generic


def _bureau_before(text: str, start: int, default: Bureau) -> Bureau:
    window = text[max(0, start - BUREAU_LOOKBACK_CHARS):start]
    matches = list(BUREAU_NAME_RE.finditer(window))
    if not matches:
        return default
    return bureau_from_name(matches[-1].group(0))


def extract_score_factors(text: Optional[str]) -> List[ScoreFactor]:
    """Read the lines under a score factors heading, up to the next blank line."""

    if not text:
        return []
    m = SCORE_FACTORS_HEADING_RE.search(text)
    if not m:
        return []
    factors: List[ScoreFactor] = []
    for line in text[m.end():].lstrip("\n").split("\n"):
        entry = line.strip().lstrip("-*•").strip()
        if not entry:
            break
        impact = "negative" if NEGATIVE_FACTOR_RE.search(entry) else "neutral"
        factors.append(ScoreFactor(description=entry, impact=impact))
        if len(factors) >= MAX_FACTORS:
            break
    return factors


def extract_scores(
    text: str,
    *,
    bureau: Bureau = Bureau.Unknown,
    factors_text: Optional[str] = None,
) -> List[CreditScore]:
    """Return every in-range score adjacent to a FICO/Vantage/credit score label.

    Values outside 300-850 are dropped. A bureau named within the preceding
    40 characters is credited with the score, otherwise ``bureau``.
    Factors found in ``factors_text`` are attached to every score.
    """

    scores: List[CreditScore] = []
    if not text:
        return scores
    factors = extract_score_factors(factors_text)
    seen: set[tuple] = set()
    for m in SCORE_RE.finditer(text):
        value = int(m.group("value"))
        if not SCORE_MIN <= value <= SCORE_MAX:
            logger.debug("score_rejected value=%d label=%s", value, m.group("label"))
            continue
        score_type = _score_type(m.group("label"))
        score_bureau = _bureau_before(text, m.start(), bureau)
        key = (score_type, value, score_bureau)
        if key in seen:
            continue
        seen.add(key)
        scores.append(
            CreditScore(
                score_type=score_type,
                score_value=value,
                bureau=score_bureau,
                factors=list(factors),
            )
        )
    return scores


__all__ = ["extract_scores", "extract_score_factors"]
