"""Bureau-aware splitting of account sections into per-account blocks.

The rules are layout guesses. Nothing cross-checks the resulting block count
against a bureau-reported total, so a format change on the bureau side shows
up as silently lower recall rather than as an error.
"""

from __future__ import annotations

import logging
import re
from typing import List

from creditparse.core.models import Bureau

from .config import get_account_block_min_chars

logger = logging.getLogger(__name__)


# Equifax prints each tradeline under an upper-case creditor line carrying a
# product keyword, e.g. ``CAPITAL ONE BANK``.
EQUIFAX_SPLIT_RE = re.compile(
    r"\n(?=[ \t]*[A-Z][A-Z0-9&'.\- ]*\b(?:BANK|CARD|CREDIT|LOAN|MORTGAGE)\b[A-Z0-9&'.\- ]*[ \t]*(?:\n|$))"
)
EXPERIAN_SPLIT_RE = re.compile(r"\n\s*\n(?=\S)")
DEFAULT_SPLIT_RE = re.compile(r"\n\s*\n|(?=(?:ACCOUNT|Account)\s*(?:Number|#))")


def _split_rule(bureau: Bureau) -> re.Pattern[str]:
    if bureau is Bureau.Equifax:
        return EQUIFAX_SPLIT_RE
    if bureau is Bureau.Experian:
        return EXPERIAN_SPLIT_RE
    return DEFAULT_SPLIT_RE


def split_account_blocks(text: str, bureau: Bureau | str | None = None) -> List[str]:
    """Split ``text`` into candidate account blocks for ``bureau``.

    Equifax text is cut before upper-case creditor lines, Experian text on
    blank lines, and anything else on blank lines or before an
    ``Account Number``/``Account #`` label. Blocks shorter than
    ``PARSER_ACCOUNT_BLOCK_MIN_CHARS`` after stripping are dropped.
    """

    if not text:
        return []
    resolved = Bureau.coerce(bureau)
    min_chars = get_account_block_min_chars()
    pieces = _split_rule(resolved).split(text)
    blocks = [p.strip() for p in pieces if p and len(p.strip()) >= min_chars]
    logger.debug(
        "account_blocks bureau=%s pieces=%d kept=%d min_chars=%d",
        resolved.value,
        len(pieces),
        len(blocks),
        min_chars,
    )
    return blocks


__all__ = ["split_account_blocks"]
