"""Credit inquiry extraction."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from creditparse.core.models import Bureau, CreditInquiry, InquiryType

from .tokens import clean_value

logger = logging.getLogger(__name__)

MIN_INQUIRER_CHARS = 3


def classify_inquiry(name: str, soft_inquirers: Iterable[str]) -> InquiryType:
    """Return ``soft`` when ``name`` contains an allow-listed inquirer."""

    lowered = name.lower()
    if any(s and s.lower() in lowered for s in soft_inquirers):
        return InquiryType.soft
    return InquiryType.hard


def extract_inquiries(
    text: str,
    *,
    patterns: Sequence[re.Pattern[str]],
    soft_inquirers: Sequence[str],
    bureau: Optional[Bureau] = None,
) -> List[CreditInquiry]:
    """Collect ``NAME DATE`` pairs from ``text`` as inquiries.

    Each pattern must expose ``name`` and ``date`` groups and may expose a
    ``purpose`` group. Identical name/date pairs are reported once.
    """

    inquiries: List[CreditInquiry] = []
    if not text:
        return inquiries
    seen: set[Tuple[str, str]] = set()
    for pattern in patterns:
        for m in pattern.finditer(text):
            name = re.sub(r"\s+", " ", m.group("name")).strip(" .,-")
            date = m.group("date")
            if len(name) < MIN_INQUIRER_CHARS:
                continue
            key = (name.lower(), date)
            if key in seen:
                continue
            seen.add(key)
            groups = m.groupdict()
            inquiries.append(
                CreditInquiry(
                    inquirer_name=name,
                    inquiry_date=date,
                    inquiry_type=classify_inquiry(name, soft_inquirers),
                    purpose=clean_value(groups.get("purpose")),
                    bureau=bureau,
                )
            )
    logger.debug("inquiries_extracted count=%d", len(inquiries))
    return inquiries


__all__ = ["extract_inquiries", "classify_inquiry"]
