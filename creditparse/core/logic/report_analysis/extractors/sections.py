"""Section detection helpers.

Sections are located by anchor phrases from the parser rulebook. A section
window opens a few characters before its anchor and closes at the next
anchor of any section that lies at least ``PARSER_SECTION_MIN_GAP``
characters further on, or at the end of the text.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from creditparse.core.models import SectionName
from creditparse.policy.rules_loader import load_rulebook

from ..config import get_section_context_chars, get_section_min_chars, get_section_min_gap

logger = logging.getLogger(__name__)

SectionMap = Dict[SectionName, str]


def _phrase_re(phrase: str) -> re.Pattern[str]:
    return re.compile(r"\s+".join(re.escape(p) for p in phrase.split()), re.IGNORECASE)


def _anchor_table(
    anchors: Mapping[str, Sequence[str]] | None,
) -> List[Tuple[SectionName, List[re.Pattern[str]]]]:
    if anchors is None:
        anchors = load_rulebook()["section_anchors"]
    return [(name, [_phrase_re(p) for p in anchors.get(name.value, [])]) for name in SectionName]


def _first_anchor(text: str, patterns: Sequence[re.Pattern[str]]) -> Optional[re.Match[str]]:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return m
    return None


def _next_boundary(
    text: str, start: int, table: Sequence[Tuple[SectionName, List[re.Pattern[str]]]]
) -> int:
    end = len(text)
    for _, patterns in table:
        for pattern in patterns:
            m = pattern.search(text, start)
            if m and m.start() < end:
                end = m.start()
    return end


def segment_sections(
    text: str, anchors: Mapping[str, Sequence[str]] | None = None
) -> SectionMap:
    """Locate the named report sections within ``text``.

    Returns a mapping from :class:`SectionName` to the section text. Sections
    whose anchor is missing, or whose window is shorter than
    ``PARSER_SECTION_MIN_CHARS``, are absent from the mapping.
    """

    sections: SectionMap = {}
    if not text:
        return sections

    table = _anchor_table(anchors)
    context = get_section_context_chars()
    min_gap = get_section_min_gap()
    min_chars = get_section_min_chars()

    for name, patterns in table:
        m = _first_anchor(text, patterns)
        if m is None:
            continue
        start = max(0, m.start() - context)
        end = _next_boundary(text, m.end() + min_gap, table)
        window = text[start:end].strip()
        if len(window) < min_chars:
            logger.debug(
                "section_discarded name=%s chars=%d min=%d", name.value, len(window), min_chars
            )
            continue
        sections[name] = window

    logger.debug("sections_found names=%s", [n.value for n in sections])
    return sections


def missing_sections(sections: Mapping[SectionName, str]) -> List[SectionName]:
    return [name for name in SectionName if name not in sections]


__all__ = ["SectionMap", "segment_sections", "missing_sections"]
