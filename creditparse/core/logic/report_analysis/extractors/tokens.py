"""Shared regex tokens and helpers for the report text extractors."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from creditparse.core.models import Bureau

AMOUNT_RE = re.compile(r"[-+]?\$?\d[\d,]*(?:\.\d+)?")
BUREAU_NAME_RE = re.compile(r"trans\s*union|experian|equifax", re.IGNORECASE)

NAME_SUFFIXES = ("JR", "SR", "II", "III", "IV")


def parse_amount(text: str | None) -> Optional[float | int]:
    if not text:
        return None
    m = AMOUNT_RE.search(text)
    if not m:
        return None
    val = m.group().replace("$", "").replace(",", "")
    try:
        if "." in val:
            return float(val)
        return int(val)
    except ValueError:
        return None


def clean_value(text: str | None) -> Optional[str]:
    """Trim a captured label value.

    A run of two or more spaces is treated as a column break, so only the
    first column survives.
    """

    if text is None:
        return None
    value = re.split(r"\s{2,}|\t", text.strip(), maxsplit=1)[0]
    value = value.strip(" ,;:-")
    return value or None


def normalize_issuer(text: str) -> str:
    t = re.sub(r"\s+", " ", text.strip())
    t = t.strip(",:;-.()[]{}")
    return t.upper()


def bureau_from_name(name: str) -> Bureau:
    return Bureau.coerce(re.sub(r"\s+", "", name))


def detect_bureau(text: str | None) -> Bureau:
    """Return the bureau mentioned most often in ``text``.

    ``Unknown`` is returned when no bureau is named or when the top count is
    shared, which is typical for tri-merge reports.
    """

    if not text:
        return Bureau.Unknown
    counts: dict[Bureau, int] = {}
    for m in BUREAU_NAME_RE.finditer(text):
        bureau = bureau_from_name(m.group(0))
        counts[bureau] = counts.get(bureau, 0) + 1
    if not counts:
        return Bureau.Unknown
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        return Bureau.Unknown
    return ranked[0][0]


def dedupe(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        key = re.sub(r"\s+", " ", value.strip()).lower()
        if key and key not in seen:
            seen.add(key)
            out.append(value.strip())
    return out


def is_heading_line(text: str, heading_words: Iterable[str]) -> bool:
    """Return ``True`` when ``text`` contains one of the upper-case heading words."""

    words = set(re.findall(r"[A-Z]+", text.upper()))
    return bool(words & {w.upper() for w in heading_words})


__all__ = [
    "AMOUNT_RE",
    "BUREAU_NAME_RE",
    "NAME_SUFFIXES",
    "parse_amount",
    "clean_value",
    "normalize_issuer",
    "bureau_from_name",
    "detect_bureau",
    "dedupe",
    "is_heading_line",
]
