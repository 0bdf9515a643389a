"""Personal information extraction."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from creditparse.core.models import Address, Employment, PersonalInfo

from ..errors import FieldNotFoundWarning
from ..patterns import (
    ADDRESS_LABELS,
    DOB_LABELS,
    PHONE_LABELS,
    PREVIOUS_ADDRESS_LABELS,
    SSN_LABELS,
    STANDALONE_PHONE_RE,
    STATE_ZIP_RE,
    CITY_STATE_ZIP_LINE_RE,
    UNLABELED_ADDRESS_RE,
    address_pattern,
    extract_fields,
    personal_rules,
    phone_pattern,
    previous_address_pattern,
    previous_employer_pattern,
    ssn_patterns,
)
from .tokens import NAME_SUFFIXES, clean_value, dedupe, is_heading_line, parse_amount

logger = logging.getLogger(__name__)

# A name stops before a token followed by a colon or before a personal-info
# label, so ``Name: JOHN SMITH SSN:`` and ``Name: JOHN SMITH Date of Birth:``
# both end at ``SMITH``.
_NAME_STOP = (
    r"(?![A-Za-z]+[ \t]*:|(?:"
    + "|".join((DOB_LABELS, SSN_LABELS, PREVIOUS_ADDRESS_LABELS, ADDRESS_LABELS, PHONE_LABELS))
    + r")(?![A-Za-z]))"
)
_NAME_TOKEN = r"[A-Za-z][A-Za-z'.\-]*"
_NAME_VALUE = _NAME_TOKEN + r"(?:[ \t]+" + _NAME_STOP + _NAME_TOKEN + r"){0,4}"
_NAME_LABELS = r"consumer\s+name|legal\s+name|full\s+name|(?<![A-Za-z][ \t])name"

CAPS_NAME_LINE_RE = re.compile(
    r"^[ \t]*([A-Z][A-Z'.\-]+(?:[ \t]+[A-Z][A-Z'.\-]*){1,4})[ \t]*$", re.MULTILINE
)
_SUFFIX_RE = re.compile(r"^(?:" + "|".join(NAME_SUFFIXES) + r")\.?$", re.IGNORECASE)


def _labeled_name_re(sep: str) -> re.Pattern[str]:
    return re.compile(
        r"\b(?:" + _NAME_LABELS + r")" + sep + r"(" + _NAME_VALUE + r")", re.IGNORECASE
    )


def find_name(text: str, sep: str, *, caps_line: bool, heading_words: Iterable[str]) -> Optional[str]:
    """Return the consumer's name as printed, or ``None``.

    The labeled form is tried first; with ``caps_line`` a standalone
    upper-case line that contains no heading word is accepted as well.
    """

    m = _labeled_name_re(sep).search(text)
    if m:
        return m.group(1).strip()
    if caps_line:
        headings = list(heading_words)
        for cm in CAPS_NAME_LINE_RE.finditer(text):
            candidate = cm.group(1).strip()
            if not is_heading_line(candidate, headings):
                return candidate
    return None


def split_name(full_name: str) -> dict:
    """Split ``full_name`` into first, middle, last and suffix parts."""

    parts = full_name.split()
    suffix = None
    if len(parts) > 2 and _SUFFIX_RE.match(parts[-1]):
        suffix = parts.pop().rstrip(".").upper()
    result = {
        "full_name": " ".join(parts),
        "first_name": parts[0] if parts else None,
        "middle_name": None,
        "last_name": None,
        "suffix": suffix,
    }
    if len(parts) >= 2:
        result["last_name"] = parts[-1]
    if len(parts) > 2:
        result["middle_name"] = " ".join(parts[1:-1])
    return result


def find_ssn_last4(text: str, sep: str, *, include_unlabeled: bool) -> Optional[str]:
    for pattern in ssn_patterns(sep, include_unlabeled=include_unlabeled):
        m = pattern.search(text)
        if m:
            return m.group("value")
    return None


def mask_ssn(last4: str) -> str:
    return f"***-**-{last4}"


def parse_address(raw: str) -> Address:
    """Best-effort comma split of an address into its parts."""

    full = re.sub(r"\s+", " ", raw).strip().strip(",")
    parts = [p.strip() for p in full.split(",") if p.strip()]
    address = Address(full_address=full)
    if parts:
        address.street = parts[0]
    if len(parts) >= 2:
        address.city = parts[1]
    m = STATE_ZIP_RE.search(parts[-1] if parts else full)
    if m:
        address.state, address.zip_code = m.group(1), m.group(2)
        if len(parts) == 2:
            # "STREET, CITY ST 12345"
            city = parts[1][: m.start()].strip()
            address.city = city or None
    return address


def _with_next_line(text: str, m: re.Match[str]) -> str:
    """Extend a labeled address by the following city/state/zip line."""

    value = m.group("value").strip()
    if STATE_ZIP_RE.search(value):
        return value
    rest = text[m.end():].lstrip("\r").split("\n", 2)
    if len(rest) >= 2 and CITY_STATE_ZIP_LINE_RE.match(rest[1]):
        return f"{value}, {rest[1].strip()}"
    return value


def find_current_address(text: str, sep: str, *, unlabeled: bool) -> Optional[Address]:
    m = address_pattern(sep).search(text)
    if m:
        return parse_address(_with_next_line(text, m))
    if unlabeled:
        um = UNLABELED_ADDRESS_RE.search(text)
        if um:
            return parse_address(um.group("value"))
    return None


def find_previous_addresses(text: str, sep: str) -> List[Address]:
    raw = [_with_next_line(text, m) for m in previous_address_pattern(sep).finditer(text)]
    return [parse_address(r) for r in dedupe(raw)]


def find_phones(text: str, sep: str, *, standalone: bool) -> List[str]:
    phones = [m.group("value").strip() for m in phone_pattern(sep).finditer(text)]
    if standalone:
        phones.extend(m.group(0).strip() for m in STANDALONE_PHONE_RE.finditer(text))
    # "(555) 123-4567" and "555-123-4567" are the same number.
    seen: set[str] = set()
    unique: List[str] = []
    for phone in phones:
        digits = re.sub(r"\D", "", phone)
        if digits not in seen:
            seen.add(digits)
            unique.append(phone)
    return unique


def extract_personal_info(
    text: str,
    *,
    sep: str,
    caps_name_line: bool = False,
    unlabeled_address: bool = False,
    standalone_phones: bool = False,
    unlabeled_ssn: bool = False,
    heading_words: Sequence[str] = (),
) -> PersonalInfo:
    """Extract a :class:`PersonalInfo` record from ``text``.

    ``sep`` is the label separator for the tier; the keyword flags enable
    the looser unlabeled alternatives. Missing fields stay ``None``.
    """

    info = PersonalInfo()
    if not text:
        return info

    name = find_name(text, sep, caps_line=caps_name_line, heading_words=heading_words)
    if name:
        parts = split_name(name)
        info.full_name = parts["full_name"]
        info.first_name = parts["first_name"]
        info.middle_name = parts["middle_name"]
        info.last_name = parts["last_name"]
        info.suffix = parts["suffix"]

    last4 = find_ssn_last4(text, sep, include_unlabeled=unlabeled_ssn)
    if last4:
        info.ssn_partial = mask_ssn(last4)

    fields = extract_fields(text, personal_rules(sep))
    info.date_of_birth = fields.get("date_of_birth")
    info.current_address = find_current_address(text, sep, unlabeled=unlabeled_address)
    info.previous_addresses = find_previous_addresses(text, sep)
    info.phone_numbers = find_phones(text, sep, standalone=standalone_phones)

    employer = clean_value(fields.get("employer"))
    if employer:
        info.employment_current = Employment(
            employer=employer,
            position=clean_value(fields.get("position")),
            income=parse_amount(fields.get("income")),
            date_hired=fields.get("date_hired"),
        )
    info.employment_previous = [
        Employment(employer=e)
        for e in dedupe(
            v for v in (clean_value(m.group("value")) for m in previous_employer_pattern(sep).finditer(text)) if v
        )
    ]

    missing = [
        FieldNotFoundWarning("personal_info", f)
        for f in ("full_name", "date_of_birth", "ssn_partial", "current_address")
        if getattr(info, f) is None
    ]
    if missing:
        logger.debug("personal_info_missing fields=%s", [str(w) for w in missing])
    return info


__all__ = [
    "extract_personal_info",
    "find_name",
    "split_name",
    "parse_address",
    "mask_ssn",
]
