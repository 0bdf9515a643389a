"""Declarative field pattern tables.

Every single-valued field is described by a :class:`FieldRule`: a compiled
pattern with ``label`` and ``value`` groups, the field it fills, and an
optional disambiguator that must occur in the matched label. Several rules
may share one combined pattern (for example all money labels) and are told
apart by their disambiguators. Rules are tried in table order and the first
accepted match wins for each field.

Tables are built per label separator, which is the knob that distinguishes
the strict, fuzzy and aggressive extraction tiers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, Optional, Sequence, Tuple

DATE_VALUE = r"\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}|\d{1,2}/\d{4}"
MONEY_VALUE = r"\d[\d,]*(?:\.\d{1,2})?(?![\d/\-])"
ACCOUNT_NUMBER_VALUE = r"[*Xx\d][*Xx\d\-]{2,}"

# Label separators by strictness: colon required, colon optional, or a short
# run of filler words between label and value.
STRICT_SEP = r"[ \t]*:[ \t]*"
FUZZY_SEP = r"[ \t]*:?[ \t]*"
AGGRESSIVE_SEP = r"[ \t]*[:#\-]?[^\n\d$:]{0,15}?"


@dataclass(frozen=True)
class FieldRule:
    field: str
    pattern: re.Pattern[str]
    disambiguator: Optional[re.Pattern[str]] = None
    exclude: Optional[re.Pattern[str]] = None

    def accepts(self, label: str) -> bool:
        if self.disambiguator is not None and not self.disambiguator.search(label):
            return False
        if self.exclude is not None and self.exclude.search(label):
            return False
        return True


def _kw(expr: str) -> re.Pattern[str]:
    return re.compile(expr, re.IGNORECASE)


def _labeled(labels: str, sep: str, value: str) -> re.Pattern[str]:
    return re.compile(
        r"\b(?P<label>" + labels + r")" + sep + r"(?P<value>" + value + r")",
        re.IGNORECASE,
    )


def extract_fields(text: str, rules: Sequence[FieldRule]) -> Dict[str, str]:
    """Run ``rules`` over ``text`` and return the raw value per field."""

    found: Dict[str, str] = {}
    if not text:
        return found
    for rule in rules:
        if rule.field in found:
            continue
        for m in rule.pattern.finditer(text):
            groups = m.groupdict()
            label = (groups.get("label") or m.group(0)).lower()
            if not rule.accepts(label):
                continue
            value = groups.get("value")
            if value is None:
                value = m.group(1)
            if value and value.strip():
                found[rule.field] = value.strip()
                break
    return found


# --- account blocks -------------------------------------------------------

MONEY_LABELS = (
    r"current\s+balance|balance(?:\s+owed)?|amount\s+owed|credit\s+limit"
    r"|(?<!high\s)limit|high\s+credit|high\s+balance|(?:monthly|scheduled)\s+payment"
    r"|payment\s+amount|past\s+due(?:\s+amount)?|amount\s+past\s+due"
)

DATE_LABELS = (
    r"date\s+opened|opened(?:\s+date)?|open\s+date|date\s+closed|closed\s+date"
    r"|closed(?=[ \t]*:)|date\s+of\s+last\s+activity|last\s+activity(?:\s+date)?"
    r"|last\s+reported|date\s+of\s+last\s+payment|last\s+payment(?:\s+date)?"
)

ACCOUNT_NUMBER_LABELS = r"account\s*(?:number|no\.?|#)|acct\s*(?:number|no\.?|#)"

CREDITOR_LABELS = (
    r"(?<!original\s)creditor(?:\s+name)?|company(?:\s+name)?|lender|subscriber(?:\s+name)?"
)

ACCOUNT_TYPE_LABELS = r"account\s+type|loan\s+type|type\s+of\s+account"

STATUS_LABELS = r"account\s+status|(?<![A-Za-z][ \t])status|condition"

PAYMENT_STATUS_LABELS = r"payment\s+status|pay\s+status"

RESPONSIBILITY_LABELS = r"responsibility|account\s+owner(?:ship)?|ecoa|whose\s+account"

REMARKS_LABELS = r"creditor\s+remarks|remarks?|comments?"

HISTORY_LABELS = (
    r"payment\s+history|(?:24|two)[\s\-]*(?:month|year)\s+(?:payment\s+)?history"
)

STATUS_KEYWORD_RE = re.compile(
    r"\b(?P<value>open|closed|paid|collection|charge[\s\-]?off|current(?!\s+balance)"
    r"|delinquent|transferred)\b",
    re.IGNORECASE,
)

MASKED_ACCOUNT_RE = re.compile(r"(?P<value>\*{2,}\d{4})")

ANY_CAPS_RUN_RE = re.compile(r"(?P<value>\b[A-Z][A-Z&'.\-]+(?:[ \t]+[A-Z][A-Z&'.\-]+)+\b)")


def _money_rules(sep: str) -> Tuple[FieldRule, ...]:
    pattern = _labeled(MONEY_LABELS, sep + r"\$?", MONEY_VALUE)
    return (
        FieldRule("past_due_amount", pattern, _kw(r"past\s+due")),
        FieldRule("high_credit", pattern, _kw(r"high")),
        FieldRule("credit_limit", pattern, _kw(r"limit")),
        FieldRule("monthly_payment", pattern, _kw(r"payment"), _kw(r"last")),
        FieldRule("current_balance", pattern, _kw(r"balance|owed"), _kw(r"high|past")),
    )


def _date_rules(sep: str) -> Tuple[FieldRule, ...]:
    pattern = _labeled(DATE_LABELS, sep, DATE_VALUE)
    return (
        FieldRule("date_opened", pattern, _kw(r"open")),
        FieldRule("date_closed", pattern, _kw(r"closed")),
        FieldRule("last_activity_date", pattern, _kw(r"activity|reported")),
        FieldRule("last_payment_date", pattern, _kw(r"payment")),
    )


def _text_rules(sep: str) -> Tuple[FieldRule, ...]:
    return (
        FieldRule("account_number", _labeled(ACCOUNT_NUMBER_LABELS, sep, ACCOUNT_NUMBER_VALUE)),
        FieldRule("account_type", _labeled(ACCOUNT_TYPE_LABELS, sep, r"[^:\n]+")),
        FieldRule("payment_status", _labeled(PAYMENT_STATUS_LABELS, sep, r"[^:\n]+")),
        FieldRule("account_status", _labeled(STATUS_LABELS, sep, r"[^:\n]+")),
        FieldRule(
            "responsibility_type",
            _labeled(RESPONSIBILITY_LABELS, sep, r"individual|joint|authorized\s+user"),
        ),
        FieldRule("account_remarks", _labeled(REMARKS_LABELS, sep, r"[^\n]+")),
        FieldRule("payment_history", _labeled(HISTORY_LABELS, sep, r"[^\n]+")),
    )


@lru_cache(maxsize=None)
def account_rules(sep: str, *, keyword_fallbacks: bool = False) -> Tuple[FieldRule, ...]:
    """Return the ordered account field table for a label separator.

    With ``keyword_fallbacks`` unlabeled status keywords and masked account
    numbers are accepted after the labeled forms.
    """

    rules = _text_rules(sep) + _money_rules(sep) + _date_rules(sep)
    if keyword_fallbacks:
        rules += (
            FieldRule("account_number", MASKED_ACCOUNT_RE),
            FieldRule("account_status", STATUS_KEYWORD_RE),
        )
    return rules


@lru_cache(maxsize=None)
def creditor_label_rule(sep: str) -> FieldRule:
    return FieldRule("creditor_name", _labeled(CREDITOR_LABELS, sep, r"[A-Za-z0-9][^:\n]*"))


def account_type_keyword_rule(account_types: Iterable[str]) -> FieldRule:
    alternatives = "|".join(re.escape(t).replace(r"\ ", r"\s+") for t in account_types)
    return FieldRule(
        "account_type",
        re.compile(r"\b(?P<value>" + alternatives + r")\b", re.IGNORECASE),
    )


# --- collections listings ------------------------------------------------

COLLECTION_DATE_LABELS = (
    r"date\s+assigned|date\s+opened|date\s+of\s+first\s+delinquency|date\s+reported|reported"
)

_COLLECTION_DATES = _labeled(COLLECTION_DATE_LABELS, FUZZY_SEP, DATE_VALUE)

FUZZY_COLLECTION_FIELDS: Tuple[FieldRule, ...] = (
    FieldRule(
        "original_creditor",
        _labeled(r"original\s+creditor|orig\.?\s+creditor", FUZZY_SEP, r"[^:\n]+"),
    ),
    FieldRule(
        "amount",
        _labeled(r"amount(?:\s+owed)?|balance|past\s+due", FUZZY_SEP + r"\$?", MONEY_VALUE),
    ),
    FieldRule("account_number", _labeled(ACCOUNT_NUMBER_LABELS, FUZZY_SEP, ACCOUNT_NUMBER_VALUE)),
    FieldRule("date_reported", _COLLECTION_DATES, _kw(r"reported")),
    FieldRule("date_occurred", _COLLECTION_DATES, None, _kw(r"reported")),
    FieldRule("status", _labeled(STATUS_LABELS, FUZZY_SEP, r"[^:\n]+")),
)


# --- personal information -------------------------------------------------

DOB_LABELS = r"date\s+of\s+birth|birth\s*date|dob|born"
EMPLOYER_LABELS = r"(?<!previous\s)(?<!former\s)(?:current\s+)?employer|employment|occupation"
PREVIOUS_EMPLOYER_LABELS = r"(?:previous|former|prior)\s+employer"
POSITION_LABELS = r"position|job\s+title"
INCOME_LABELS = r"income|salary"
HIRED_LABELS = r"date\s+hired|hire\s+date|hired"
PHONE_LABELS = r"(?:home\s+|cell\s+|work\s+|mobile\s+)?(?:phone|telephone|tel)(?:\s+(?:number|no\.?|#))?"
ADDRESS_LABELS = (
    r"(?<!previous\s)(?<!former\s)(?<!prior\s)(?<!email\s)(?<!e-mail\s)(?<!creditor\s)"
    r"(?:current\s+address|address|residence)"
)
PREVIOUS_ADDRESS_LABELS = r"(?:previous|former|prior)\s+address(?:es)?"

PHONE_VALUE = r"\(?\d{3}\)?[\-.\s]?\d{3}[\-.\s]?\d{4}"
STANDALONE_PHONE_RE = re.compile(r"(?<![\d\-])\(?\d{3}\)?[\-.\s]\d{3}[\-.]\d{4}(?![\d\-])")
UNLABELED_ADDRESS_RE = re.compile(
    r"(?P<value>\d+[ \t]+[^,\n]+,[ \t]*[^,\n]+,[ \t]*[A-Z]{2}[ \t]+\d{5}(?:-\d{4})?)"
)
STATE_ZIP_RE = re.compile(r"\b([A-Z]{2})\s+(\d{5}(?:-\d{4})?)\b")
CITY_STATE_ZIP_LINE_RE = re.compile(r"^[ \t]*[A-Za-z .'\-]+,?[ \t]+[A-Z]{2}[ \t]+\d{5}(?:-\d{4})?[ \t]*$")

MASKED_SSN_PREFIX = r"(?:\*{3}|X{3}|x{3}|#{3})-?(?:\*{2}|X{2}|x{2}|#{2})-?"
SSN_LABELS = r"ssn|social\s+security(?:\s+number)?|ss#"

BARE_MASKED_SSN_RE = re.compile(r"(?:\*{3}-\*{2}-|X{3}-X{2}-)(?P<value>\d{4})\b")
RECOVERY_SSN_RE = re.compile(r"(?<!\d)\d{3}[\-\s]?\d{2}[\-\s]?(?P<value>\d{4})(?!\d)")
RECOVERY_ACCOUNT_RE = re.compile(
    r"\b(?:account|acct)(?:\s*(?:number|no\.?))?[\s#:]*(?P<value>[A-Za-z*]*\d[\w*\-]*)",
    re.IGNORECASE,
)


@lru_cache(maxsize=None)
def personal_rules(sep: str) -> Tuple[FieldRule, ...]:
    return (
        FieldRule("date_of_birth", _labeled(DOB_LABELS, sep, DATE_VALUE)),
        FieldRule("employer", _labeled(EMPLOYER_LABELS, sep, r"[^:\n]+")),
        FieldRule("position", _labeled(POSITION_LABELS, sep, r"[^:\n]+")),
        FieldRule("income", _labeled(INCOME_LABELS, sep + r"\$?", MONEY_VALUE)),
        FieldRule("date_hired", _labeled(HIRED_LABELS, sep, DATE_VALUE)),
    )


@lru_cache(maxsize=None)
def ssn_patterns(sep: str, *, include_unlabeled: bool) -> Tuple[re.Pattern[str], ...]:
    patterns = [
        re.compile(
            r"\b(?:" + SSN_LABELS + r")" + sep + MASKED_SSN_PREFIX + r"(?P<value>\d{4})\b",
            re.IGNORECASE,
        ),
        re.compile(
            r"\b(?:" + SSN_LABELS + r")" + sep + r"\d{3}[\- ]?\d{2}[\- ]?(?P<value>\d{4})\b",
            re.IGNORECASE,
        ),
    ]
    if include_unlabeled:
        patterns.append(BARE_MASKED_SSN_RE)
    return tuple(patterns)


@lru_cache(maxsize=None)
def phone_pattern(sep: str) -> re.Pattern[str]:
    return _labeled(PHONE_LABELS, sep, PHONE_VALUE)


@lru_cache(maxsize=None)
def address_pattern(sep: str) -> re.Pattern[str]:
    return _labeled(ADDRESS_LABELS, sep, r"[^\n]+")


@lru_cache(maxsize=None)
def previous_address_pattern(sep: str) -> re.Pattern[str]:
    return _labeled(PREVIOUS_ADDRESS_LABELS, sep, r"[^\n]+")


@lru_cache(maxsize=None)
def previous_employer_pattern(sep: str) -> re.Pattern[str]:
    return _labeled(PREVIOUS_EMPLOYER_LABELS, sep, r"[^:\n]+")


# --- inquiries and scores -------------------------------------------------

INQUIRY_LINE_RE = re.compile(
    r"^[ \t]*(?P<name>[A-Z][A-Z0-9 &'.\-]*?[A-Z0-9.])[ \t]+(?P<date>"
    + DATE_VALUE
    + r")(?:[ \t]+(?P<purpose>[A-Za-z][A-Za-z /]*?))?[ \t]*$",
    re.MULTILINE,
)
INQUIRY_PAIR_RE = re.compile(
    r"(?P<name>\b[A-Z][A-Z0-9&'.\-]*(?:[ \t]+[A-Z0-9&'.\-]+)*?)[ \t]+(?P<date>" + DATE_VALUE + r")\b"
)
INQUIRY_MIXED_CASE_RE = re.compile(
    r"(?P<name>\b[A-Z][A-Za-z0-9&'.\-]*(?:[ \t]+[A-Za-z0-9&'.\-]+)*?)[ \t]+(?P<date>"
    + DATE_VALUE
    + r")\b"
)
INQUIRY_LABELED_RE = re.compile(
    r"\b(?:inquirer|inquiring\s+company|company|creditor)[ \t]*:?[ \t]*(?P<name>[^:\n]+?)"
    r"[ \t]+(?:date|on|inquiry\s+date)[ \t]*:?[ \t]*(?P<date>" + DATE_VALUE + r")",
    re.IGNORECASE,
)

SCORE_RE = re.compile(
    r"\b(?P<label>fico(?:\s*®)?(?:\s+(?:bankcard\s+|auto\s+)?score)?|vantage\s*score|vantage"
    r"|credit\s+score)(?:[ \t]+\d(?:\.\d)?)?[ \t]*:?[ \t]*(?P<value>\d{3})\b",
    re.IGNORECASE,
)
SCORE_FACTORS_HEADING_RE = re.compile(
    r"^[ \t]*(?:score\s+factors|key\s+factors|factors\s+affecting(?:\s+your)?\s+score)[ \t]*:?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
NEGATIVE_FACTOR_RE = re.compile(
    r"too\s+many|too\s+high|delinquen|late|insufficient|short|lack\s+of", re.IGNORECASE
)


__all__ = [
    "FieldRule",
    "extract_fields",
    "account_rules",
    "creditor_label_rule",
    "account_type_keyword_rule",
    "personal_rules",
    "ssn_patterns",
    "phone_pattern",
    "address_pattern",
    "previous_address_pattern",
    "previous_employer_pattern",
]
