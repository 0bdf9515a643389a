"""Per-block account parser."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from creditparse.core.models import Bureau, CreditAccount
from creditparse.core.taxonomy import is_negative_status

from ..block_segmenter import split_account_blocks
from ..patterns import (
    ANY_CAPS_RUN_RE,
    account_rules,
    account_type_keyword_rule,
    creditor_label_rule,
    extract_fields,
)
from .history import parse_payment_history
from .tokens import clean_value, is_heading_line, parse_amount

logger = logging.getLogger(__name__)

MIN_CREDITOR_CHARS = 3

CAPS_LINE_RE = re.compile(r"^[ \t]*([A-Z0-9][A-Z0-9 &'./\-]*[A-Z0-9.])[ \t]*$", re.MULTILINE)
_LETTERS_RE = re.compile(r"[A-Z]{2,}")

_MONEY_FIELDS = (
    "current_balance",
    "credit_limit",
    "high_credit",
    "monthly_payment",
    "past_due_amount",
)
_DATE_FIELDS = ("date_opened", "date_closed", "last_activity_date", "last_payment_date")


def find_creditor(
    block: str, sep: str, *, caps_run: bool = False, heading_words: Iterable[str] = ()
) -> Optional[str]:
    """Return the creditor name for ``block``.

    A labeled ``Creditor:`` value wins, then the first upper-case line that is
    not a heading, then (with ``caps_run``) any run of upper-case words.
    """

    headings = list(heading_words)
    labeled = clean_value(extract_fields(block, (creditor_label_rule(sep),)).get("creditor_name"))
    if labeled and len(labeled) >= MIN_CREDITOR_CHARS:
        return labeled

    for m in CAPS_LINE_RE.finditer(block):
        candidate = m.group(1).strip()
        if _LETTERS_RE.search(candidate) and not is_heading_line(candidate, headings):
            return candidate

    if caps_run:
        for m in ANY_CAPS_RUN_RE.finditer(block):
            candidate = m.group("value").strip()
            if not is_heading_line(candidate, headings):
                return candidate
    return None


def _title(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return " ".join(w.capitalize() for w in value.split())


def parse_account_block(
    block: str,
    bureau: Bureau = Bureau.Unknown,
    *,
    sep: str,
    keyword_fallbacks: bool = False,
    caps_run: bool = False,
    account_types: Sequence[str] = (),
    heading_words: Sequence[str] = (),
    negative_patterns: Optional[Sequence[re.Pattern[str]]] = None,
) -> Optional[CreditAccount]:
    """Parse one account block into a :class:`CreditAccount`.

    Returns ``None`` when no creditor name of at least three characters is
    found; every other field is optional.
    """

    creditor = find_creditor(block, sep, caps_run=caps_run, heading_words=heading_words)
    if not creditor or len(creditor) < MIN_CREDITOR_CHARS:
        return None

    fields = extract_fields(block, account_rules(sep, keyword_fallbacks=keyword_fallbacks))
    if keyword_fallbacks and "account_type" not in fields and account_types:
        fields.update(extract_fields(block, (account_type_keyword_rule(account_types),)))

    account = CreditAccount(creditor_name=creditor, bureau_reporting=[Bureau.coerce(bureau)])
    account.account_number = fields.get("account_number")
    account.account_type = clean_value(fields.get("account_type"))
    account.account_status = clean_value(fields.get("account_status"))
    account.payment_status = clean_value(fields.get("payment_status"))
    account.responsibility_type = _title(fields.get("responsibility_type"))
    account.account_remarks = clean_value(fields.get("account_remarks"))
    for name in _MONEY_FIELDS:
        setattr(account, name, parse_amount(fields.get(name)))
    for name in _DATE_FIELDS:
        setattr(account, name, fields.get(name))
    account.payment_history = parse_payment_history(fields.get("payment_history"))
    account.is_negative = is_negative_status(account.reported_status, negative_patterns)
    return account


def extract_accounts(text: str, bureau: Bureau = Bureau.Unknown, **options) -> List[CreditAccount]:
    """Split ``text`` into blocks and parse every block into an account.

    ``options`` are passed through to :func:`parse_account_block`.
    """

    accounts: List[CreditAccount] = []
    for block in split_account_blocks(text, bureau):
        account = parse_account_block(block, bureau, **options)
        if account is None:
            continue
        accounts.append(account)
    logger.debug("accounts_extracted bureau=%s count=%d", Bureau.coerce(bureau).value, len(accounts))
    return accounts


__all__ = ["extract_accounts", "parse_account_block", "find_creditor"]
