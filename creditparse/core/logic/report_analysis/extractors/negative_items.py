"""Negative item derivation from accounts and collections blocks."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from creditparse.core.models import Bureau, CreditAccount, NegativeItem
from creditparse.core.taxonomy import (
    COLLECTION_SEVERITY,
    NegativeItemType,
    classify_negative_status,
    severity_score,
)

from ..patterns import DATE_VALUE, FUZZY_COLLECTION_FIELDS, extract_fields
from .tokens import clean_value, normalize_issuer, parse_amount

logger = logging.getLogger(__name__)

COLLECTIONS_HEADING_RE = re.compile(
    r"^[ \t]*collections?(?:[ \t]+accounts?)?[ \t]*:?[ \t]*$", re.IGNORECASE | re.MULTILINE
)
# Any following upper-case heading line closes the collections listing.
NEXT_HEADING_RE = re.compile(
    r"\n\s*\n(?=[ \t]*(?:PUBLIC\s+RECORDS|INQUIRIES|CREDIT\s+INQUIRIES|ACCOUNT\s+INFORMATION"
    r"|NEGATIVE\s+ACCOUNTS|CREDIT\s+SCORE)\b)",
    re.IGNORECASE,
)
COLLECTION_CREDITOR_RE = re.compile(r"([A-Z][^:\n]+)")
# Entries are separated by blank lines or start on an unlabeled capitalised
# line; ``Label: value`` lines stay with the entry above them.
COLLECTION_ENTRY_SPLIT_RE = re.compile(
    r"\n\s*\n|\n(?=[ \t]*(?!(?i:original|amount|balance|past\s+due|date|reported|status|account|acct)\b)"
    r"[A-Z][^:\n]*(?:\n|$))"
)
# Trailing date and amount tokens on a one-line entry such as
# ``MIDLAND FUNDING 01/2020 $500``.
COLLECTION_LINE_TAIL_RE = re.compile(
    r"(?:[ \t]+(?:\$[\d,]+(?:\.\d{1,2})?|" + DATE_VALUE + r"))+[ \t]*$"
)
TAIL_DATE_RE = re.compile(DATE_VALUE)
TAIL_AMOUNT_RE = re.compile(r"\$[\d,]+(?:\.\d{1,2})?")


def negative_from_account(account: CreditAccount) -> NegativeItem:
    """Build the negative item implied by a negative account."""

    status = account.reported_status
    amount = account.current_balance if account.current_balance is not None else account.past_due_amount
    return NegativeItem(
        item_type=classify_negative_status(status),
        creditor_name=account.creditor_name,
        severity_score=severity_score(status, account.past_due_amount),
        account_number=account.account_number,
        amount=amount,
        date_occurred=account.last_activity_date or account.date_opened,
        status=status,
        description=f"{account.account_type or 'Account'} with {account.creditor_name}",
        bureau_reporting=tuple(account.bureau_reporting),
    )


def collections_text(text: Optional[str]) -> Optional[str]:
    """Return the body under a ``Collections`` heading in ``text``, if any."""

    if not text:
        return None
    m = COLLECTIONS_HEADING_RE.search(text)
    if not m:
        return None
    body = text[m.end():]
    end = NEXT_HEADING_RE.search(body)
    if end:
        body = body[: end.start()]
    return body.strip() or None


def parse_collection_block(block: str, bureau: Bureau) -> Optional[NegativeItem]:
    m = COLLECTION_CREDITOR_RE.search(block)
    if not m:
        return None
    agency = m.group(1).strip()
    fields = extract_fields(block, FUZZY_COLLECTION_FIELDS)
    tail = COLLECTION_LINE_TAIL_RE.search(agency)
    if tail:
        agency = agency[: tail.start()].strip()
        dm = TAIL_DATE_RE.search(tail.group(0))
        am = TAIL_AMOUNT_RE.search(tail.group(0))
        if dm:
            fields.setdefault("date_occurred", dm.group(0))
        if am:
            fields.setdefault("amount", am.group(0))
    if not agency:
        return None
    original = clean_value(fields.get("original_creditor"))
    return NegativeItem(
        item_type=NegativeItemType.collection,
        creditor_name=agency,
        severity_score=COLLECTION_SEVERITY,
        original_creditor=original,
        collection_agency=agency,
        account_number=fields.get("account_number"),
        amount=parse_amount(fields.get("amount")),
        date_occurred=fields.get("date_occurred"),
        date_reported=fields.get("date_reported"),
        status=clean_value(fields.get("status")),
        description=f"Collection account with {agency}",
        bureau_reporting=(bureau,),
    )


def extract_collection_items(text: Optional[str], bureau: Bureau = Bureau.Unknown) -> List[NegativeItem]:
    body = collections_text(text)
    if not body:
        return []
    items: List[NegativeItem] = []
    for block in COLLECTION_ENTRY_SPLIT_RE.split(body):
        if not block.strip():
            continue
        item = parse_collection_block(block.strip(), bureau)
        if item is not None:
            items.append(item)
    return items


def extract_negative_items(
    accounts: Iterable[CreditAccount],
    collections_source: Optional[str] = None,
    bureau: Bureau = Bureau.Unknown,
) -> List[NegativeItem]:
    """Derive negative items from negative accounts and a collections listing.

    A collections entry whose creditor already produced an item through its
    account is skipped, so one tradeline is never reported twice.
    """

    items = [negative_from_account(a) for a in accounts if a.is_negative]
    known = {normalize_issuer(i.creditor_name) for i in items}
    for item in extract_collection_items(collections_source, bureau):
        key = normalize_issuer(item.creditor_name)
        if key in known:
            continue
        known.add(key)
        items.append(item)
    logger.debug("negative_items_extracted count=%d", len(items))
    return items


__all__ = [
    "extract_negative_items",
    "extract_collection_items",
    "negative_from_account",
    "collections_text",
]
