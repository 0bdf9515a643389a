"""Extraction strategies selected by text quality tier.

One :class:`FieldExtractor` capability with four implementations. The
strict, fuzzy and aggressive extractors share the same field tables and
differ only in the label separator and in which unlabeled fallbacks they
enable. The recovery extractor ignores sections and only pulls isolated
SSN and account tokens.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from creditparse.core.models import (
    Bureau,
    CreditAccount,
    CreditInquiry,
    CreditScore,
    NegativeItem,
    PersonalInfo,
    QualityTier,
)
from creditparse.policy.rules_loader import load_rulebook, negative_status_patterns, soft_inquirers

from .extractors.accounts import extract_accounts
from .extractors.inquiries import extract_inquiries
from .extractors.negative_items import collections_text, extract_negative_items
from .extractors.personal_info import extract_personal_info, mask_ssn
from .extractors.scores import extract_scores
from .extractors.tokens import dedupe
from .patterns import (
    AGGRESSIVE_SEP,
    FUZZY_SEP,
    INQUIRY_LABELED_RE,
    INQUIRY_LINE_RE,
    INQUIRY_MIXED_CASE_RE,
    INQUIRY_PAIR_RE,
    RECOVERY_ACCOUNT_RE,
    RECOVERY_SSN_RE,
    STRICT_SEP,
)

logger = logging.getLogger(__name__)

UNKNOWN_CREDITOR = "Unknown Creditor"
UNKNOWN_STATUS = "Unknown"


class FieldExtractor:
    """Field extraction capability shared by every quality tier."""

    tier: QualityTier
    sep: str = STRICT_SEP
    caps_name_line: bool = False
    unlabeled_address: bool = False
    unlabeled_ssn: bool = False
    standalone_phones: bool = False
    keyword_fallbacks: bool = False
    caps_run_creditor: bool = False
    inquiry_patterns: Sequence[re.Pattern[str]] = (INQUIRY_LINE_RE, INQUIRY_LABELED_RE)

    def __init__(self, rulebook: Optional[Mapping[str, Any]] = None) -> None:
        if rulebook is None:
            self.rules = load_rulebook()
            self.negative_patterns = negative_status_patterns()
        else:
            self.rules = rulebook
            self.negative_patterns = tuple(
                re.compile(p, re.IGNORECASE) for p in rulebook["negative_status_patterns"]
            )

    @property
    def requires_sections(self) -> bool:
        return True

    def personal_info(self, text: str) -> PersonalInfo:
        return extract_personal_info(
            text,
            sep=self.sep,
            caps_name_line=self.caps_name_line,
            unlabeled_address=self.unlabeled_address,
            standalone_phones=self.standalone_phones,
            unlabeled_ssn=self.unlabeled_ssn,
            heading_words=self.rules["heading_words"],
        )

    def accounts(self, text: str, bureau: Bureau) -> List[CreditAccount]:
        return extract_accounts(
            text,
            bureau,
            sep=self.sep,
            keyword_fallbacks=self.keyword_fallbacks,
            caps_run=self.caps_run_creditor,
            account_types=self.rules["account_types"],
            heading_words=self.rules["heading_words"],
            negative_patterns=self.negative_patterns,
        )

    def inquiries(self, text: str, bureau: Bureau) -> List[CreditInquiry]:
        return extract_inquiries(
            text,
            patterns=self.inquiry_patterns,
            soft_inquirers=soft_inquirers(self.rules),
            bureau=None if bureau is Bureau.Unknown else bureau,
        )

    def scores(self, text: str, bureau: Bureau, factors_text: Optional[str] = None) -> List[CreditScore]:
        return extract_scores(text, bureau=bureau, factors_text=factors_text or text)

    def negative_items(
        self,
        accounts: Sequence[CreditAccount],
        negative_section: Optional[str],
        full_text: str,
        bureau: Bureau,
    ) -> List[NegativeItem]:
        source = negative_section
        if collections_text(source) is None:
            source = full_text
        return extract_negative_items(accounts, source, bureau)


class StrictExtractor(FieldExtractor):
    """Labeled ``keyword: value`` patterns only."""

    tier = QualityTier.high


class FuzzyExtractor(FieldExtractor):
    tier = QualityTier.medium
    sep = FUZZY_SEP
    caps_name_line = True
    unlabeled_address = True
    unlabeled_ssn = True
    keyword_fallbacks = True
    inquiry_patterns = (INQUIRY_LINE_RE, INQUIRY_PAIR_RE, INQUIRY_LABELED_RE)


class AggressiveExtractor(FuzzyExtractor):
    """Fuzzy extraction with filler words allowed between label and value."""

    tier = QualityTier.low
    sep = AGGRESSIVE_SEP
    standalone_phones = True
    caps_run_creditor = True
    inquiry_patterns = (INQUIRY_LINE_RE, INQUIRY_PAIR_RE, INQUIRY_MIXED_CASE_RE, INQUIRY_LABELED_RE)


class RecoveryExtractor(FieldExtractor):
    """Last-resort token harvesting for text that barely reads as a report."""

    tier = QualityTier.recovery

    @property
    def requires_sections(self) -> bool:
        return False

    def personal_info(self, text: str) -> PersonalInfo:
        m = RECOVERY_SSN_RE.search(text or "")
        return PersonalInfo(ssn_partial=mask_ssn(m.group("value")) if m else None)

    def accounts(self, text: str, bureau: Bureau) -> List[CreditAccount]:
        tokens = dedupe(m.group("value") for m in RECOVERY_ACCOUNT_RE.finditer(text or ""))
        return [
            CreditAccount(
                creditor_name=UNKNOWN_CREDITOR,
                account_number=token,
                account_status=UNKNOWN_STATUS,
                bureau_reporting=[bureau],
            )
            for token in tokens
        ]

    def inquiries(self, text: str, bureau: Bureau) -> List[CreditInquiry]:
        return []

    def scores(self, text: str, bureau: Bureau, factors_text: Optional[str] = None) -> List[CreditScore]:
        return []

    def negative_items(
        self,
        accounts: Sequence[CreditAccount],
        negative_section: Optional[str],
        full_text: str,
        bureau: Bureau,
    ) -> List[NegativeItem]:
        return []


_EXTRACTORS: Dict[QualityTier, Type[FieldExtractor]] = {
    QualityTier.high: StrictExtractor,
    QualityTier.medium: FuzzyExtractor,
    QualityTier.low: AggressiveExtractor,
    QualityTier.recovery: RecoveryExtractor,
}


def get_extractor(tier: QualityTier, rulebook: Optional[Mapping[str, Any]] = None) -> FieldExtractor:
    extractor = _EXTRACTORS[QualityTier(tier)](rulebook)
    logger.debug("extractor_selected tier=%s class=%s", extractor.tier.value, type(extractor).__name__)
    return extractor


__all__ = [
    "FieldExtractor",
    "StrictExtractor",
    "FuzzyExtractor",
    "AggressiveExtractor",
    "RecoveryExtractor",
    "get_extractor",
]
