"""End-to-end parse of one report's text into a :class:`ParsingResult`."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from creditparse.core.config import FLAGS
from creditparse.core.models import (
    Bureau,
    CreditAccount,
    ParsingResult,
    PersonalInfo,
    SectionName,
    TextQuality,
)
from creditparse.core.telemetry import metrics
from creditparse.core.telemetry.parser_metrics import emit_parser_audit

from .confidence import compute_confidence
from .errors import (
    NoInputTextError,
    RecoveryExhaustedError,
    SectionNotFoundWarning,
    extraction_failure,
)
from .extractors.sections import missing_sections, segment_sections
from .extractors.summary import summarize_accounts
from .extractors.tokens import detect_bureau
from .quality import assess_text
from .strategies import FieldExtractor, get_extractor
from .text_normalization import normalize_for_extraction, preprocess_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_bureau(bureau_hint: Optional[str], text: str) -> Bureau:
    """Use the caller's hint when it names a bureau, else detect from ``text``."""

    hinted = Bureau.coerce(bureau_hint)
    if hinted is not Bureau.Unknown:
        return hinted
    return detect_bureau(text)


def _guarded(category: str, func: Callable[[], T], empty: T, errors: List[str]) -> T:
    try:
        return func()
    except Exception as exc:
        logger.exception("extraction_failed category=%s", category)
        metrics.increment("parser.extraction_failed", tags={"category": category})
        errors.append(extraction_failure(category, exc))
        return empty


def _recover(
    extractor: FieldExtractor, text: str, bureau: Bureau, quality: TextQuality, errors: List[str]
) -> tuple[PersonalInfo, List[CreditAccount]]:
    personal = _guarded("personal_info", lambda: extractor.personal_info(text), PersonalInfo(), errors)
    accounts = _guarded("accounts", lambda: extractor.accounts(text, bureau), [], errors)
    if personal.ssn_partial is None and not accounts:
        metrics.increment("parser.recovery_exhausted")
        logger.warning("recovery_exhausted quality_score=%d chars=%d", quality.score, len(text))
        raise RecoveryExhaustedError(quality_score=quality.score)
    return personal, accounts


def parse(
    raw_text: Optional[str],
    bureau_hint: Optional[str] = None,
    *,
    rulebook: Optional[Mapping[str, Any]] = None,
) -> ParsingResult:
    """Parse bureau report text into structured records.

    Raises :class:`NoInputTextError` for empty or whitespace-only input and
    :class:`RecoveryExhaustedError` when the text falls to the recovery tier
    and not even an SSN or account token can be found. Any other failure
    inside a category is recorded in ``extraction_errors`` and that category
    is left empty.
    """

    if raw_text is None or not raw_text.strip():
        metrics.increment("parser.no_input")
        raise NoInputTextError()

    started = time.perf_counter()
    cleaned, stats = preprocess_text(raw_text)
    quality = assess_text(cleaned)
    text = normalize_for_extraction(raw_text)
    bureau = resolve_bureau(bureau_hint, text)
    extractor = get_extractor(quality.tier, rulebook)
    errors: List[str] = []
    logger.debug(
        "parse_start chars=%d quality=%d tier=%s bureau=%s tokens_joined=%d",
        len(raw_text),
        quality.score,
        quality.tier.value,
        bureau.value,
        stats.tokens_joined,
    )

    sections: dict[SectionName, str] = {}
    if not extractor.requires_sections:
        personal, accounts = _recover(extractor, text, bureau, quality, errors)
        negatives, inquiries, scores = [], [], []
    else:
        sections = segment_sections(text, extractor.rules["section_anchors"])
        for name in missing_sections(sections):
            errors.append(str(SectionNotFoundWarning(name.value)))
        if FLAGS.parser_debug:
            for name, body in sections.items():
                logger.debug("section name=%s chars=%d", name.value, len(body))

        def section(name: SectionName) -> str:
            return sections.get(name, text)

        personal = _guarded(
            "personal_info",
            lambda: extractor.personal_info(section(SectionName.personal_info)),
            PersonalInfo(),
            errors,
        )
        accounts = _guarded(
            "accounts",
            lambda: extractor.accounts(section(SectionName.accounts), bureau),
            [],
            errors,
        )
        inquiries = _guarded(
            "inquiries",
            lambda: extractor.inquiries(section(SectionName.inquiries), bureau),
            [],
            errors,
        )
        scores = _guarded(
            "scores",
            lambda: extractor.scores(text, bureau, sections.get(SectionName.scores)),
            [],
            errors,
        )
        negatives = _guarded(
            "negative_items",
            lambda: extractor.negative_items(
                accounts, sections.get(SectionName.negative_items), text, bureau
            ),
            [],
            errors,
        )

    summary = summarize_accounts(accounts)
    confidence = compute_confidence(personal, accounts, negatives, scores)
    parse_ms = round((time.perf_counter() - started) * 1000, 3)

    metrics.increment("parser.parsed", tags={"tier": quality.tier.value})
    metrics.gauge("parser.confidence", confidence)
    if FLAGS.parser_audit_enabled:
        emit_parser_audit(
            bureau=bureau.value,
            text_chars=len(raw_text),
            quality_score=quality.score,
            tier=quality.tier.value,
            sections_found=[n.value for n in sections],
            accounts_total=len(accounts),
            negative_items_total=len(negatives),
            inquiries_total=len(inquiries),
            scores_total=len(scores),
            parsing_confidence=confidence,
            extraction_errors=len(errors),
            parse_ms=parse_ms,
        )
    logger.info(
        "parse_done tier=%s bureau=%s accounts=%d negatives=%d inquiries=%d scores=%d confidence=%d errors=%d",
        quality.tier.value,
        bureau.value,
        len(accounts),
        len(negatives),
        len(inquiries),
        len(scores),
        confidence,
        len(errors),
    )

    return ParsingResult(
        personal_info=personal,
        credit_accounts=tuple(accounts),
        negative_items=tuple(negatives),
        credit_inquiries=tuple(inquiries),
        credit_scores=tuple(scores),
        account_summary=summary,
        parsing_confidence=confidence,
        extraction_errors=tuple(errors),
        bureau=bureau,
        text_quality=quality,
    )


__all__ = ["parse", "resolve_bureau"]
