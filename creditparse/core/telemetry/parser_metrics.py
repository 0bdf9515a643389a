"""Telemetry helpers for parser audit instrumentation."""

from __future__ import annotations

from .emit import emit


def emit_parser_audit(
    *,
    bureau: str,
    text_chars: int,
    quality_score: int,
    tier: str,
    sections_found: list[str],
    accounts_total: int,
    negative_items_total: int,
    inquiries_total: int,
    scores_total: int,
    parsing_confidence: int,
    extraction_errors: int,
    parse_ms: float,
) -> None:
    """Emit a ``parser_audit`` telemetry event.

    Only counts and scores are emitted; no report text or PII leaves the
    pipeline through this channel.
    """

    emit(
        "parser_audit",
        {
            "bureau": bureau,
            "text_chars": text_chars,
            "quality_score": quality_score,
            "tier": tier,
            "sections_found": sections_found,
            "accounts_total": accounts_total,
            "negative_items_total": negative_items_total,
            "inquiries_total": inquiries_total,
            "scores_total": scores_total,
            "parsing_confidence": parsing_confidence,
            "extraction_errors": extraction_errors,
            "parse_ms": parse_ms,
        },
    )
