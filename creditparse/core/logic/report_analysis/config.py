"""Environment-backed thresholds for the report text parser.

Values are read on every call so tests and long-running workers pick up
environment changes without a reload.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)


_DEFAULT_MIN_TEXT_CHARS = 100
_DEFAULT_TIER_HIGH = 70
_DEFAULT_TIER_MEDIUM = 40
_DEFAULT_TIER_LOW = 20
_DEFAULT_SECTION_CONTEXT_CHARS = 50
_DEFAULT_SECTION_MIN_GAP = 200
_DEFAULT_SECTION_MIN_CHARS = 100
_DEFAULT_ACCOUNT_BLOCK_MIN_CHARS = 100

_WARNED_KEYS: set[str] = set()


@dataclass(frozen=True)
class TierThresholds:
    high: int
    medium: int
    low: int


def _warn_once(key: str, raw: object, default: object, reason: str) -> None:
    """Emit a structured warning for an invalid environment value once."""

    if key in _WARNED_KEYS:
        return

    _WARNED_KEYS.add(key)
    payload = {
        "key": key,
        "value": "" if raw is None else str(raw),
        "default": default,
        "reason": reason,
    }
    logger.warning("PARSER_CONFIG_DEFAULT %s", json.dumps(payload, sort_keys=True))


def _read_int(key: str, default: int, *, min_value: int = 0, max_value: int | None = None) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        _warn_once(key, raw, default, "invalid_int")
        return default
    if value < min_value:
        _warn_once(key, raw, default, f"min_{min_value}")
        return default
    if max_value is not None and value > max_value:
        _warn_once(key, raw, default, f"max_{max_value}")
        return default
    return value


def get_min_text_chars() -> int:
    """Return the length below which text scores zero."""

    return _read_int("PARSER_MIN_TEXT_CHARS", _DEFAULT_MIN_TEXT_CHARS, min_value=1)


def get_tier_thresholds() -> TierThresholds:
    """Return the quality score cut-offs for the high/medium/low tiers.

    Thresholds that are not strictly descending fall back to the defaults.
    """

    high = _read_int("PARSER_TIER_HIGH", _DEFAULT_TIER_HIGH, max_value=100)
    medium = _read_int("PARSER_TIER_MEDIUM", _DEFAULT_TIER_MEDIUM, max_value=100)
    low = _read_int("PARSER_TIER_LOW", _DEFAULT_TIER_LOW, max_value=100)
    if not high > medium > low:
        _warn_once(
            "PARSER_TIER_*",
            f"{high}/{medium}/{low}",
            f"{_DEFAULT_TIER_HIGH}/{_DEFAULT_TIER_MEDIUM}/{_DEFAULT_TIER_LOW}",
            "not_descending",
        )
        return TierThresholds(_DEFAULT_TIER_HIGH, _DEFAULT_TIER_MEDIUM, _DEFAULT_TIER_LOW)
    return TierThresholds(high, medium, low)


def get_section_context_chars() -> int:
    return _read_int("PARSER_SECTION_CONTEXT_CHARS", _DEFAULT_SECTION_CONTEXT_CHARS)


def get_section_min_gap() -> int:
    return _read_int("PARSER_SECTION_MIN_GAP", _DEFAULT_SECTION_MIN_GAP)


def get_section_min_chars() -> int:
    return _read_int("PARSER_SECTION_MIN_CHARS", _DEFAULT_SECTION_MIN_CHARS)


def get_account_block_min_chars() -> int:
    return _read_int("PARSER_ACCOUNT_BLOCK_MIN_CHARS", _DEFAULT_ACCOUNT_BLOCK_MIN_CHARS)


__all__ = [
    "TierThresholds",
    "get_min_text_chars",
    "get_tier_thresholds",
    "get_section_context_chars",
    "get_section_min_gap",
    "get_section_min_chars",
    "get_account_block_min_chars",
]
