"""Utilities for loading and validating the parser rulebook."""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml
from jsonschema import Draft7Validator, ValidationError

from creditparse.config import env_list

logger = logging.getLogger(__name__)

_RULEBOOK_PATH = Path(__file__).with_name("parser_rules.yaml")
_SCHEMA_PATH = Path(__file__).with_name("parser_rules_schema.yaml")

_RULEBOOK_CACHE: Mapping[str, Any] | None = None
_RULEBOOK_VERSION: str | None = None
_NEGATIVE_PATTERNS: Tuple[re.Pattern[str], ...] | None = None


def validate_rulebook(data: Any) -> None:
    """Raise :class:`jsonschema.ValidationError` unless ``data`` fits the schema.

    Negative status patterns are additionally compiled so a bad regular
    expression fails at load time rather than mid-parse.
    """

    schema = yaml.safe_load(_SCHEMA_PATH.read_text(encoding="utf-8"))
    Draft7Validator(schema).validate(data)
    for pattern in data["negative_status_patterns"]:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ValidationError(f"invalid negative_status_pattern {pattern!r}: {exc}") from exc


def load_rulebook(path: Path | None = None) -> Mapping[str, Any]:
    """Load and return the parser rulebook.

    The default rulebook is cached after the first successful load. Passing
    ``path`` loads and validates that file without touching the cache.
    """

    global _RULEBOOK_CACHE
    if path is None and _RULEBOOK_CACHE is not None:
        return _RULEBOOK_CACHE

    source = path or _RULEBOOK_PATH
    data = yaml.safe_load(Path(source).read_text(encoding="utf-8"))
    validate_rulebook(data)
    logger.debug("rulebook_loaded path=%s version=%s", source, data.get("version"))

    if path is not None:
        return data
    _RULEBOOK_CACHE = data
    return _RULEBOOK_CACHE


def get_rulebook_version() -> str:
    """Return a stable hash representing the current rulebook version."""

    global _RULEBOOK_VERSION
    if _RULEBOOK_VERSION is None:
        _RULEBOOK_VERSION = hashlib.sha256(_RULEBOOK_PATH.read_bytes()).hexdigest()
    return _RULEBOOK_VERSION


def soft_inquirers(rulebook: Mapping[str, Any] | None = None) -> list[str]:
    """Return the soft-inquiry allow-list, lower-cased.

    Names listed in ``PARSER_SOFT_INQUIRERS`` (comma separated) extend the
    rulebook list.
    """

    source = rulebook if rulebook is not None else load_rulebook()
    names = [n.lower() for n in source["soft_inquirers"]]
    for extra in env_list("PARSER_SOFT_INQUIRERS", []):
        lowered = extra.lower()
        if lowered not in names:
            names.append(lowered)
    return names


def negative_status_patterns() -> Tuple[re.Pattern[str], ...]:
    global _NEGATIVE_PATTERNS
    if _NEGATIVE_PATTERNS is None:
        _NEGATIVE_PATTERNS = tuple(
            re.compile(p, re.IGNORECASE)
            for p in load_rulebook()["negative_status_patterns"]
        )
    return _NEGATIVE_PATTERNS


def clear_cache() -> None:
    """Forget the cached rulebook; used by tests swapping rule files."""

    global _RULEBOOK_CACHE, _RULEBOOK_VERSION, _NEGATIVE_PATTERNS
    _RULEBOOK_CACHE = None
    _RULEBOOK_VERSION = None
    _NEGATIVE_PATTERNS = None


__all__ = [
    "load_rulebook",
    "get_rulebook_version",
    "validate_rulebook",
    "soft_inquirers",
    "negative_status_patterns",
    "clear_cache",
    "ValidationError",
]
