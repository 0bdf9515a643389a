"""Field extractors for bureau report text."""

from . import (
    accounts,
    history,
    inquiries,
    negative_items,
    personal_info,
    scores,
    sections,
    summary,
    tokens,
)

__all__ = [
    "accounts",
    "history",
    "inquiries",
    "negative_items",
    "personal_info",
    "scores",
    "sections",
    "summary",
    "tokens",
]
