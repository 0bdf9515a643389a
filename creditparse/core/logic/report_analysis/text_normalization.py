"""Utilities for cleaning OCR output before it is scored or parsed.

Two entry points exist. :func:`preprocess_text` applies the full repair
sequence, including the token re-joining that undoes OCR letter and digit
splitting; its output feeds the quality scorer. :func:`normalize_for_extraction`
applies only the lossless subset, because re-joining would also fuse
legitimate words such as ``JOHN SMITH`` into ``JOHNSMITH``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from creditparse.config import PARSER_TEXT_PREPROCESS_ENABLED


PDF_STREAM_RE = re.compile(r"/Filter.*?/Length.*?stream")
PDF_ENDSTREAM_RE = re.compile(r"endstream\s+endobj")
SPLIT_DIGITS_RE = re.compile(r"(\d)\s+(\d)")
SPLIT_CAPITALS_RE = re.compile(r"([A-Z])\s+([A-Z])")
WIDE_SPACE_RE = re.compile(r"\s{3,}")
BLANK_LINES_RE = re.compile(r"\n\s*\n")

# Curly quotes and dashes mapped to ASCII.
PUNCTUATION_MAP = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "“": '"',
        "”": '"',
        "–": "-",
        "—": "-",
    }
)


@dataclass
class PreprocessStats:
    """Counts of preprocessing operations for telemetry."""

    metadata_fragments: int = 0
    tokens_joined: int = 0
    space_reduced_chars: int = 0


def _strip_pdf_metadata(text: str, stats: PreprocessStats) -> str:
    text, n_stream = PDF_STREAM_RE.subn("", text)
    text, n_end = PDF_ENDSTREAM_RE.subn("", text)
    stats.metadata_fragments += n_stream + n_end
    return text


def preprocess_text(text: str | None) -> tuple[str, PreprocessStats]:
    """Repair common OCR artefacts in ``text``.

    Steps run in a fixed order: PDF stream markers are removed, split
    digit and capital-letter tokens are re-joined, whitespace runs of three
    or more collapse to one space, line endings and blank-line runs are
    normalised, and typographic quotes and dashes become ASCII. Never
    raises; ``None`` yields an empty string.
    """

    stats = PreprocessStats()
    if not text:
        return "", stats
    if not PARSER_TEXT_PREPROCESS_ENABLED:
        return text, stats

    txt = _strip_pdf_metadata(text, stats)

    txt, n_digits = SPLIT_DIGITS_RE.subn(r"\1\2", txt)
    txt, n_caps = SPLIT_CAPITALS_RE.subn(r"\1\2", txt)
    stats.tokens_joined += n_digits + n_caps

    before_len = len(txt)
    txt = WIDE_SPACE_RE.sub(" ", txt)
    txt = txt.replace("\r\n", "\n")
    txt = BLANK_LINES_RE.sub("\n", txt)
    stats.space_reduced_chars += before_len - len(txt)

    txt = txt.translate(PUNCTUATION_MAP)
    return txt, stats


def normalize_for_extraction(text: str | None) -> str:
    """Apply the non-destructive part of :func:`preprocess_text`.

    PDF markers are stripped, line endings unified and typographic
    punctuation replaced; line structure and spacing are preserved for the
    line-anchored field patterns.
    """

    if not text:
        return ""
    txt = _strip_pdf_metadata(text, PreprocessStats())
    txt = txt.replace("\r\n", "\n").replace("\r", "\n")
    return txt.translate(PUNCTUATION_MAP)


__all__ = ["preprocess_text", "normalize_for_extraction", "PreprocessStats"]
