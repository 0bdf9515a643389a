from dataclasses import dataclass, field


# Known error codes
NO_INPUT_TEXT = "NO_INPUT_TEXT"
RECOVERY_EXHAUSTED = "RECOVERY_EXHAUSTED"


@dataclass
class ParseError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


@dataclass
class NoInputTextError(ParseError):
    code: str = field(default=NO_INPUT_TEXT)
    message: str = field(default="no report text was supplied")


@dataclass
class RecoveryExhaustedError(ParseError):
    code: str = field(default=RECOVERY_EXHAUSTED)
    message: str = field(default="No meaningful data could be recovered")
    quality_score: int = 0


class SectionNotFoundWarning(UserWarning):
    """A report section had no anchor; extractors fall back to the full text."""

    def __init__(self, section: str) -> None:
        super().__init__(section)
        self.section = section

    def __str__(self) -> str:
        return f"section_not_found: {self.section}"


class FieldNotFoundWarning(UserWarning):
    """A field pattern matched nothing; the field is left as ``None``."""

    def __init__(self, category: str, field_name: str) -> None:
        super().__init__(category, field_name)
        self.category = category
        self.field_name = field_name

    def __str__(self) -> str:
        return f"field_not_found: {self.category}.{self.field_name}"


def extraction_failure(category: str, exc: BaseException) -> str:
    """Format an unexpected extractor exception as an extraction error entry."""

    return f"{category}_extraction_failed: {type(exc).__name__}: {exc}"


__all__ = [
    "ParseError",
    "NoInputTextError",
    "RecoveryExhaustedError",
    "SectionNotFoundWarning",
    "FieldNotFoundWarning",
    "extraction_failure",
    "NO_INPUT_TEXT",
    "RECOVERY_EXHAUSTED",
]
