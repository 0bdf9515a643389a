#!/usr/bin/env python3
"""Parse one extracted report text file and print the structured result."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

try:  # pragma: no cover - convenience bootstrap
    import scripts._bootstrap  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover - direct execution
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from creditparse.core.case_store.api import save_parsing_result
from creditparse.core.case_store.errors import CaseStoreError
from creditparse.core.logic.report_analysis.errors import (
    NoInputTextError,
    RecoveryExhaustedError,
)
from creditparse.core.logic.report_analysis.orchestrator import parse

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STORE_FAILED = 1
EXIT_NO_INPUT = 2
EXIT_RECOVERY_EXHAUSTED = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse credit report text into JSON")
    parser.add_argument("text_file", help="Path to the extracted report text")
    parser.add_argument("--bureau", help="Bureau hint (TransUnion, Experian, Equifax)")
    parser.add_argument("--report-id", dest="report_id", help="Report identifier for --store")
    parser.add_argument("--output", help="Write the JSON result here instead of stdout")
    parser.add_argument(
        "--store",
        action="store_true",
        help="Replace the stored records for --report-id with this result",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    report_id = args.report_id or Path(args.text_file).stem
    text = Path(args.text_file).read_text(encoding="utf-8", errors="replace")

    try:
        result = parse(text, args.bureau)
    except NoInputTextError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_NO_INPUT
    except RecoveryExhaustedError as exc:
        print(
            f"error: {exc} (quality score {exc.quality_score}); the file may be a "
            "scanned image, corrupted, or an unsupported format",
            file=sys.stderr,
        )
        return EXIT_RECOVERY_EXHAUSTED

    payload = json.dumps(result.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        logger.info("parse_written report=%s path=%s", report_id, args.output)
    else:
        print(payload)

    if args.store:
        try:
            case = save_parsing_result(report_id, result)
        except CaseStoreError as exc:
            print(f"error: {exc.code}: {exc.message}", file=sys.stderr)
            return EXIT_STORE_FAILED
        logger.info("parse_stored report=%s version=%d", report_id, case.version)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual tool
    sys.exit(main())
