#!/usr/bin/env python3
"""Parse every ``*.txt`` report in a directory, one after another."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Dict, Sequence

try:  # pragma: no cover - convenience bootstrap
    import scripts._bootstrap  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover - direct execution
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from creditparse.config import BATCH_DELAY_MS
from creditparse.core.case_store.api import save_parsing_result
from creditparse.core.logic.report_analysis.errors import ParseError
from creditparse.core.logic.report_analysis.orchestrator import parse

logger = logging.getLogger(__name__)


def run_batch(
    directory: Path,
    *,
    delay_ms: int = BATCH_DELAY_MS,
    store: bool = False,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, str]:
    """Parse each text file under ``directory`` in name order.

    Returns a mapping of report id to outcome (``ok`` or the error code).
    ``delay_ms`` is waited between items, never after the last one.
    """

    outcomes: Dict[str, str] = {}
    files = sorted(directory.glob("*.txt"))
    for index, path in enumerate(files):
        if index and delay_ms > 0:
            sleep(delay_ms / 1000.0)
        report_id = path.stem
        try:
            result = parse(path.read_text(encoding="utf-8", errors="replace"))
        except ParseError as exc:
            logger.warning("batch_item_failed report=%s code=%s", report_id, exc.code)
            outcomes[report_id] = exc.code
            continue
        if store:
            save_parsing_result(report_id, result)
        outcomes[report_id] = "ok"
        logger.info(
            "batch_item_done report=%s confidence=%d accounts=%d",
            report_id,
            result.parsing_confidence,
            len(result.credit_accounts),
        )
    return outcomes


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Parse a directory of report text files")
    parser.add_argument("directory", help="Directory containing *.txt report files")
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=BATCH_DELAY_MS,
        dest="delay_ms",
        help="Pause between reports in milliseconds",
    )
    parser.add_argument("--store", action="store_true", help="Persist each result")
    args = parser.parse_args(argv)

    outcomes = run_batch(Path(args.directory), delay_ms=max(0, args.delay_ms), store=args.store)
    print(json.dumps(outcomes, indent=2, sort_keys=True))
    return 0 if all(v == "ok" for v in outcomes.values()) else 1


if __name__ == "__main__":  # pragma: no cover - manual tool
    sys.exit(main())
