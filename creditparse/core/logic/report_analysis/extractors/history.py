"""Payment history code parsing."""

from __future__ import annotations

import re
from typing import Dict, Optional

from creditparse.core.models import PaymentHistoryStatus

_CODE_MAP: Dict[str, PaymentHistoryStatus] = {
    "OK": PaymentHistoryStatus.current,
    "C": PaymentHistoryStatus.current,
    "0": PaymentHistoryStatus.current,
    "✓": PaymentHistoryStatus.current,
    "30": PaymentHistoryStatus.late_30,
    "1": PaymentHistoryStatus.late_30,
    "60": PaymentHistoryStatus.late_60,
    "2": PaymentHistoryStatus.late_60,
    "90": PaymentHistoryStatus.late_90,
    "3": PaymentHistoryStatus.late_90,
    "120": PaymentHistoryStatus.late_120,
    "120+": PaymentHistoryStatus.late_120,
    "CO": PaymentHistoryStatus.late_120,
    "-": PaymentHistoryStatus.no_data,
    "ND": PaymentHistoryStatus.no_data,
    "X": PaymentHistoryStatus.no_data,
}
_CODE_MAP.update({str(n): PaymentHistoryStatus.late_120 for n in range(4, 10)})

_TOKEN_RE = re.compile(r"120\+|[A-Za-z]+|\d+|[✓\-]")


def history_status(code: str) -> Optional[PaymentHistoryStatus]:
    return _CODE_MAP.get(code.strip().upper())


def parse_payment_history(line: str | None) -> Dict[str, PaymentHistoryStatus]:
    """Map a printed payment history line onto ``m01``, ``m02``, ... keys.

    The first code is the most recent month. Unrecognised tokens are
    skipped without consuming a month key.
    """

    history: Dict[str, PaymentHistoryStatus] = {}
    if not line:
        return history
    for token in _TOKEN_RE.findall(line):
        status = history_status(token)
        if status is None:
            continue
        history[f"m{len(history) + 1:02d}"] = status
    return history


__all__ = ["parse_payment_history", "history_status"]
