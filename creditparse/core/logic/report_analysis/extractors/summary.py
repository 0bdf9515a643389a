"""Account summary aggregation."""
from __future__ import annotations

from typing import Iterable

from creditparse.core.models import AccountSummary, CreditAccount


def summarize_accounts(accounts: Iterable[CreditAccount]) -> AccountSummary:
    """Recompute the summary counts and totals from ``accounts``.

    Missing balances and limits count as zero. Utilization is 0 when the
    total limit is 0.
    """

    accounts = list(accounts)
    closed = sum(1 for a in accounts if a.is_closed)
    total_limit = sum(a.credit_limit or 0 for a in accounts)
    total_balance = sum(a.current_balance or 0 for a in accounts)
    utilization = round(total_balance / total_limit * 100) if total_limit > 0 else 0
    return AccountSummary(
        total_accounts=len(accounts),
        open_accounts=len(accounts) - closed,
        closed_accounts=closed,
        negative_accounts=sum(1 for a in accounts if a.is_negative),
        total_credit_limit=total_limit,
        total_balance=total_balance,
        available_credit=total_limit - total_balance,
        overall_utilization=utilization,
    )


__all__ = ["summarize_accounts"]
