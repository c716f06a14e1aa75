"""CLI adapter printing the dashboard summary for a user.

The user id is read from the first argument, or WEALTHFLOW_USER_ID. A user
without a stored document is seeded with the demonstration dataset.
"""

import os
import sys

from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
)
from src.infrastructure.container import (
    build_finance_session,
    build_identity_provider,
)
from src.infrastructure.logging.logger import get_app_logger


def _resolve_user_id(argv: list[str]) -> str | None:
    if argv:
        return argv[0].strip() or None
    value = os.getenv("WEALTHFLOW_USER_ID", "").strip()
    return value or None


def main(argv: list[str] | None = None) -> None:
    """Sign in, print the dashboard summary, then sign out."""
    logger = get_app_logger()
    user_id = _resolve_user_id(sys.argv[1:] if argv is None else argv)
    if user_id is None:
        logger.warning(
            "A user id is required: pass it as argument or set "
            "WEALTHFLOW_USER_ID."
        )
        return

    session = build_finance_session()
    provider = build_identity_provider()
    unsubscribe = session.bind(provider)
    provider.sign_in(user_id)
    try:
        if session.load_failed:
            logger.error(f"Could not load finance data for user_id={user_id}")
            return
        summary = GetDashboardSummaryUseCase(logger=logger).execute(
            session.aggregate
        )
        overview = GetPortfolioOverviewUseCase().execute(session.aggregate)
    finally:
        provider.sign_out()
        unsubscribe()

    print(f"Summary for {user_id}")
    print(
        f"Cash balance: {summary.total_balance:,.2f} | "
        f"Investments: {summary.total_investments:,.2f} | "
        f"Total assets: {summary.total_assets:,.2f}"
    )
    print(
        f"Income: {summary.totals.income_total:,.2f} | "
        f"Expense: {summary.totals.expense_total:,.2f} | "
        f"Net: {summary.totals.net:,.2f}"
    )
    for item in summary.categories:
        print(f"  {item.category}: {item.amount:,.2f}")
    print(
        f"Portfolio gain/loss: {overview.totals.total_gain_loss:,.2f} "
        f"({overview.totals.total_gain_loss_percent:.2f}%)"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
