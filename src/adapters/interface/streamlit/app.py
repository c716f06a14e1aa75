"""Streamlit dashboard entry point."""

import asyncio
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from src.application.ports.identity_provider import AuthenticationError
from src.application.use_cases.finance_session import (
    FinanceSession,
    SessionState,
)
from src.application.use_cases.get_dashboard_summary import (
    DashboardSummary,
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
    PortfolioOverview,
)
from src.application.use_cases.list_transactions import (
    ListTransactionsUseCase,
    TransactionRow,
)
from src.application.use_cases.request_financial_analysis import (
    RequestFinancialAnalysisUseCase,
    SuggestCategoryUseCase,
)
from src.domain.constants import SUGGESTED_CATEGORIES
from src.domain.errors import ValidationError, WealthFlowError
from src.domain.models import (
    Account,
    AccountDraft,
    AccountType,
    HoldingDraft,
    Market,
    TransactionDraft,
    TransactionType,
)
from src.infrastructure.container import (
    build_advisory_client,
    build_finance_session,
    build_identity_provider,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import WealthFlowSettings

PAGES = ["Dashboard", "Accounts", "Transactions", "Stocks", "AI Advisor"]

_SESSION_KEY = "finance_session"
_PROVIDER_KEY = "identity_provider"


def _get_runtime():
    """Return the session and identity provider kept in Streamlit state."""
    state = st.session_state
    if _SESSION_KEY not in state:
        session = build_finance_session()
        provider = build_identity_provider()
        session.bind(provider)
        state[_SESSION_KEY] = session
        state[_PROVIDER_KEY] = provider
    return state[_SESSION_KEY], state[_PROVIDER_KEY]


def _format_currency(value: Decimal, currency_code: str = "TWD") -> str:
    """Format currency values for display."""
    return f"{value:,.2f} {currency_code}"


def _format_percent(value: Decimal | None) -> str:
    """Format a gain/loss percent, "n/a" when not applicable."""
    if value is None:
        return "n/a"
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def _prepare_expense_chart_data(
    summary: DashboardSummary,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows for the expense donut."""
    total = sum(
        (item.amount for item in summary.categories),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for item in summary.categories:
        share = (item.amount / total) * Decimal("100") if total else Decimal("0")
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": _format_currency(item.amount),
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def _account_rows(accounts: Sequence[Account]) -> list[dict[str, str]]:
    return [
        {
            "Name": account.name,
            "Type": account.type.value,
            "Balance": _format_currency(account.balance, account.currency),
        }
        for account in accounts
    ]


def _transaction_rows(rows: Sequence[TransactionRow]) -> list[dict[str, str]]:
    data = []
    for row in rows:
        transaction = row.transaction
        sign = "+" if transaction.type is TransactionType.INCOME else "-"
        data.append(
            {
                "Date": transaction.date.isoformat(),
                "Description": transaction.description,
                "Category": transaction.category,
                "Account": row.account_name,
                "Amount": f"{sign}{transaction.amount:,.2f}",
            }
        )
    return data


def _holding_rows(overview: PortfolioOverview) -> list[dict[str, str]]:
    return [
        {
            "Symbol": row.holding.symbol,
            "Name": row.holding.name,
            "Market": row.holding.market.value,
            "Shares": f"{row.holding.shares:,}",
            "Avg cost": f"{row.holding.avg_cost:,.2f}",
            "Price": f"{row.holding.current_price:,.2f}",
            "Market value": f"{row.metrics.market_value:,.2f}",
            "Gain/Loss": f"{row.metrics.gain_loss:,.2f}",
            "Gain/Loss %": _format_percent(row.metrics.gain_loss_percent),
        }
        for row in overview.rows
    ]


def _render_expense_chart(summary: DashboardSummary, chart_size: int = 300):
    """Render a donut chart of expenses by category."""
    if not summary.categories:
        st.info("No expenses recorded yet.")
        return
    data = _prepare_expense_chart_data(summary)
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            legend=alt.Legend(orient="bottom", title=None, columns=3),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.4)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    chart = base.add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.subheader("Expenses by Category")
    st.altair_chart(chart, width="stretch")


def _render_login(provider) -> None:
    st.subheader("Sign in")
    with st.form("sign_in"):
        user_id = st.text_input("User id")
        display_name = st.text_input("Display name")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        try:
            provider.sign_in(user_id, display_name=display_name or None)
        except AuthenticationError as exc:
            st.error(str(exc))
            return
        st.rerun()


def _render_dashboard(session: FinanceSession) -> None:
    summary = GetDashboardSummaryUseCase().execute(session.aggregate)
    assets_col, cash_col, invest_col = st.columns(3)
    assets_col.metric("Total Assets", _format_currency(summary.total_assets))
    cash_col.metric("Cash Balance", _format_currency(summary.total_balance))
    invest_col.metric(
        "Investments",
        _format_currency(summary.total_investments),
    )
    income_col, expense_col, net_col = st.columns(3)
    income_col.metric("Income", _format_currency(summary.totals.income_total))
    expense_col.metric(
        "Expense",
        _format_currency(summary.totals.expense_total),
    )
    net_col.metric("Net", _format_currency(summary.totals.net))
    _render_expense_chart(summary)


def _render_accounts(session: FinanceSession) -> None:
    st.subheader("Accounts")
    accounts = session.aggregate.accounts
    st.dataframe(_account_rows(accounts), width="stretch", hide_index=True)

    with st.form("add_account"):
        name = st.text_input("Name")
        account_type = st.selectbox(
            "Type",
            [item.value for item in AccountType],
        )
        balance = st.text_input("Balance", value="0")
        currency = st.text_input("Currency", value="TWD")
        submitted = st.form_submit_button("Add account")
    if submitted:
        try:
            session.add_account(
                AccountDraft(
                    name=name,
                    type=account_type,
                    balance=balance,
                    currency=currency,
                )
            )
        except ValidationError as exc:
            st.error(str(exc))
        else:
            st.rerun()

    if not accounts:
        return
    labels = {account.id: account.name for account in accounts}
    selected = st.selectbox(
        "Edit account",
        list(labels),
        format_func=lambda account_id: labels[account_id],
    )
    current = next(item for item in accounts if item.id == selected)
    with st.form("edit_account"):
        name = st.text_input("Name", value=current.name)
        account_type = st.selectbox(
            "Type",
            [item.value for item in AccountType],
            index=list(AccountType).index(current.type),
        )
        balance = st.text_input("Balance", value=str(current.balance))
        currency = st.text_input("Currency", value=current.currency)
        save = st.form_submit_button("Save")
        delete = st.form_submit_button("Delete")
    try:
        if save:
            session.update_account(
                selected,
                AccountDraft(
                    name=name,
                    type=account_type,
                    balance=balance,
                    currency=currency,
                ),
            )
            st.rerun()
        if delete:
            session.remove_account(selected)
            st.rerun()
    except WealthFlowError as exc:
        st.error(str(exc))


def _render_transactions(session: FinanceSession, advisory) -> None:
    st.subheader("Transactions")
    accounts = session.aggregate.accounts
    if accounts:
        labels = {account.id: account.name for account in accounts}
        description = st.text_input("Description")
        if st.button("Suggest category"):
            st.session_state["suggested_category"] = asyncio.run(
                SuggestCategoryUseCase(advisory).execute(description)
            )
        suggested = st.session_state.get("suggested_category", "Other")
        with st.form("record_transaction"):
            account_id = st.selectbox(
                "Account",
                list(labels),
                format_func=lambda value: labels[value],
            )
            transaction_type = st.selectbox(
                "Type",
                [TransactionType.EXPENSE.value, TransactionType.INCOME.value],
            )
            amount = st.text_input("Amount")
            category = st.selectbox(
                "Category",
                list(SUGGESTED_CATEGORIES),
                index=list(SUGGESTED_CATEGORIES).index(suggested),
            )
            when = st.date_input("Date", value=date.today())
            submitted = st.form_submit_button("Record")
        if submitted:
            try:
                session.record_transaction(
                    TransactionDraft(
                        account_id=account_id,
                        date=when,
                        amount=amount,
                        type=transaction_type,
                        category=category,
                        description=description,
                    )
                )
            except WealthFlowError as exc:
                st.error(str(exc))
            else:
                st.session_state.pop("suggested_category", None)
                st.rerun()
    else:
        st.info("Add an account before recording transactions.")

    category_filter = st.selectbox(
        "Filter by category",
        ["ALL", *SUGGESTED_CATEGORIES],
    )
    search = st.text_input("Search", placeholder="Description or amount")
    rows = ListTransactionsUseCase().execute(
        session.aggregate,
        category=category_filter,
        search=search,
    )
    st.caption(f"{len(rows)} transactions shown")
    st.dataframe(_transaction_rows(rows), width="stretch", hide_index=True)


def _render_stocks(session: FinanceSession) -> None:
    st.subheader("Stocks")
    overview = GetPortfolioOverviewUseCase().execute(session.aggregate)
    totals = overview.totals
    cost_col, value_col, gain_col = st.columns(3)
    cost_col.metric("Total Cost", _format_currency(totals.total_cost))
    value_col.metric("Market Value", _format_currency(totals.total_value))
    gain_col.metric(
        "Gain/Loss",
        _format_currency(totals.total_gain_loss),
        _format_percent(totals.total_gain_loss_percent),
    )
    if st.button("Refresh prices"):
        session.refresh_prices()
        st.rerun()
    st.dataframe(_holding_rows(overview), width="stretch", hide_index=True)

    with st.form("add_holding"):
        symbol = st.text_input("Symbol")
        name = st.text_input("Name")
        shares = st.text_input("Shares")
        avg_cost = st.text_input("Average cost")
        market = st.selectbox("Market", [item.value for item in Market])
        submitted = st.form_submit_button("Add holding")
    if submitted:
        try:
            session.add_holding(
                HoldingDraft(
                    symbol=symbol,
                    name=name,
                    shares=shares,
                    avg_cost=avg_cost,
                    market=market,
                )
            )
        except ValidationError as exc:
            st.error(str(exc))
        else:
            st.rerun()

    if overview.rows:
        labels = {row.holding.id: row.holding.symbol for row in overview.rows}
        selected = st.selectbox(
            "Remove holding",
            list(labels),
            format_func=lambda value: labels[value],
        )
        if st.button("Remove"):
            session.remove_holding(selected)
            st.rerun()


def _render_advisor(session: FinanceSession, advisory, settings) -> None:
    st.subheader("AI Advisor")
    if st.button("Analyze my finances"):
        get_usage_logger().info("Requested financial analysis")
        use_case = RequestFinancialAnalysisUseCase(
            advisory,
            timeout_seconds=settings.advisory_timeout_seconds,
        )
        with st.spinner("Analyzing..."):
            st.session_state["analysis"] = asyncio.run(
                use_case.execute(session.aggregate)
            )
    analysis = st.session_state.get("analysis")
    if analysis:
        st.markdown(analysis)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="WealthFlow", layout="wide")
    st.title("WealthFlow")

    session, provider = _get_runtime()
    if session.state is SessionState.UNAUTHENTICATED:
        _render_login(provider)
        return
    if session.state is SessionState.LOADING:
        st.info("Loading your data...")
        return

    identity = session.identity
    st.sidebar.caption(f"Signed in as {identity.display_name}")
    if st.sidebar.button("Sign out"):
        provider.sign_out()
        st.session_state.pop("analysis", None)
        st.rerun()
    if session.load_failed:
        st.warning(
            "Your saved data could not be loaded. Changes will not be saved."
        )

    settings = WealthFlowSettings.from_env()
    advisory = build_advisory_client(settings)
    page = st.sidebar.selectbox("Page", PAGES)
    if page == "Dashboard":
        _render_dashboard(session)
    elif page == "Accounts":
        _render_accounts(session)
    elif page == "Transactions":
        _render_transactions(session, advisory)
    elif page == "Stocks":
        _render_stocks(session)
    else:
        _render_advisor(session, advisory, settings)


if __name__ == "__main__":  # pragma: no cover
    main()
