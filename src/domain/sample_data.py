"""Demonstration dataset written for identities without a stored document."""

from datetime import date
from decimal import Decimal

from src.domain.models import (
    Account,
    AccountType,
    FinanceAggregate,
    Market,
    StockHolding,
    Transaction,
    TransactionType,
)


def build_sample_aggregate(today: date | None = None) -> FinanceAggregate:
    """Return the fixed demonstration aggregate.

    Args:
        today: Date stamped on the sample transactions; defaults to today.

    Returns:
        FinanceAggregate: Two accounts, three transactions, two holdings.
    """
    stamp = today or date.today()
    accounts = (
        Account(
            id="acc_demo_1",
            name="Salary Account",
            type=AccountType.SAVINGS,
            balance=Decimal("52000"),
            currency="TWD",
        ),
        Account(
            id="acc_demo_2",
            name="Main Credit Card",
            type=AccountType.CREDIT,
            balance=Decimal("-8500"),
            currency="TWD",
        ),
    )
    transactions = (
        Transaction(
            id="tx_demo_1",
            account_id="acc_demo_1",
            date=stamp,
            amount=Decimal("65000"),
            type=TransactionType.INCOME,
            category="Salary",
            description="Monthly salary",
        ),
        Transaction(
            id="tx_demo_2",
            account_id="acc_demo_2",
            date=stamp,
            amount=Decimal("250"),
            type=TransactionType.EXPENSE,
            category="Food",
            description="Business lunch",
        ),
        Transaction(
            id="tx_demo_3",
            account_id="acc_demo_2",
            date=stamp,
            amount=Decimal("1200"),
            type=TransactionType.EXPENSE,
            category="Transport",
            description="High-speed rail ticket",
        ),
    )
    stocks = (
        StockHolding(
            id="st_demo_1",
            symbol="2330",
            name="TSMC",
            shares=Decimal("1000"),
            avg_cost=Decimal("550"),
            current_price=Decimal("780"),
            market=Market.TWSE,
        ),
        StockHolding(
            id="st_demo_2",
            symbol="AAPL",
            name="Apple Inc.",
            shares=Decimal("10"),
            avg_cost=Decimal("150"),
            current_price=Decimal("185"),
            market=Market.NASDAQ,
        ),
    )
    return FinanceAggregate(
        accounts=accounts,
        transactions=transactions,
        stocks=stocks,
    )


__all__ = ["build_sample_aggregate"]
