"""Tests for portfolio valuation services."""

from decimal import Decimal
import random

import pytest

from src.domain.errors import HoldingValidationError
from src.domain.models import HoldingDraft, Market, StockHolding
from src.domain.services import portfolio


def _holding(holding_id, shares, avg_cost, current_price):
    return StockHolding(
        id=holding_id,
        symbol=holding_id.upper(),
        name=holding_id,
        shares=Decimal(shares),
        avg_cost=Decimal(avg_cost),
        current_price=Decimal(current_price),
    )


class _FixedRandom(random.Random):
    """Random source returning a fixed sequence of draws."""

    def __init__(self, values):
        super().__init__()
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


def test_holding_metrics_for_gain() -> None:
    metrics = portfolio.compute_holding_metrics(
        _holding("tsmc", "1000", "550", "780")
    )

    assert metrics.market_value == Decimal("780000")
    assert metrics.gain_loss == Decimal("230000")
    assert metrics.gain_loss_percent.quantize(Decimal("0.01")) == Decimal(
        "41.82"
    )


def test_holding_metrics_percent_not_applicable_for_zero_cost() -> None:
    metrics = portfolio.compute_holding_metrics(_holding("gift", "5", "0", "10"))

    assert metrics.market_value == Decimal("50")
    assert metrics.gain_loss == Decimal("50")
    assert metrics.gain_loss_percent is None


def test_portfolio_totals_gain_equals_value_minus_cost() -> None:
    holdings = [
        _holding("tsmc", "1000", "550", "780"),
        _holding("aapl", "10", "150", "185"),
    ]

    totals = portfolio.compute_portfolio_totals(holdings)

    assert totals.total_cost == Decimal("551500")
    assert totals.total_value == Decimal("781850")
    assert totals.total_gain_loss == totals.total_value - totals.total_cost
    assert totals.total_gain_loss_percent > 0


@pytest.mark.parametrize(
    "holdings",
    [[], [_holding("gift", "5", "0", "10")]],
)
def test_portfolio_totals_percent_is_zero_without_cost(holdings) -> None:
    totals = portfolio.compute_portfolio_totals(holdings)

    assert totals.total_gain_loss_percent == Decimal("0")


def test_total_investments_is_market_value() -> None:
    holdings = [
        _holding("tsmc", "1000", "550", "780"),
        _holding("aapl", "10", "150", "185"),
    ]

    assert portfolio.compute_total_investments(holdings) == Decimal("781850")


@pytest.mark.parametrize("draw", [0.0, 0.5, 0.999999999])
def test_price_tick_stays_inside_band(draw) -> None:
    holdings = [
        _holding("a", "1", "1", "780"),
        _holding("b", "1", "1", "0.33"),
        _holding("c", "1", "1", "185.17"),
    ]

    ticked = portfolio.simulate_price_tick(
        holdings,
        rng=_FixedRandom([draw] * len(holdings)),
    )

    for before, after in zip(holdings, ticked):
        low = before.current_price * Decimal("0.95")
        high = before.current_price * Decimal("1.05")
        assert low <= after.current_price <= high
        assert after.current_price == after.current_price.quantize(
            Decimal("0.01")
        )
        assert after.avg_cost == before.avg_cost


def test_price_tick_with_seeded_generator_stays_inside_band() -> None:
    rng = random.Random(42)
    holdings = [_holding(f"h{i}", "1", "1", str(10 + i * 7.31)) for i in range(50)]

    for _ in range(5):
        ticked = portfolio.simulate_price_tick(holdings, rng=rng)
        for before, after in zip(holdings, ticked):
            assert (
                before.current_price * Decimal("0.95")
                <= after.current_price
                <= before.current_price * Decimal("1.05")
            )


def test_price_tick_does_not_mutate_input() -> None:
    holdings = [_holding("a", "1", "1", "100")]

    portfolio.simulate_price_tick(holdings, rng=_FixedRandom([0.0]))

    assert holdings[0].current_price == Decimal("100")


def test_add_holding_starts_at_breakeven() -> None:
    holdings = portfolio.add_holding(
        HoldingDraft(symbol=" nvda ", shares="3", avg_cost="120.5"),
        [],
        holding_id="st1",
    )

    assert holdings == [
        StockHolding(
            id="st1",
            symbol="NVDA",
            name="NVDA",
            shares=Decimal("3"),
            avg_cost=Decimal("120.5"),
            current_price=Decimal("120.5"),
            market=Market.TWSE,
        )
    ]


@pytest.mark.parametrize(
    "draft",
    [
        HoldingDraft(symbol="", shares="1", avg_cost="1"),
        HoldingDraft(symbol="X", shares="0", avg_cost="1"),
        HoldingDraft(symbol="X", shares="-1", avg_cost="1"),
        HoldingDraft(symbol="X", shares="1", avg_cost="0"),
        HoldingDraft(symbol="X", shares="1"),
        HoldingDraft(symbol="X", shares="1", avg_cost="1", market="LSE"),
    ],
)
def test_add_holding_rejects_invalid_drafts(draft) -> None:
    with pytest.raises(HoldingValidationError):
        portfolio.add_holding(draft, [])


def test_remove_holding() -> None:
    holdings = [_holding("a", "1", "1", "1"), _holding("b", "1", "1", "1")]

    assert [item.id for item in portfolio.remove_holding("a", holdings)] == [
        "b"
    ]


@pytest.mark.parametrize(
    "draft",
    [
        HoldingDraft(symbol="X", shares="NaN", avg_cost="10"),
        HoldingDraft(symbol="X", shares="Infinity", avg_cost="10"),
        HoldingDraft(symbol="X", shares="1", avg_cost="NaN"),
        HoldingDraft(symbol="X", shares="1", avg_cost="Infinity"),
        HoldingDraft(symbol="X", shares="1", avg_cost=float("inf")),
    ],
)
def test_add_holding_rejects_non_finite_numbers(draft) -> None:
    with pytest.raises(HoldingValidationError):
        portfolio.add_holding(draft, [])
