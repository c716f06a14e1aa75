"""Domain services for stock holding valuation."""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
import random

from src.domain.constants import PRICE_TICK_MAX_FACTOR, PRICE_TICK_MIN_FACTOR
from src.domain.models import (
    HoldingDraft,
    HoldingMetrics,
    PortfolioTotals,
    StockHolding,
)
from src.domain.services.normalization import new_identifier
from src.domain.services.validation import validate_holding_draft
from src.utils.decimal_utils import CENT, round_to_cents

_HUNDRED = Decimal("100")


def compute_holding_metrics(holding: StockHolding) -> HoldingMetrics:
    """Compute market value and unrealized gain/loss for one holding.

    Args:
        holding: Holding to value.

    Returns:
        HoldingMetrics: Market value, gain/loss and gain/loss percent. The
        percent is None ("not applicable") when the average cost is zero.
    """
    market_value = holding.shares * holding.current_price
    gain_loss = market_value - holding.shares * holding.avg_cost
    gain_loss_percent = None
    if holding.avg_cost != 0:
        gain_loss_percent = (
            (holding.current_price - holding.avg_cost)
            / holding.avg_cost
            * _HUNDRED
        )
    return HoldingMetrics(
        market_value=market_value,
        gain_loss=gain_loss,
        gain_loss_percent=gain_loss_percent,
    )


def compute_portfolio_totals(
    holdings: Iterable[StockHolding],
) -> PortfolioTotals:
    """Compute cost basis, market value and gain/loss across holdings.

    The total percent is 0 when the total cost is 0.
    """
    total_cost = Decimal("0")
    total_value = Decimal("0")
    for holding in holdings:
        total_cost += holding.shares * holding.avg_cost
        total_value += holding.shares * holding.current_price
    total_gain_loss = total_value - total_cost
    total_gain_loss_percent = (
        total_gain_loss / total_cost * _HUNDRED
        if total_cost != 0
        else Decimal("0")
    )
    return PortfolioTotals(
        total_cost=total_cost,
        total_value=total_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=total_gain_loss_percent,
    )


def compute_total_investments(holdings: Iterable[StockHolding]) -> Decimal:
    """Return the market value of all holdings."""
    return sum(
        (holding.shares * holding.current_price for holding in holdings),
        start=Decimal("0"),
    )


def _draw_factor(rng: random.Random) -> Decimal:
    spread = PRICE_TICK_MAX_FACTOR - PRICE_TICK_MIN_FACTOR
    return PRICE_TICK_MIN_FACTOR + spread * Decimal(repr(rng.random()))


def _tick_price(price: Decimal, factor: Decimal) -> Decimal:
    moved = round_to_cents(price * factor)
    lower = (price * PRICE_TICK_MIN_FACTOR).quantize(
        CENT,
        rounding=ROUND_CEILING,
    )
    upper = (price * PRICE_TICK_MAX_FACTOR).quantize(
        CENT,
        rounding=ROUND_FLOOR,
    )
    # Sub-cent prices have no two-decimal value inside the band.
    if lower > upper:
        return moved
    return min(max(moved, lower), upper)


def simulate_price_tick(
    holdings: Sequence[StockHolding],
    rng: random.Random | None = None,
) -> list[StockHolding]:
    """Apply one simulated market move to every holding.

    Each price is multiplied by an independent factor drawn uniformly from
    [0.95, 1.05) and rounded to two decimals, kept inside the +/-5% band.

    Args:
        holdings: Current holdings; left untouched.
        rng: Random source. Defaults to an unseeded system generator.

    Returns:
        list[StockHolding]: Holdings with refreshed current prices.
    """
    source = rng or random.SystemRandom()
    return [
        replace(
            holding,
            current_price=_tick_price(
                holding.current_price,
                _draw_factor(source),
            ),
        )
        for holding in holdings
    ]


def add_holding(
    draft: HoldingDraft,
    holdings: Sequence[StockHolding],
    holding_id: str | None = None,
) -> list[StockHolding]:
    """Validate a partial holding and append it at breakeven.

    Args:
        draft: Partial holding entered by the user.
        holdings: Current holdings; left untouched.
        holding_id: Optional identifier, generated when omitted.

    Returns:
        list[StockHolding]: Holdings with the new position appended; its
        current price equals its average cost.

    Raises:
        HoldingValidationError: If the symbol is missing or shares/average
            cost are not strictly positive.
    """
    symbol, shares, avg_cost, market = validate_holding_draft(draft)
    name = (draft.name or "").strip() or symbol
    holding = StockHolding(
        id=holding_id or new_identifier("st"),
        symbol=symbol,
        name=name,
        shares=shares,
        avg_cost=avg_cost,
        current_price=avg_cost,
        market=market,
    )
    return [*holdings, holding]


def remove_holding(
    holding_id: str,
    holdings: Sequence[StockHolding],
) -> list[StockHolding]:
    """Drop a holding by identifier."""
    return [holding for holding in holdings if holding.id != holding_id]


__all__ = [
    "compute_holding_metrics",
    "compute_portfolio_totals",
    "compute_total_investments",
    "simulate_price_tick",
    "add_holding",
    "remove_holding",
]
