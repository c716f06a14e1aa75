"""Domain models for stock holdings and their valuation."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from src.domain.errors import HoldingValidationError
from src.utils.decimal_utils import coerce_decimal


class Market(str, Enum):
    """Exchanges a holding can be listed on."""

    TWSE = "TWSE"
    NASDAQ = "NASDAQ"
    NYSE = "NYSE"

    @classmethod
    def parse(cls, value: "Market | str | None") -> "Market":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.TWSE
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise HoldingValidationError(f"Unknown market: {value!r}") from exc


@dataclass(frozen=True)
class StockHolding:
    """A position in a single ticker.

    Market value and gain/loss are derived on demand and never stored.
    """

    id: str
    symbol: str
    name: str
    shares: Decimal
    avg_cost: Decimal
    current_price: Decimal
    market: Market = Market.TWSE

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "shares": self.shares,
            "avgCost": self.avg_cost,
            "currentPrice": self.current_price,
            "market": self.market.value,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "StockHolding":
        return cls(
            id=str(data["id"]),
            symbol=str(data.get("symbol", "")),
            name=str(data.get("name", "")),
            shares=coerce_decimal(data.get("shares")),
            avg_cost=coerce_decimal(data.get("avgCost")),
            current_price=coerce_decimal(data.get("currentPrice")),
            market=Market.parse(data.get("market")),
        )


@dataclass(frozen=True)
class HoldingDraft:
    """Partial holding entered by the user; fields may be missing."""

    symbol: str | None = None
    name: str | None = None
    shares: Decimal | int | float | str | None = None
    avg_cost: Decimal | int | float | str | None = None
    market: Market | str | None = None


@dataclass(frozen=True)
class HoldingMetrics:
    """Derived valuation of a single holding.

    Attributes:
        market_value: shares x current price.
        gain_loss: market value minus cost basis.
        gain_loss_percent: Percent move against average cost, or None when
            the average cost is zero.
    """

    market_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal | None


@dataclass(frozen=True)
class PortfolioTotals:
    """Totals across all holdings."""

    total_cost: Decimal
    total_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percent: Decimal


__all__ = [
    "Market",
    "StockHolding",
    "HoldingDraft",
    "HoldingMetrics",
    "PortfolioTotals",
]
