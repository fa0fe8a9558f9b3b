"""
Accounting - Margin Math for Leveraged Positions

Closed-form margin, leverage and liquidation price calculations over a
margin account's quote balance, base balance and the mark price, plus the
order book walk used to estimate the exposure a deposit can buy.

All functions are pure. Undefined results come back as sentinels, never
exceptions:
- calc_leverage returns -1 when the account has no margin left
- calc_total_margin is clamped at 0
- calc_withdrawable goes negative once the account is under minimum margin
- liquidation prices are 0.0 when no positive liquidation price exists

The one exception is a non-positive max_leverage, which is a caller bug
rather than an account state: every function taking max_leverage raises
ValueError for it.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Union

from tracer_utils import config
from tracer_utils.core.types import BookLevel, TradeExposure

logger = logging.getLogger(__name__)

UNDEFINED_LEVERAGE = -1.0


def calc_notional_value(base: float, price: float) -> float:
    """Size of the position in quote terms: |base| * price."""
    return abs(base) * price


def calc_total_margin(quote: float, base: float, price: float) -> float:
    """
    Net value of the account at the given price.

    A fully depleted account reports 0, never a negative margin.
    """
    return max(0.0, quote + base * price)


def calc_borrowed(quote: float, base: float, price: float) -> float:
    """Part of the notional value not covered by the account's own margin."""
    notional = calc_notional_value(base, price)
    return max(0.0, notional - calc_total_margin(quote, base, price))


def calc_leverage(quote: float, base: float, price: float) -> float:
    """
    Notional value over total margin.

    Returns -1 when total margin is zero (leverage undefined, the position
    is already liquidatable).
    """
    margin = calc_total_margin(quote, base, price)
    if margin == 0:
        logger.debug(f"No margin left (quote={quote}, base={base}, price={price})")
        return UNDEFINED_LEVERAGE
    return calc_notional_value(base, price) / margin


def calc_minimum_margin(quote: float, base: float, price: float, max_leverage: float) -> float:
    """
    Smallest margin the position may hold before it can be liquidated.

    notional / max_leverage plus the liquidation gas reserve.
    """
    _check_max_leverage(max_leverage)
    reserve = config.MINIMUM_MARGIN_GAS_MULTIPLIER * config.LIQUIDATION_GAS_COST
    return calc_notional_value(base, price) / max_leverage + reserve


def calc_withdrawable(quote: float, base: float, price: float, max_leverage: float) -> float:
    """Margin above the minimum margin. Negative means under water."""
    return (calc_total_margin(quote, base, price)
            - calc_minimum_margin(quote, base, price, max_leverage))


def calc_liquidation_price(quote: float, base: float, price: float, max_leverage: float) -> float:
    """
    Mark price at which total margin equals minimum margin.

    Solves quote + base * P = |base| * P / max_leverage + gas_reserve for P.
    Longs are liquidated below this price, shorts above it. A flat position
    has no liquidation price and returns 0.0.
    """
    reserve = config.MINIMUM_MARGIN_GAS_MULTIPLIER * config.LIQUIDATION_GAS_COST
    return _solve_price_for_margin(quote, base, max_leverage, reserve)


def calc_profitable_liquidation_price(quote: float, base: float, price: float,
                                      max_leverage: float) -> float:
    """
    Mark price at which liquidating the position pays for the liquidator's gas.

    Same equation as calc_liquidation_price, with the margin one further
    liquidation gas cost below the minimum margin.
    """
    reserve = config.PROFITABLE_LIQUIDATION_GAS_MULTIPLIER * config.LIQUIDATION_GAS_COST
    return _solve_price_for_margin(quote, base, max_leverage, reserve)


def _solve_price_for_margin(quote: float, base: float, max_leverage: float,
                            reserve: float) -> float:
    _check_max_leverage(max_leverage)

    # base * P - |base| * P / L = reserve - quote
    denominator = base - abs(base) / max_leverage
    if denominator == 0:
        logger.debug(f"No liquidation price for base={base} at max leverage {max_leverage}")
        return 0.0

    liquidation_price = (reserve - quote) / denominator
    if liquidation_price < 0:
        logger.debug(f"Liquidation price {liquidation_price:.4f} is not reachable")
        return 0.0
    return liquidation_price


def _check_max_leverage(max_leverage: float):
    if max_leverage <= 0:
        raise ValueError(f"max_leverage must be positive, got {max_leverage}")


LevelLike = Union[BookLevel, Mapping[str, Any]]


def calc_trade_exposure(quote: float, leverage: float,
                        book_levels: Iterable[LevelLike]) -> TradeExposure:
    """
    Walk the book with quote * leverage of buying power.

    Levels are consumed best first. A level the remaining buying power can
    pay for in full is taken whole and weighted by its amount in the trade
    price; the level that exhausts the buying power is filled partially and
    weighted by the buying power spent on it.

    This mixed weighting is not a true volume-weighted price. It is kept
    because it reproduces the protocol's reference results (1.05 for 20
    quote into [10 @ 1, 20 @ 1.1, ...] and 68 / 60 for a full sweep of
    that book, written amount @ price). On books with a wide price gap the
    two diverge: 30 quote into [1 @ 10, 10 @ 20] gives 410 / 21 (about
    19.52) where the cost per unit filled is 15.

    Args:
        quote: Margin put towards the trade
        leverage: Leverage applied to the margin
        book_levels: BookLevel objects or {"price", "amount"} mappings,
            best price first

    Returns:
        TradeExposure with the base units filled, the average trade price
        and the slippage against the best price. An empty book gives all
        zeros; no buying power gives zero exposure at the best price.
    """
    levels = [_as_level(level) for level in book_levels]
    if not levels:
        return TradeExposure()

    best_price = levels[0].price
    buying_power = quote * leverage
    if buying_power <= 0:
        return TradeExposure(exposure=0.0, trade_price=best_price, slippage=0.0)

    exposure = 0.0
    weighted_price = 0.0
    total_weight = 0.0

    for level in levels:
        if buying_power <= 0:
            break
        if level.price <= 0 or level.amount <= 0:
            continue

        cost = level.notional
        if buying_power >= cost or math.isclose(buying_power, cost):
            # Take the whole level
            exposure += level.amount
            weighted_price += level.price * level.amount
            total_weight += level.amount
            buying_power -= cost
        else:
            exposure += buying_power / level.price
            weighted_price += level.price * buying_power
            total_weight += buying_power
            buying_power = 0.0

    if total_weight == 0:
        return TradeExposure(exposure=0.0, trade_price=best_price, slippage=0.0)

    trade_price = weighted_price / total_weight
    slippage = (trade_price - best_price) / best_price if best_price > 0 else 0.0

    if buying_power > 0:
        logger.debug(f"Book exhausted with {buying_power:.4f} buying power unused")

    return TradeExposure(
        exposure=round(exposure, config.EXPOSURE_DECIMALS),
        trade_price=trade_price,
        slippage=slippage,
    )


def _as_level(level: LevelLike) -> BookLevel:
    if isinstance(level, BookLevel):
        return level
    return BookLevel.from_dict(level)


@dataclass
class Position:
    """
    A margin account at a given mark price.

    Built by the caller for a calculation, never stored by the library.
    """
    quote: float
    base: float
    price: float
    max_leverage: float

    @property
    def notional_value(self) -> float:
        return calc_notional_value(self.base, self.price)

    @property
    def total_margin(self) -> float:
        return calc_total_margin(self.quote, self.base, self.price)

    @property
    def borrowed(self) -> float:
        return calc_borrowed(self.quote, self.base, self.price)

    @property
    def leverage(self) -> float:
        return calc_leverage(self.quote, self.base, self.price)

    @property
    def minimum_margin(self) -> float:
        return calc_minimum_margin(self.quote, self.base, self.price, self.max_leverage)

    @property
    def withdrawable(self) -> float:
        return calc_withdrawable(self.quote, self.base, self.price, self.max_leverage)

    @property
    def liquidation_price(self) -> float:
        return calc_liquidation_price(self.quote, self.base, self.price, self.max_leverage)

    @property
    def profitable_liquidation_price(self) -> float:
        return calc_profitable_liquidation_price(
            self.quote, self.base, self.price, self.max_leverage
        )

    @property
    def is_liquidatable(self) -> bool:
        """True once total margin is below minimum margin."""
        return self.withdrawable < 0

    def get_summary(self) -> Dict[str, Any]:
        """Position metrics for logging/dashboard."""
        return {
            "side": "long" if self.base > 0 else "short" if self.base < 0 else "flat",
            "notional_value": round(self.notional_value, 4),
            "total_margin": round(self.total_margin, 4),
            "minimum_margin": round(self.minimum_margin, 4),
            "borrowed": round(self.borrowed, 4),
            "leverage": round(self.leverage, 4),
            "withdrawable": round(self.withdrawable, 4),
            "liquidation_price": round(self.liquidation_price, 4),
            "profitable_liquidation_price": round(self.profitable_liquidation_price, 4),
            "liquidatable": self.is_liquidatable,
        }
