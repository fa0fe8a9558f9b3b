# Core module - position math and order records
from .types import BookLevel, TradeExposure, Order, SignedOrder, OMEOrder
from .accounting import (
    Position,
    calc_notional_value,
    calc_total_margin,
    calc_borrowed,
    calc_leverage,
    calc_minimum_margin,
    calc_withdrawable,
    calc_liquidation_price,
    calc_profitable_liquidation_price,
    calc_trade_exposure,
)

__all__ = [
    'BookLevel', 'TradeExposure', 'Order', 'SignedOrder', 'OMEOrder', 'Position',
    'calc_notional_value', 'calc_total_margin', 'calc_borrowed', 'calc_leverage',
    'calc_minimum_margin', 'calc_withdrawable', 'calc_liquidation_price',
    'calc_profitable_liquidation_price', 'calc_trade_exposure',
]
