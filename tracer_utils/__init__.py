"""
Tracer Utils - client helpers for the Tracer perpetuals protocol.

- core.accounting: margin, leverage and liquidation price math
- utils.signing: EIP-712 limit order signing
- utils.serialisation: order <-> matching engine wire format
"""

from .core import (
    BookLevel,
    TradeExposure,
    Order,
    SignedOrder,
    OMEOrder,
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
from .utils import (
    DOMAIN_TYPE,
    LIMIT_ORDER_TYPE,
    LocalAccountSigner,
    generate_domain_data,
    build_signing_data,
    sign_order,
    sign_orders,
    sign_orders_settled,
    recover_signer,
    split_signature,
    join_signature,
    order_to_ome_order,
    ome_order_to_order,
)

__version__ = "0.1.0"

__all__ = [
    'BookLevel', 'TradeExposure', 'Order', 'SignedOrder', 'OMEOrder', 'Position',
    'calc_notional_value', 'calc_total_margin', 'calc_borrowed', 'calc_leverage',
    'calc_minimum_margin', 'calc_withdrawable', 'calc_liquidation_price',
    'calc_profitable_liquidation_price', 'calc_trade_exposure',
    'DOMAIN_TYPE', 'LIMIT_ORDER_TYPE', 'LocalAccountSigner', 'generate_domain_data',
    'build_signing_data', 'sign_order', 'sign_orders', 'sign_orders_settled',
    'recover_signer', 'split_signature', 'join_signature',
    'order_to_ome_order', 'ome_order_to_order',
]
