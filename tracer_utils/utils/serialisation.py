"""
Serialisation - Order <-> Order Matching Engine Format

The OME names fields differently, wants checksummed addresses, the
signature as one R || S || V byte string, the side as "Bid"/"Ask" and the
nonce as a hex string. These helpers map between that format and the
SignedOrder produced by the signing module.
"""

import logging
from typing import Any, Mapping, Optional, Union
from uuid import uuid4

from eth_utils import to_checksum_address, to_hex, to_int

from tracer_utils.core.types import SIDE_ASK, SIDE_BID, OMEOrder, Order, SignedOrder
from tracer_utils.utils.signing import join_signature, split_signature

logger = logging.getLogger(__name__)


def order_to_ome_order(signed_order: SignedOrder, order_id: Optional[str] = None) -> OMEOrder:
    """
    Serialise a signed order for submission to the OME.

    Args:
        signed_order: Order plus r/s/v as returned by sign_orders
        order_id: Id to send with the order. A fresh uuid4 when omitted.
    """
    order = signed_order.order
    return OMEOrder(
        id=order_id or str(uuid4()),
        user=to_checksum_address(order.user),
        target_tracer=to_checksum_address(order.target_tracer),
        side=SIDE_BID if order.side else SIDE_ASK,
        price=order.price,
        amount=order.amount,
        expiration=order.expiration,
        signed_data=join_signature(signed_order.sig_r, signed_order.sig_s, signed_order.sig_v),
        nonce=to_hex(order.nonce),
    )


def ome_order_to_order(ome_order: Union[OMEOrder, Mapping[str, Any]]) -> SignedOrder:
    """
    Turn an order received from the OME back into a SignedOrder that can be
    submitted to the contracts.

    Accepts an OMEOrder or its wire dict.
    """
    if not isinstance(ome_order, OMEOrder):
        ome_order = OMEOrder.from_dict(ome_order)

    if ome_order.side not in (SIDE_BID, SIDE_ASK):
        raise ValueError(f"Unknown order side {ome_order.side!r}")

    sig_r, sig_s, sig_v = split_signature(ome_order.signed_data)

    order = Order(
        user=to_checksum_address(ome_order.user),
        target_tracer=to_checksum_address(ome_order.target_tracer),
        side=ome_order.side == SIDE_BID,
        price=int(ome_order.price),
        amount=int(ome_order.amount),
        expiration=int(ome_order.expiration),
        nonce=to_int(hexstr=ome_order.nonce),
    )
    logger.debug(f"Parsed OME order {ome_order.id} nonce={order.nonce}")
    return SignedOrder(order=order, sig_r=sig_r, sig_s=sig_s, sig_v=sig_v)
