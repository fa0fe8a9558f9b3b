# Utility modules - order signing and OME serialisation
from .signing import (
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
)
from .serialisation import order_to_ome_order, ome_order_to_order

__all__ = [
    'DOMAIN_TYPE', 'LIMIT_ORDER_TYPE', 'LocalAccountSigner', 'generate_domain_data',
    'build_signing_data', 'sign_order', 'sign_orders', 'sign_orders_settled',
    'recover_signer', 'split_signature', 'join_signature',
    'order_to_ome_order', 'ome_order_to_order',
]
