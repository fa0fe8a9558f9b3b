"""
Signing - EIP-712 Limit Order Signatures

Builds the typed data the Tracer contracts verify orders against and asks a
signer for a signature over it. The signer is injected: anything with an
async sign_typed_data(account, data) method, or a plain (async) callable
taking the same arguments. It must return the 65 byte r || s || v signature
as bytes or a 0x hex string.

LocalAccountSigner is the in-process signer backed by eth-account.
"""

import asyncio
import inspect
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import decode_hex, encode_hex, to_checksum_address

from tracer_utils import config
from tracer_utils.core.types import Order, SignedOrder

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65
PRIMARY_TYPE = "LimitOrder"

DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

# Field order and type names are part of the contract's LIMIT_ORDER_TYPEHASH
LIMIT_ORDER_TYPE = [
    {"name": "amount", "type": "uint256"},
    {"name": "price", "type": "int256"},
    {"name": "side", "type": "bool"},
    {"name": "user", "type": "address"},
    {"name": "expiration", "type": "uint256"},
    {"name": "targetTracer", "type": "address"},
    {"name": "nonce", "type": "uint256"},
]

Signature = Union[bytes, str]


def generate_domain_data(trader_address: str, chain_id: Optional[int] = None) -> Dict[str, Any]:
    """EIP-712 domain for orders verified by the Trader contract at trader_address."""
    return {
        "name": config.DOMAIN_NAME,
        "version": config.DOMAIN_VERSION,
        "chainId": chain_id if chain_id is not None else config.DEFAULT_CHAIN_ID,
        "verifyingContract": trader_address,
    }


def build_signing_data(order: Order, trader_address: str,
                       chain_id: Optional[int] = None) -> Dict[str, Any]:
    """Full typed data payload for one order."""
    return {
        "types": {
            "EIP712Domain": DOMAIN_TYPE,
            PRIMARY_TYPE: LIMIT_ORDER_TYPE,
        },
        "primaryType": PRIMARY_TYPE,
        "domain": generate_domain_data(trader_address, chain_id),
        "message": order.to_message(),
    }


def split_signature(signature: Signature) -> Tuple[str, str, int]:
    """
    Split a 65 byte signature into (r, s, v).

    r and s come back as 0x prefixed 32 byte hex strings, v as an int.
    """
    raw = decode_hex(signature) if isinstance(signature, str) else bytes(signature)
    if len(raw) != SIGNATURE_LENGTH:
        raise ValueError(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
    return encode_hex(raw[:32]), encode_hex(raw[32:64]), raw[64]


def join_signature(sig_r: str, sig_s: str, sig_v: int) -> bytes:
    """Inverse of split_signature."""
    r = decode_hex(sig_r)
    s = decode_hex(sig_s)
    if len(r) != 32 or len(s) != 32:
        raise ValueError(f"sig_r and sig_s must be 32 bytes, got {len(r)} and {len(s)}")
    if not 0 <= sig_v <= 0xff:
        raise ValueError(f"sig_v must fit in one byte, got {sig_v}")
    return r + s + bytes([sig_v])


class LocalAccountSigner:
    """
    Signs typed data with eth-account LocalAccounts held in memory.

    Keys are supplied by the caller; nothing is loaded or stored here.
    """

    def __init__(self, *accounts):
        """
        Args:
            accounts: eth_account LocalAccount instances (Account.from_key(...))
        """
        self._accounts = {to_checksum_address(acct.address): acct for acct in accounts}
        logger.debug(f"🔑 Local signer holding {len(self._accounts)} account(s)")

    @classmethod
    def from_keys(cls, *private_keys: str) -> 'LocalAccountSigner':
        return cls(*(Account.from_key(key) for key in private_keys))

    @property
    def addresses(self) -> List[str]:
        return list(self._accounts)

    async def sign_typed_data(self, account: str, data: Dict[str, Any]) -> bytes:
        """Sign data as account. Raises ValueError for an unknown account."""
        address = to_checksum_address(account)
        local_account = self._accounts.get(address)
        if local_account is None:
            raise ValueError(f"No key held for {address}")

        loop = asyncio.get_event_loop()

        def _sign():
            signable = encode_typed_data(full_message=data)
            return bytes(local_account.sign_message(signable).signature)

        return await loop.run_in_executor(None, _sign)


async def _request_signature(signer, account: str, data: Dict[str, Any]) -> Signature:
    sign = getattr(signer, "sign_typed_data", signer)
    result = sign(account, data)
    if inspect.isawaitable(result):
        result = await result
    return result


async def sign_order(signer, signing_account: str, data: Dict[str, Any]) -> Tuple[str, str, int]:
    """
    Ask the signer for a signature over data and split it into (r, s, v).

    Errors from the signer (rejection, unreachable signer, bad domain)
    propagate unchanged. No retries.
    """
    logger.debug(f"✍️ Requesting signature from {signing_account}")
    signature = await _request_signature(signer, signing_account, data)
    return split_signature(signature)


async def _sign_one(signer, order: Order, trader_address: str,
                    chain_id: Optional[int]) -> SignedOrder:
    data = build_signing_data(order, trader_address, chain_id)
    sig_r, sig_s, sig_v = await sign_order(signer, order.user, data)
    logger.info(f"✅ Signed order nonce={order.nonce} for {order.user}")
    return SignedOrder(order=order, sig_r=sig_r, sig_s=sig_s, sig_v=sig_v)


async def sign_orders(signer, orders: Sequence[Order], trader_address: str,
                      chain_id: Optional[int] = None) -> List['asyncio.Task[SignedOrder]']:
    """
    Start signing every order concurrently.

    Each order is signed by its own user. Returns one task per order, in
    input order; each task resolves or fails on its own, so the caller
    decides how to await and reconcile them.
    """
    logger.info(f"📝 Signing {len(orders)} order(s) for trader {trader_address}")
    return [
        asyncio.create_task(_sign_one(signer, order, trader_address, chain_id))
        for order in orders
    ]


async def sign_orders_settled(signer, orders: Sequence[Order], trader_address: str,
                              chain_id: Optional[int] = None) -> List[Union[SignedOrder, Exception]]:
    """
    Sign every order concurrently and wait for all of them.

    Returns a SignedOrder or the raised exception for each order, in input order.
    """
    tasks = await sign_orders(signer, orders, trader_address, chain_id)
    results = await asyncio.gather(*tasks, return_exceptions=True)

    failed = sum(1 for result in results if isinstance(result, Exception))
    if failed:
        logger.warning(f"⚠️ {failed}/{len(results)} order signature(s) failed")
    return results


def recover_signer(signed_order: SignedOrder, trader_address: str,
                   chain_id: Optional[int] = None) -> str:
    """Address whose key produced signed_order's signature."""
    data = build_signing_data(signed_order.order, trader_address, chain_id)
    signature = join_signature(signed_order.sig_r, signed_order.sig_s, signed_order.sig_v)
    return Account.recover_message(encode_typed_data(full_message=data), signature=signature)
