"""
Order and Order Book Records

Plain records shared by the accounting and signing modules.
Nothing here talks to a chain or to the matching engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from eth_utils import decode_hex

SIDE_BID = "Bid"
SIDE_ASK = "Ask"


@dataclass(frozen=True)
class BookLevel:
    """One level of resting liquidity."""
    price: float
    amount: float

    @classmethod
    def from_dict(cls, level: Mapping[str, Any]) -> 'BookLevel':
        return cls(price=float(level["price"]), amount=float(level["amount"]))

    @property
    def notional(self) -> float:
        return self.price * self.amount


@dataclass(frozen=True)
class TradeExposure:
    """Result of walking the book with a given amount of buying power."""
    exposure: float = 0.0
    trade_price: float = 0.0
    slippage: float = 0.0


@dataclass(frozen=True)
class Order:
    """
    A limit order as the Tracer contracts see it.

    price and amount are the integer on-chain values. side is True for a
    long (bid) and False for a short (ask).
    """
    user: str
    target_tracer: str
    side: bool
    price: int
    amount: int
    expiration: int
    nonce: int

    def to_message(self) -> Dict[str, Any]:
        """EIP-712 LimitOrder message, keyed by the contract field names."""
        return {
            "amount": self.amount,
            "price": self.price,
            "side": self.side,
            "user": self.user,
            "expiration": self.expiration,
            "targetTracer": self.target_tracer,
            "nonce": self.nonce,
        }


@dataclass(frozen=True)
class SignedOrder:
    """An order plus the r/s/v parts of its EIP-712 signature."""
    order: Order
    sig_r: str
    sig_s: str
    sig_v: int


@dataclass
class OMEOrder:
    """Order as exchanged with the order matching engine."""
    id: str
    user: str
    target_tracer: str
    side: str  # "Bid" or "Ask"
    price: int
    amount: int
    expiration: int
    signed_data: bytes = field(repr=False)
    nonce: str = "0x0"

    def to_dict(self) -> Dict[str, Any]:
        """Wire mapping. signed_data goes out as a list of byte values."""
        return {
            "id": self.id,
            "user": self.user,
            "target_tracer": self.target_tracer,
            "side": self.side,
            "price": self.price,
            "amount": self.amount,
            "expiration": self.expiration,
            "signed_data": list(self.signed_data),
            "nonce": self.nonce,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'OMEOrder':
        return cls(
            id=str(data["id"]),
            user=data["user"],
            target_tracer=data["target_tracer"],
            side=data["side"],
            price=data["price"],
            amount=data["amount"],
            expiration=data["expiration"],
            signed_data=_to_bytes(data["signed_data"]),
            nonce=data["nonce"],
        )


def _to_bytes(value: Union[bytes, bytearray, str, List[int]]) -> bytes:
    """Accept raw bytes, a 0x hex string or a list of byte values."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return decode_hex(value)
    return bytes(value)
