"""
Configuration for Tracer Utils

Protocol constants used for order signing and margin accounting.
These are fixed by the Tracer contracts; the environment is never read.
Per-call overrides (e.g. chain_id) are keyword arguments on the functions.
"""

# ======== EIP-712 DOMAIN ========
# Must match the domain the Tracer contracts hash orders against
DOMAIN_NAME = "Tracer Protocol"
DOMAIN_VERSION = "1.0"

# Local development chain (ganache/hardhat)
DEFAULT_CHAIN_ID = 1337

# ======== LIQUIDATION ========
# Gas cost of one forced liquidation, in quote units
LIQUIDATION_GAS_COST = 25.0

# Minimum margin keeps this many liquidation gas costs in reserve
MINIMUM_MARGIN_GAS_MULTIPLIER = 6

# A liquidator breaks even once margin drops one more gas cost below minimum
PROFITABLE_LIQUIDATION_GAS_MULTIPLIER = MINIMUM_MARGIN_GAS_MULTIPLIER - 1

# ======== TRADE EXPOSURE ========
# Decimal places kept on filled exposure
EXPOSURE_DECIMALS = 10
