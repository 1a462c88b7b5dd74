"""Runtime settings read from the ``[custom]`` table of ``domain.toml``."""

from checkout.domain import checkout

DEFAULT_ADDRESS = "ADDRESS_NOT_SET"
DEFAULT_WALLET_MONEY = 500.0
CONFLICT_RETRY_ATTEMPTS = 3


def _custom(key, fallback):
    custom = checkout.config.get("custom") or {}
    return custom.get(key, fallback)


def default_address() -> str:
    """Sentinel stored on shoppers who have not configured a shipping address."""
    return _custom("DEFAULT_ADDRESS", DEFAULT_ADDRESS)


def default_wallet_money() -> float:
    return float(_custom("DEFAULT_WALLET_MONEY", DEFAULT_WALLET_MONEY))


def conflict_retry_attempts() -> int:
    return int(_custom("CONFLICT_RETRY_ATTEMPTS", CONFLICT_RETRY_ATTEMPTS))
