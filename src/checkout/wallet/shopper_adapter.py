"""Wallet capability over a persisted Shopper."""

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from checkout.wallet.port import StaleWalletError, WalletAccount, WalletSaveError
from checkout.wallet.shopper import Shopper

logger = structlog.get_logger(__name__)


class ShopperWallet(WalletAccount):
    """Wraps one Shopper loaded for the current request."""

    def __init__(self, shopper: Shopper) -> None:
        self._shopper = shopper

    @classmethod
    def load(cls, owner_key: str) -> "ShopperWallet | None":
        """Load the wallet of ``owner_key``, or None if no such shopper exists."""
        repo = current_domain.repository_for(Shopper)
        matches = repo._dao.query.filter(owner_key=owner_key).all().items
        if not matches:
            return None
        return cls(repo.get(matches[0].id))

    @property
    def owner_key(self) -> str:
        return self._shopper.owner_key

    @property
    def balance(self) -> float:
        return self._shopper.wallet_money

    def has_non_default_address(self) -> bool:
        return self._shopper.has_non_default_address()

    def debit(self, amount: float) -> None:
        self._shopper.debit(amount)

    def credit(self, amount: float) -> None:
        self._shopper.credit(amount)

    def save(self) -> None:
        try:
            current_domain.repository_for(Shopper).add(self._shopper)
        except ExpectedVersionError as exc:
            logger.warning("Rejected stale wallet write", owner_key=self.owner_key)
            raise StaleWalletError(f"Wallet for {self.owner_key} was modified after it was loaded") from exc
        except Exception as exc:
            logger.error("Failed to persist wallet", owner_key=self.owner_key, error=str(exc))
            raise WalletSaveError(f"Could not save wallet for {self.owner_key}") from exc
