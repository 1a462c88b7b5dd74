"""Wallet capability port (abstract interface).

The narrow slice of a user account that checkout needs: can we ship, how much
money is there, and a way to move money and persist the change.
"""

from abc import ABC, abstractmethod


class WalletSaveError(Exception):
    """The wallet balance could not be persisted."""


class StaleWalletError(WalletSaveError):
    """The wallet changed in storage after this copy was loaded."""


class WalletAccount(ABC):
    """Abstract wallet capability handed to checkout for one request."""

    @property
    @abstractmethod
    def owner_key(self) -> str: ...

    @property
    @abstractmethod
    def balance(self) -> float: ...

    @abstractmethod
    def has_non_default_address(self) -> bool:
        """True when the owner has configured a real shipping address."""
        ...

    @abstractmethod
    def debit(self, amount: float) -> None:
        """Reduce the in-memory balance; persisted only by ``save``."""
        ...

    @abstractmethod
    def credit(self, amount: float) -> None:
        """Increase the in-memory balance; persisted only by ``save``."""
        ...

    @abstractmethod
    def save(self) -> None:
        """Persist the balance; raises WalletSaveError on failure."""
        ...
