"""Configurable in-memory wallet for development and testing.

Besides holding a balance it can be told to fail its next saves, which is
how the checkout rollback paths are exercised.
"""

from checkout.wallet.port import WalletAccount, WalletSaveError


class FakeWallet(WalletAccount):
    def __init__(self, owner_key: str, balance: float = 500.0, address_set: bool = True) -> None:
        self._owner_key = owner_key
        self._balance = balance
        self.address_set = address_set
        self.saved_balance = balance
        self.failing_saves: list[bool] = []
        self.calls: list[dict] = []

    def configure(self, fail_saves: list[bool]) -> None:
        """Queue outcomes for upcoming saves: True means that save fails."""
        self.failing_saves = list(fail_saves)

    @property
    def owner_key(self) -> str:
        return self._owner_key

    @property
    def balance(self) -> float:
        return self._balance

    def has_non_default_address(self) -> bool:
        return self.address_set

    def debit(self, amount: float) -> None:
        self.calls.append({"method": "debit", "amount": amount})
        self._balance = round(self._balance - amount, 2)

    def credit(self, amount: float) -> None:
        self.calls.append({"method": "credit", "amount": amount})
        self._balance = round(self._balance + amount, 2)

    def save(self) -> None:
        self.calls.append({"method": "save", "balance": self._balance})
        if self.failing_saves and self.failing_saves.pop(0):
            raise WalletSaveError(f"Could not save wallet for {self._owner_key}")
        self.saved_balance = self._balance
