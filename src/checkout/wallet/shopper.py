"""Shopper aggregate — the account data checkout reads and debits."""

from protean.exceptions import ValidationError
from protean.fields import Float, String, Text

from checkout.domain import checkout
from checkout.utils.settings import default_address, default_wallet_money


@checkout.aggregate
class Shopper:
    owner_key = String(required=True, max_length=255)
    email = String(max_length=254)
    wallet_money = Float(default=default_wallet_money, min_value=0.0)
    address = Text(default=default_address)

    @classmethod
    def register(cls, owner_key, email=None, wallet_money=None, address=None):
        shopper = cls(owner_key=owner_key, email=email)
        if wallet_money is not None:
            shopper.wallet_money = wallet_money
        if address is not None:
            shopper.address = address
        return shopper

    def has_non_default_address(self) -> bool:
        return bool(self.address) and self.address != default_address()

    def set_address(self, address):
        if not address or not address.strip():
            raise ValidationError({"address": ["Address cannot be blank"]})
        self.address = address

    def debit(self, amount):
        if amount < 0:
            raise ValidationError({"amount": ["Debit amount cannot be negative"]})
        if amount > self.wallet_money:
            raise ValidationError({"wallet_money": ["Insufficient wallet balance"]})
        self.wallet_money = round(self.wallet_money - amount, 2)

    def credit(self, amount):
        if amount < 0:
            raise ValidationError({"amount": ["Credit amount cannot be negative"]})
        self.wallet_money = round(self.wallet_money + amount, 2)
