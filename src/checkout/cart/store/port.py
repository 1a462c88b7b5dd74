"""Cart store port (abstract interface).

Persistence for carts keyed by owner. Implementations must make ``create``
an atomic create-if-absent and must reject a ``save`` whose cart was
modified by someone else since it was read.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from checkout.cart.cart import Cart
from checkout.catalogue.port import Product


class CartStoreError(Exception):
    """A cart could not be written."""


class StaleCartError(CartStoreError):
    """The cart changed in the store after this copy was read."""

    def __init__(self, owner_key: str) -> None:
        self.owner_key = owner_key
        super().__init__(f"Cart for {owner_key} was modified after this copy was read")


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a create-if-absent call.

    ``created`` is False when the owner already had a cart; ``cart`` is then
    the existing one, untouched.
    """

    cart: Cart
    created: bool


class CartStore(ABC):
    """Abstract cart persistence."""

    @abstractmethod
    def find_by_owner(self, owner_key: str) -> Cart | None:
        """Load a fresh copy of the owner's cart, or None."""
        ...

    @abstractmethod
    def create(self, owner_key: str, lines: list[tuple[Product, int]]) -> CreateResult:
        """Create the owner's cart holding ``lines`` unless one already exists."""
        ...

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist ``cart``; raises StaleCartError or CartStoreError on failure."""
        ...
