"""Cart store factory.

Provides get_cart_store() / set_cart_store() to swap implementations.
Defaults to RepositoryCartStore.
"""

from checkout.cart.store.port import CartStore
from checkout.cart.store.repository_adapter import RepositoryCartStore

_current_store: CartStore | None = None


def get_cart_store() -> CartStore:
    """Return the current cart store. Defaults to RepositoryCartStore."""
    global _current_store
    if _current_store is None:
        _current_store = RepositoryCartStore()
    return _current_store


def set_cart_store(store: CartStore) -> None:
    """Override the active cart store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_cart_store() -> None:
    """Reset to default cart store."""
    global _current_store
    _current_store = None
