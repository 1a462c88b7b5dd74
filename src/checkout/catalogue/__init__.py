"""Product catalogue factory.

Provides get_catalog() / set_catalog() to swap implementations. Defaults to
an empty InMemoryCatalog.
"""

from checkout.catalogue.fake_adapter import InMemoryCatalog
from checkout.catalogue.port import ProductCatalog

_current_catalog: ProductCatalog | None = None


def get_catalog() -> ProductCatalog:
    """Return the current catalogue. Defaults to InMemoryCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = InMemoryCatalog()
    return _current_catalog


def set_catalog(catalog: ProductCatalog) -> None:
    """Override the active catalogue (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to default catalogue."""
    global _current_catalog
    _current_catalog = None
