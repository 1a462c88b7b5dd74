"""Product catalogue port (abstract interface).

The cart only ever reads from the catalogue: does a product exist, and what
does it cost. Catalogue management lives elsewhere.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """Reference data for a sellable product."""

    product_id: str
    cost: float
    name: str = ""


class ProductCatalog(ABC):
    """Abstract read-only product lookup."""

    @abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        """Return the product, or None when the catalogue has no such id."""
        ...
