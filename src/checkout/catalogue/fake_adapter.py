"""In-memory product catalogue for development and testing."""

from checkout.catalogue.port import Product, ProductCatalog


class InMemoryCatalog(ProductCatalog):
    """Catalogue backed by a plain dict, seeded through ``add``."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products: dict[str, Product] = {}
        self.calls: list[str] = []
        for product in products or []:
            self.add(product)

    def add(self, product: Product) -> Product:
        self.products[str(product.product_id)] = product
        return product

    def discontinue(self, product_id: str) -> None:
        self.products.pop(str(product_id), None)

    def find_by_id(self, product_id: str) -> Product | None:
        self.calls.append(str(product_id))
        return self.products.get(str(product_id))
