"""Cart operations bind the owner to the structlog context while they run."""

import pytest
import structlog
from checkout.cart.errors import InvalidProduct
from checkout.cart.service import CartService
from checkout.catalogue.fake_adapter import InMemoryCatalog


class ContextRecordingCatalog(InMemoryCatalog):
    """Remembers the bound log context seen by each lookup."""

    def __init__(self, products):
        super().__init__(products)
        self.seen_context = []

    def find_by_id(self, product_id):
        self.seen_context.append(structlog.contextvars.get_contextvars())
        return super().find_by_id(product_id)


@pytest.fixture()
def recording_catalog(catalog):
    return ContextRecordingCatalog(list(catalog.products.values()))


@pytest.fixture(autouse=True)
def _clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


def test_owner_and_operation_bound_during_call(recording_catalog, store, owner):
    service = CartService(recording_catalog, store)

    service.add_item(owner, "prod-001", 1)

    assert recording_catalog.seen_context == [{"owner_key": owner, "operation": "add_item"}]


def test_context_cleared_after_success(recording_catalog, store, owner):
    CartService(recording_catalog, store).add_item(owner, "prod-001", 1)

    assert structlog.contextvars.get_contextvars() == {}


def test_context_cleared_after_failure(recording_catalog, store, owner):
    service = CartService(recording_catalog, store)

    with pytest.raises(InvalidProduct):
        service.add_item(owner, "prod-999", 1)

    assert structlog.contextvars.get_contextvars() == {}
