import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def checkout_bed():
    from checkout.domain import checkout

    bed = DomainFixture(checkout)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(checkout_bed):
    with checkout_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def _reset_adapters():
    yield

    from checkout.cart.store import reset_cart_store
    from checkout.catalogue import reset_catalog

    reset_catalog()
    reset_cart_store()


@pytest.fixture()
def owner():
    return "crio-user@gmail.com"


@pytest.fixture()
def catalog():
    from checkout.catalogue.fake_adapter import InMemoryCatalog
    from checkout.catalogue.port import Product

    return InMemoryCatalog(
        [
            Product(product_id="prod-001", cost=10.0, name="Notebook"),
            Product(product_id="prod-002", cost=5.0, name="Pen"),
            Product(product_id="prod-003", cost=2.5, name="Eraser"),
            Product(product_id="prod-004", cost=120.0, name="Backpack"),
        ]
    )


@pytest.fixture()
def store():
    from checkout.cart.store.repository_adapter import RepositoryCartStore

    return RepositoryCartStore()


@pytest.fixture()
def service(catalog, store):
    from checkout.cart.service import CartService

    return CartService(catalog=catalog, carts=store)
