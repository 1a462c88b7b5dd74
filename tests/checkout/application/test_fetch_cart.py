"""Application tests for fetching carts and wiring the default service."""

import pytest
from checkout.cart.errors import NotFound
from checkout.cart.service import CartService, cart_service
from checkout.cart.store import get_cart_store, set_cart_store
from checkout.cart.store.repository_adapter import RepositoryCartStore
from checkout.catalogue import get_catalog, set_catalog
from checkout.catalogue.fake_adapter import InMemoryCatalog


class TestFetchCart:
    def test_owner_without_cart(self, service, owner):
        with pytest.raises(NotFound) as exc_info:
            service.fetch_cart(owner)
        assert exc_info.value.message == "User does not have a cart"

    def test_returns_owner_cart(self, service, owner):
        service.add_item(owner, "prod-001", 2)
        cart = service.fetch_cart(owner)
        assert cart.owner_key == owner
        assert len(cart.items) == 1

    def test_carts_are_per_owner(self, service, owner):
        service.add_item(owner, "prod-001", 2)
        service.add_item("other@gmail.com", "prod-002", 1)

        assert [str(i.product_id) for i in service.fetch_cart(owner).items] == ["prod-001"]
        assert [str(i.product_id) for i in service.fetch_cart("other@gmail.com").items] == ["prod-002"]


class TestDefaultWiring:
    def test_defaults(self):
        assert isinstance(get_catalog(), InMemoryCatalog)
        assert isinstance(get_cart_store(), RepositoryCartStore)

    def test_cart_service_uses_active_adapters(self, catalog, owner):
        store = RepositoryCartStore()
        set_catalog(catalog)
        set_cart_store(store)

        service = cart_service()
        assert isinstance(service, CartService)

        service.add_item(owner, "prod-001", 1)
        assert store.find_by_owner(owner) is not None
        assert catalog.calls == ["prod-001"]
