"""Application tests for removing cart items."""

import pytest
from checkout.cart.errors import ItemNotInCart, NoCart


def _product_ids(cart):
    return [str(item.product_id) for item in cart.items]


class TestRemoveItem:
    def test_owner_without_cart(self, service, owner):
        with pytest.raises(NoCart) as exc_info:
            service.remove_item(owner, "prod-001")
        assert exc_info.value.message == "User does not have a cart"

    def test_removes_exactly_one_item_keeping_order(self, service, store, owner):
        service.add_item(owner, "prod-001", 1)
        service.add_item(owner, "prod-002", 1)
        service.add_item(owner, "prod-003", 1)

        result = service.remove_item(owner, "prod-002")

        assert result is None
        assert _product_ids(store.find_by_owner(owner)) == ["prod-001", "prod-003"]

    def test_absent_item_leaves_cart_unchanged(self, service, store, owner):
        service.add_item(owner, "prod-001", 1)
        before = store.find_by_owner(owner)

        with pytest.raises(ItemNotInCart):
            service.remove_item(owner, "prod-002")

        after = store.find_by_owner(owner)
        assert _product_ids(after) == _product_ids(before)
        assert after._version == before._version

    def test_discontinued_product_can_still_be_removed(self, service, catalog, store, owner):
        service.add_item(owner, "prod-001", 1)
        catalog.discontinue("prod-001")

        service.remove_item(owner, "prod-001")

        assert _product_ids(store.find_by_owner(owner)) == []

    def test_removed_product_can_be_added_again_at_the_end(self, service, owner):
        service.add_item(owner, "prod-001", 1)
        service.add_item(owner, "prod-002", 1)
        service.remove_item(owner, "prod-001")

        cart = service.add_item(owner, "prod-001", 4)

        assert _product_ids(cart) == ["prod-002", "prod-001"]
