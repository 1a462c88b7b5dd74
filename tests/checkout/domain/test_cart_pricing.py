"""Cart totals multiply unit cost by quantity."""

from checkout.cart.cart import Cart
from checkout.cart.pricing import cart_total, line_total
from checkout.catalogue.port import Product


class TestLineTotal:
    def test_cost_times_quantity(self):
        assert line_total(10.0, 2) == 20.0

    def test_single_unit(self):
        assert line_total(5.0, 1) == 5.0


class TestCartTotal:
    def test_reference_basket(self):
        cart = Cart.create(owner_key="crio-user@gmail.com")
        cart.add_item(Product(product_id="prod-001", cost=10.0), 2)
        cart.add_item(Product(product_id="prod-002", cost=5.0), 1)

        assert cart.total() == 25.0

    def test_quantity_is_not_added_to_cost(self):
        # Summing cost + quantity per line would give (10 + 2) + (5 + 1) = 18
        cart = Cart.create(owner_key="crio-user@gmail.com")
        cart.add_item(Product(product_id="prod-001", cost=10.0), 2)
        cart.add_item(Product(product_id="prod-002", cost=5.0), 1)

        assert cart.total() != 18.0

    def test_empty_cart_totals_zero(self):
        assert cart_total([]) == 0

    def test_rounded_to_cents(self):
        cart = Cart.create(owner_key="crio-user@gmail.com")
        cart.add_item(Product(product_id="prod-001", cost=0.1), 3)
        assert cart.total() == 0.3
