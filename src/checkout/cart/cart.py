"""Cart aggregate — one per owner, holds line items until checkout.

The cart is a standard (non event-sourced) aggregate. Items keep insertion
order and a product appears at most once. Checkout empties the cart rather
than closing it, so an emptied cart looks exactly like a fresh one and can be
filled again.

Concurrent writers are detected through the version the repository keeps on
every aggregate; a copy saved after someone else wrote the cart is rejected.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from checkout.cart.events import (
    CartCheckedOut,
    CartCreated,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from checkout.cart.pricing import cart_total
from checkout.domain import checkout


@checkout.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    cost = Float(required=True, min_value=0.0)  # Captured from the catalogue at add time
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@checkout.aggregate
class Cart:
    owner_key = String(required=True, max_length=255, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()
    checked_out_at = DateTime()

    @invariant.post
    def product_must_appear_only_once(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner_key):
        now = datetime.now(UTC)
        cart = cls(
            owner_key=owner_key,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartCreated(cart_id=str(cart.id), owner_key=owner_key))
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def contains(self, product_id) -> bool:
        return self.find_item(product_id) is not None

    def total(self) -> float:
        return cart_total(self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Append a catalogue product as a new line at the end of the cart."""
        _ensure_positive(quantity)
        if self.contains(product.product_id):
            raise ValidationError({"product_id": ["Product already in cart"]})

        now = datetime.now(UTC)
        item = CartItem(
            product_id=product.product_id,
            product_name=product.name,
            cost=product.cost,
            quantity=quantity,
            added_at=now,
        )
        self.add_items(item)
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.product_id),
                cost=product.cost,
                quantity=quantity,
            )
        )
        return item

    def update_item_quantity(self, product_id, new_quantity):
        """Change the quantity of the line holding ``product_id`` in place."""
        _ensure_positive(new_quantity)
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product not in cart"]})

        previous_quantity = item.quantity
        item.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product not in cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
            )
        )

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def clear_after_checkout(self, total):
        """Empty the cart once its contents have been paid for."""
        if not self.items:
            raise ValidationError({"items": ["Cannot check out an empty cart"]})

        item_count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        now = datetime.now(UTC)
        self.updated_at = now
        self.checked_out_at = now

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                total=total,
                item_count=item_count,
                checked_out_at=now,
            )
        )


def _ensure_positive(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be a positive whole number"]})
