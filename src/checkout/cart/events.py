"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Cart")
class CartCreated:
    """A cart was created for an owner on their first add."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=255)


@checkout.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    cost = Float(required=True)
    quantity = Integer(required=True)


@checkout.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart item was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@checkout.event(part_of="Cart")
class CartItemRemoved:
    """An item was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@checkout.event(part_of="Cart")
class CartCheckedOut:
    """The cart was paid for from the owner's wallet and emptied."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=255)
    total = Float(required=True)
    item_count = Integer(required=True)
    checked_out_at = DateTime(required=True)
