"""Error taxonomy for cart operations and the checkout transaction.

Every failure leaving ``CartService`` is one of the classes below. Each
carries a ``kind`` (stable name for callers), a ``category`` that a transport
layer can map to its own status codes, and a human-readable message.
"""

from enum import Enum


class ErrorCategory(Enum):
    NOT_FOUND = "not_found"
    INVALID_REQUEST = "invalid_request"
    INTERNAL = "internal"


class CartError(Exception):
    """Base class for all cart domain errors."""

    kind = "CartError"
    category = ErrorCategory.INTERNAL
    default_message = "Cart operation failed"

    def __init__(self, message: str | None = None, **context) -> None:
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "category": self.category.value,
            "message": self.message,
        }


class NotFound(CartError):
    kind = "NotFound"
    category = ErrorCategory.NOT_FOUND
    default_message = "User does not have a cart"


class NoCart(CartError):
    """Raised when an operation needs an existing cart and the owner has none."""

    kind = "NoCart"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "User does not have a cart. Use POST to create cart and add a product"


class InvalidProduct(CartError):
    kind = "InvalidProduct"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Product doesn't exist in database"


class InvalidQuantity(CartError):
    kind = "InvalidQuantity"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Quantity must be a positive whole number"


class DuplicateItem(CartError):
    kind = "DuplicateItem"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Product already in cart. Use the cart sidebar to update or remove product from cart"


class ItemNotInCart(CartError):
    kind = "ItemNotInCart"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Product not in cart"


class EmptyCart(CartError):
    kind = "EmptyCart"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Cart is empty"


class AddressNotSet(CartError):
    kind = "AddressNotSet"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Address not set"


class InsufficientFunds(CartError):
    kind = "InsufficientFunds"
    category = ErrorCategory.INVALID_REQUEST
    default_message = "Wallet balance is insufficient for this purchase"


class PersistenceFailure(CartError):
    """A store write failed.

    ``conflict`` is true when the write was rejected because the cart changed
    after it was read; only those failures are worth retrying.
    """

    kind = "PersistenceFailure"
    category = ErrorCategory.INTERNAL
    default_message = "Could not persist changes"

    def __init__(self, message: str | None = None, conflict: bool = False, **context) -> None:
        super().__init__(message, **context)
        self.conflict = conflict


class InternalError(CartError):
    kind = "Internal"
    category = ErrorCategory.INTERNAL
    default_message = "Unexpected failure while processing the cart"
