"""Cart service — line-item operations and the wallet checkout transaction.

Every operation loads a fresh copy of the owner's cart, validates the request
against it, mutates that copy and persists it through the cart store. All
validation happens before any write, so a rejected call leaves stored state
untouched.

Checkout writes twice (wallet, then cart). When the cart write fails after the
wallet was saved, the debit is compensated by crediting the wallet back.
A concurrent write to either the cart or the wallet surfaces as a
conflict-flagged PersistenceFailure that the caller may retry.
"""

import functools
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TypeVar

import structlog

from checkout.cart.cart import Cart
from checkout.cart.errors import (
    AddressNotSet,
    CartError,
    DuplicateItem,
    EmptyCart,
    InsufficientFunds,
    InternalError,
    InvalidProduct,
    InvalidQuantity,
    ItemNotInCart,
    NoCart,
    NotFound,
    PersistenceFailure,
)
from checkout.cart.store import get_cart_store
from checkout.cart.store.port import CartStore, CartStoreError, StaleCartError
from checkout.catalogue import get_catalog
from checkout.catalogue.port import Product, ProductCatalog
from checkout.utils.logging import add_context, clear_context
from checkout.utils.settings import conflict_retry_attempts
from checkout.wallet.port import StaleWalletError, WalletAccount, WalletSaveError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CheckoutReceipt:
    owner_key: str
    total: float
    remaining_balance: float
    item_count: int


@contextmanager
def _collaborator(action: str, **context):
    """Translate collaborator failures into the cart error taxonomy."""
    try:
        yield
    except CartError:
        raise
    except (StaleCartError, StaleWalletError) as exc:
        subject = "Cart" if isinstance(exc, StaleCartError) else "Wallet"
        logger.warning("Concurrent write detected", action=action, **context)
        raise PersistenceFailure(
            f"{subject} was modified by another request; retry the operation",
            conflict=True,
            **context,
        ) from exc
    except (CartStoreError, WalletSaveError) as exc:
        logger.error("Persistence failed", action=action, error=str(exc), **context)
        raise PersistenceFailure(**context) from exc
    except Exception as exc:
        logger.exception("Unexpected collaborator failure", action=action, **context)
        raise InternalError(**context) from exc


def _owner_context(operation):
    """Bind the owner and operation name to every log line emitted during the call."""

    @functools.wraps(operation)
    def wrapper(self, owner_key, *args, **kwargs):
        add_context(owner_key=owner_key, operation=operation.__name__)
        try:
            return operation(self, owner_key, *args, **kwargs)
        finally:
            clear_context()

    return wrapper


def _require_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity(quantity=quantity)


class CartService:
    def __init__(self, catalog: ProductCatalog, carts: CartStore) -> None:
        self._catalog = catalog
        self._carts = carts

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def _find_cart(self, owner_key: str) -> Cart | None:
        with _collaborator("find_cart", owner_key=owner_key):
            return self._carts.find_by_owner(owner_key)

    def _require_product(self, product_id: str) -> Product:
        with _collaborator("find_product", product_id=product_id):
            product = self._catalog.find_by_id(product_id)
        if product is None:
            raise InvalidProduct(product_id=product_id)
        return product

    def _save(self, cart: Cart, action: str) -> None:
        with _collaborator(action, owner_key=cart.owner_key, cart_id=str(cart.id)):
            self._carts.save(cart)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    @_owner_context
    def fetch_cart(self, owner_key: str) -> Cart:
        cart = self._find_cart(owner_key)
        if cart is None:
            raise NotFound(owner_key=owner_key)
        return cart

    @_owner_context
    def add_item(self, owner_key: str, product_id: str, quantity: int) -> Cart:
        """Add a product to the owner's cart, creating the cart on first use."""
        _require_quantity(quantity)
        product = self._require_product(product_id)

        cart = self._find_cart(owner_key)
        if cart is None:
            with _collaborator("create_cart", owner_key=owner_key):
                result = self._carts.create(owner_key, [(product, quantity)])
            if result.created:
                logger.info("Added item to new cart", owner_key=owner_key, product_id=product_id, quantity=quantity)
                return result.cart
            # Another request created the cart first
            cart = result.cart

        if cart.contains(product_id):
            raise DuplicateItem(owner_key=owner_key, product_id=product_id)

        cart.add_item(product, quantity)
        self._save(cart, "add_item")

        logger.info("Added item to cart", owner_key=owner_key, product_id=product_id, quantity=quantity)
        return cart

    @_owner_context
    def update_item_quantity(self, owner_key: str, product_id: str, quantity: int) -> Cart:
        _require_quantity(quantity)
        cart = self._find_cart(owner_key)
        if cart is None:
            raise NoCart(owner_key=owner_key)

        self._require_product(product_id)
        if not cart.contains(product_id):
            raise ItemNotInCart(owner_key=owner_key, product_id=product_id)

        cart.update_item_quantity(product_id, quantity)
        self._save(cart, "update_item_quantity")

        logger.info("Updated cart item quantity", owner_key=owner_key, product_id=product_id, quantity=quantity)
        return cart

    @_owner_context
    def remove_item(self, owner_key: str, product_id: str) -> None:
        cart = self._find_cart(owner_key)
        if cart is None:
            raise NoCart("User does not have a cart", owner_key=owner_key)

        if not cart.contains(product_id):
            raise ItemNotInCart(owner_key=owner_key, product_id=product_id)

        cart.remove_item(product_id)
        self._save(cart, "remove_item")

        logger.info("Removed item from cart", owner_key=owner_key, product_id=product_id)

    @_owner_context
    def checkout(self, owner_key: str, wallet: WalletAccount) -> CheckoutReceipt:
        """Pay for the owner's cart from ``wallet`` and empty the cart.

        Either both the debit and the emptied cart are persisted, or neither
        is visible when this raises.
        """
        cart = self._find_cart(owner_key)
        if cart is None:
            raise NoCart("User does not have a cart", owner_key=owner_key)
        if not cart.items:
            raise EmptyCart(owner_key=owner_key)
        if not wallet.has_non_default_address():
            raise AddressNotSet(owner_key=owner_key)

        total = cart.total()
        if total > wallet.balance:
            raise InsufficientFunds(owner_key=owner_key, total=total, balance=wallet.balance)

        item_count = len(cart.items)
        # Emptied in memory only; persisted after the wallet is saved
        with _collaborator("clear_cart", owner_key=owner_key):
            cart.clear_after_checkout(total)

        with _collaborator("debit_wallet", owner_key=owner_key):
            wallet.debit(total)
        try:
            with _collaborator("save_wallet", owner_key=owner_key):
                wallet.save()
        except CartError:
            wallet.credit(total)
            raise

        try:
            self._save(cart, "save_cart")
        except CartError:
            self._refund(wallet, total)
            raise

        logger.info(
            "Checkout complete",
            owner_key=owner_key,
            total=total,
            item_count=item_count,
            remaining_balance=wallet.balance,
        )
        return CheckoutReceipt(
            owner_key=owner_key,
            total=total,
            remaining_balance=wallet.balance,
            item_count=item_count,
        )

    def _refund(self, wallet: WalletAccount, total: float) -> None:
        """Compensate a persisted debit after the cart write failed."""
        wallet.credit(total)
        try:
            wallet.save()
        except Exception as exc:
            logger.critical(
                "Wallet refund failed after cart write failure",
                owner_key=wallet.owner_key,
                amount=total,
                error=str(exc),
            )
            raise InternalError(
                "Checkout failed and the wallet debit could not be reversed",
                owner_key=wallet.owner_key,
                amount=total,
            ) from exc
        logger.warning("Reversed wallet debit after cart write failure", owner_key=wallet.owner_key, amount=total)


def retry_on_conflict(operation: Callable[[], T], attempts: int | None = None) -> T:
    """Run ``operation``, re-running it while it fails on a concurrent cart write."""
    attempts = attempts or conflict_retry_attempts()
    attempt = 1
    while True:
        try:
            return operation()
        except PersistenceFailure as exc:
            if not exc.conflict or attempt >= attempts:
                raise
            logger.info("Retrying after cart write conflict", attempt=attempt)
            attempt += 1


def cart_service() -> CartService:
    """CartService wired to the active catalogue and cart store."""
    return CartService(catalog=get_catalog(), carts=get_cart_store())
