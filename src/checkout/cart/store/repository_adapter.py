"""Cart store backed by the domain's Cart repository.

Conflicts are left to the repository: ``owner_key`` is unique, so a second
cart for the same owner is refused on ``add``, and every aggregate carries a
version, so writing a copy that was read before someone else's save raises
``ExpectedVersionError``. Both hold across store instances and workers.
"""

import structlog
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.utils.globals import current_domain

from checkout.cart.cart import Cart
from checkout.cart.store.port import CartStore, CartStoreError, CreateResult, StaleCartError
from checkout.catalogue.port import Product

logger = structlog.get_logger(__name__)


class RepositoryCartStore(CartStore):
    def _repository(self):
        return current_domain.repository_for(Cart)

    def find_by_owner(self, owner_key: str) -> Cart | None:
        return self._load_by_owner(owner_key)

    def _load_by_owner(self, owner_key: str) -> Cart | None:
        repo = self._repository()
        matches = repo._dao.query.filter(owner_key=owner_key).all().items
        if not matches:
            return None
        return repo.get(matches[0].id)

    def create(self, owner_key: str, lines: list[tuple[Product, int]]) -> CreateResult:
        existing = self._load_by_owner(owner_key)
        if existing is not None:
            logger.info("Cart already exists for owner", owner_key=owner_key, cart_id=str(existing.id))
            return CreateResult(cart=existing, created=False)

        cart = Cart.create(owner_key=owner_key)
        for product, quantity in lines:
            cart.add_item(product, quantity)

        try:
            self._repository().add(cart)
        except ValidationError as exc:
            # Lost the race: another writer stored this owner's cart first
            existing = self._load_by_owner(owner_key)
            if existing is None:
                raise CartStoreError(f"Could not create cart for {owner_key}") from exc
            logger.info("Cart created concurrently by another writer", owner_key=owner_key, cart_id=str(existing.id))
            return CreateResult(cart=existing, created=False)
        except Exception as exc:
            raise CartStoreError(f"Could not create cart for {owner_key}") from exc

        logger.info("Cart created", owner_key=owner_key, cart_id=str(cart.id))
        return CreateResult(cart=cart, created=True)

    def save(self, cart: Cart) -> None:
        try:
            self._repository().add(cart)
        except ExpectedVersionError as exc:
            logger.warning("Rejected stale cart write", owner_key=cart.owner_key, cart_id=str(cart.id))
            raise StaleCartError(cart.owner_key) from exc
        except Exception as exc:
            raise CartStoreError(f"Could not save cart {cart.id}") from exc
