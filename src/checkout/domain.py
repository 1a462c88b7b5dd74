"""Checkout bounded context — Shopping Cart and Wallet Checkout.

Handles cart line-item management and the checkout transaction that turns
a cart into a wallet debit and an emptied cart.
"""

from protean.domain import Domain

from checkout.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
checkout = Domain(name="checkout")
