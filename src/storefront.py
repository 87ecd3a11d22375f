"""Composition root: builds the entity store and the services around it.

One ``Storefront`` is created per process (or per test) and handed to the
HTTP layer; nothing reaches for module-level state.
"""

import structlog
from fastapi import Request

from catalogue.queries import CatalogueService
from catalogue.seed import seed_catalogue
from identity.accounts import AccountService
from ordering.cart.cart import CartAggregator
from ordering.checkout.compiler import OrderCompiler
from ordering.checkout.locks import UserLocks
from ordering.order.history import OrderHistory
from shared.config import Settings
from shared.store import EntityStore

logger = structlog.get_logger(__name__)


class Storefront:
    def __init__(self, settings: Settings | None = None, store: EntityStore | None = None):
        self.settings = settings or Settings.from_env()
        self.store = store or EntityStore()

        self.catalogue = CatalogueService(self.store)
        self.accounts = AccountService(self.store)
        self.cart = CartAggregator(self.store)
        self.orders = OrderHistory(self.store)
        self.checkout = OrderCompiler(self.store, self.cart, self.settings, UserLocks())

    @classmethod
    def create(cls, settings: Settings | None = None) -> "Storefront":
        """Build a storefront, loading the sample catalogue when the settings ask for it."""
        storefront = cls(settings)
        if storefront.settings.seed_catalogue:
            seed_catalogue(storefront.catalogue)

        logger.info("Storefront ready", settings=repr(storefront.settings))
        return storefront


def get_storefront(request: Request) -> Storefront:
    """FastAPI dependency resolving the storefront attached to the running app."""
    return request.app.state.storefront
