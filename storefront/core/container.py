"""
Service wiring.

One Storefront object per app instance holds every store and service, so
tests can build isolated instances and a persistent backend can be plugged
in by passing different repositories.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from .config import Settings
from ..auth.passwords import PasswordHasher
from ..auth.store import CredentialStore, InMemoryUserRepository, UserRepository
from ..auth.tokens import TokenService
from ..catalog.store import CatalogService, InMemoryProductRepository, ProductRepository
from ..orders.reconciler import OrderReconciler
from ..orders.store import InMemoryOrderRepository, OrderRepository
from ..payments.gateway import PaymentGateway, StripeGateway
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Storefront:
    settings: Settings
    credentials: CredentialStore
    tokens: TokenService
    catalog: CatalogService
    reconciler: OrderReconciler


def build_storefront(
    settings: Settings,
    gateway: Optional[PaymentGateway] = None,
    users: Optional[UserRepository] = None,
    products: Optional[ProductRepository] = None,
    orders: Optional[OrderRepository] = None,
    clock: Callable[[], float] = time.time,
) -> Storefront:
    if gateway is None:
        key = settings.stripe_secret_key.get_secret_value() if settings.stripe_secret_key else ""
        gateway = StripeGateway(key)
        if not key:
            logger.warning("STRIPE_SECRET_KEY not set; checkout will fail until it is configured")

    credentials = CredentialStore(
        users if users is not None else InMemoryUserRepository(),
        PasswordHasher(rounds=settings.bcrypt_rounds),
        first_user_is_admin=settings.first_user_is_admin,
    )
    if settings.admin_email and settings.admin_password:
        credentials.seed_admin(settings.admin_email, settings.admin_password.get_secret_value())

    catalog = CatalogService(
        products if products is not None else InMemoryProductRepository(),
        settings.uploads_dir,
    )
    return Storefront(
        settings=settings,
        credentials=credentials,
        tokens=TokenService(
            settings.token_secret.get_secret_value(),
            ttl_seconds=settings.token_ttl_seconds,
            clock=clock,
        ),
        catalog=catalog,
        reconciler=OrderReconciler(
            catalog,
            orders if orders is not None else InMemoryOrderRepository(),
            gateway,
            currency=settings.currency,
            require_confirmed_payment=settings.require_confirmed_payment,
        ),
    )
