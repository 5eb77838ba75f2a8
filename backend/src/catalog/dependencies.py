"""Wiring of the catalog service from configuration"""

import logging
from typing import Iterable, Optional

from config import Settings, get_settings
from domain.catalog.lifecycle import ItemLifecycle
from domain.notifications import LoanActivitySubscriber, NotificationHub
from domain.validation.engine import ValidationPipeline
from infrastructure.repositories.catalog_repository import SqlAlchemyRecordStore
from observability.logging_config import configure_logging

from .service import CatalogService


logger = logging.getLogger(__name__)


def build_catalog_service(
    settings: Optional[Settings] = None,
    subscribers: Optional[Iterable] = None
) -> CatalogService:
    """Create a CatalogService with its own record store.

    The caller owns the returned service and must close() it (or use it
    as a context manager) to release the database engine.

    Args:
        settings: Settings to use (defaults to get_settings())
        subscribers: Subscribers to register; defaults to a LoanActivitySubscriber

    Example:
        with build_catalog_service() as catalog:
            catalog.admit(item)
    """
    settings = settings or get_settings()

    store = SqlAlchemyRecordStore.from_url(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    hub = NotificationHub()
    for subscriber in (subscribers if subscribers is not None else [LoanActivitySubscriber()]):
        hub.subscribe(subscriber)

    service = CatalogService(
        store=store,
        pipeline=ValidationPipeline(),
        lifecycle=ItemLifecycle(default_loan_days=settings.DEFAULT_LOAN_DAYS),
        hub=hub
    )
    logger.info(f"Catalog service ready ({settings.ENVIRONMENT}, {len(hub)} subscribers)")
    return service


def configure_catalog_logging(settings: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL and LOG_JSON to the root logger.

    Call once at process start, before build_catalog_service().
    """
    settings = settings or get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
