# services/sync_service.py

import logging

from catalog_service import CatalogRequestError, CatalogService
from state import CatalogStore

logger = logging.getLogger("sync_service")

LOAD_ERROR_MESSAGE = "Failed to load products. Please try again later."


def refresh_catalog(store: CatalogStore, service: CatalogService) -> bool:
    """
    Re-fetches the full product list and replaces the store's copy.

    Returns False when a newer load completed first and this result was
    discarded. Fetch failures are recorded on the store and re-raised.
    """
    ticket = store.begin_load()
    try:
        products = service.list_products()
    except CatalogRequestError as e:
        logger.error("Error fetching products: %s", e)
        store.record_load_failure(ticket, LOAD_ERROR_MESSAGE)
        raise
    applied = store.apply_products(products, ticket)
    if applied:
        logger.info("Catalog refreshed: %d products", len(products))
    return applied


def refresh_categories(store: CatalogStore, service: CatalogService) -> None:
    """Category failures only log; the selector is simply left empty."""
    try:
        categories = service.list_categories()
    except CatalogRequestError as e:
        logger.warning("Error fetching categories: %s", e)
        return
    store.set_categories(categories)


def load_dashboard(store: CatalogStore, service: CatalogService) -> None:
    """Initial load: products then categories. A product failure does not block categories."""
    try:
        refresh_catalog(store, service)
    except CatalogRequestError:
        # already logged and recorded as store.load_error
        pass
    refresh_categories(store, service)
