# catalog_service.py
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests
from pydantic import ValidationError

from config import get_settings
from schemas import Category, Product, ProductUpdate, ProductWrite

logger = logging.getLogger("catalog_service")

T = TypeVar("T")


class CatalogRequestError(Exception):
    """Any failed call to the catalog API. Carries only a generic message."""


class CatalogService:
    """
    Thin client for the remote catalog REST API.

    One attempt per call: no retries, no backoff. Any non-2xx response,
    transport error or unreadable body collapses to CatalogRequestError.
    """
    def __init__(self, base_url: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        if not base_url:
            raise ValueError("Catalog API base URL is required.")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json", "Accept": "application/json"}

    def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        failure_message: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> T:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, headers=self.headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return parse(response.json())
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning("%s %s returned status %s", method, url, status)
            raise CatalogRequestError(failure_message) from e
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise CatalogRequestError(failure_message) from e
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning("%s %s returned an unreadable body: %s", method, url, e)
            raise CatalogRequestError(failure_message) from e

    def list_products(self) -> List[Product]:
        return self._request(
            "GET", "/products",
            lambda data: [Product.model_validate(item) for item in data],
            "Failed to fetch products",
        )

    def list_categories(self) -> List[Category]:
        return self._request(
            "GET", "/categories",
            lambda data: [Category.model_validate(item) for item in data],
            "Failed to fetch categories",
        )

    def create_product(self, data: ProductWrite) -> Product:
        return self._request(
            "POST", "/products", Product.model_validate,
            "Failed to create product", payload=data.to_payload(),
        )

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        return self._request(
            "PUT", f"/products/{product_id}", Product.model_validate,
            "Failed to update product", payload=data.to_payload(),
        )


_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """FastAPI dependency returning the shared client built from settings."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = CatalogService(settings.catalog_api_base_url, timeout=settings.request_timeout)
    return _service
