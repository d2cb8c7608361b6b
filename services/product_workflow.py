# services/product_workflow.py

import logging
import math
from typing import Dict, List, Optional

from catalog_service import CatalogRequestError, CatalogService
from schemas import Product, ProductForm, ProductUpdate, ProductWrite
from services import sync_service
from state import EDITING, VIEWING, CatalogStore
from utils import parse_int, plain_number

logger = logging.getLogger("product_workflow")

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields!"


class ProductValidationError(ValueError):
    """A required form field is missing or invalid; nothing was sent."""


class ProductNotFoundError(LookupError):
    pass


# ---------- form parsing ----------

def parse_images(text: str, placeholder: str) -> List[str]:
    """One URL per line, blank lines dropped; a single placeholder when empty."""
    images = [line.strip() for line in (text or "").splitlines() if line.strip()]
    return images or [placeholder]


def _parse_price(raw: str) -> Optional[float]:
    try:
        price = float(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return price if math.isfinite(price) else None


def validate_create(form: ProductForm, placeholder: str) -> ProductWrite:
    title = form.title.strip()
    description = form.description.strip()
    price = _parse_price(form.price)
    category_id = parse_int(form.category_id)
    if not title or price is None or price <= 0 or not category_id or not description:
        raise ProductValidationError(REQUIRED_FIELDS_MESSAGE)
    return ProductWrite(
        title=title,
        price=price,
        category_id=category_id,
        description=description,
        images=parse_images(form.images, placeholder),
    )


def validate_update(existing: Product, form: ProductForm) -> ProductUpdate:
    """All fields are overwritten from the form except images, which carry forward."""
    title = form.title.strip()
    price = _parse_price(form.price)
    category_id = parse_int(form.category_id)
    if not title or price is None or price < 0 or not category_id:
        raise ProductValidationError(REQUIRED_FIELDS_MESSAGE)
    return ProductUpdate(
        id=existing.id,
        title=title,
        price=price,
        category_id=category_id,
        description=form.description,
        images=list(existing.images),
    )


def form_from_product(product: Product) -> Dict[str, str]:
    return {
        "title": product.title or "",
        "price": str(plain_number(product.price)),
        "category_id": str(product.category.id) if product.category else "",
        "description": product.description or "",
        "images": "\n".join(product.images),
    }


def _resync_after_write(store: CatalogStore, service: CatalogService) -> None:
    # The write already succeeded; a failed refetch shows up as the table's load error.
    try:
        sync_service.refresh_catalog(store, service)
    except CatalogRequestError:
        logger.warning("Resync after write failed; catalog may be stale")


# ---------- raising operations (used by the JSON API) ----------

def create_product(store: CatalogStore, service: CatalogService, form: ProductForm, placeholder: str) -> Product:
    payload = validate_create(form, placeholder)
    created = service.create_product(payload)
    logger.info("Created product id=%s title=%r", created.id, created.title)
    _resync_after_write(store, service)
    return created


def update_product(store: CatalogStore, service: CatalogService, product_id: int, form: ProductForm) -> Product:
    existing = store.get_product(product_id)
    if existing is None:
        raise ProductNotFoundError(f"Product {product_id} not found")
    payload = validate_update(existing, form)
    updated = service.update_product(product_id, payload)
    logger.info("Updated product id=%s", product_id)
    _resync_after_write(store, service)
    return updated


# ---------- edit workflow ----------

def open_product(store: CatalogStore, product_id: int) -> Optional[Product]:
    """Closed -> Viewing. Unknown ids leave the session untouched."""
    product = store.get_product(product_id)
    if product is None:
        return None
    session = store.editor
    session.mode, session.product_id, session.error = VIEWING, product_id, None
    session.form = form_from_product(product)
    return product


def begin_edit(store: CatalogStore, product_id: int) -> Optional[Product]:
    """Viewing -> Editing, opening the record first if needed."""
    session = store.editor
    if session.mode == EDITING and session.product_id == product_id:
        return store.get_product(product_id)
    product = open_product(store, product_id)
    if product is not None:
        session.mode = EDITING
    return product


def cancel_edit(store: CatalogStore) -> None:
    store.editor.close()


def submit_update(store: CatalogStore, service: CatalogService, product_id: int, form: ProductForm) -> bool:
    """
    Editing -> Closed on success. On failure the session stays in Editing
    with the user's input and an inline error.
    """
    session = store.editor
    session.mode, session.product_id = EDITING, product_id
    session.form = form.model_dump()
    try:
        update_product(store, service, product_id, form)
    except ProductValidationError as e:
        session.error = str(e)
        return False
    except (CatalogRequestError, ProductNotFoundError) as e:
        logger.error("Error updating product %s: %s", product_id, e)
        session.error = f"Error: {e}"
        return False
    session.close()
    store.push_notice("Product updated successfully!")
    return True


# ---------- create workflow ----------

def open_create(store: CatalogStore) -> None:
    session = store.creator
    session.close()
    session.mode = EDITING


def cancel_create(store: CatalogStore) -> None:
    store.creator.close()


def submit_create(store: CatalogStore, service: CatalogService, form: ProductForm, placeholder: str) -> bool:
    session = store.creator
    session.mode = EDITING
    session.form = form.model_dump()
    try:
        create_product(store, service, form, placeholder)
    except ProductValidationError as e:
        session.error = str(e)
        return False
    except CatalogRequestError as e:
        logger.error("Error creating product: %s", e)
        session.error = f"Error: {e}"
        return False
    session.close()
    store.push_notice("Product created successfully!")
    return True
