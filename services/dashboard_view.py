# services/dashboard_view.py

from typing import Any, Dict, List

from config import Settings
from schemas import Product
from services import catalog_query
from state import CatalogStore
from utils import format_price, truncate_text

TITLE_MAX_LENGTH = 30
DESCRIPTION_MAX_LENGTH = 50


def product_row(product: Product, placeholder: str) -> Dict[str, Any]:
    return {
        "id": product.id,
        "title": truncate_text(product.title, TITLE_MAX_LENGTH),
        "full_title": product.title,
        "price": format_price(product.price),
        "category": product.category_name or "N/A",
        "image": product.images[0] if product.images else placeholder,
        "description": truncate_text(product.description or "No description", DESCRIPTION_MAX_LENGTH),
        "full_description": product.description or "No description available",
    }


def page_summary(page: int, page_size: int, total: int) -> str:
    start_index = (page - 1) * page_size
    start = start_index + 1 if total > 0 else 0
    end = min(start_index + page_size, total)
    return f"Showing {start} to {end} of {total} entries"


def pagination(page: int, total_pages: int) -> Dict[str, Any]:
    return {
        "current": page,
        "total_pages": total_pages,
        "pages": catalog_query.page_window(page, total_pages),
        "prev": page - 1,
        "next": page + 1,
        "prev_disabled": page <= 1,
        "next_disabled": page >= total_pages or total_pages == 0,
    }


def build_dashboard_context(store: CatalogStore, settings: Settings) -> Dict[str, Any]:
    """
    Projects the store into everything the products page renders.

    Notices are one-shot: reading the context consumes them.
    """
    view = store.view
    visible: List[Product] = store.visible_page()
    total_pages = store.total_pages
    return {
        "rows": [product_row(p, settings.thumbnail_placeholder_url) for p in visible],
        "empty": not visible,
        "loaded": store.loaded,
        "load_error": store.load_error,
        "notices": store.pop_notices(),
        "summary": page_summary(view.page, view.page_size, len(store.filtered)),
        "pagination": pagination(view.page, total_pages),
        "stats": catalog_query.catalog_stats(store.products),
        "view": view,
        "page_size_options": store.page_size_options,
        "categories": store.categories,
    }
