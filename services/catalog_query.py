# services/catalog_query.py

import math
from typing import Any, Dict, List, Sequence, Tuple

from schemas import SORT_FIELDS, Product


def normalize_term(term: str) -> str:
    return (term or "").strip().lower()


def filter_products(products: Sequence[Product], search_term: str) -> List[Product]:
    """
    Keeps products whose title contains the search term, case-insensitively.
    An empty term keeps everything.
    """
    term = normalize_term(search_term)
    if not term:
        return list(products)
    return [p for p in products if p.title and term in p.title.lower()]


def _sort_key(field: str):
    if field == "title":
        return lambda p: (p.title or "").lower()
    if field == "price":
        return lambda p: p.price or 0
    return lambda p: p.id or 0


def sort_products(products: Sequence[Product], field: str, direction: str) -> List[Product]:
    """
    Stable sort by id, title (case-insensitive) or price.

    Equal keys keep their catalog order in both directions.
    """
    if field not in SORT_FIELDS:
        raise ValueError(f"Cannot sort by '{field}'.")
    return sorted(products, key=_sort_key(field), reverse=(direction == "desc"))


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(total / page_size)


def clamp_page(page: int, total: int, page_size: int) -> int:
    return min(max(1, page), max(1, page_count(total, page_size)))


def paginate(products: Sequence[Product], page: int, page_size: int) -> List[Product]:
    start = (page - 1) * page_size
    return list(products[start:start + page_size])


def run_pipeline(
    products: Sequence[Product],
    search_term: str = "",
    sort_field: str = "id",
    sort_direction: str = "asc",
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[Product], List[Product], int]:
    """
    filter -> sort -> paginate.

    Returns (filtered list, visible page, clamped page number).
    """
    filtered = sort_products(filter_products(products, search_term), sort_field, sort_direction)
    page = clamp_page(page, len(filtered), page_size)
    return filtered, paginate(filtered, page, page_size), page


def page_window(current: int, total_pages: int, max_visible: int = 5) -> List[int]:
    """Page numbers to show around the current page, at most ``max_visible`` of them."""
    if total_pages <= 0:
        return []
    start = max(1, current - max_visible // 2)
    end = min(total_pages, start + max_visible - 1)
    if end - start + 1 < max_visible:
        start = max(1, end - max_visible + 1)
    return list(range(start, end + 1))


def catalog_stats(products: Sequence[Product]) -> Dict[str, Any]:
    total = len(products)
    average = f"{sum(p.price or 0 for p in products) / total:.2f}" if total else "0"
    categories = {p.category.id if p.category else 0 for p in products}
    return {"total_products": total, "average_price": average, "total_categories": len(categories)}
