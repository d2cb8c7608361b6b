# state.py
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from config import get_settings
from schemas import SORT_FIELDS, Category, Product, ViewState
from services import catalog_query

logger = logging.getLogger("state")

CLOSED, VIEWING, EDITING = "closed", "viewing", "editing"


@dataclass
class EditorSession:
    """Per-workflow form state: closed, viewing a record, or editing a form."""
    mode: str = CLOSED
    product_id: Optional[int] = None
    form: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    def close(self):
        self.mode, self.product_id, self.form, self.error = CLOSED, None, {}, None


class CatalogStore:
    """
    The dashboard's single source of in-memory state.

    Holds the full product list as last fetched, the derived filtered list
    and the view parameters. Every state-affecting call recomputes the
    filtered list from scratch and clamps the page.
    """
    def __init__(self, page_size_options: Sequence[int] = (5, 10, 25, 50), default_page_size: int = 10):
        if default_page_size not in page_size_options:
            raise ValueError(f"Default page size {default_page_size} is not one of {list(page_size_options)}")
        self._lock = threading.Lock()
        self.page_size_options: List[int] = list(page_size_options)
        self.view = ViewState(page_size=default_page_size)
        self.products: List[Product] = []
        self.filtered: List[Product] = []
        self.categories: List[Category] = []
        self.load_error: Optional[str] = None
        self.loaded = False
        self.notices: List[str] = []
        self.editor = EditorSession()
        self.creator = EditorSession()
        self._load_seq = 0
        self._applied_seq = 0

    # ---------- loading ----------

    def begin_load(self) -> int:
        with self._lock:
            self._load_seq += 1
            return self._load_seq

    def apply_products(self, products: Sequence[Product], ticket: int) -> bool:
        """Replaces the full list wholesale, unless a newer load already landed."""
        with self._lock:
            if ticket <= self._applied_seq:
                logger.info("Discarding stale product load #%s (already applied #%s)", ticket, self._applied_seq)
                return False
            self._applied_seq = ticket
            self.products = list(products)
            self.load_error = None
            self.loaded = True
            self._recompute()
            return True

    def record_load_failure(self, ticket: int, message: str) -> None:
        with self._lock:
            if ticket > self._applied_seq:
                self.load_error = message

    def set_categories(self, categories: Sequence[Category]) -> None:
        with self._lock:
            self.categories = list(categories)

    # ---------- view-state actions ----------

    def _recompute(self) -> None:
        v = self.view
        self.filtered = catalog_query.sort_products(
            catalog_query.filter_products(self.products, v.search_term), v.sort_field, v.sort_direction
        )
        v.page = catalog_query.clamp_page(v.page, len(self.filtered), v.page_size)

    def set_search(self, term: str) -> None:
        with self._lock:
            self.view.search_term = (term or "").strip()
            self.view.page = 1
            self._recompute()

    def toggle_sort(self, field_name: str) -> None:
        if field_name not in SORT_FIELDS:
            raise ValueError(f"Cannot sort by '{field_name}'.")
        with self._lock:
            if self.view.sort_field == field_name:
                self.view.sort_direction = "desc" if self.view.sort_direction == "asc" else "asc"
            else:
                self.view.sort_field = field_name
                self.view.sort_direction = "asc"
            self._recompute()

    def change_page(self, page: int) -> bool:
        """Moves to ``page``; out-of-range requests leave the state untouched."""
        with self._lock:
            if page < 1 or page > self.total_pages:
                return False
            self.view.page = page
            return True

    def set_page_size(self, page_size: int) -> None:
        if page_size not in self.page_size_options:
            raise ValueError(f"Page size must be one of {self.page_size_options}.")
        with self._lock:
            self.view.page_size = page_size
            self.view.page = 1
            self._recompute()

    # ---------- reads ----------

    @property
    def total_pages(self) -> int:
        return catalog_query.page_count(len(self.filtered), self.view.page_size)

    def visible_page(self) -> List[Product]:
        return catalog_query.paginate(self.filtered, self.view.page, self.view.page_size)

    def get_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def push_notice(self, message: str) -> None:
        with self._lock:
            self.notices.append(message)

    def pop_notices(self) -> List[str]:
        with self._lock:
            notices, self.notices = self.notices, []
            return notices


_store: Optional[CatalogStore] = None
_store_lock = threading.Lock()


def get_store() -> CatalogStore:
    """
    FastAPI dependency returning the process-wide catalog store.
    """
    global _store
    with _store_lock:
        if _store is None:
            settings = get_settings()
            _store = CatalogStore(settings.page_size_options, settings.default_page_size)
        return _store
