# schemas.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SortField = Literal["id", "title", "price"]
SortDirection = Literal["asc", "desc"]
SORT_FIELDS = ("id", "title", "price")

# =========================
# Base model configurations
# =========================

class APIBase(BaseModel):
    """Base for models mapped to external API payloads."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

# ======================================================
# Catalog API payloads (read side)
# ======================================================

class Category(APIBase):
    id: int
    name: str = ""

class Product(APIBase):
    id: int
    title: str = ""
    price: float = 0.0
    description: Optional[str] = None
    category: Optional[Category] = None
    images: List[str] = Field(default_factory=list)

    @field_validator("title", "price", "images", mode="before")
    @classmethod
    def null_as_default(cls, value, info):
        # The catalog API sends null for blank fields on some records.
        if value is None:
            return {"title": "", "price": 0.0, "images": []}[info.field_name]
        return value

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None

# ======================================================
# Catalog API payloads (write side)
# ======================================================

class ProductWrite(APIBase):
    """Body for POST /products; the category is referenced by id on write."""
    title: str
    price: float
    description: str = ""
    category_id: int = Field(..., alias="categoryId")
    images: List[str] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)

class ProductUpdate(ProductWrite):
    """Body for PUT /products/{id}: a full replace, so every field is sent."""
    id: int

# --- Form input shared by the HTML forms and the JSON API ---

class ProductForm(BaseModel):
    title: str = ""
    price: str = ""
    category_id: str = ""
    description: str = ""
    images: str = ""

class ProductInput(APIBase):
    """JSON body accepted by the dashboard's own API; validated like the forms."""
    title: str = ""
    price: Optional[float] = None
    category_id: Optional[int] = Field(None, alias="categoryId")
    description: str = ""
    images: List[str] = Field(default_factory=list)

    def to_form(self) -> ProductForm:
        return ProductForm(
            title=self.title,
            price="" if self.price is None else str(self.price),
            category_id="" if self.category_id is None else str(self.category_id),
            description=self.description,
            images="\n".join(self.images),
        )

# ======================================================
# Dashboard view state and responses
# ======================================================

class ViewState(BaseModel):
    page: int = Field(1, ge=1)
    page_size: int = Field(10, gt=0)
    sort_field: SortField = "id"
    sort_direction: SortDirection = "asc"
    search_term: str = ""

class ProductPage(BaseModel):
    total_count: int
    page: int
    page_size: int
    total_pages: int
    products: List[Product]

class CatalogStats(BaseModel):
    total_products: int
    average_price: str
    total_categories: int
