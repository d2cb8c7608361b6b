# routes/editor.py

from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from catalog_service import CatalogService, get_catalog_service
from config import Settings, get_settings
from schemas import ProductForm
from services import product_workflow
from state import CatalogStore, get_store

router = APIRouter(
    prefix="/products",
    tags=["Editor"],
    include_in_schema=False,
)
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def _product_form(
    title: str = Form(""),
    price: str = Form(""),
    category_id: str = Form(""),
    description: str = Form(""),
    images: str = Form(""),
) -> ProductForm:
    return ProductForm(title=title, price=price, category_id=category_id, description=description, images=images)


def _render_create(request: Request, store: CatalogStore):
    return templates.TemplateResponse(request, "product_create.html", {
        "title": "New Product",
        "session": store.creator,
        "categories": store.categories,
    })


def _render_product(request: Request, store: CatalogStore, product_id: int):
    product = store.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return templates.TemplateResponse(request, "product_detail.html", {
        "title": product.title,
        "product": product,
        "session": store.editor,
        "categories": store.categories,
    })


# --- Create workflow ---

@router.get("/new", response_class=HTMLResponse)
def open_create_form(request: Request, store: CatalogStore = Depends(get_store)):
    product_workflow.open_create(store)
    return _render_create(request, store)


@router.post("/new", response_class=HTMLResponse)
def submit_create_form(
    request: Request,
    form: ProductForm = Depends(_product_form),
    store: CatalogStore = Depends(get_store),
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
):
    if product_workflow.submit_create(store, service, form, settings.placeholder_image_url):
        return RedirectResponse(url="/products", status_code=303)
    return _render_create(request, store)


@router.post("/new/cancel")
def cancel_create_form(store: CatalogStore = Depends(get_store)):
    product_workflow.cancel_create(store)
    return RedirectResponse(url="/products", status_code=303)


# --- Edit workflow ---

@router.get("/{product_id}", response_class=HTMLResponse)
def view_product(request: Request, product_id: int, store: CatalogStore = Depends(get_store)):
    if product_workflow.open_product(store, product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _render_product(request, store, product_id)


@router.get("/{product_id}/edit", response_class=HTMLResponse)
def edit_product(request: Request, product_id: int, store: CatalogStore = Depends(get_store)):
    if product_workflow.begin_edit(store, product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _render_product(request, store, product_id)


@router.post("/{product_id}/edit", response_class=HTMLResponse)
def submit_edit_form(
    request: Request,
    product_id: int,
    form: ProductForm = Depends(_product_form),
    store: CatalogStore = Depends(get_store),
    service: CatalogService = Depends(get_catalog_service),
):
    if store.get_product(product_id) is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if product_workflow.submit_update(store, service, product_id, form):
        return RedirectResponse(url="/products", status_code=303)
    return _render_product(request, store, product_id)


@router.post("/{product_id}/cancel")
def cancel_edit_form(product_id: int, store: CatalogStore = Depends(get_store)):
    product_workflow.cancel_edit(store)
    return RedirectResponse(url="/products", status_code=303)
