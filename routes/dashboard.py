# routes/dashboard.py

from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, StreamingResponse
from fastapi.templating import Jinja2Templates

from catalog_service import CatalogService, get_catalog_service
from config import Settings, get_settings
from services import dashboard_view, export_service, sync_service
from state import CatalogStore, get_store

router = APIRouter(
    prefix="/products",
    tags=["Dashboard"],
    include_in_schema=False,
)
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def _back_to_dashboard() -> RedirectResponse:
    return RedirectResponse(url="/products", status_code=303)


@router.get("", response_class=HTMLResponse)
def get_products_page(
    request: Request,
    store: CatalogStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    context = dashboard_view.build_dashboard_context(store, settings)
    context["title"] = "Products"
    return templates.TemplateResponse(request, "products.html", context)


@router.post("/search")
def search_products(term: str = Form(""), store: CatalogStore = Depends(get_store)):
    store.set_search(term)
    return _back_to_dashboard()


@router.post("/sort/{field}")
def sort_products(field: str, store: CatalogStore = Depends(get_store)):
    try:
        store.toggle_sort(field)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _back_to_dashboard()


@router.post("/page/{page}")
def change_page(page: int, store: CatalogStore = Depends(get_store)):
    # Out-of-range pages are ignored, the dashboard simply re-renders.
    store.change_page(page)
    return _back_to_dashboard()


@router.post("/page-size")
def change_page_size(page_size: int = Form(...), store: CatalogStore = Depends(get_store)):
    try:
        store.set_page_size(page_size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _back_to_dashboard()


@router.post("/refresh")
def refresh_products(
    store: CatalogStore = Depends(get_store),
    service: CatalogService = Depends(get_catalog_service),
):
    sync_service.load_dashboard(store, service)
    return _back_to_dashboard()


@router.get("/export")
def export_products(store: CatalogStore = Depends(get_store)):
    """
    Downloads the visible page as CSV. An empty page produces no file,
    only a notice on the dashboard.
    """
    result = export_service.export_visible_page(store.visible_page())
    if result is None:
        store.push_notice("No data to export!")
        return _back_to_dashboard()

    filename, content = result
    return StreamingResponse(
        iter([content]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
