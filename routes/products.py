# routes/products.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

import schemas
from catalog_service import CatalogRequestError, CatalogService, get_catalog_service
from config import Settings, get_settings
from services import catalog_query, product_workflow, sync_service
from state import CatalogStore, get_store

router = APIRouter(
    prefix="/api/products",
    tags=["Products"],
)
categories_router = APIRouter(
    prefix="/api/categories",
    tags=["Categories"],
)


@router.get("/", response_model=schemas.ProductPage)
def get_products(
    store: CatalogStore = Depends(get_store),
    search: str = Query(""),
    sort_by: schemas.SortField = Query("id"),
    sort_order: schemas.SortDirection = Query("asc"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=200),
):
    """
    Get a filtered, sorted page of the cached catalog. Does not touch the
    dashboard's own view state.
    """
    filtered, items, page = catalog_query.run_pipeline(
        store.products, search, sort_by, sort_order, page, page_size
    )
    return {
        "total_count": len(filtered),
        "page": page,
        "page_size": page_size,
        "total_pages": catalog_query.page_count(len(filtered), page_size),
        "products": items,
    }


@router.get("/stats", response_model=schemas.CatalogStats)
def get_product_stats(store: CatalogStore = Depends(get_store)):
    return catalog_query.catalog_stats(store.products)


@router.post("/refresh")
def refresh_products(
    store: CatalogStore = Depends(get_store),
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        applied = sync_service.refresh_catalog(store, service)
    except CatalogRequestError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"applied": applied, "total_count": len(store.products)}


@router.get("/{product_id}", response_model=schemas.Product)
def get_product_details(product_id: int, store: CatalogStore = Depends(get_store)):
    product = store.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/", response_model=schemas.Product, status_code=201)
def create_product(
    payload: schemas.ProductInput,
    store: CatalogStore = Depends(get_store),
    service: CatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
):
    try:
        return product_workflow.create_product(store, service, payload.to_form(), settings.placeholder_image_url)
    except product_workflow.ProductValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogRequestError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.put("/{product_id}", response_model=schemas.Product)
def update_product(
    product_id: int,
    payload: schemas.ProductInput,
    store: CatalogStore = Depends(get_store),
    service: CatalogService = Depends(get_catalog_service),
):
    try:
        return product_workflow.update_product(store, service, product_id, payload.to_form())
    except product_workflow.ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except product_workflow.ProductValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CatalogRequestError as e:
        raise HTTPException(status_code=502, detail=str(e))


@categories_router.get("/", response_model=List[schemas.Category])
def get_categories(store: CatalogStore = Depends(get_store)):
    return store.categories
