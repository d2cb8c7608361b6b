# main.py
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

ROOT_DIR = Path(__file__).resolve().parent
sys.path.append(str(ROOT_DIR))

from catalog_service import get_catalog_service
from config import get_settings
from routes import dashboard, editor, products
from services import sync_service
from state import get_store

logger = logging.getLogger("catalog_dashboard")


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.load_on_startup:
        logger.info("Loading catalog from %s", settings.catalog_api_base_url)
        await run_in_threadpool(sync_service.load_dashboard, get_store(), get_catalog_service())
    yield


app = FastAPI(title="Product Catalog Dashboard", lifespan=lifespan)


@app.get("/", response_class=RedirectResponse, include_in_schema=False)
async def read_root():
    return RedirectResponse(url="/products")


# Routers. The dashboard router goes first so /products/export and the
# action endpoints win over /products/{product_id}.
app.include_router(dashboard.router)
app.include_router(editor.router)
app.include_router(products.router)
app.include_router(products.categories_router)
