# product_form/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from product_form.api.routes import products as product_routes
from product_form.database import db
from product_form.middleware.cors_config import configure_cors


logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: report where products are stored. The store file is created on
    the first createProduct call, so a missing file is only informational.
    """
    products_path = db._file_path("products")
    if products_path.exists():
        logger.info("Found products file: %s", products_path)
    else:
        logger.info("Products file %s will be created on first product", products_path)
    yield
    logger.info("Shutting down Product Admin API")


app = FastAPI(title="Product Admin API", version="0.1.0", lifespan=lifespan)
configure_cors(app)

app.include_router(product_routes.router)


@app.get("/", tags=["root"])
async def root():
    return {"status": "ok", "service": "Product Admin API"}
