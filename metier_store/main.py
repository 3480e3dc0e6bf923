from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from metier_store.config import settings
from metier_store.database import create_db_and_tables, engine
from metier_store.routes import (
    cart,
    categories,
    health,
    orders,
    products,
)
from metier_store.services.catalog_service import seed_catalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables and demo catalog ONLY in local
    if settings.ENV == "local" or settings.is_sqlite:
        create_db_and_tables()
        if settings.SEED_CATALOG:
            with Session(engine) as session:
                seed_catalog(session)
    yield

app = FastAPI(title="Métier Parts Store API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(cart.router, prefix="/api/cart", tags=["Cart"])
app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get("/")
def root():
    return {
        "catalog_endpoints": [
            "/api/products", "/api/products/{id}",
            "/api/products/{id}/related", "/api/categories"
        ],
        "cart": [
            "/api/cart", "/api/cart/count", "/api/cart/items",
            "/api/cart/items/{item_id}"
        ],
        "orders": [
            "/api/orders", "/api/orders/{order_number}",
            "/api/orders/{order_number}/confirm-payment"
        ]
    }
