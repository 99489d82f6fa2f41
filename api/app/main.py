import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from api.app.config import settings
from common.cache.results import close_result_cache
from api.app.routers.shopify import router as shopify_router
from api.app.routers.mailboxes import router as mailboxes_router
from api.app.routers.customers import router as customers_router

logging.basicConfig(level=settings.log_level)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_result_cache()

app = FastAPI(lifespan=lifespan, title="ShopDesk Order Bridge API", version="0.1.0")

app.include_router(shopify_router)
app.include_router(mailboxes_router)
app.include_router(customers_router)

@app.get("/health")
def health():
    return {
        "status": "OK",
        "version": app.version,
        "env": settings.app_env,
        "services": {
            "db": "unknown",
            "cache": settings.cache_backend,
            "shopify": "configured" if settings.shopify_shop_domain else "unset",
        },
    }
