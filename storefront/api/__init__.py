# storefront/api/__init__.py
from fastapi import FastAPI
from storefront.api.routers import carts, checkout
from storefront.api.routers.health import router as health_router


def create_app(lifespan=None) -> FastAPI:
    app = FastAPI(title="Storefront Cart Service", version="1.0.0", lifespan=lifespan)
    app.include_router(health_router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    return app
