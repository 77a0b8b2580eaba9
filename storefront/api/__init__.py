# storefront/api/__init__.py
from fastapi import FastAPI
from storefront.api.routers import auth, carts, checkout, health, products


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)

    return app
