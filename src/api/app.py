"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.adapter.services.schema import init_database
from src.api.error import ClientError, client_error_handler, validation_error_handler
from src.api.middleware import RequestLoggingMiddleware
from src.api.routes import accounts, catalog, purchases, users

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        import sentry_sdk

        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)
        logger.info(f"Sentry enabled ({config.SENTRY_ENVIRONMENT})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.depends import engine

        await init_database(engine)
        yield
        await engine.dispose()

    app = FastAPI(
        title="Streaming Slot Allocation Service",
        description="Catalog, shared account pool, balances and slot purchases",
        version="1.0.0",
        lifespan=lifespan,
    )

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    if config.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(catalog.router)
    app.include_router(accounts.router)
    app.include_router(users.router)
    app.include_router(purchases.router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
