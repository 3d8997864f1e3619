import logging
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.logging_setup import setup_logging
from config.settings import settings
from infrastructure.db.sqlite import init_db
from infrastructure.web.container import ServiceContainer, build_container
from infrastructure.web.controllers.health_controller import router as health_router
from infrastructure.web.controllers.transaction_controller import (
    cached_router as transaction_cached_router,
    router as transaction_router,
)
from infrastructure.web.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    container = container or build_container(settings)
    cfg = container.settings

    app = FastAPI(title="Transaction Management Service")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # group all transaction routes under the service version, e.g. /v1
    versioned = APIRouter(prefix=f"/{cfg.SERVICE_ROUTE_VERSION}" if cfg.SERVICE_ROUTE_VERSION else "")
    versioned.include_router(transaction_cached_router)
    versioned.include_router(transaction_router)
    app.include_router(versioned)
    app.include_router(health_router)

    @app.on_event("startup")
    def on_startup():
        init_db(cfg.DB_PATH, cfg.TABLE_NAME)
        container.register_pdf_template()
        logger.info("transaction_service_started", extra={"version": cfg.SERVICE_ROUTE_VERSION})

    @app.on_event("shutdown")
    def on_shutdown():
        container.close()

    return app


setup_logging(settings.LOG_LEVEL)
app = create_app()
