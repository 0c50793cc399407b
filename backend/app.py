from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from backend.application import build_tab_store, configure_record_services, configure_tab_store
from backend.core.errors import NotFound, ValidationError
from backend.core.logging_config import configure_logging
from backend.core.settings import Settings, load_settings
from backend.routes import finance, hrm, layout, pms, system

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="ERP Admin API", version="0.1.0")

    configure_record_services(settings)
    configure_tab_store(build_tab_store(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFound)
    async def handle_not_found(request: Request, exc: NotFound) -> PlainTextResponse:
        logger.info("record_not_found", entity=exc.entity, record_id=exc.record_id, path=request.url.path)
        return PlainTextResponse(str(exc), status_code=404)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("request_rejected", path=request.url.path, detail=str(exc))
        return JSONResponse({"detail": str(exc), "errors": exc.errors}, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
            for error in exc.errors()
        ]
        logger.info("request_rejected", path=request.url.path, detail="malformed request")
        return JSONResponse({"detail": "malformed request", "errors": errors}, status_code=400)

    for router in (
        finance.accounts_router,
        finance.ledgers_router,
        hrm.employees_router,
        pms.projects_router,
        pms.tasks_router,
        system.tenants_router,
        system.users_router,
        system.code_groups_router,
        system.codes_router,
        layout.router,
    ):
        app.include_router(router, prefix="/api")

    @app.get("/api/health", include_in_schema=False)
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "ERP Admin API",
                "docs": "/docs",
                "health": "/api/health",
            }
        )

    logger.info("app_configured", storage=str(settings.layout_storage_root), policy=settings.tab_activation_policy)
    return app


app = create_app()
