# personcore/services/api/app.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from personcore.common.logging import get_logger
from personcore.common.settings import get_settings
from personcore.domain.errors import PersonNotFoundError, StorageError, ValidationError
from personcore.services.api.routers import family_relationships, health, people, references

cfg = get_settings()
dev = cfg.app_env.lower() == "development"
log = get_logger(__name__)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(request: Request, ex: ValidationError):
        return JSONResponse(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            content={"detail": ex.message, "errors": ex.errors},
        )

    @app.exception_handler(PersonNotFoundError)
    async def _not_found(request: Request, ex: PersonNotFoundError):
        return JSONResponse(status_code=HTTPStatus.NOT_FOUND, content={"detail": "Person not found"})

    @app.exception_handler(StorageError)
    async def _storage(request: Request, ex: StorageError):
        # cause is logged by the writer; callers get an opaque error
        log.error("%s %s failed: %s", request.method, request.url.path, ex)
        return JSONResponse(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content={"detail": "Storage error"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Personcore API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    allow_origins = ["*"] if dev else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    _install_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(people.router)
    app.include_router(family_relationships.router)
    app.include_router(references.router)
    return app


app = create_app()
