"""FastAPI application entrypoint for the Gnawa Tours site."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import crud, schemas
from .api import router as api_router
from .api.deps import get_db, get_optional_db
from .cache import page_cache
from .config import configure_logging, settings
from .database import init_db
from .exceptions import ServiceError
from .geo import country_from_headers, pricing_region
from .rendering import render_landing_page, render_sections, resolve_section

logger = logging.getLogger(__name__)

REDUCED_MOTION_HEADER = "sec-ch-prefers-reduced-motion"


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [
        str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header")
    ]
    message = first.get("msg", "Invalid value")
    return f"{'.'.join(location)}: {message}" if location else message


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _format_validation_error(exc)
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        logger.warning(
            "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message
        )
        return _error(exc.status_code, exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def backend_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        message = str(getattr(exc, "orig", None) or exc)
        logger.error("Backend failure on %s %s: %s", request.method, request.url.path, message)
        return _error(500, message)


def _landing_context(
    db: Optional[Session], region: str, country: Optional[str], reduced_motion: bool
) -> dict[str, Any]:
    content = crud.get_public_content(db)
    sections = [resolve_section(section) for section in content["sections"]]
    return {
        "hero": content["hero"],
        "programs": [
            schemas.PublicProgram.model_validate(program) for program in content["programs"]
        ],
        "sections": sections,
        "rendered_sections": render_sections(content["sections"], reduced_motion=reduced_motion),
        "site": content["site"],
        "region": region,
        "currency": "DZD" if region == "DZ" else "EUR",
        "origin_country": country or region,
        "current_year": datetime.utcnow().year,
    }


def create_application() -> FastAPI:
    configure_logging()
    init_db()

    app = FastAPI(title="Gnawa Tours API", version="1.0.0")
    register_exception_handlers(app)
    app.include_router(api_router)
    app.mount(
        settings.media_url_prefix,
        StaticFiles(directory=settings.media_root, check_dir=False),
        name="media",
    )

    @app.get("/", response_class=HTMLResponse, tags=["public"], summary="Landing page")
    def landing_page(
        request: Request, db: Optional[Session] = Depends(get_optional_db)
    ) -> HTMLResponse:
        country = country_from_headers(request.headers)
        region = pricing_region(country)
        reduced_motion = request.headers.get(REDUCED_MOTION_HEADER, "").strip('" ').lower() == "reduce"
        variant = f"{region}:{country or ''}:{'reduce' if reduced_motion else 'motion'}"

        html = page_cache.get("/", variant)
        if html is None:
            version = page_cache.version("/")
            html = render_landing_page(_landing_context(db, region, country, reduced_motion))
            page_cache.set("/", html, variant, version=version)
        return HTMLResponse(html)

    @app.get("/health", tags=["health"], summary="Service healthcheck")
    def healthcheck() -> dict[str, Any]:
        return {
            "status": "ok",
            "message": "Gnawa Tours API is running",
            "backend_configured": settings.backend_configured,
        }

    return app


app = create_application()

__all__ = ["app", "create_application", "get_db", "get_optional_db"]
