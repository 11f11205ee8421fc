"""Mini README: FastAPI service for the daily cost tracker.

Structure:
    * ProductPayload - request body for new products.
    * create_application - application factory wiring routes, handlers and
      the storage gateway.

The factory accepts an already constructed gateway so tests can inject one;
uvicorn calls it without arguments and the gateway is built from settings.
Route handlers are plain functions, so blocking database calls run on the
worker threadpool. Errors leave the service as ``{"error": message}``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from .. import __version__
from ..configuration import DailyCostSettings, get_settings
from ..errors import DailyCostError, MissingFieldsError
from ..logging_utils import configure_root_logger, get_logger
from ..storage import ProductGateway, create_gateway

LOGGER = get_logger(__name__)

STATIC_DIRECTORY = Path(__file__).parent / "static"
DELETED_MESSAGE = "product deleted successfully"


class ProductPayload(BaseModel):
    """Body of ``POST /api/products``; presence is checked by the handler."""

    name: Optional[str] = None
    price: Optional[float] = Field(None, allow_inf_nan=False)
    purchase_date: Optional[date] = None

    def missing_fields(self) -> tuple[str, ...]:
        """Name the required fields that are absent or blank."""

        missing = []
        if self.name is None or not self.name.strip():
            missing.append("name")
        if self.price is None:
            missing.append("price")
        if self.purchase_date is None:
            missing.append("purchase_date")
        return tuple(missing)


def _describe_validation_error(error: RequestValidationError) -> str:
    """Summarise the first validation problem as ``location: message``."""

    problems = error.errors()
    if not problems:
        return "invalid request"
    first = problems[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def create_application(
    gateway: Optional[ProductGateway] = None,
    settings: Optional[DailyCostSettings] = None,
) -> FastAPI:
    """Create the FastAPI application around a product gateway."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    store = gateway or create_gateway(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        LOGGER.info(
            "Starting daily cost tracker (%s) on %s storage",
            settings.environment,
            store.describe_backend(),
        )
        store.init_schema()
        yield
        LOGGER.info("Shutting down daily cost tracker")
        store.dispose()

    app = FastAPI(title="Daily Cost Tracker", version=__version__, lifespan=lifespan)
    app.state.gateway = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.mount("/static", StaticFiles(directory=str(STATIC_DIRECTORY)), name="static")

    @app.exception_handler(DailyCostError)
    async def tracker_error_handler(request: Request, exc: DailyCostError) -> JSONResponse:
        if exc.status_code >= 500:
            LOGGER.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        elif isinstance(exc, MissingFieldsError):
            LOGGER.warning(
                "%s %s rejected: missing %s",
                request.method,
                request.url.path,
                ", ".join(exc.missing) or "body",
            )
        else:
            LOGGER.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _describe_validation_error(exc)
        LOGGER.warning("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/", include_in_schema=False)
    def index() -> FileResponse:
        """Serve the single-page front-end."""

        return FileResponse(STATIC_DIRECTORY / "index.html")

    @app.get("/api/products")
    def list_products() -> List[Dict[str, Any]]:
        """Return every tracked product, newest first."""

        return [record.as_dict() for record in store.list_products()]

    @app.post("/api/products")
    def add_product(payload: Optional[ProductPayload] = None) -> Dict[str, Any]:
        """Record a purchase and return it with its derived metrics."""

        payload = payload or ProductPayload()
        missing = payload.missing_fields()
        if missing:
            raise MissingFieldsError(missing)
        record = store.insert_product(
            payload.name.strip(), payload.price, payload.purchase_date
        )
        return record.as_dict()

    @app.delete("/api/products/{product_id}")
    def delete_product(product_id: int) -> Dict[str, str]:
        """Remove a product; unknown ids are acknowledged the same way."""

        store.delete_product(product_id)
        return {"message": DELETED_MESSAGE}

    @app.get("/api/statistics")
    def statistics() -> Dict[str, Any]:
        """Return totals and the average daily cost across all products."""

        return store.get_statistics().as_dict()

    @app.get("/api/health")
    def health() -> Dict[str, str]:
        return {
            "status": "healthy",
            "backend": store.describe_backend(),
            "environment": settings.environment,
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app
