"""Module: main."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from vetclinic.api.api import api_router
from vetclinic.core.config import Settings, get_settings
from vetclinic.core.exceptions import VetClinicError
from vetclinic.storage.base import Storage
from vetclinic.storage.factory import build_storage

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _format_validation_errors(errors) -> tuple[str, list[dict]]:
    details = []
    for err in errors:
        # Body fields are reported by name; path/query problems keep their prefix.
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        details.append({"path": loc, "message": err.get("msg", ""), "code": err.get("type", "")})

    parts = []
    for d in details:
        where = ".".join(str(p) for p in d["path"])
        parts.append(f'{d["message"]} at "{where}"' if where else d["message"])
    return "Validation error: " + "; ".join(parts), details


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message, details = _format_validation_errors(exc.errors())
        return JSONResponse(status_code=400, content={"message": message, "errors": details})

    @app.exception_handler(ValidationError)
    async def model_validation_error_handler(request: Request, exc: ValidationError):
        # Raised inside a handler, e.g. when a merged record fails revalidation.
        message, details = _format_validation_errors(exc.errors())
        return JSONResponse(status_code=400, content={"message": message, "errors": details})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(VetClinicError)
    async def domain_error_handler(request: Request, exc: VetClinicError):
        logger.warning("%s %s refused: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # Full detail goes to the log only; clients get a generic message.
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(storage: Storage | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Vet Clinic API", version="0.1.0")
    app.state.storage = storage if storage is not None else build_storage(settings)

    app.include_router(api_router, prefix="/api")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    return app


app = create_app()
