from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import Settings
from .exceptions import EmailApiError
from .infrastructure.email.mock import MockEmailSender
from .infrastructure.store.memory import InMemoryTokenStore
from .logging_config import get_logger

logger = get_logger(__name__)


def error_body(error: str, details: str | None = None) -> dict:
    body: dict = {"success": False, "error": error}
    if details:
        body["details"] = details
    return body


def _create_minimal_app(settings: Settings) -> FastAPI:
    """Create the FastAPI app object without running side-effectful wiring.
    Tests can import and call this to create fresh apps.
    """
    app = FastAPI(title="DriveCore Email API")

    # Safe defaults: an in-memory store and a recording sender. The
    # composition root swaps in Redis/SendGrid at startup when configured.
    app.state.settings = settings
    app.state.token_store = InMemoryTokenStore()
    app.state.email_sender = MockEmailSender()
    return app


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a fully routed FastAPI application.

    Startup wiring (external clients, background sweep) is performed by the
    composition root at runtime, not here.
    """
    if settings is None:
        settings = Settings()

    app = _create_minimal_app(settings)

    from .metrics import metrics_response
    from .middleware.metrics_middleware import MetricsMiddleware
    from .routers import health, notifications, verification

    app.include_router(health.router)
    app.include_router(verification.router)
    app.include_router(notifications.router)

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/metrics")
    async def _metrics():
        data, content_type = metrics_response()
        return Response(content=data, media_type=content_type)

    @app.exception_handler(EmailApiError)
    async def _email_api_error_handler(request: Request, exc: EmailApiError):
        if exc.status_code >= 500:
            logger.error(
                "request_failed", path=request.url.path, error=exc.message, details=exc.details
            )
        else:
            logger.info("request_rejected", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        details = f"{location}: {first.get('msg')}" if location else first.get("msg")
        return JSONResponse(status_code=400, content=error_body("Invalid request", details))

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("request_crashed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content=error_body("Internal server error"))

    return app


__all__ = ["create_app", "error_body"]
