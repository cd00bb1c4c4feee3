from . import composition
from .config import Settings
from .logging_config import configure_logging, get_logger

settings = Settings()
configure_logging(settings.log_level)

logger = get_logger(__name__)

# Create app using wiring.create_app() to avoid duplicating router/middleware registration
from .wiring import create_app  # noqa: E402

app = create_app(settings)


@app.on_event("startup")
async def on_startup():
    # delegate runtime wiring to composition.wire_app; keep its teardown for shutdown
    result = await composition.wire_app(app)
    app.state.teardown = result.teardown
    logger.info(
        "email api started",
        host=settings.server_host,
        port=settings.server_port,
        frontend_url=settings.frontend_url,
    )


@app.on_event("shutdown")
async def on_shutdown():
    teardown = getattr(app.state, "teardown", None)
    if teardown is not None:
        await teardown()
    logger.info("shutdown complete")


def run():
    import uvicorn

    uvicorn.run("email_api.main:app", host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
