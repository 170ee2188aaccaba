# configure logging early so mail transport libraries log through structlog settings
from .logging_config import get_logger

logger = get_logger(__name__)

from . import composition
from .config import Settings

# Create app using wiring.create_app() to avoid duplicating router/middleware registration
from .wiring import create_app

app = create_app()


@app.on_event("startup")
async def on_startup():
    # delegate runtime wiring to composition.wire_app; keep the teardown for shutdown
    result = await composition.wire_app(app)
    app.state.teardown = result.teardown


@app.on_event("shutdown")
async def on_shutdown():
    teardown = getattr(app.state, "teardown", None)
    if teardown is not None:
        await teardown()
    logger.info("shutdown complete")


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    logger.info("starting token mail service", host=settings.server_host, port=settings.server_port)
    uvicorn.run("tokenmail.main:app", host=settings.server_host, port=settings.server_port)
