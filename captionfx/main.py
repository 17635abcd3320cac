"""FastAPI application entry point."""

import logging

from fastapi import FastAPI

from captionfx.config import LOG_LEVEL, ensure_directories
from captionfx.routes import animations, captions, health

app = FastAPI(title="Caption FX", version="0.1.0")

# Register routes.
app.include_router(health.router)
app.include_router(animations.router)
app.include_router(captions.router)


@app.on_event("startup")
def startup() -> None:
    """Apply the log level and ensure filesystem layout is ready at boot."""
    logging.getLogger("captionfx").setLevel(LOG_LEVEL)
    ensure_directories()
