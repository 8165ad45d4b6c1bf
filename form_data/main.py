from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from form_data.routers import encode, info
from form_data.logging import RequestContextMiddleware, get_logger, init_logging
from form_data.services.formatters import FORMATTERS
from form_data.settings import settings
from form_data.version import __version__

init_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the encoding defaults the service starts with."""

    get_logger().info(
        "Form data service started",
        default_formatter=settings.default_formatter,
        url_encoding=settings.url_encoding,
    )
    yield


app = FastAPI(title="Form Data Builder", version=__version__, lifespan=lifespan)
app.add_middleware(RequestContextMiddleware)

app.include_router(info.router)
app.include_router(encode.router)


@app.get("/health", tags=["info"])
async def health_check():
    return {"status": "ok", "formatters": sorted(FORMATTERS)}
