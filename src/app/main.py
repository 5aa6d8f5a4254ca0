import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from importlib import metadata

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1 import health
from app.api.v1 import math as math_api
from app.core import errors
from app.core.config import get_settings
from app.core.logging import setup_logging
from app.core.middleware import RequestContextMiddleware

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

try:
    app_version = metadata.version("devsecops-demo-api")
except metadata.PackageNotFoundError:
    app_version = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("%s started", app.title)
    yield
    logger.info("%s stopped", app.title)


# Swagger UI lives at the root, and only outside production-like environments.
app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=app_version,
    root_path=settings.root_path,
    docs_url="/" if settings.docs_enabled else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(math_api.router)

app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
app.add_exception_handler(RequestValidationError, errors.validation_exception_handler)
app.add_exception_handler(Exception, errors.unhandled_exception_handler)
