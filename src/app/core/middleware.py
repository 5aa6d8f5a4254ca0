import logging
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.config import get_settings
from app.core.logging import RequestContext, request_ctx

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a ``RequestContext`` while the request runs and echo its id header."""

    def __init__(self, app: ASGIApp, header_name: str | None = None) -> None:
        super().__init__(app)
        self.header_name = header_name or get_settings().request_id_header

    def build_context(self, request: Request) -> RequestContext:
        return RequestContext(
            request_id=request.headers.get(self.header_name) or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        context = self.build_context(request)
        request.state.request_id = context.request_id
        token = request_ctx.set(context)
        try:
            response = await call_next(request)
            logger.debug("Request completed", extra={"status_code": response.status_code})
        finally:
            request_ctx.reset(token)

        response.headers[self.header_name] = context.request_id
        return response
