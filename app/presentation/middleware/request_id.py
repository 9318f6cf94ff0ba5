import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.utils.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def resolve_request_id(value: str | None) -> str:
    """Canonical form of a client-supplied UUID, or a fresh UUID4."""
    if value:
        try:
            return str(uuid.UUID(value))
        except ValueError:
            logger.debug("Replacing malformed request id")
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id (x-request-id).

    A valid UUID sent by the client is kept, anything else is replaced by a
    new UUID4. The id is stored on ``request.state.request_id``, echoed in
    the response header and attached to every log record written while the
    request is handled.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = request_id
        return response
