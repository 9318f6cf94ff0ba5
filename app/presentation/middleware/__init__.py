"""
Middleware components for the API presentation layer.

Request/response processing shared by every endpoint.
"""

from app.presentation.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware

__all__ = ["REQUEST_ID_HEADER", "RequestIdMiddleware"]
