# src/category_api/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Each request gets a request id: the incoming `X-Request-ID` header when it is a
valid UUID, otherwise a fresh uuid4. The id is stored in the contextvar read by
RequestIdFilter for the duration of the request and echoed back in the
`X-Request-ID` response header.

Register it last so it wraps every other middleware, including the API key gate:

    app.add_middleware(APIKeyMiddleware, api_key=settings.API_KEY)
    app.add_middleware(RequestIDMiddleware)
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def _resolve_request_id(incoming: str | None) -> str:
    # Only UUID-shaped values are accepted; anything else could inject into log lines
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = _resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
