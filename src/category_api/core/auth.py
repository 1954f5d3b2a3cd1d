"""
Shared-secret gate in front of the router.

A request reaches the application only when its `X-API-KEY` header equals the
configured key (settings.API_KEY, "AUTH" by default). Anything else is answered
here with:

    401 {"code": 401, "status": "UNAUTHORIZED", "data": null}

There are no sessions, tokens or expiry; the key is a static value compared by
exact match. The gate applies to every method and path.

Register it with FastAPI as a middleware wrapping the app:

    app.add_middleware(APIKeyMiddleware, api_key=settings.API_KEY)
"""

import logging
import secrets

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from ..schemas.web import WebResponse

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"


def unauthorized_response() -> JSONResponse:
    body = WebResponse.of(status.HTTP_401_UNAUTHORIZED)
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=body.model_dump())


class APIKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, api_key: str):
        super().__init__(app)
        self.api_key = api_key

    def is_authorized(self, request: Request) -> bool:
        provided = request.headers.get(API_KEY_HEADER)
        if provided is None:
            return False
        return secrets.compare_digest(provided.encode(), self.api_key.encode())

    async def dispatch(self, request: Request, call_next):
        if self.is_authorized(request):
            return await call_next(request)

        # never log the provided key itself
        logger.info(
            "auth.rejected",
            extra={
                "method": request.method,
                "path": request.url.path,
                "header_present": API_KEY_HEADER in request.headers,
            },
        )
        return unauthorized_response()
