"""Authentication Gate — shared-secret bearer check in front of every route.

Invariants:
    - Runs before routing: every request is checked, known route or not
    - Rejection returns 401 with the standard error envelope and WWW-Authenticate
    - A rejected request never reaches a handler (no side effects)
    - Secret is injected at construction, never read from ambient state

Design Decisions:
    - Middleware over route dependency: body parsing and path validation cannot
      run ahead of the credential check
    - Decision delegated to core.check_bearer (pure), middleware only dispatches
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from user_api.core.check_bearer import check_bearer_token

logger = logging.getLogger(__name__)


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """Reject any request whose bearer token does not match the shared secret."""

    def __init__(self, app: ASGIApp, secret: str):
        super().__init__(app)
        self._secret = secret

    async def dispatch(self, request: Request, call_next):
        error = check_bearer_token(
            request.headers.get("Authorization"), self._secret,
        )
        if error is None:
            return await call_next(request)

        error.context.path = request.url.path
        logger.warning(
            f"Rejected request: {error.reason}",
            extra={
                "error_code": error.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=error.http_status,
            content=error.to_response(),
            headers={"WWW-Authenticate": "Bearer"},
        )
