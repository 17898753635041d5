"""Static bearer token authentication for the /api routes."""
import logging
import secrets

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security.utils import get_authorization_scheme_param
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from schemas.errors import UnauthorizedResponse

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/api"


def is_protected_path(path: str) -> bool:
    """Whether a request path falls under the token-gated /api tree."""
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header value, if any."""
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def token_matches(token: str | None, expected: str) -> bool:
    """Compare a presented token with the configured secret."""
    if token is None:
        return False
    return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """
    Reject /api requests that do not carry the configured bearer token.

    Runs before routing, so unauthorized requests never reach validation or
    storage. Responds with 401 `{"error": "Unauthorized request"}`.
    """

    def __init__(self, app: ASGIApp, api_token: str) -> None:
        super().__init__(app)
        self.api_token = api_token

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Check the Authorization header for protected paths."""
        if not is_protected_path(request.url.path):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        if not token_matches(token, self.api_token):
            logger.warning("Unauthorized request to path: %s", request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=UnauthorizedResponse().model_dump(),
                headers={"WWW-Authenticate": "Bearer"},
            )
        return await call_next(request)
