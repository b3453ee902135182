"""Bearer Check — pure shared-secret validation for the Authentication Gate.

Invariants:
    - Only "Bearer <token>" is accepted (scheme compared exactly)
    - Token is taken verbatim after the prefix: no trimming of surrounding spaces
    - Token comparison is constant-time (hmac.compare_digest)
    - Returns AuthenticationError on rejection, None on success; never raises

Design Decisions:
    - Pure function over middleware logic: gate behaviour testable without HTTP
"""

import hmac

from user_api.core.errors import AuthenticationError

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an Authorization header value, or None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    return token or None


def check_bearer_token(
    authorization: str | None, secret: str,
) -> AuthenticationError | None:
    """Validate an Authorization header value against the shared secret."""
    if not authorization:
        return AuthenticationError("missing bearer token")
    token = extract_bearer_token(authorization)
    if token is None:
        return AuthenticationError("malformed authorization header")
    if not hmac.compare_digest(token.encode(), secret.encode()):
        return AuthenticationError("invalid bearer token")
    return None
