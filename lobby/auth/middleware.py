# auth/middleware.py
from typing import Optional

from fastapi import Header, HTTPException, Request

from .utils import verify_token


def _bearer(authorization: str) -> str:
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return authorization.strip()


async def require_trigger_token(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Optional[dict]:
    """
    Guard for scheduler-facing endpoints.

    When the app was built with a JWT secret, a valid HS256 bearer token is
    required and its payload returned. Without a secret the endpoint is open
    and None is returned.
    """
    secret = request.app.state.settings.jwt_secret
    if not secret:
        return None

    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    payload = verify_token(_bearer(authorization), secret)
    if payload is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return payload
