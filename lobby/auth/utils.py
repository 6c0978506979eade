# auth/utils.py
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

ALGORITHM = "HS256"
TRIGGER_TOKEN_TTL = timedelta(hours=1)


def create_access_token(secret: str, role: str = "service_role", ttl: timedelta = TRIGGER_TOKEN_TTL) -> str:
    """Mint a short-lived token for the cleanup trigger (see `lobby-cleanup --print-token`)"""
    issued = datetime.now(timezone.utc)
    return jwt.encode(
        {"role": role, "iat": issued, "exp": issued + ttl},
        secret,
        algorithm=ALGORITHM,
    )


def verify_token(token: str, secret: str) -> Optional[dict]:
    """Payload of a valid, unexpired token signed with `secret`, else None"""
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError:
        # ExpiredSignatureError is a subclass
        return None
