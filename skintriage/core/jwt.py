# skintriage/core/jwt.py

from datetime import datetime, timedelta, timezone
from jose import jwt
from skintriage.core.config import settings


def create_jwt_token(data: dict, expires_delta: timedelta = timedelta(hours=1)) -> str:
    """Issue an access token shaped like the identity provider's (sub, role, aud, exp)."""
    to_encode = data.copy()
    to_encode.setdefault("aud", settings.JWT_AUDIENCE)
    to_encode.setdefault("role", "authenticated")
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
