# skintriage/routers/deps.py

from typing import Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from skintriage.core.config import settings
from skintriage.core.logger import logger
from skintriage.models.user import CurrentUser
from skintriage.utils.errors import UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    token: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> CurrentUser:
    if token is None or not token.credentials:
        raise UnauthorizedError("Authentication required")
    try:
        payload = jwt.decode(
            token.credentials,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except JWTError as e:
        logger.warning(f"Authentication failed: {e}")
        raise UnauthorizedError("Invalid authentication token")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid authentication token")
    return CurrentUser(
        user_id=str(user_id),
        role=payload.get("role", "authenticated"),
        access_token=token.credentials,
    )
