# skintriage/models/user.py
from pydantic import BaseModel


class CurrentUser(BaseModel):
    user_id: str
    role: str = "authenticated"
    # Raw bearer token, forwarded so collaborators authorize as the caller
    access_token: str
