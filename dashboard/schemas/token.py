# dashboard/schemas/token.py
from sqlmodel import SQLModel

from dashboard.schemas.common import RequestBody


class TokenStore(RequestBody):
    token: str | None = None
    email: str | None = None


class TokenUpdate(RequestBody):
    token: str | None = None


class TokenRead(SQLModel):
    """A user row with no token yet gives `{"token": null}`."""

    token: str | None = None
