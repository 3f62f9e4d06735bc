# dashboard/models/user.py
from datetime import date

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent dashboard user.

    Identity:
      - id: the identity provider's user id (Google "id" from userinfo)

    Column names follow the JSON the browser client sends and reads
    (orgName, countryCode, profilepicture), so rows serialize straight
    into API responses.

    Only `id` is required. `email` is how most routes find a user but is
    not unique at the database level.

    `password` holds whatever the client sent; writes go through
    `dashboard.core.credentials.encode_password`.
    """

    __tablename__ = "users"

    id: str = Field(
        primary_key=True,
        max_length=255,
        description="Identity provider user id",
    )

    email: str | None = Field(default=None, max_length=255, index=True)
    name: str | None = Field(default=None, max_length=255)
    gender: str | None = Field(default=None, max_length=50)
    birthday: date | None = None
    password: str | None = Field(default=None, max_length=255)

    # API token generated from the dashboard
    token: str | None = Field(default=None, max_length=255)

    # Company info
    orgName: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)

    # Contact details
    countryCode: str | None = Field(default=None, max_length=10)
    contact: str | None = Field(default=None, max_length=20)
    profilepicture: str | None = None
