# dashboard/schemas/user.py
from datetime import date

from sqlmodel import SQLModel

from dashboard.schemas.common import RequestBody


class CheckUserRequest(RequestBody):
    email: str | None = None


class AuthInfoCreate(RequestBody):
    """
    Sign-in payload built by the client from Google userinfo + People API.

    Required (checked in UserService.store_auth_info):
      id, email, name, gender, birthday (YYYY-MM-DD), password
    """

    id: str | None = None
    email: str | None = None
    name: str | None = None
    gender: str | None = None
    birthday: str | None = None
    password: str | None = None


class ProfileUpdate(RequestBody):
    """Full overwrite of the editable profile columns, keyed by id."""

    id: str | None = None
    name: str | None = None
    email: str | None = None
    gender: str | None = None
    birthday: str | None = None
    password: str | None = None
    profilepicture: str | None = None
    countryCode: str | None = None
    contact: str | None = None


class CompanyInfoUpdate(RequestBody):
    email: str | None = None
    orgName: str | None = None
    position: str | None = None


class CompanyInfoRead(SQLModel):
    orgName: str | None = None
    position: str | None = None


class UserRead(SQLModel):
    """Full user row, as returned in `userInfo`."""

    id: str
    email: str | None = None
    name: str | None = None
    gender: str | None = None
    birthday: date | None = None
    password: str | None = None
    token: str | None = None
    orgName: str | None = None
    position: str | None = None
    countryCode: str | None = None
    contact: str | None = None
    profilepicture: str | None = None


class CheckUserResponse(SQLModel):
    """
    `{exists: false}` or `{exists: true, userInfo: {...}}`.

    Routes return it with `response_model_exclude_unset=True` so the
    miss case carries no `userInfo` key.
    """

    exists: bool
    userInfo: UserRead | None = None
