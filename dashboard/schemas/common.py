# dashboard/schemas/common.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class RequestBody(SQLModel):
    """
    Base for request payloads.

    Fields are optional on purpose: presence is checked in the services so
    a missing field maps to 400 instead of FastAPI's 422. Extra keys sent
    by the browser client (picture, verified_email, ...) are ignored, and
    numeric ids are accepted as strings.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class MessageResponse(SQLModel):
    """Confirmation returned by write routes."""

    message: str
