# dashboard/core/errors.py
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Missing or unusable request field. Raised before any store access."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    """Lookup miss on routes that report it as 404."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class StoreError(HTTPException):
    """
    Database failure surfaced to the client.

    `detail` is the generic per-route message; the driver error is only
    written to the logs table and the server log.
    """

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


class RelayDeliveryError(Exception):
    """A frame could not be handed to one subscriber. Logged, never raised."""

    def __init__(self, subscriber, cause: BaseException):
        super().__init__(f"delivery to {subscriber!r} failed: {cause}")
        self.subscriber = subscriber
        self.cause = cause
