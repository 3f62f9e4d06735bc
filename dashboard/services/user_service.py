# dashboard/services/user_service.py
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from dashboard.core.errors import NotFoundError, ValidationError
from dashboard.models.user import User
from dashboard.repositories.log_repo import LogRepository
from dashboard.repositories.user_repo import UserRepository
from dashboard.schemas.common import MessageResponse
from dashboard.schemas.token import TokenRead, TokenStore, TokenUpdate
from dashboard.schemas.user import (
    AuthInfoCreate,
    CheckUserRequest,
    CheckUserResponse,
    CompanyInfoRead,
    CompanyInfoUpdate,
    ProfileUpdate,
    UserRead,
)
from dashboard.services.base import LoggedService
from dashboard.services.event_service import EventService

AUTH_REQUIRED_FIELDS = ("id", "email", "name", "gender", "birthday", "password")


def parse_birthday(value: str | None) -> date | None:
    """
    Parse a YYYY-MM-DD birthday.

    Raises:
        ValidationError(400): if the value is present but not a date.
    """
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Invalid birthday, expected YYYY-MM-DD.")


def _user_subject(user: User) -> dict:
    """Fields of a user included in emitted events."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
    }


class UserService(LoggedService):
    """
    Business logic for users, company info and API tokens.

    Responsibilities:
      - presence checks before any store access
      - one repository operation per call
      - one log entry per outcome
      - event emission once the write has committed
    """

    def __init__(self, repo: UserRepository, logs: LogRepository):
        self.repo = repo
        super().__init__(logs)

    # ----- Sign-in -----

    def check_user(
        self,
        session: Session,
        events: EventService,
        payload: CheckUserRequest,
    ) -> CheckUserResponse:
        email = payload.email
        try:
            user = self.repo.get_by_email(session, email)
        except SQLAlchemyError as exc:
            self._store_failed(session, "Error checking user", exc)

        if user is None:
            self._info(session, f"User with email {email} not found.")
            events.emit(session, "user_not_found", user_email=email, user={"email": email})
            return CheckUserResponse(exists=False)

        result = CheckUserResponse(exists=True, userInfo=UserRead.model_validate(user))
        subject = _user_subject(user)
        self._info(session, f"User with email {email} found.")
        events.emit(session, "user_checked", user_email=email, user=subject)
        return result

    def store_auth_info(
        self,
        session: Session,
        events: EventService,
        payload: AuthInfoCreate,
    ) -> MessageResponse:
        """
        Insert-or-update the user on sign-in.

        Rules:
          - id, email, name, gender, birthday, password must all be present
          - birthday must be YYYY-MM-DD
          - an existing row keeps its token and company columns
        """
        missing = [f for f in AUTH_REQUIRED_FIELDS if not getattr(payload, f)]
        if missing:
            self._error(
                session,
                f"Missing required auth info fields: {', '.join(missing)}",
            )
            raise ValidationError("Missing required auth info fields.")

        birthday = parse_birthday(payload.birthday)

        try:
            user = self.repo.upsert(
                session,
                user_id=payload.id,
                email=payload.email,
                name=payload.name,
                gender=payload.gender,
                birthday=birthday,
                password=payload.password,
            )
        except SQLAlchemyError as exc:
            self._store_failed(session, "Error storing or updating auth info", exc)

        subject = _user_subject(user)
        self._info(
            session, f"Auth info for user {payload.email} stored/updated successfully."
        )
        events.emit(session, "user_signed_up", user_email=payload.email, user=subject)
        return MessageResponse(message="Auth info received and stored/updated.")

    # ----- Profile -----

    def update_profile(
        self,
        session: Session,
        events: EventService,
        payload: ProfileUpdate,
    ) -> MessageResponse:
        """Overwrite the profile columns of user `payload.id`."""
        birthday = parse_birthday(payload.birthday)

        try:
            self.repo.update_profile(
                session,
                payload.id,
                name=payload.name,
                email=payload.email,
                gender=payload.gender,
                birthday=birthday,
                password=payload.password,
                profilepicture=payload.profilepicture,
                countryCode=payload.countryCode,
                contact=payload.contact,
            )
        except SQLAlchemyError as exc:
            self._store_failed(
                session, f"Error updating profile for user {payload.id}", exc
            )

        self._info(session, f"Profile updated successfully for user {payload.id}.")
        events.emit(
            session,
            "profile_updated",
            user_email=payload.email,
            user={
                "id": payload.id,
                "email": payload.email,
                "name": payload.name,
                "countryCode": payload.countryCode,
                "contact": payload.contact,
            },
        )
        return MessageResponse(message="Profile updated successfully.")

    # ----- Company info -----

    def update_company_info(
        self,
        session: Session,
        events: EventService,
        payload: CompanyInfoUpdate,
    ) -> MessageResponse:
        try:
            self.repo.update_company_info(
                session, payload.email, payload.orgName, payload.position
            )
        except SQLAlchemyError as exc:
            self._store_failed(
                session, f"Error updating company info for user {payload.email}", exc
            )

        self._info(
            session, f"Company info updated successfully for user {payload.email}."
        )
        events.emit(
            session,
            "company_info_updated",
            user_email=payload.email,
            user={
                "email": payload.email,
                "orgName": payload.orgName,
                "position": payload.position,
            },
        )
        return MessageResponse(message="Company info updated successfully.")

    def get_company_info(self, session: Session, email: str) -> CompanyInfoRead:
        """
        Raises:
            NotFoundError(404): if no user has this email.
        """
        try:
            user = self.repo.get_by_email(session, email)
        except SQLAlchemyError as exc:
            self._store_failed(
                session, f"Error fetching company info for user {email}", exc
            )

        if user is None:
            self._info(session, f"Company info not found for user {email}.")
            raise NotFoundError("Company info not found")

        result = CompanyInfoRead(orgName=user.orgName, position=user.position)
        self._info(session, f"Company info fetched successfully for user {email}.")
        return result

    # ----- API token -----

    def store_token(
        self,
        session: Session,
        events: EventService,
        payload: TokenStore,
    ) -> MessageResponse:
        try:
            self.repo.set_token(session, payload.email, payload.token)
        except SQLAlchemyError as exc:
            self._store_failed(
                session, f"Error storing token for user {payload.email}", exc
            )

        self._info(session, f"Token stored successfully for user {payload.email}.")
        events.emit(
            session, "token_stored", user_email=payload.email, user={"email": payload.email}
        )
        return MessageResponse(message="Token stored successfully.")

    def fetch_token(
        self,
        session: Session,
        events: EventService,
        email: str,
    ) -> TokenRead:
        """
        Return the stored token of the user with this email.

        A user without a token yet gives `token=None`; no user at all is a
        404.
        """
        try:
            user = self.repo.get_by_email(session, email)
        except SQLAlchemyError as exc:
            self._store_failed(session, f"Error fetching token for user {email}", exc)

        if user is None:
            self._info(session, f"Token not found for user {email}.")
            events.emit(session, "token_not_found", user_email=email, user={"email": email})
            raise NotFoundError("Token not found.")

        result = TokenRead(token=user.token)
        self._info(session, f"Token fetched successfully for user {email}.")
        events.emit(session, "token_fetched", user_email=email, user={"email": email})
        return result

    def update_token(
        self,
        session: Session,
        events: EventService,
        email: str,
        payload: TokenUpdate,
    ) -> MessageResponse:
        try:
            self.repo.set_token(session, email, payload.token)
        except SQLAlchemyError as exc:
            self._store_failed(session, f"Error updating token for user {email}", exc)

        self._info(session, f"Token updated successfully for user {email}.")
        events.emit(session, "token_updated", user_email=email, user={"email": email})
        return MessageResponse(message="Token updated successfully.")
