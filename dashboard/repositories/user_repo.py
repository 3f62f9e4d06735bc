# dashboard/repositories/user_repo.py
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from dashboard.core.credentials import encode_password
from dashboard.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (fixed, parameterized queries)
      - No FastAPI, no HTTP, no business logic

    Database errors (sqlalchemy.exc.SQLAlchemyError) propagate to the
    service, which logs them and maps them to a 500.
    """

    # ----- Lookups -----

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return the first User with this email, or None if not found."""
        if email is None:
            return None
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    # ----- Writes -----

    def upsert(
        self,
        session: Session,
        *,
        user_id: str,
        email: str,
        name: str,
        gender: str,
        birthday: date,
        password: str,
    ) -> User:
        """
        Insert a user, or overwrite the sign-in columns if the id exists.

        token, orgName, position and the contact columns are left as they
        are on an existing row. If another writer inserts the same id
        between the lookup and the commit, the insert is retried as an
        update, so the last write wins.
        """
        fields = {
            "email": email,
            "name": name,
            "gender": gender,
            "birthday": birthday,
            "password": encode_password(password),
        }
        user = session.get(User, user_id) or User(id=user_id)
        try:
            return self._save(session, user, fields)
        except IntegrityError:
            session.rollback()
            user = session.get(User, user_id)
            if user is None:
                raise
            return self._save(session, user, fields)

    def _save(self, session: Session, user: User, fields: dict) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update_profile(
        self,
        session: Session,
        user_id: str,
        *,
        name: str | None,
        email: str | None,
        gender: str | None,
        birthday: date | None,
        password: str | None,
        profilepicture: str | None,
        countryCode: str | None,
        contact: str | None,
    ) -> int:
        """
        Overwrite every profile column of the user with this id.

        Returns the number of rows changed (0 when the id is unknown).
        """
        user = session.get(User, user_id) if user_id is not None else None
        if user is None:
            return 0

        user.name = name
        user.email = email
        user.gender = gender
        user.birthday = birthday
        user.password = encode_password(password)
        user.profilepicture = profilepicture
        user.countryCode = countryCode
        user.contact = contact

        session.add(user)
        session.commit()
        return 1

    def update_company_info(
        self,
        session: Session,
        email: str | None,
        orgName: str | None,
        position: str | None,
    ) -> int:
        """Overwrite orgName/position on every row with this email."""
        if email is None:
            return 0
        rows = session.exec(select(User).where(User.email == email)).all()
        for user in rows:
            user.orgName = orgName
            user.position = position
            session.add(user)
        session.commit()
        return len(rows)

    def set_token(self, session: Session, email: str | None, token: str | None) -> int:
        """Store `token` on every row with this email."""
        if email is None:
            return 0
        rows = session.exec(select(User).where(User.email == email)).all()
        for user in rows:
            user.token = token
            session.add(user)
        session.commit()
        return len(rows)
