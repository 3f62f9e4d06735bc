# dashboard/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dashboard.database import get_session
from dashboard.repositories.log_repo import LogRepository
from dashboard.repositories.user_repo import UserRepository
from dashboard.schemas.common import MessageResponse
from dashboard.schemas.user import (
    AuthInfoCreate,
    CheckUserRequest,
    CheckUserResponse,
    CompanyInfoRead,
    CompanyInfoUpdate,
    ProfileUpdate,
)
from dashboard.services.event_service import EventService, get_event_service
from dashboard.services.user_service import UserService

router = APIRouter(tags=["Users"])

repo = UserRepository()
service = UserService(repo, LogRepository())


# -------- Sign-in --------


@router.post(
    "/checkUser",
    response_model=CheckUserResponse,
    response_model_exclude_unset=True,
)
def check_user(
    payload: CheckUserRequest,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    """
    Look a user up by email.

    Returns `{exists: false}` on a miss, `{exists: true, userInfo}` on a hit.
    """
    return service.check_user(session, events, payload)


@router.post("/storeAuthInfo", response_model=MessageResponse)
def store_auth_info(
    payload: AuthInfoCreate,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    """
    Insert or update the signed-in user.

    400 when id, email, name, gender, birthday or password is missing.
    """
    return service.store_auth_info(session, events, payload)


# -------- Profile / company --------


@router.post("/updateProfile", response_model=MessageResponse)
def update_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    return service.update_profile(session, events, payload)


@router.post("/updateCompanyInfo", response_model=MessageResponse)
def update_company_info(
    payload: CompanyInfoUpdate,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    return service.update_company_info(session, events, payload)


@router.get("/fetchCompanyInfo/{email}", response_model=CompanyInfoRead)
def fetch_company_info(
    email: str,
    session: Session = Depends(get_session),
):
    """Company info of a user; 404 if the email is unknown."""
    return service.get_company_info(session, email)
