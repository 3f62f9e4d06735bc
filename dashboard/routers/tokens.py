# dashboard/routers/tokens.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from dashboard.database import get_session
from dashboard.repositories.log_repo import LogRepository
from dashboard.repositories.user_repo import UserRepository
from dashboard.schemas.common import MessageResponse
from dashboard.schemas.token import TokenRead, TokenStore, TokenUpdate
from dashboard.services.event_service import EventService, get_event_service
from dashboard.services.user_service import UserService

router = APIRouter(tags=["Tokens"])

service = UserService(UserRepository(), LogRepository())


@router.post("/storeToken", response_model=MessageResponse)
def store_token(
    payload: TokenStore,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    return service.store_token(session, events, payload)


@router.get("/fetchToken/{email}", response_model=TokenRead)
def fetch_token(
    email: str,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    """404 when no user has this email."""
    return service.fetch_token(session, events, email)


@router.put("/updateToken/{email}", response_model=MessageResponse)
def update_token(
    email: str,
    payload: TokenUpdate,
    session: Session = Depends(get_session),
    events: EventService = Depends(get_event_service),
):
    return service.update_token(session, events, email, payload)
