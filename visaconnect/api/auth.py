from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from visaconnect.db.session import get_session
from visaconnect.models.user import User
from visaconnect.schemas.auth import LoginRequest, RegisterRequest, RefreshRequest, TokenResponse, LogoutRequest
from visaconnect.schemas.user import UserOut, UserUpdate
from visaconnect.services.auth_service import (
    authenticate_user,
    create_access_token,
    create_refresh_token,
    create_user,
    get_current_user,
    get_user_by_email,
    revoke_refresh_token,
    store_refresh_token,
    validate_refresh_token,
)
from visaconnect.services.user_service import to_user_out, update_user

router = APIRouter(prefix='/auth', tags=['auth'])


def _issue_tokens(session: Session, user_id: str) -> TokenResponse:
    access_token = create_access_token(user_id)
    refresh_token, expires_at = create_refresh_token(user_id)
    store_refresh_token(session, refresh_token, user_id, expires_at)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post('/register', response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, session: Session = Depends(get_session)) -> UserOut:
    if get_user_by_email(session, payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Email already registered')
    user = create_user(
        session,
        payload.email,
        payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return to_user_out(user)


@router.post('/login', response_model=TokenResponse)
def login(payload: LoginRequest, session: Session = Depends(get_session)) -> TokenResponse:
    user = authenticate_user(session, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid email or password')
    return _issue_tokens(session, user.id)


@router.post('/refresh', response_model=TokenResponse)
def refresh(payload: RefreshRequest, session: Session = Depends(get_session)) -> TokenResponse:
    user_id = validate_refresh_token(session, payload.refresh_token)
    revoke_refresh_token(session, payload.refresh_token)
    return _issue_tokens(session, user_id)


@router.post('/logout')
def logout(payload: LogoutRequest, session: Session = Depends(get_session)) -> dict:
    revoke_refresh_token(session, payload.refresh_token)
    return {'status': 'ok'}


@router.get('/me', response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return to_user_out(user)


@router.patch('/me', response_model=UserOut)
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> UserOut:
    try:
        record = update_user(session, user, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return to_user_out(record)
