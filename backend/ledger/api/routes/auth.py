"""
Authentication routes for register, login, logout and the current user.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from ledger.db.session import get_db
from ledger.schemas.common import ApiResponse
from ledger.schemas.user import RegisterRequest, LoginRequest, Identity
from ledger.core.exceptions import ValidationError
from ledger.api.cookies import set_session_cookie, read_session_cookie, clear_session_cookie
from ledger.api.dependencies import get_session_store, get_current_identity
from ledger.services.auth_service import authenticate, register_user
from ledger.services.session_store import SessionStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[Identity], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store)
):
    """Register a new user and sign them in."""
    user = register_user(
        db,
        email=user_data.email,
        password=user_data.password,
        confirm_password=user_data.confirm_password,
        name=user_data.name
    )

    token, expires = store.create_session(user.id)
    set_session_cookie(response, token, expires)

    return {"success": True, "message": "Account created", "data": Identity.model_validate(user)}


@router.post("/login", response_model=ApiResponse[Identity])
async def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store)
):
    """Verify email and password and start a session."""
    if not credentials.email.strip() or not credentials.password:
        raise ValidationError("Please enter your email and password")

    user = authenticate(db, credentials.email, credentials.password)

    token, expires = store.create_session(user.id)
    set_session_cookie(response, token, expires)

    return {"success": True, "data": Identity.model_validate(user)}


@router.post("/logout", response_model=ApiResponse[None])
async def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store)
):
    """Delete the current session and clear the cookie."""
    token = read_session_cookie(request)
    if token:
        store.destroy_session(token)
    clear_session_cookie(response)
    return {"success": True, "message": "Signed out"}


@router.get("/me", response_model=ApiResponse[Identity])
async def get_current_user_info(identity: Identity = Depends(get_current_identity)):
    """Get current user information."""
    return {"success": True, "data": identity}
