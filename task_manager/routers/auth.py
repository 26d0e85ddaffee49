# task_manager/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from task_manager.config.settings import Settings
from task_manager.database import get_db
from task_manager.models.user import User
from task_manager.schemas.tokens import Token
from task_manager.schemas.user import (
    MessageOut,
    PasswordChange,
    ProfileOut,
    ProfileUpdateOut,
    UserCreate,
    UserLogin,
    UserOut,
    UserUpdate,
)
from task_manager.services.credential_store import CredentialStore
from task_manager.services.token_service import TokenService
from task_manager.utils.auth import get_current_user, get_settings, get_token_service
from task_manager.utils.exceptions import DuplicateEmail, InvalidCredentials
from task_manager.utils.security import hash_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(message: str, user: User, token_service: TokenService) -> dict:
    return {
        "message": message,
        "user": UserOut.model_validate(user),
        "token": token_service.issue(user.id, email=user.email),
        "token_type": "bearer",
    }


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    token_service: TokenService = Depends(get_token_service),
):
    store = CredentialStore(db)
    try:
        hashed = hash_password(user.password, rounds=settings.bcrypt_rounds)
        new_user = store.create(name=user.name, email=user.email, hashed_password=hashed)
    except DuplicateEmail:
        raise HTTPException(status_code=400, detail="User already exists")
    except Exception:
        logger.exception("Registration error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return _token_response("User registered successfully", new_user, token_service)


@router.post("/login", response_model=Token)
def login(
    user: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    token_service: TokenService = Depends(get_token_service),
):
    try:
        db_user = CredentialStore(db).authenticate(
            user.email, user.password, rounds=settings.bcrypt_rounds
        )
    except InvalidCredentials:
        logger.info("Failed login attempt")
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return _token_response("Login successful", db_user, token_service)


@router.get("/profile", response_model=ProfileOut)
def get_profile(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return {"user": UserOut.model_validate(current_user)}


@router.put("/profile", response_model=ProfileUpdateOut)
def update_profile(
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update name and/or email; omitted fields are left as they are"""
    try:
        user = CredentialStore(db).update_profile(
            current_user.id, user_update.model_dump(exclude_unset=True)
        )
    except DuplicateEmail:
        raise HTTPException(status_code=400, detail="Email already registered")
    except Exception:
        logger.exception("Update profile error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"message": "Profile updated successfully", "user": UserOut.model_validate(user)}


@router.put("/change-password", response_model=MessageOut)
def change_password(
    passwords: PasswordChange,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    store = CredentialStore(db)
    try:
        store.authenticate(
            current_user.email, passwords.current_password, rounds=settings.bcrypt_rounds
        )
    except InvalidCredentials:
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    try:
        store.update_password(
            current_user.id,
            hash_password(passwords.new_password, rounds=settings.bcrypt_rounds),
        )
    except Exception:
        logger.exception("Change password error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {"message": "Password changed successfully"}
