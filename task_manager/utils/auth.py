# task_manager/utils/auth.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from task_manager.config.settings import Settings
from task_manager.database import get_db
from task_manager.models.user import User
from task_manager.services.credential_store import CredentialStore
from task_manager.services.token_service import InvalidToken, TokenFailure, TokenService

logger = logging.getLogger(__name__)

# auto_error is off so a missing header gets our own 401 message
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

TOKEN_FAILURE_MESSAGES = {
    TokenFailure.EXPIRED: "Token has expired",
    TokenFailure.MALFORMED: "Token is malformed",
    TokenFailure.NOT_YET_VALID: "Token not active",
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> User:
    """Resolve the bearer token to a stored user or reject with 401"""
    if not token:
        raise unauthorized("No token provided, authorization denied")

    try:
        user_id = token_service.verify(token)
    except InvalidToken as e:
        logger.info(f"Rejected bearer token: {e.reason.value}")
        raise unauthorized(TOKEN_FAILURE_MESSAGES[e.reason])

    user = CredentialStore(db).find_by_id(user_id)
    if user is None:
        logger.info(f"Rejected bearer token for unknown user {user_id}")
        raise unauthorized("Token is not valid")

    return user
