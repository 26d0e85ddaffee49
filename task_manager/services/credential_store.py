# task_manager/services/credential_store.py
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from task_manager.models.user import User
from task_manager.utils.exceptions import DuplicateEmail, InvalidCredentials, UserNotFound
from task_manager.utils.security import DEFAULT_ROUNDS, dummy_hash, verify_password

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persistence for user records and their password hashes"""

    PROFILE_FIELDS = ("name", "email")

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def authenticate(self, email: str, password: str, rounds: int = DEFAULT_ROUNDS) -> User:
        """Return the user ``email`` belongs to if ``password`` matches.

        Raises InvalidCredentials otherwise. An unknown email still costs one
        bcrypt check at ``rounds``, the same work as a wrong password.
        """
        user = self.find_by_email(email)
        if user is None:
            verify_password(password, dummy_hash(rounds))
            raise InvalidCredentials("Invalid credentials")
        if not verify_password(password, user.hashed_password):
            raise InvalidCredentials("Invalid credentials")
        return user

    def create(self, name: str, email: str, hashed_password: str) -> User:
        """Insert a new user.

        The existence check gives a clean error in the common case; the unique
        index on ``users.email`` catches two registrations racing past it.
        """
        if self.find_by_email(email):
            raise DuplicateEmail(email)

        user = User(name=name, email=email, hashed_password=hashed_password)
        self.db.add(user)
        self._commit_unique(email)
        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    def update_profile(self, user_id: int, changes: Dict[str, Any]) -> User:
        user = self._get(user_id)

        new_email = changes.get("email")
        if new_email and new_email != user.email:
            other = self.find_by_email(new_email)
            if other and other.id != user.id:
                raise DuplicateEmail(new_email)

        for key, value in changes.items():
            if key in self.PROFILE_FIELDS:
                setattr(user, key, value)

        self._commit_unique(new_email or user.email)
        self.db.refresh(user)
        logger.info(f"Updated profile of user {user.id}: {sorted(changes)}")
        return user

    def update_password(self, user_id: int, hashed_password: str) -> None:
        user = self._get(user_id)
        user.hashed_password = hashed_password
        self.db.commit()
        logger.info(f"Changed password of user {user.id}")

    def _get(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def _commit_unique(self, email: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEmail(email)
