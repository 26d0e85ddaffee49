# task_manager/services/token_service.py
"""
Issues and verifies the signed bearer tokens handed out at login.

Tokens are stateless HS256 JWTs: validity depends only on the signature and
the time claims, so rotating the secret invalidates every outstanding token.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from task_manager.utils.exceptions import TaskManagerError


class TokenFailure(str, Enum):
    MALFORMED = "malformed"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"


class InvalidToken(TaskManagerError):
    def __init__(self, reason: TokenFailure):
        super().__init__(f"Invalid token: {reason.value}")
        self.reason = reason


class TokenService:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(hours=24),
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, user_id: int, email: Optional[str] = None, now: Optional[datetime] = None) -> str:
        """Sign a token for ``user_id`` that expires ``expires_delta`` after ``now``"""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        if email:
            claims["email"] = email
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id carried by ``token`` or raise InvalidToken"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidToken(TokenFailure.EXPIRED)
        except JWTClaimsError:
            # Signature is fine here; only a future nbf counts as "not yet valid"
            nbf = jwt.get_unverified_claims(token).get("nbf")
            if isinstance(nbf, (int, float)) and nbf > datetime.now(timezone.utc).timestamp():
                raise InvalidToken(TokenFailure.NOT_YET_VALID)
            raise InvalidToken(TokenFailure.MALFORMED)
        except JWTError:
            raise InvalidToken(TokenFailure.MALFORMED)

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise InvalidToken(TokenFailure.MALFORMED)
