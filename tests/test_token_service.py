# tests/test_token_service.py

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from task_manager.services.token_service import InvalidToken, TokenFailure, TokenService

SECRET = "unit-test-secret"


@pytest.fixture()
def service() -> TokenService:
    return TokenService(secret_key=SECRET)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _failure(service: TokenService, token: str) -> TokenFailure:
    with pytest.raises(InvalidToken) as exc_info:
        service.verify(token)
    return exc_info.value.reason


def test_issued_token_resolves_to_user_id(service):
    token = service.issue(42, email="ann@x.com")
    assert service.verify(token) == 42


def test_token_carries_subject_and_24h_expiry(service):
    issued_at = _now().replace(microsecond=0)
    token = service.issue(7, now=issued_at)

    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_token_is_valid_until_expiry(service):
    token = service.issue(3, now=_now() - timedelta(hours=23, minutes=59))
    assert service.verify(token) == 3


def test_token_past_expiry_is_expired(service):
    token = service.issue(3, now=_now() - timedelta(hours=24, seconds=5))
    assert _failure(service, token) is TokenFailure.EXPIRED


def test_garbage_is_malformed(service):
    assert _failure(service, "not-a-jwt") is TokenFailure.MALFORMED
    assert _failure(service, "") is TokenFailure.MALFORMED


def test_tampered_signature_is_malformed(service):
    token = service.issue(5)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    assert _failure(service, tampered) is TokenFailure.MALFORMED


def test_rotating_the_secret_invalidates_tokens(service):
    token = service.issue(5)
    rotated = TokenService(secret_key="another-secret")
    assert _failure(rotated, token) is TokenFailure.MALFORMED


def test_future_not_before_is_not_yet_valid(service):
    now = _now()
    token = jwt.encode(
        {"sub": "9", "nbf": now + timedelta(hours=1), "exp": now + timedelta(hours=2)},
        SECRET,
        algorithm="HS256",
    )
    assert _failure(service, token) is TokenFailure.NOT_YET_VALID


def test_past_not_before_is_accepted(service):
    now = _now()
    token = jwt.encode(
        {"sub": "9", "nbf": now - timedelta(minutes=1), "exp": now + timedelta(hours=1)},
        SECRET,
        algorithm="HS256",
    )
    assert service.verify(token) == 9


@pytest.mark.parametrize("claims", [
    {"email": "ann@x.com"},
    {"sub": "ann@x.com"},
])
def test_missing_or_non_numeric_subject_is_malformed(service, claims):
    claims = dict(claims, exp=_now() + timedelta(hours=1))
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    assert _failure(service, token) is TokenFailure.MALFORMED


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService(secret_key="")
