import jwt
import pytest
from datetime import datetime, timedelta
from uuid import uuid4

from app.core.config import settings
from app.core.exceptions import InvalidTokenException
from app.core.security import create_access_token, hash_password, verify_password, verify_token
from app.schemas.auth import CallerIdentity


def test_password_hash_round_trip():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("correct horsE", hashed)
    assert not verify_password("", hashed)


def test_token_carries_identity_and_expires_in_an_hour():
    identity = CallerIdentity(user_id=uuid4(), username="alice")
    before = datetime.utcnow()
    token = create_access_token(identity)

    assert verify_token(token) == identity
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    lifetime = datetime.utcfromtimestamp(payload["exp"]) - before
    assert timedelta(minutes=59) < lifetime <= timedelta(hours=1, seconds=1)


def test_token_signed_with_another_key_is_rejected():
    forged = jwt.encode(
        {"user_id": str(uuid4()), "username": "mallory", "exp": datetime.utcnow() + timedelta(hours=1)},
        "not-the-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenException):
        verify_token(forged)


@pytest.mark.parametrize("payload", [
    {"username": "alice"},
    {"user_id": "not-a-uuid", "username": "alice"},
    {"user_id": 12345, "username": "alice"},
    {"user_id": str(uuid4())},
])
def test_token_without_usable_identity_is_rejected(payload):
    payload["exp"] = datetime.utcnow() + timedelta(hours=1)
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenException):
        verify_token(token)
