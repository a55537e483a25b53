import base64
import uuid
from datetime import timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from character_manager.core import config
from character_manager.core.security import (
    create_access_token,
    decode_access_token,
    generate_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)


def test_password_hash_is_salted_and_verifies():
    first = get_password_hash("Password1")
    second = get_password_hash("Password1")

    assert first != "Password1"
    assert first != second
    assert verify_password("Password1", first)
    assert not verify_password("password1", first)


def test_access_token_carries_identity_claims():
    user_id = uuid.uuid4()
    token = create_access_token(user_id, "testuser", "user")

    payload = decode_access_token(token)

    assert payload["sub"] == str(user_id)
    assert payload["name"] == "testuser"
    assert payload["role"] == "user"
    assert payload["iss"] == config.JWT_ISSUER
    assert payload["aud"] == config.JWT_AUDIENCE
    assert jwt.get_unverified_header(token)["alg"] == "HS512"


def test_verify_token_returns_user_id():
    user_id = uuid.uuid4()
    assert verify_token(create_access_token(user_id, "testuser", "user")) == user_id


@pytest.mark.parametrize("token_factory", [
    lambda: "not-a-jwt",
    lambda: create_access_token(uuid.uuid4(), "testuser", "user", expires_delta=timedelta(minutes=-1)),
    lambda: create_access_token(uuid.uuid4(), "testuser", "guest"),
    lambda: create_access_token(uuid.UUID(int=0), "testuser", "user"),
    lambda: jwt.encode(
        {"sub": "42", "role": "user", "iss": config.JWT_ISSUER, "aud": config.JWT_AUDIENCE},
        config.SECRET_KEY, algorithm=config.JWT_ALGORITHM,
    ),
    lambda: jwt.encode(
        {"sub": str(uuid.uuid4()), "role": "user", "iss": "someone-else", "aud": config.JWT_AUDIENCE},
        config.SECRET_KEY, algorithm=config.JWT_ALGORITHM,
    ),
    lambda: jwt.encode(
        {"sub": str(uuid.uuid4()), "role": "user", "iss": config.JWT_ISSUER, "aud": config.JWT_AUDIENCE},
        "a-different-key", algorithm=config.JWT_ALGORITHM,
    ),
])
def test_verify_token_rejects_bad_tokens(token_factory):
    with pytest.raises(HTTPException) as exc_info:
        verify_token(token_factory())
    assert exc_info.value.status_code == 401


def test_refresh_token_is_random_256_bit_base64():
    token = generate_refresh_token()

    assert len(base64.b64decode(token)) == 32
    assert token != generate_refresh_token()
