import time

import jwt
import pytest

from common.tokens import TokenError, decode_payload, looks_like_object_id, user_id_from_token


def make_token(payload, key="backend-signing-secret-0123456789abcdef"):
    return jwt.encode(payload, key, algorithm="HS256")


def test_decode_payload_ignores_signature():
    token = make_token({"userId": "691d6035962542bf4120f30b", "role": "user"}, key="another-service-secret-0123456789abcdef")
    assert decode_payload(token) == {"userId": "691d6035962542bf4120f30b", "role": "user"}


def test_expired_token_still_decodes():
    token = make_token({"userId": "abc", "exp": int(time.time()) - 3600})
    assert decode_payload(token)["userId"] == "abc"


def test_user_id_from_token():
    assert user_id_from_token(make_token({"userId": "abc"})) == "abc"


def test_missing_user_id_raises():
    with pytest.raises(TokenError):
        user_id_from_token(make_token({"role": "user"}))


@pytest.mark.parametrize("token", ["not-a-jwt", "a.b", "a.!!!.c", ""])
def test_malformed_tokens_raise(token):
    with pytest.raises(TokenError):
        decode_payload(token)


def test_looks_like_object_id():
    assert looks_like_object_id("691d6035962542bf4120f30b")
    assert not looks_like_object_id("691d6035962542bf4120f30")
    assert not looks_like_object_id("691d6035962542bf4120f30b ")
