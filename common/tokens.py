"""Read the payload of a bearer token (JWT) without verifying it.

The seeding scripts only need the user ID that the backend embedded in the
token; signature checks belong to the backend.
"""
from __future__ import annotations

import re

import jwt

_OBJECT_ID = re.compile(r"[0-9a-fA-F]{24}")


class TokenError(ValueError):
    """Raised when a token cannot be decoded as a JWT."""


def decode_payload(token: str) -> dict:
    try:
        return jwt.decode(token.strip(), options={"verify_signature": False})
    except jwt.PyJWTError as exc:
        raise TokenError(f"could not decode token: {exc}") from exc


def user_id_from_token(token: str) -> str:
    """Return the ``userId`` claim, raising ``TokenError`` if it is missing."""
    payload = decode_payload(token)
    user_id = payload.get("userId")
    if not user_id:
        raise TokenError("token payload has no userId claim")
    return str(user_id)


def looks_like_object_id(value: str) -> bool:
    """True when ``value`` is exactly 24 hex characters (a MongoDB ObjectId)."""
    return bool(_OBJECT_ID.fullmatch(value))
