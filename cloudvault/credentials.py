"""
Password hashing and session tokens.

Passwords are hashed with bcrypt the way the auth routes always did it;
tokens are HS256 JWTs minted through flask-jwt-extended, so the signing key
is whatever ``JWT_SECRET_KEY`` the app was configured with at startup.
"""

import time
from collections import namedtuple

import bcrypt
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token, get_jwt
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from cloudvault.errors import InvalidToken
from cloudvault.validators import ROLES

Principal = namedtuple("Principal", ["user_id", "role"])

ROLE_CLAIM = "role"


def hash_password(plaintext: str, rounds: int = None) -> str:
    if rounds is None:
        rounds = current_app.config.get("BCRYPT_LOG_ROUNDS", 12)
    hashed = bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds=rounds))
    return hashed.decode()


def verify_password(plaintext: str, hashed: str) -> bool:
    if not plaintext or not hashed:
        return False
    try:
        return bcrypt.checkpw(plaintext.encode(), hashed.encode())
    except ValueError:
        # malformed hash, or input past bcrypt's 72 byte limit
        return False


def issue_token(user_id, role: str, ttl=None) -> str:
    if ttl is None:
        ttl = current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    return create_access_token(
        identity=str(user_id),
        expires_delta=ttl,
        additional_claims={ROLE_CLAIM: role},
    )


def verify_token(token: str, now: float = None) -> Principal:
    """Return the principal a token was issued for, or raise InvalidToken.

    Expiry is checked here against ``now`` (epoch seconds, defaults to the
    current time) rather than inside the JWT library so the clock can be
    moved forward without waiting.
    """
    if not token or not isinstance(token, str):
        raise InvalidToken("Missing token")

    try:
        claims = decode_token(token, allow_expired=True)
    except (PyJWTError, JWTExtendedException) as e:
        current_app.logger.info(f"Rejected token: {e}")
        raise InvalidToken()

    if now is None:
        now = time.time()
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or exp <= now:
        raise InvalidToken("Token has expired")
    return principal_from_claims(claims)


def principal_from_claims(claims) -> Principal:
    role = claims.get(ROLE_CLAIM)
    if role not in ROLES:
        raise InvalidToken()
    try:
        user_id = int(claims.get("sub"))
    except (TypeError, ValueError):
        raise InvalidToken()
    return Principal(user_id, role)


def current_principal() -> Principal:
    """Principal of the token ``@jwt_required()`` verified for this request."""
    return principal_from_claims(get_jwt())
