"""
Auth security helpers: session tokens and password hashing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import bcrypt
import jwt

# The only accepted signing scheme. Tokens declaring anything else are
# rejected before their signature is looked at.
TOKEN_ALGORITHM = "HS256"


class TokenError(RuntimeError):
    pass


class InvalidSignature(TokenError):
    pass


class UnsupportedAlgorithm(TokenError):
    pass


class TokenExpired(TokenError):
    pass


class MalformedToken(TokenError):
    pass


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class SessionClaims:
    login: str
    user_id: int
    exp: int


def now_epoch_s() -> int:
    return int(time.time())


class TokenService:
    """
    Issues and verifies signed session tokens.

    Tokens are self-contained: verification needs only the signing secret,
    no server-side session lookup.
    """

    def __init__(self, secret: str, *, ttl_seconds: int, logger: logging.Logger) -> None:
        if not secret:
            raise AuthSecurityError("Token signing secret is empty.")
        if ttl_seconds <= 0:
            raise AuthSecurityError("Token lifetime must be positive.")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._logger = logger

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def claims_for(self, *, login: str, user_id: int, now: int | None = None) -> SessionClaims:
        issued_at = now_epoch_s() if now is None else now
        return SessionClaims(login=login, user_id=user_id, exp=issued_at + self._ttl_seconds)

    def issue(self, claims: SessionClaims) -> str:
        payload = {"login": claims.login, "user_id": claims.user_id, "exp": claims.exp}
        token = jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)
        self._logger.debug("token_issued user_id=%s exp=%s", claims.user_id, claims.exp)
        return token

    def verify(self, token: str) -> SessionClaims:
        raw = (token or "").strip()
        if not raw:
            raise MalformedToken("Token is empty.")

        try:
            payload = jwt.decode(
                raw,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired.") from exc
        except jwt.InvalidAlgorithmError as exc:
            raise UnsupportedAlgorithm("Token signing algorithm is not allowed.") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature("Token signature does not verify.") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(f"Token could not be decoded: {exc}") from exc

        return self._claims_from_payload(payload)

    def _claims_from_payload(self, payload: dict) -> SessionClaims:
        login = payload.get("login")
        user_id = payload.get("user_id")
        exp = payload.get("exp")
        # bool is an int subclass; a `true` user_id is not an identity.
        if not isinstance(login, str) or not login:
            raise MalformedToken("Token has no login claim.")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise MalformedToken("Token has no integer user_id claim.")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise MalformedToken("Token has no integer exp claim.")
        return SessionClaims(login=login, user_id=user_id, exp=exp)


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False
