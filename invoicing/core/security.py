"""Password hashing and session-token collaborators.

Both are plain objects constructed once at startup and handed to the services
that need them, so tests can substitute fakes.
"""

from __future__ import annotations

import time
from typing import Protocol

from authlib.jose import JoseError, JsonWebToken
from werkzeug.security import check_password_hash, generate_password_hash

from invoicing.core.config import Settings


class PasswordHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...

    def compare(self, plaintext: str, digest: str) -> bool: ...


class TokenIssuer(Protocol):
    def sign(self, user_id: str) -> str: ...

    def verify(self, token: str) -> str | None: ...


class WerkzeugPasswordHasher:
    """Salted password hashing backed by werkzeug.security."""

    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self._method)

    def compare(self, plaintext: str, digest: str) -> bool:
        if not digest:
            return False
        return check_password_hash(digest, plaintext)


class JwtTokenIssuer:
    """Signs and verifies HMAC session tokens whose subject is the user id."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        expires_in_seconds: int = 3600,
        issuer: str = "invoicing-api",
    ) -> None:
        if not secret:
            raise ValueError("JWT signing secret not configured")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = int(expires_in_seconds)
        self._issuer = issuer
        # Only the configured algorithm is accepted on decode
        self._jwt = JsonWebToken([algorithm])

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtTokenIssuer:
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in_seconds=settings.jwt_expires_in,
            issuer=settings.jwt_issuer,
        )

    def sign(self, user_id: str) -> str:
        now = int(time.time())
        header = {"alg": self._algorithm, "typ": "JWT"}
        payload = {
            "iss": self._issuer,
            "sub": str(user_id),
            "iat": now,
            "exp": now + self._expires_in,
        }
        token = self._jwt.encode(header, payload, self._secret)
        # authlib returns bytes, decode to string
        return token.decode() if isinstance(token, bytes) else token

    def verify(self, token: str) -> str | None:
        """Return the user id carried by ``token``, or None if it is not acceptable."""
        try:
            claims = self._jwt.decode(
                token,
                self._secret,
                claims_options={
                    "iss": {"essential": True, "value": self._issuer},
                    "sub": {"essential": True},
                    "exp": {"essential": True},
                },
            )
            claims.validate()
        except (JoseError, ValueError):
            return None
        subject = claims.get("sub")
        return str(subject) if subject else None
