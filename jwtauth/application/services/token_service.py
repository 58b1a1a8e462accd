# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed, expiring session tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from jwtauth.domain.users.entities import SessionToken, TokenClaims
from jwtauth.domain.users.exceptions import UnauthenticatedError
from jwtauth.domain.users.repositories import SecretProvider, TokenService
from jwtauth.shared.logging import logger

ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)

# Generous upper bound; anything larger is not one of ours.
MAX_TOKEN_LENGTH = 8 * 1024

# User ids are stored as signed 64-bit integers.
MAX_SUBJECT = 2**63 - 1


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """HS256 JWT issuance and validation.

    The algorithm is pinned on both sides: tokens are always signed with
    ``HS256`` and decoding only accepts ``HS256``, so a token whose header
    names another algorithm (``none``, ``HS512``, ``RS256``...) is rejected.
    All validation failures surface as a single ``UnauthenticatedError``;
    the concrete reason is only logged.
    """

    def __init__(
        self,
        secrets: SecretProvider,
        *,
        lifetime: timedelta = DEFAULT_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secrets = secrets
        self._lifetime = lifetime
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user_id: int) -> SessionToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secrets.get_signing_secret(), algorithm=ALGORITHM)
        logger.debug(f"token.issue: user_id={user_id} exp={expires_at.isoformat()}")
        return SessionToken(
            user_id=user_id,
            token=token,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def validate(self, token: str) -> TokenClaims:
        if not token:
            raise self._reject("empty token")
        if len(token) > MAX_TOKEN_LENGTH:
            raise self._reject("token too large")

        secret = self._secrets.get_signing_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                # Expiry is checked below against the service clock.
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidAlgorithmError as exc:
            raise self._reject(f"algorithm mismatch ({exc})") from exc
        except jwt.InvalidSignatureError as exc:
            raise self._reject("bad signature") from exc
        except jwt.InvalidTokenError as exc:
            raise self._reject(f"invalid token ({type(exc).__name__})") from exc

        try:
            subject = int(payload["sub"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (TypeError, ValueError, OverflowError, OSError) as exc:
            raise self._reject("malformed claims") from exc

        if not 0 < subject <= MAX_SUBJECT:
            raise self._reject("subject out of range")

        if self._clock() >= expires_at:
            raise self._reject("expired")

        return TokenClaims(subject=subject, issued_at=issued_at, expires_at=expires_at)

    @staticmethod
    def _reject(reason: str) -> UnauthenticatedError:
        logger.warning(f"token.validate: rejected, reason={reason}")
        return UnauthenticatedError()
