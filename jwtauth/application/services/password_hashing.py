"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from jwtauth.domain.users.repositories import PasswordHasher
from jwtauth.shared.errors import HashingFailedError
from jwtauth.shared.logging import logger

DEFAULT_HASH_METHOD = "scrypt:32768:8:1"


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted scrypt hashing with one fixed cost for every call site."""

    def __init__(self, method: str = DEFAULT_HASH_METHOD, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (ValueError, TypeError, MemoryError) as exc:
            logger.error(f"password.hash: failed with {type(exc).__name__}")
            raise HashingFailedError() from exc

    def verify(self, password: str, hashed: str) -> bool:
        if not password or not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            logger.warning("password.verify: stored hash is malformed")
            return False
