from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from jwtauth.app import create_app
from jwtauth.application.services.token_service import JwtTokenService
from jwtauth.domain.users.entities import User, UserChanges
from jwtauth.domain.users.exceptions import UserAlreadyExistsError
from jwtauth.domain.users.repositories import PasswordHasher, SecretProvider, UserRepository
from jwtauth.shared.config import AppConfig, DatabaseConfig, SecurityConfig

TEST_SECRET = "test-signing-secret-0123456789abcdef"
# Low scrypt cost keeps the suite fast; production uses the configured default.
TEST_HASH_METHOD = "scrypt:1024:8:1"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        if self.find_by_email(user.email):
            raise UserAlreadyExistsError()
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def update(self, user_id: int, changes: UserChanges) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        if changes.email is not None:
            other = self.find_by_email(changes.email)
            if other and other.id != user_id:
                raise UserAlreadyExistsError()
        updated = User(
            id=user.id,
            name=changes.name if changes.name is not None else user.name,
            email=changes.email if changes.email is not None else user.email,
            password_hash=(
                changes.password_hash if changes.password_hash is not None else user.password_hash
            ),
        )
        self._users[user_id] = updated
        return updated

    def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class StaticSecretProvider(SecretProvider):
    def __init__(self, secret: str = TEST_SECRET) -> None:
        self._secret = secret.encode()

    def get_signing_secret(self) -> bytes:
        return self._secret


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime.now(UTC).replace(microsecond=0))


@pytest.fixture()
def token_service(clock: FrozenClock) -> JwtTokenService:
    return JwtTokenService(StaticSecretProvider(), clock=clock)


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        JWT_SECRET_KEY=TEST_SECRET,
        PASSWORD_HASH_METHOD=TEST_HASH_METHOD,
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'auth.db'}"),
        security=SecurityConfig(ALLOWED_ORIGINS="http://localhost:3000"),
    )


@pytest.fixture()
def app(app_config: AppConfig) -> Iterator[Flask]:
    flask_app = create_app(app_config)
    flask_app.config.update(TESTING=True)
    yield flask_app
    flask_app.extensions["jwtauth.container"].engine.dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()
