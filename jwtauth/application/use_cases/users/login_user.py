# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jwtauth.domain.users.entities import SessionToken, User
from jwtauth.domain.users.exceptions import InvalidCredentialsError
from jwtauth.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from jwtauth.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> tuple[User, SessionToken]:
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("auth.login: unknown email")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.login: wrong password for user_id={user.id}")
            raise InvalidCredentialsError()

        return user, self._tokens.issue(user.id)
