# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jwtauth.domain.users.entities import User, UserChanges
from jwtauth.domain.users.exceptions import UserNotFoundError
from jwtauth.domain.users.repositories import PasswordHasher, UserRepository


class UpdateProfileUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        if self._users.find_by_id(user_id) is None:
            raise UserNotFoundError()

        # An empty password means "keep the current one".
        password_hash = self._password_hasher.hash(password) if password else None

        updated = self._users.update(
            user_id,
            UserChanges(name=name, email=email, password_hash=password_hash),
        )
        if updated is None:
            raise UserNotFoundError()
        return updated
