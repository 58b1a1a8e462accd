# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jwtauth.domain.users.entities import User
from jwtauth.domain.users.exceptions import UserNotFoundError
from jwtauth.domain.users.repositories import UserRepository


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            # Account deleted while the token is still within its lifetime.
            raise UserNotFoundError()
        return user
