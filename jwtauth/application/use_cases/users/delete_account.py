# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jwtauth.domain.users.repositories import UserRepository
from jwtauth.shared.logging import logger


class DeleteAccountUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> None:
        if not self._users.delete(user_id):
            logger.info(f"account.delete: user_id={user_id} was already gone")
