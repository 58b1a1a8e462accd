# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jwtauth.domain.users.entities import User
from jwtauth.domain.users.exceptions import UserAlreadyExistsError
from jwtauth.domain.users.repositories import PasswordHasher, UserRepository
from jwtauth.shared.errors import ValidationError


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str) -> User:
        fields = {"name": name, "email": email, "password": password}
        missing = [field for field, value in fields.items() if not value]
        if missing:
            raise ValidationError(context={"fields": missing})

        # Fast path only; the unique constraint in the store settles races.
        if self._users.find_by_email(email):
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        user = User(id=0, name=name, email=email, password_hash=hashed)
        return self._users.add(user)
