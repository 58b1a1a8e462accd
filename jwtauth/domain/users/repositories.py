# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionToken, TokenClaims, User, UserChanges


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def update(self, user_id: int, changes: UserChanges) -> User | None: ...
    def delete(self, user_id: int) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class SecretProvider(Protocol):
    def get_signing_secret(self) -> bytes: ...


class TokenService(Protocol):
    def issue(self, user_id: int) -> SessionToken: ...
    def validate(self, token: str) -> TokenClaims: ...
