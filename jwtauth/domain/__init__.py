# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from jwtauth.shared.errors.base import DomainError

from .users.entities import SessionToken, TokenClaims, User, UserChanges

__all__ = [
    "DomainError",
    "SessionToken",
    "TokenClaims",
    "User",
    "UserChanges",
]
