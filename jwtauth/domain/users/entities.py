# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str

    def public_view(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}


@dataclass(slots=True, frozen=True)
class UserChanges:
    """Partial profile update; ``None`` means the field is left untouched."""

    name: str | None = None
    email: str | None = None
    password_hash: str | None = None


@dataclass(slots=True, frozen=True)
class SessionToken:

    user_id: int
    token: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:

    subject: int
    issued_at: datetime
    expires_at: datetime
