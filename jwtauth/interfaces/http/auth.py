# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import Request, Response, g, request

from jwtauth.domain.users.entities import SessionToken
from jwtauth.domain.users.exceptions import UnauthenticatedError
from jwtauth.domain.users.repositories import TokenService
from jwtauth.shared.config import SecurityConfig
from jwtauth.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


class AuthedRequest(Request):
    user_id: int


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def auth_required(tokens: TokenService, *, cookie_name: str) -> Callable[[F], F]:
    """Reject the request with 401 unless the session cookie holds a valid token."""

    def decorator(f: F) -> F:
        @wraps(f)
        def inner(*a, **kw):
            token = request.cookies.get(cookie_name, "")
            if not token:
                logger.warning(
                    f"No session cookie on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise UnauthenticatedError()

            claims = tokens.validate(token)

            request.user_id = claims.subject  # type: ignore[attr-defined]
            g.user_id = claims.subject
            logger.debug(f"Auth OK: user={claims.subject} {request.method} {request.path}")
            return f(*a, **kw)

        return cast(F, inner)

    return decorator


def set_session_cookie(response: Response, session: SessionToken, security: SecurityConfig) -> None:
    max_age = int((session.expires_at - session.issued_at).total_seconds())
    response.set_cookie(
        security.cookie_name,
        session.token,
        max_age=max_age,
        expires=session.expires_at,
        path="/",
        httponly=True,
        secure=security.cookie_secure,
        samesite=security.cookie_samesite,
    )


def clear_session_cookie(response: Response, security: SecurityConfig) -> None:
    # Overwrites the cookie with an empty value that expired at the epoch.
    response.delete_cookie(
        security.cookie_name,
        path="/",
        httponly=True,
        secure=security.cookie_secure,
        samesite=security.cookie_samesite,
    )
