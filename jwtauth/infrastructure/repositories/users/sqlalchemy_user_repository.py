# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jwtauth.domain.users.entities import User as DomainUser
from jwtauth.domain.users.entities import UserChanges
from jwtauth.domain.users.exceptions import UserAlreadyExistsError
from jwtauth.domain.users.repositories import UserRepository
from jwtauth.infrastructure.db.models import User
from jwtauth.infrastructure.unit_of_work import unit_of_work_scope
from jwtauth.shared.errors import StoreError
from jwtauth.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
    )


class SqlAlchemyUserRepository(UserRepository):
    """Account store backed by the ``users`` table.

    Email uniqueness is left to the database constraint so concurrent
    writers cannot both succeed; a violation surfaces as
    ``UserAlreadyExistsError``. Any other driver error becomes ``StoreError``.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.scalars(select(User).where(User.email == email)).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.exception("users.find_by_email: query failed")
            raise StoreError() from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.exception(f"users.find_by_id: query failed user_id={user_id}")
            raise StoreError() from exc

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(name=user.name, email=user.email, password_hash=user.password_hash)
                session.add(row)
                session.flush()
                persisted = _to_domain(row)
        except IntegrityError as exc:
            logger.info("users.add: email already registered")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.exception("users.add: insert failed")
            raise StoreError() from exc

        logger.info(f"users.add: created user_id={persisted.id}")
        return persisted

    def update(self, user_id: int, changes: UserChanges) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                if row is None:
                    return None
                if changes.name is not None:
                    row.name = changes.name
                if changes.email is not None:
                    row.email = changes.email
                if changes.password_hash is not None:
                    row.password_hash = changes.password_hash
                session.flush()
                updated = _to_domain(row)
        except IntegrityError as exc:
            logger.info(f"users.update: email collision for user_id={user_id}")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.exception(f"users.update: failed user_id={user_id}")
            raise StoreError() from exc

        return updated

    def delete(self, user_id: int) -> bool:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                result = session.execute(delete(User).where(User.id == user_id))
                deleted = bool(result.rowcount)
        except SQLAlchemyError as exc:
            logger.exception(f"users.delete: failed user_id={user_id}")
            raise StoreError() from exc

        logger.info(f"users.delete: user_id={user_id} deleted={deleted}")
        return deleted
