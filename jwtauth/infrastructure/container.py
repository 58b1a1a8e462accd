# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from jwtauth.application.services.password_hashing import WerkzeugPasswordHasher
from jwtauth.application.services.token_service import JwtTokenService
from jwtauth.application.use_cases.users.delete_account import DeleteAccountUseCase
from jwtauth.application.use_cases.users.get_profile import GetProfileUseCase
from jwtauth.application.use_cases.users.login_user import LoginUserUseCase
from jwtauth.application.use_cases.users.register_user import RegisterUserUseCase
from jwtauth.application.use_cases.users.update_profile import UpdateProfileUseCase
from jwtauth.infrastructure.db import build_engine, build_session_factory
from jwtauth.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from jwtauth.infrastructure.signing_secret import ConfigSecretProvider
from jwtauth.interfaces.http.controllers.auth_controller import AuthController
from jwtauth.interfaces.http.controllers.user_controller import UserController
from jwtauth.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def secret_provider(self) -> ConfigSecretProvider:
        return ConfigSecretProvider(self.config)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.password_hash_method)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self.secret_provider,
            lifetime=timedelta(seconds=self.config.token_ttl_seconds),
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def delete_account_use_case(self) -> DeleteAccountUseCase:
        return DeleteAccountUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            security=self.config.security,
        )

    @cached_property
    def user_controller(self) -> UserController:
        return UserController(
            tokens=self.token_service,
            get_profile_use_case=self.get_profile_use_case,
            update_profile_use_case=self.update_profile_use_case,
            delete_account_use_case=self.delete_account_use_case,
            security=self.config.security,
        )
