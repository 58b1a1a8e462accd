# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from jwtauth.application.use_cases.users.login_user import LoginUserUseCase
from jwtauth.application.use_cases.users.register_user import RegisterUserUseCase
from jwtauth.interfaces.http.auth import clear_session_cookie, set_session_cookie
from jwtauth.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    MessageDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
    UserDTO,
)
from jwtauth.shared.config import SecurityConfig
from jwtauth.shared.errors.validation import raise_validation_error
from jwtauth.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._security = security

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.name, dto.email, dto.password)

        payload = RegisterResponseDTO(
            user=UserDTO(id=user.id, name=user.name, email=user.email)
        ).model_dump()
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(payload), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, session = self._login_use_case.execute(dto.email, dto.password)

        payload = LoginResponseDTO(name=user.name, email=user.email).model_dump()
        response = jsonify(payload)
        set_session_cookie(response, session, self._security)
        logger.info(f"auth.login: ok user_id={user.id} exp={session.expires_at.isoformat()}")
        return response, HTTPStatus.OK

    def logout(self) -> tuple[Response, int]:
        response = jsonify(MessageDTO().model_dump())
        clear_session_cookie(response, self._security)
        logger.info("auth.logout: ok")
        return response, HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
