# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from jwtauth.application.use_cases.users.delete_account import DeleteAccountUseCase
from jwtauth.application.use_cases.users.get_profile import GetProfileUseCase
from jwtauth.application.use_cases.users.update_profile import UpdateProfileUseCase
from jwtauth.domain.users.repositories import TokenService
from jwtauth.interfaces.http.auth import auth_required, authed_request, clear_session_cookie
from jwtauth.interfaces.http.dto.auth import MessageDTO, UserDTO
from jwtauth.interfaces.http.dto.user import UpdateProfileRequestDTO, UpdateProfileResponseDTO
from jwtauth.shared.config import SecurityConfig
from jwtauth.shared.errors import ValidationError as InvalidInputError
from jwtauth.shared.errors.validation import raise_validation_error
from jwtauth.shared.logging import logger


class UserController:
    def __init__(
        self,
        *,
        tokens: TokenService,
        get_profile_use_case: GetProfileUseCase,
        update_profile_use_case: UpdateProfileUseCase,
        delete_account_use_case: DeleteAccountUseCase,
        security: SecurityConfig,
    ) -> None:
        self._tokens = tokens
        self._get_profile_use_case = get_profile_use_case
        self._update_profile_use_case = update_profile_use_case
        self._delete_account_use_case = delete_account_use_case
        self._security = security

    def get_profile(self) -> tuple[Response, int]:
        user = self._get_profile_use_case.execute(authed_request().user_id)
        payload = UserDTO(id=user.id, name=user.name, email=user.email).model_dump()
        return jsonify(payload), HTTPStatus.OK

    def update_profile(self) -> tuple[Response, int]:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidInputError(context={"fields": ["body"]})
        try:
            dto = UpdateProfileRequestDTO.model_validate(data)
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = authed_request().user_id
        user = self._update_profile_use_case.execute(
            user_id,
            name=dto.name,
            email=dto.email,
            password=dto.password,
        )

        payload = UpdateProfileResponseDTO(name=user.name, email=user.email).model_dump()
        logger.info(
            f"user.update: ok user_id={user_id} "
            f"fields={sorted(k for k, v in dto.model_dump().items() if v)}"
        )
        return jsonify(payload), HTTPStatus.OK

    def delete_account(self) -> tuple[Response, int]:
        user_id = authed_request().user_id
        self._delete_account_use_case.execute(user_id)

        response = jsonify(MessageDTO(message="User profile deleted successfully").model_dump())
        clear_session_cookie(response, self._security)
        logger.info(f"user.delete: ok user_id={user_id}")
        return response, HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        authenticated = auth_required(self._tokens, cookie_name=self._security.cookie_name)

        bp = Blueprint("user", __name__, url_prefix="/api")
        bp.add_url_rule(
            "/user", "get_profile", view_func=authenticated(self.get_profile), methods=["GET"]
        )
        bp.add_url_rule(
            "/user", "update_profile", view_func=authenticated(self.update_profile), methods=["PUT"]
        )
        bp.add_url_rule(
            "/user", "delete_account", view_func=authenticated(self.delete_account), methods=["DELETE"]
        )
        return bp
