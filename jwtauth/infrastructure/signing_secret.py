# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signing secret sourced from the configuration snapshot."""

from __future__ import annotations

from jwtauth.domain.users.repositories import SecretProvider
from jwtauth.shared.config import AppConfig
from jwtauth.shared.errors import ConfigMissingError

SECRET_SETTING = "JWT_SECRET_KEY"


class ConfigSecretProvider(SecretProvider):
    def __init__(self, config: AppConfig) -> None:
        self._secret = config.jwt_secret_key

    def get_signing_secret(self) -> bytes:
        if not self._secret or not self._secret.strip():
            raise ConfigMissingError(SECRET_SETTING)
        return self._secret.encode("utf-8")
