# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from jwtauth.infrastructure.container import Container
from jwtauth.infrastructure.db import init_db
from jwtauth.shared.config import AppConfig, load_config
from jwtauth.shared.logging import logger, setup_logging
from jwtauth.shared.middleware.error_handler import configure_error_handling
from jwtauth.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    setup_logging(config.log_level, log_file=config.log_file)

    # Fail at startup rather than on the first login.
    container.secret_provider.get_signing_secret()
    init_db(container.engine)

    app = Flask(__name__)
    app.extensions["jwtauth.container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    origins = config.security.allowed_origins
    cors_kwargs: dict[str, object] = {"resources": {r"/api/*": {"origins": origins}}}
    if any(o != "*" for o in origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.user_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host=config.server_host, port=config.server_port, debug=False)


if __name__ == "__main__":
    main()
