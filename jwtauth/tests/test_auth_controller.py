from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from flask import Flask

from jwtauth.application.services.token_service import JwtTokenService
from jwtauth.domain.users.entities import SessionToken, User
from jwtauth.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from jwtauth.interfaces.http.controllers.auth_controller import AuthController
from jwtauth.interfaces.http.controllers.user_controller import UserController
from jwtauth.shared.config import SecurityConfig
from jwtauth.shared.errors import StoreError
from jwtauth.shared.middleware.error_handler import configure_error_handling

ANN = User(id=1, name="Ann", email="ann@x.com", password_hash="hash")


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


@pytest.fixture()
def security() -> SecurityConfig:
    return SecurityConfig()


def _set_cookies(response) -> list[str]:
    return response.headers.getlist("Set-Cookie")


def _register_auth(flask_app: Flask, security: SecurityConfig, **use_cases) -> None:
    controller = AuthController(
        register_use_case=use_cases.get("register", MagicMock()),
        login_use_case=use_cases.get("login", MagicMock()),
        security=security,
    )
    flask_app.register_blueprint(controller.as_blueprint())


def test_register_returns_201_without_hash(flask_app: Flask, security: SecurityConfig) -> None:
    register = MagicMock()
    register.execute.return_value = ANN
    _register_auth(flask_app, security, register=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"name": "Ann", "email": "ann@x.com", "password": "pw123"}
        )

    assert response.status_code == 201
    assert response.get_json() == {
        "message": "User created successfully",
        "user": {"id": 1, "name": "Ann", "email": "ann@x.com"},
    }
    register.execute.assert_called_once_with("Ann", "ann@x.com", "pw123")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"name": "Ann", "email": "ann@x.com"},
        {"name": "", "email": "ann@x.com", "password": "pw"},
        {"name": "Ann", "email": 5, "password": "pw"},
    ],
)
def test_register_invalid_payload_returns_400(
    flask_app: Flask, security: SecurityConfig, body: dict
) -> None:
    register = MagicMock()
    _register_auth(flask_app, security, register=register)

    with flask_app.test_client() as client:
        response = client.post("/api/register", json=body)

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_input"
    register.execute.assert_not_called()


def test_register_duplicate_email_returns_400(flask_app: Flask, security: SecurityConfig) -> None:
    register = MagicMock()
    register.execute.side_effect = UserAlreadyExistsError()
    _register_auth(flask_app, security, register=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"name": "Ann", "email": "ann@x.com", "password": "pw123"}
        )

    assert response.status_code == 400
    assert response.get_json() == {"error": "email_in_use"}


def test_register_store_failure_is_opaque_500(flask_app: Flask, security: SecurityConfig) -> None:
    register = MagicMock()
    register.execute.side_effect = StoreError()
    _register_auth(flask_app, security, register=register)

    with flask_app.test_client() as client:
        response = client.post(
            "/api/register", json={"name": "Ann", "email": "ann@x.com", "password": "pw123"}
        )

    assert response.status_code == 500
    assert response.get_json() == {"error": "store_error"}


def test_login_sets_http_only_session_cookie(flask_app: Flask, security: SecurityConfig) -> None:
    issued_at = datetime.now(UTC).replace(microsecond=0)
    session = SessionToken(
        user_id=1,
        token="header.payload.signature",
        issued_at=issued_at,
        expires_at=issued_at + timedelta(hours=24),
    )
    login = MagicMock()
    login.execute.return_value = (ANN, session)
    _register_auth(flask_app, security, login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "ann@x.com", "password": "pw123"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "success", "name": "Ann", "email": "ann@x.com"}
    (cookie,) = _set_cookies(response)
    assert cookie.startswith("jwt=header.payload.signature;")
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie
    assert "Max-Age=86400" in cookie
    assert "Secure" not in cookie


def test_login_secure_flag_follows_config(flask_app: Flask) -> None:
    issued_at = datetime.now(UTC)
    login = MagicMock()
    login.execute.return_value = (
        ANN,
        SessionToken(1, "tok", issued_at, issued_at + timedelta(hours=24)),
    )
    _register_auth(flask_app, SecurityConfig(COOKIE_SECURE="true"), login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "ann@x.com", "password": "pw123"})

    assert "Secure" in _set_cookies(response)[0]


def test_login_invalid_credentials_returns_401(flask_app: Flask, security: SecurityConfig) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    _register_auth(flask_app, security, login=login)

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "ann@x.com", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}
    assert not _set_cookies(response)


def test_login_missing_fields_returns_400(flask_app: Flask, security: SecurityConfig) -> None:
    _register_auth(flask_app, security)

    with flask_app.test_client() as client:
        response = client.post("/api/login", json={"email": "ann@x.com", "password": ""})

    assert response.status_code == 400


def test_logout_clears_cookie_without_auth(flask_app: Flask, security: SecurityConfig) -> None:
    _register_auth(flask_app, security)

    with flask_app.test_client() as client:
        response = client.post("/api/logout")

    assert response.status_code == 200
    assert response.get_json() == {"message": "success"}
    (cookie,) = _set_cookies(response)
    assert cookie.startswith("jwt=;")
    assert "Max-Age=0" in cookie
    assert "Expires=Thu, 01 Jan 1970 00:00:00 GMT" in cookie
    assert "HttpOnly" in cookie


def _register_user(
    flask_app: Flask, security: SecurityConfig, token_service: JwtTokenService, **use_cases
) -> None:
    controller = UserController(
        tokens=token_service,
        get_profile_use_case=use_cases.get("get_profile", MagicMock()),
        update_profile_use_case=use_cases.get("update_profile", MagicMock()),
        delete_account_use_case=use_cases.get("delete_account", MagicMock()),
        security=security,
    )
    flask_app.register_blueprint(controller.as_blueprint())


@pytest.mark.parametrize(
    ("method", "cookie"),
    [
        ("get", None),
        ("put", None),
        ("delete", None),
        ("get", "not-a-jwt"),
        ("delete", "not-a-jwt"),
    ],
)
def test_user_routes_require_valid_cookie(
    flask_app: Flask,
    security: SecurityConfig,
    token_service: JwtTokenService,
    method: str,
    cookie: str | None,
) -> None:
    get_profile, update_profile, delete_account = MagicMock(), MagicMock(), MagicMock()
    _register_user(
        flask_app,
        security,
        token_service,
        get_profile=get_profile,
        update_profile=update_profile,
        delete_account=delete_account,
    )

    with flask_app.test_client() as client:
        if cookie is not None:
            client.set_cookie("jwt", cookie)
        response = getattr(client, method)("/api/user", json={"name": "x"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthenticated"}
    get_profile.execute.assert_not_called()
    update_profile.execute.assert_not_called()
    delete_account.execute.assert_not_called()


def test_get_profile_uses_token_subject(
    flask_app: Flask, security: SecurityConfig, token_service: JwtTokenService
) -> None:
    get_profile = MagicMock()
    get_profile.execute.return_value = ANN
    _register_user(flask_app, security, token_service, get_profile=get_profile)

    with flask_app.test_client() as client:
        client.set_cookie("jwt", token_service.issue(1).token)
        response = client.get("/api/user")

    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "name": "Ann", "email": "ann@x.com"}
    get_profile.execute.assert_called_once_with(1)


@pytest.mark.parametrize("body", [["name"], "text", {"name": ""}, {"email": ""}, {"name": 3}])
def test_update_profile_invalid_body_returns_400(
    flask_app: Flask, security: SecurityConfig, token_service: JwtTokenService, body
) -> None:
    update_profile = MagicMock()
    _register_user(flask_app, security, token_service, update_profile=update_profile)

    with flask_app.test_client() as client:
        client.set_cookie("jwt", token_service.issue(1).token)
        response = client.put("/api/user", json=body)

    assert response.status_code == 400
    update_profile.execute.assert_not_called()


def test_update_profile_passes_only_given_fields(
    flask_app: Flask, security: SecurityConfig, token_service: JwtTokenService
) -> None:
    update_profile = MagicMock()
    update_profile.execute.return_value = User(1, "Annie", "ann@x.com", "hash")
    _register_user(flask_app, security, token_service, update_profile=update_profile)

    with flask_app.test_client() as client:
        client.set_cookie("jwt", token_service.issue(1).token)
        response = client.put("/api/user", json={"name": "Annie", "password": ""})

    assert response.status_code == 200
    assert response.get_json() == {
        "message": "Profile updated successfully",
        "name": "Annie",
        "email": "ann@x.com",
    }
    update_profile.execute.assert_called_once_with(1, name="Annie", email=None, password="")


def test_delete_account_clears_cookie(
    flask_app: Flask, security: SecurityConfig, token_service: JwtTokenService
) -> None:
    delete_account = MagicMock()
    _register_user(flask_app, security, token_service, delete_account=delete_account)

    with flask_app.test_client() as client:
        client.set_cookie("jwt", token_service.issue(3).token)
        response = client.delete("/api/user")

    assert response.status_code == 200
    assert response.get_json() == {"message": "User profile deleted successfully"}
    assert "Max-Age=0" in _set_cookies(response)[0]
    delete_account.execute.assert_called_once_with(3)
