from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import ApiError, AuthError, ErrorCode, TransportError
from ..http_client import CSRF_COOKIE_NAME
from ..models import LoginResponse, SessionCheck, User
from .base import BaseClient

CSRF_PATH = "/api/auth/csrf/"
LOGIN_PATH = "/api/auth/session/login/"
LOGOUT_PATH = "/api/auth/session/logout/"
CHECK_PATH = "/api/auth/session/check/"


@dataclass
class SessionAuthClient(BaseClient):
    @property
    def module(self) -> str:
        return "auth"

    def csrf(self) -> str | None:
        data = self._request("GET", CSRF_PATH, operation="csrf")
        token = data.get("csrfToken") if isinstance(data, dict) else None
        if token and self.http.session is not None and not self.http.csrf_token():
            self.http.session.cookies.set(CSRF_COOKIE_NAME, token)
        return token or self.http.csrf_token()

    def login(self, username: str, password: str) -> LoginResponse:
        self.csrf()
        payload = {"username": username, "password": password}
        data = self._request("POST", LOGIN_PATH, json_body=payload, operation="login")
        response = LoginResponse.model_validate(data or {})
        if not response.success:
            raise AuthError(
                code=ErrorCode.AUTHENTICATION_ERROR.value,
                message="Login was not accepted",
                status_code=401,
                raw_payload=data,
            )
        return response

    def logout(self) -> None:
        self.csrf()
        self._request("POST", LOGOUT_PATH, operation="logout")

    def check(self) -> SessionCheck:
        try:
            data = self._request("GET", CHECK_PATH, operation="check")
        except TransportError:
            raise
        except ApiError:
            return SessionCheck(authenticated=False)
        return SessionCheck.model_validate(data or {})

    def current_user(self) -> User:
        check = self.check()
        if not check.authenticated or check.user is None:
            raise AuthError(
                code=ErrorCode.AUTHENTICATION_ERROR.value,
                message="Not authenticated",
                status_code=401,
            )
        return check.user
