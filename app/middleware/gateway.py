"""Redirect signed-out browser navigations to the login page."""

from typing import Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.utils.security import verify_session_token

PUBLIC_PATHS = {"/", "/login", "/signup", "/forgot-password"}
PASSTHROUGH_PREFIXES = ("/api", "/static", "/docs", "/redoc", "/openapi.json", "/health")
PASSTHROUGH_SUFFIXES = ("favicon.ico", ".png", ".svg")
LOGIN_PATH = "/login"


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS:
        return True
    if path.endswith(PASSTHROUGH_SUFFIXES):
        return True
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PASSTHROUGH_PREFIXES)


def should_redirect(method: str, path: str, token: Optional[str]) -> bool:
    """True for a page navigation that lacks a valid session cookie."""
    if method not in ("GET", "HEAD") or is_public_path(path):
        return False
    return verify_session_token(token) is None


class GatewayMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if should_redirect(request.method, request.url.path, token):
            return RedirectResponse(url=LOGIN_PATH, status_code=307)
        return await call_next(request)
