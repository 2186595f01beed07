import pytest

from app.middleware.gateway import is_public_path, should_redirect
from app.schemas.auth import SessionUser
from app.utils.security import create_session_token

VALID_TOKEN = create_session_token(SessionUser(id=1, email="ada@skillswap.com", name="Ada"))


@pytest.mark.parametrize(
    "path",
    [
        "/",
        "/login",
        "/signup",
        "/forgot-password",
        "/api/users/explore",
        "/api",
        "/static/app.js",
        "/docs",
        "/openapi.json",
        "/health",
        "/favicon.ico",
        "/images/logo.png",
        "/icons/star.svg",
    ],
)
def test_public_and_passthrough_paths(path):
    assert is_public_path(path)
    assert not should_redirect("GET", path, None)


@pytest.mark.parametrize("path", ["/dashboard", "/messages/3", "/apiary", "/login/extra"])
def test_protected_pages_redirect_without_session(path):
    assert not is_public_path(path)
    assert should_redirect("GET", path, None)
    assert should_redirect("GET", path, "not-a-token")


def test_valid_session_passes_through():
    assert not should_redirect("GET", "/dashboard", VALID_TOKEN)


def test_non_navigation_methods_are_not_redirected():
    assert not should_redirect("POST", "/dashboard", None)
