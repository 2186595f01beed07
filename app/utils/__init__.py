__all__ = [
    "verify_password",
    "get_password_hash",
    "create_session_token",
    "verify_session_token",
    "set_session_cookie",
    "clear_session_cookie",
    "get_current_user",
    "get_optional_user",
    "is_email_enabled",
    "send_email",
    "haversine_km",
]


def __getattr__(name):
    if name in {
        "verify_password",
        "get_password_hash",
        "create_session_token",
        "verify_session_token",
        "set_session_cookie",
        "clear_session_cookie",
        "get_current_user",
        "get_optional_user",
    }:
        from . import security as _security
        return getattr(_security, name)
    if name in {"is_email_enabled", "send_email"}:
        from . import email as _email
        return getattr(_email, name)
    if name == "haversine_km":
        from . import geo as _geo
        return _geo.haversine_km
    raise AttributeError(f"module 'app.utils' has no attribute '{name}'")
