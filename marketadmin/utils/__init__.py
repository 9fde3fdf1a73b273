__all__ = [
    "create_access_token",
    "decode_subject",
    "get_current_admin",
    "require_permission",
    "bearer_scheme",
    "is_email_enabled",
    "send_email",
]


def __getattr__(name):
    if name in {
        "create_access_token",
        "decode_subject",
        "get_current_admin",
        "require_permission",
        "bearer_scheme",
    }:
        from . import security as _security
        return getattr(_security, name)
    if name in {"is_email_enabled", "send_email"}:
        from . import email as _email
        return getattr(_email, name)
    raise AttributeError(f"module 'marketadmin.utils' has no attribute '{name}'")
