# marketadmin/api/__init__.py
# This file makes the api directory a Python package.

from . import admins
from . import audit_log
from . import auth
from . import dashboard
from . import feedback
from . import listings
from . import reports
from . import system
from . import users

__all__ = [
    "auth",
    "dashboard",
    "users",
    "listings",
    "reports",
    "feedback",
    "audit_log",
    "admins",
    "system",
]
