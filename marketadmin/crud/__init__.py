# marketadmin/crud/__init__.py
# Read-side queries: filtered, paginated lists and detail fetchers.

from . import audit, dashboard, feedback, listings, reports, users

__all__ = ["audit", "dashboard", "feedback", "listings", "reports", "users"]
