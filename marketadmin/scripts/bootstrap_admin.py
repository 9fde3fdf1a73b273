"""Create the first super_admin for an existing auth-provider user.

    ENABLE_ADMIN_BOOTSTRAP=true \
    ADMIN_BOOTSTRAP_CONFIRM=CREATE-FIRST-ADMIN \
    ADMIN_USER_ID=<auth user id> \
    python -m marketadmin.scripts.bootstrap_admin
"""

import os
import sys
from typing import Optional

from marketadmin import models
from marketadmin.database import SessionLocal


CONFIRM_PHRASE = "CREATE-FIRST-ADMIN"


def _is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def _required_env(key: str) -> str:
    value = os.getenv(key, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def bootstrap_admin(session_factory=SessionLocal) -> int:
    try:
        if not _is_truthy(os.getenv("ENABLE_ADMIN_BOOTSTRAP")):
            raise ValueError(
                "Bootstrap disabled. Set ENABLE_ADMIN_BOOTSTRAP=true to run."
            )
        confirm = _required_env("ADMIN_BOOTSTRAP_CONFIRM")
        if confirm != CONFIRM_PHRASE:
            raise ValueError(
                f"Invalid ADMIN_BOOTSTRAP_CONFIRM. Expected exact phrase: {CONFIRM_PHRASE}"
            )

        user_id = _required_env("ADMIN_USER_ID")
        if len(user_id) > 36:
            raise ValueError("ADMIN_USER_ID must be at most 36 characters.")

        db = session_factory()
        try:
            existing_super_admins = db.query(models.AdminUser).filter(
                models.AdminUser.role == models.AdminRole.SUPER_ADMIN
            ).count()
            if existing_super_admins > 0:
                raise ValueError(
                    "Admin bootstrap blocked: a super_admin already exists. "
                    "Add further admins through POST /admins."
                )

            existing = db.query(models.AdminUser).filter(
                models.AdminUser.user_id == user_id
            ).first()
            if existing:
                raise ValueError("ADMIN_USER_ID already has an admin account.")

            admin = models.AdminUser(
                user_id=user_id,
                role=models.AdminRole.SUPER_ADMIN,
                is_active=True,
            )
            db.add(admin)
            db.commit()
            print(f"Super admin created successfully for user {user_id} (admin id {admin.id})")
            return 0
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    except Exception as exc:
        print(f"Admin bootstrap failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(bootstrap_admin())
