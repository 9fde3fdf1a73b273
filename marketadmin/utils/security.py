from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from marketadmin.config import settings
from marketadmin.context import AdminContext
from marketadmin.database import get_db, utcnow
from marketadmin.models.admin_user import AdminUser
from marketadmin.permissions import Permission


# ==========================
# AUTH CONFIG
# ==========================

bearer_scheme = HTTPBearer(auto_error=False)


# ==========================
# JWT TOKEN
# ==========================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Mint a token the way the auth provider does. Used for local development and tests."""
    to_encode = data.copy()

    if expires_delta:
        expire = utcnow() + expires_delta
    else:
        expire = utcnow() + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

    return encoded_jwt


def decode_subject(token: str) -> Optional[str]:
    """Return the ``sub`` claim of a valid token, or None."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    return str(subject) if subject else None


# ==========================
# AUTH HELPERS
# ==========================

def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None


def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> AdminContext:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception

    user_id = decode_subject(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    admin = db.query(AdminUser).filter(
        AdminUser.user_id == user_id,
        AdminUser.is_active.is_(True)
    ).first()

    if admin is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")

    return AdminContext.from_admin_user(admin, ip_address=client_ip(request))


def require_permission(permission: Permission):
    """Dependency factory: the current admin, if their role grants ``permission``."""

    def dependency(admin: AdminContext = Depends(get_current_admin)) -> AdminContext:
        if not admin.can(permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing permission: {permission.value}",
            )
        return admin

    return dependency
