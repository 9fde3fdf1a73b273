from fastapi import APIRouter, Depends

from marketadmin.context import AdminContext
from marketadmin.schemas.admin import AdminMe
from marketadmin.utils.security import get_current_admin

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/me", response_model=AdminMe)
def read_current_admin(admin: AdminContext = Depends(get_current_admin)):
    """Who is calling and what they may do. The dashboard uses this to hide actions."""
    return AdminMe(
        admin_id=admin.admin_id,
        user_id=admin.user_id,
        role=admin.role,
        permissions=sorted(admin.permissions, key=lambda p: p.value),
    )
