from fastapi import APIRouter, Depends

from marketadmin.config import settings
from marketadmin.context import AdminContext
from marketadmin.permissions import Permission
from marketadmin.utils.security import require_permission

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("")
def read_settings(admin: AdminContext = Depends(require_permission(Permission.SYSTEM_SETTINGS))):
    """Non-secret runtime configuration."""
    return settings.public_view()
