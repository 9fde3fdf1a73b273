from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketadmin.context import AdminContext
from marketadmin.crud.dashboard import get_dashboard_stats
from marketadmin.database import get_db
from marketadmin.utils.security import get_current_admin

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


# ─────────────────────────────────────────
# GET /dashboard/stats  - Overview counts
# ─────────────────────────────────────────
@router.get("/stats")
def dashboard_stats(
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return get_dashboard_stats(db)
