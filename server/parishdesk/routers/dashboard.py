from fastapi import APIRouter, Depends

from parishdesk.auth.deps import get_current_user
from parishdesk.core.timezone import local_now, local_timezone
from parishdesk.schemas.dashboard import DashboardSummary
from parishdesk.services.dashboard import build_summary
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(
    store: DocumentStore = Depends(get_store),
    user: SessionUser = Depends(get_current_user),
) -> DashboardSummary:
    return build_summary(store, user, now=local_now(), tz=local_timezone())
