from fastapi import APIRouter, Depends

from parishdesk.auth.deps import get_current_user
from parishdesk.schemas.auth import WhoAmIResponse
from parishdesk.services.priests import find_priest_for_user
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/whoami", response_model=WhoAmIResponse)
def whoami(
    user: SessionUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_store),
) -> WhoAmIResponse:
    priest = find_priest_for_user(store, user)
    return WhoAmIResponse(
        id=user.id,
        name=user.name,
        is_super_admin=user.is_super_admin,
        priest_id=priest["id"] if priest else None,
    )
