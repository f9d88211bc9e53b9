from fastapi import APIRouter, Depends

from parishdesk.auth.deps import get_current_user
from parishdesk.schemas.browse import AnnouncementFeed
from parishdesk.services.announcements import public_feed
from parishdesk.services.session import SessionUser
from parishdesk.stores import DocumentStore, get_store

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("/feed", response_model=AnnouncementFeed)
def announcement_feed(
    store: DocumentStore = Depends(get_store),
    _: SessionUser = Depends(get_current_user),
) -> AnnouncementFeed:
    return AnnouncementFeed(**public_feed(store))
