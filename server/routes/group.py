"""Group API - cohesion across questions and the caller's alignment"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from database.store import SessionStore
from server.dependencies import get_optional_participant_id, get_store
from server.services.polling import group_summary

router = APIRouter(prefix="/api/v1/group", tags=["group"])


@router.get("")
async def get_group_stats(
    tags: Optional[List[str]] = Query(None),
    participant_id: Optional[str] = Depends(get_optional_participant_id),
    store: SessionStore = Depends(get_store),
):
    """Group statistics over the (optionally tag-filtered) question list.

    Returns {"group": null} until at least one question has a response.
    Alignment fields are null when the caller answered none of them.
    """
    return {"success": True, "group": group_summary(store, participant_id, tags)}
