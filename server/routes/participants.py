"""Participants API - anonymous session identifiers"""

from fastapi import APIRouter, status

from config import get_logger
from database.id_generation import generate_participant_id

logger = get_logger(__name__).bind(component="participants_api")

router = APIRouter(prefix="/api/v1/participants", tags=["participants"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_participant():
    """Issue a new anonymous participant id.

    Clients keep the id for the session and send it back in the
    X-Participant-ID header. It is never tied to an account.
    """
    participant_id = generate_participant_id()
    logger.info("issued participant id")
    return {"success": True, "participant_id": participant_id}
