import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from airsoft_hub.database import get_db
from airsoft_hub.models.user import User
from airsoft_hub.core.dependencies import get_current_user
from airsoft_hub.schemas.events import EventResponse, SavedEventResponse
from airsoft_hub.services import event_service, saved_events_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[EventResponse])
def list_saved_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Events bookmarked by the current user, ordered by date"""
    try:
        return saved_events_service.get_saved_events(db, current_user.id)
    except Exception as e:
        logger.error(f"Error fetching saved events for user {current_user.id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch saved events"
        )


@router.get("/ids", response_model=List[int])
def list_saved_event_ids(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return saved_events_service.get_saved_event_ids(db, current_user.id)
    except Exception as e:
        logger.error(f"Error fetching saved event ids for user {current_user.id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch saved events"
        )


@router.post("/{event_id}", response_model=SavedEventResponse, status_code=status.HTTP_201_CREATED)
def save_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Bookmark an event. Saving it again has no effect."""
    try:
        if event_service.get_event(db, event_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
        saved_events_service.save_event(db, current_user.id, event_id)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving event {event_id} for user {current_user.id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save event"
        )
    logger.info(f"User {current_user.id} saved event {event_id}")
    return {"event_id": event_id, "saved": True}


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def unsave_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        saved_events_service.unsave_event(db, current_user.id, event_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error removing saved event {event_id} for user {current_user.id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove saved event"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
