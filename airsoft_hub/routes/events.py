import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from airsoft_hub.database import get_db
from airsoft_hub.core.dependencies import get_optional_email
from airsoft_hub.schemas.events import EventCreate, EventUpdate, EventResponse
from airsoft_hub.services import event_service
from airsoft_hub.services.storage_service import (
    StorageService,
    StorageError,
    ThumbnailRejected,
    get_storage_service,
)

router = APIRouter()
logger = logging.getLogger(__name__)

# Multipart field names as sent by the web client, snake_case accepted too
FORM_TEXT_FIELDS = {
    "description": ("description",),
    "detailed_description": ("detailedDescription", "detailed_description"),
    "location": ("location",),
    "date": ("date",),
    "category": ("category",),
    "facebook_link": ("facebookLink", "facebook_link"),
}


def _is_multipart(request: Request) -> bool:
    return "multipart/form-data" in request.headers.get("content-type", "")


def _bad_request(message: str, **extra) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": message, **extra})


def _require_name(value: Optional[str]) -> str:
    name = (value or "").strip()
    if not name:
        raise _bad_request("Name is required")
    return name


def _check_category(value: Optional[str]) -> str:
    try:
        return event_service.normalize_category(value)
    except ValueError as e:
        raise _bad_request("Invalid category", details=str(e))


def _form_text(form, key: str) -> Optional[str]:
    value = form.get(key)
    if value is not None and not isinstance(value, str):
        raise _bad_request("Invalid input", details=f"{key} must be a text field")
    return value


def _parse_coordinate(form, field: str) -> float:
    raw = _form_text(form, field)
    try:
        return float((raw or "").strip())
    except ValueError:
        raise _bad_request(f"Invalid {field}")


def _form_thumbnail(form) -> Optional[UploadFile]:
    value = form.get("thumbnail")
    # Browsers send an empty file part when nothing was selected
    if isinstance(value, UploadFile) and value.filename:
        return value
    return None


async def _read_form(request: Request) -> Dict[str, Any]:
    """
    Parse a multipart event form into column values plus an optional upload.
    name, lat and lng are always required; other text fields are included only when sent.
    """
    try:
        form = await request.form()
    except Exception as e:
        raise _bad_request("Invalid input", details=str(e))

    fields: Dict[str, Any] = {
        "name": _require_name(_form_text(form, "name")),
        "lat": _parse_coordinate(form, "lat"),
        "lng": _parse_coordinate(form, "lng"),
    }
    for column, keys in FORM_TEXT_FIELDS.items():
        for key in keys:
            if key in form:
                fields[column] = _form_text(form, key)
                break
    if "category" in fields:
        fields["category"] = _check_category(fields["category"])
    fields["_upload"] = _form_thumbnail(form)
    return fields


async def _read_json(request: Request, schema) -> Dict[str, Any]:
    """Parse a JSON body into the columns the client actually sent."""
    try:
        body = await request.json()
        payload = schema.model_validate(body)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise _bad_request(
            "Invalid input",
            details=str(e),
            content_type=request.headers.get("content-type", ""),
        )
    return payload.model_dump(exclude_unset=True)


async def _store_upload(storage: StorageService, upload: Optional[UploadFile]) -> Optional[str]:
    if upload is None:
        return None
    try:
        return await storage.save_thumbnail(upload)
    except ThumbnailRejected as e:
        logger.warning(f"Rejected thumbnail '{upload.filename}': {str(e)}")
        raise _bad_request(str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=List[EventResponse])
def list_events(db: Session = Depends(get_db)):
    """List all events ordered by date"""
    try:
        return event_service.list_events(db)
    except Exception as e:
        logger.error(f"Error fetching events: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch events"
        )


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: Request,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
    creator_email: Optional[str] = Depends(get_optional_email),
):
    """
    Create an event from a JSON body or a multipart form.
    A multipart form may carry a thumbnail image (max 5MB).
    """
    stored = None
    if _is_multipart(request):
        fields = await _read_form(request)
        stored = await _store_upload(storage, fields.pop("_upload"))
        if stored:
            fields["thumbnail"] = stored
    else:
        fields = await _read_json(request, EventCreate)
        fields["name"] = _require_name(fields.get("name"))
        fields["category"] = _check_category(fields.get("category"))

    try:
        event = event_service.create_event(db, fields, creator_email=creator_email)
        logger.info(f"Created event {event.id} '{event.name}'")
        return event
    except Exception as e:
        db.rollback()
        storage.delete_thumbnail(stored)
        logger.error(f"Error creating event: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create event"
        )


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    request: Request,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
):
    """
    Update an event by ID. Only the supplied columns are replaced;
    the thumbnail changes only when a new one is uploaded or given.
    """
    stored = None
    if _is_multipart(request):
        fields = await _read_form(request)
    else:
        fields = await _read_json(request, EventUpdate)
        if "name" in fields:
            fields["name"] = _require_name(fields["name"])
        if "category" in fields:
            fields["category"] = _check_category(fields["category"])
        if not fields.get("thumbnail"):
            fields.pop("thumbnail", None)

    if event_service.get_event(db, event_id) is None:
        logger.warning(f"Event {event_id} not found for update")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")

    if "_upload" in fields:
        stored = await _store_upload(storage, fields.pop("_upload"))
        if stored:
            fields["thumbnail"] = stored

    try:
        event = event_service.update_event(db, event_id, fields)
    except Exception as e:
        db.rollback()
        storage.delete_thumbnail(stored)
        logger.error(f"Error updating event {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update event", "details": str(e)}
        )

    # Removed between the lookup and the update
    if event is None:
        storage.delete_thumbnail(stored)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")

    logger.info(f"Event {event_id} updated: {', '.join(sorted(fields))}")
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: int, db: Session = Depends(get_db)):
    """Delete an event by ID. Deleting a missing event also succeeds."""
    try:
        deleted = event_service.delete_event(db, event_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting event {event_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete event"
        )
    if deleted:
        logger.info(f"Event {event_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
