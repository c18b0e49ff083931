"""
Calendar Routes - Calendars, events and availability

Provides endpoints for:
- GET /api/calendar/list
- GET/POST /api/calendar/events
- GET/PATCH/DELETE /api/calendar/events/{event_id}
- POST /api/calendar/freebusy
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from mailhub.api.dependencies import get_calendar
from mailhub.api.models import CreateEventRequest, FreeBusyRequest, UpdateEventRequest
from mailhub.config import get_section
from mailhub.workspace.calendar import CalendarService


logger = logging.getLogger(__name__)

router = APIRouter()


def default_calendar_id() -> str:
    return get_section("google").get("default_calendar_id", "primary")


@router.get("/list")
async def list_calendars(calendar: CalendarService = Depends(get_calendar)):
    try:
        calendars = await calendar.list_calendars()
    except Exception as e:
        logger.error(f"Error fetching calendars: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch calendars")
    return [entry.to_dict() for entry in calendars]


@router.get("/events")
async def list_events(
    calendar_id: str | None = Query(None, alias="calendarId"),
    time_min: str | None = Query(None, alias="timeMin"),
    time_max: str | None = Query(None, alias="timeMax"),
    max_results: int | None = Query(None, alias="maxResults", ge=1, le=2500),
    calendar: CalendarService = Depends(get_calendar),
):
    """
    List events from today onward (or from timeMin).

    Recurring events come back as individual instances ordered by start.
    """
    try:
        page = await calendar.list_events(
            calendar_id=calendar_id or default_calendar_id(),
            time_min=time_min or None,
            time_max=time_max or None,
            max_results=max_results,
        )
    except Exception as e:
        logger.error(f"Error fetching calendar events: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch calendar events")
    return page.to_dict()


@router.post("/events")
async def create_event(request: CreateEventRequest, calendar: CalendarService = Depends(get_calendar)):
    try:
        event = await calendar.create_event(
            request.event_body(),
            calendar_id=request.calendar_id,
            conference_data_version=request.conference_data_version,
        )
    except Exception as e:
        logger.error(f"Error creating event: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create event")
    return event.to_dict()


@router.get("/events/{event_id}")
async def get_event(
    event_id: str,
    calendar_id: str | None = Query(None, alias="calendarId"),
    calendar: CalendarService = Depends(get_calendar),
):
    try:
        event = await calendar.get_event(event_id, calendar_id or default_calendar_id())
    except Exception as e:
        logger.error(f"Error fetching event {event_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch event")
    return event.to_dict()


@router.patch("/events/{event_id}")
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    calendar: CalendarService = Depends(get_calendar),
):
    """Patch an event; calendarId travels in the body."""
    try:
        event = await calendar.update_event(event_id, request.updates(), request.calendar_id)
    except Exception as e:
        logger.error(f"Error updating event {event_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update event")
    return event.to_dict()


@router.delete("/events/{event_id}")
async def delete_event(
    event_id: str,
    calendar_id: str | None = Query(None, alias="calendarId"),
    calendar: CalendarService = Depends(get_calendar),
):
    try:
        await calendar.delete_event(event_id, calendar_id or default_calendar_id())
    except Exception as e:
        logger.error(f"Error deleting event {event_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete event")
    return {"success": True}


@router.post("/freebusy")
async def find_free_slots(request: FreeBusyRequest, calendar: CalendarService = Depends(get_calendar)):
    """Find free slots of at least durationMinutes across the given calendars."""
    try:
        slots = await calendar.find_free_slots(
            request.time_min,
            request.time_max,
            calendar_ids=request.calendar_ids,
            duration_minutes=request.duration_minutes,
        )
    except Exception as e:
        logger.error(f"Error finding free slots: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to find free slots")
    return {"freeSlots": [slot.to_dict() for slot in slots]}
