"""
Tool: Calendar Service
Purpose: Calendar and event CRUD plus free-slot discovery via the Calendar API

Usage:
    from mailhub.workspace.calendar import CalendarService

    calendar = CalendarService(access_token)
    page = await calendar.list_events(time_max="2024-01-31T00:00:00Z")
    slots = await calendar.find_free_slots(
        "2024-01-01T09:00:00Z", "2024-01-01T17:00:00Z", duration_minutes=45
    )
"""

import logging
from datetime import datetime, timedelta
from typing import Any
from urllib.parse import quote

from mailhub.workspace.client import CALENDAR_API_BASE, GoogleApiClient
from mailhub.workspace.freebusy import find_free_slots, parse_instant, to_iso_z
from mailhub.workspace.models import (
    CalendarEvent,
    CalendarListEntry,
    EventPage,
    TimeSlot,
)


logger = logging.getLogger(__name__)


def start_of_today() -> datetime:
    """Local midnight today, timezone-aware."""
    return datetime.now().astimezone().replace(hour=0, minute=0, second=0, microsecond=0)


class CalendarService(GoogleApiClient):
    """Calendar wrapper bound to one access token."""

    def _events_url(self, calendar_id: str, event_id: str | None = None) -> str:
        url = f"{CALENDAR_API_BASE}/calendars/{quote(calendar_id, safe='')}/events"
        if event_id:
            url = f"{url}/{quote(event_id, safe='')}"
        return url

    async def list_calendars(self) -> list[CalendarListEntry]:
        url = f"{CALENDAR_API_BASE}/users/me/calendarList"
        data = await self._make_request("GET", url)
        return [CalendarListEntry.from_api(item) for item in data.get("items") or []]

    async def list_events(
        self,
        calendar_id: str = "primary",
        time_min: str | None = None,
        time_max: str | None = None,
        max_results: int | None = None,
        single_events: bool = True,
        order_by: str = "startTime",
    ) -> EventPage:
        """
        List events in a calendar.

        Recurring events are expanded into instances and ordered by start
        time unless told otherwise. time_min defaults to local midnight.
        """
        params = {
            "timeMin": time_min or to_iso_z(start_of_today()),
            "timeMax": time_max,
            "maxResults": max_results or 50,
            "singleEvents": single_events,
            "orderBy": order_by,
        }
        data = await self._make_request("GET", self._events_url(calendar_id), params=params)

        return EventPage(
            events=[CalendarEvent.from_api(item) for item in data.get("items") or []],
            next_page_token=data.get("nextPageToken"),
        )

    async def get_event(self, event_id: str, calendar_id: str = "primary") -> CalendarEvent:
        data = await self._make_request("GET", self._events_url(calendar_id, event_id))
        return CalendarEvent.from_api(data)

    async def create_event(
        self,
        event: dict[str, Any],
        calendar_id: str = "primary",
        conference_data_version: int = 0,
    ) -> CalendarEvent:
        """
        Create an event.

        Args:
            event: Event body (summary, start, end and optional description,
                location, attendees, recurrence) in Calendar API shape
            calendar_id: Target calendar
            conference_data_version: 1 to let Calendar attach a Meet link
        """
        params = {"conferenceDataVersion": conference_data_version}
        data = await self._make_request(
            "POST", self._events_url(calendar_id), data=event, params=params
        )
        logger.info(f"Created event {data.get('id')} in {calendar_id}")
        return CalendarEvent.from_api(data)

    async def update_event(
        self,
        event_id: str,
        updates: dict[str, Any],
        calendar_id: str = "primary",
    ) -> CalendarEvent:
        """Patch an event. Only the given fields change."""
        data = await self._make_request(
            "PATCH", self._events_url(calendar_id, event_id), data=updates
        )
        return CalendarEvent.from_api(data)

    async def delete_event(self, event_id: str, calendar_id: str = "primary") -> None:
        await self._make_request("DELETE", self._events_url(calendar_id, event_id))

    async def find_free_slots(
        self,
        time_min: str,
        time_max: str,
        calendar_ids: list[str] | None = None,
        duration_minutes: int = 30,
    ) -> list[TimeSlot]:
        """
        Query free/busy for the calendars and return gaps in the window.

        Busy blocks from all calendars are pooled before the sweep.
        """
        calendar_ids = calendar_ids or ["primary"]

        url = f"{CALENDAR_API_BASE}/freeBusy"
        data = {
            "timeMin": time_min,
            "timeMax": time_max,
            "items": [{"id": calendar_id} for calendar_id in calendar_ids],
        }
        result = await self._make_request("POST", url, data=data)

        calendars = result.get("calendars") or {}
        busy = []
        for calendar_id in calendar_ids:
            for block in (calendars.get(calendar_id) or {}).get("busy") or []:
                if block.get("start") and block.get("end"):
                    busy.append((parse_instant(block["start"]), parse_instant(block["end"])))

        slots = find_free_slots(
            busy,
            parse_instant(time_min),
            parse_instant(time_max),
            timedelta(minutes=duration_minutes),
        )
        return [TimeSlot(start=to_iso_z(start), end=to_iso_z(end)) for start, end in slots]
