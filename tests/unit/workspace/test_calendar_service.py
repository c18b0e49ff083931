"""Tests for mailhub/workspace/calendar.py - CalendarService"""

from unittest.mock import AsyncMock

import pytest

from mailhub.workspace.calendar import CalendarService, start_of_today
from mailhub.workspace.client import CALENDAR_API_BASE


@pytest.fixture
def calendar():
    service = CalendarService("token-123")
    service._make_request = AsyncMock()
    return service


class TestListEvents:
    @pytest.mark.asyncio
    async def test_defaults(self, calendar):
        calendar._make_request.return_value = {
            "items": [{"id": "ev1", "summary": "Standup", "start": {"dateTime": "2024-01-01T09:00:00Z"}}],
            "nextPageToken": "p2",
        }

        page = await calendar.list_events()

        method, url = calendar._make_request.await_args.args
        params = calendar._make_request.await_args.kwargs["params"]
        assert (method, url) == ("GET", f"{CALENDAR_API_BASE}/calendars/primary/events")
        assert params["singleEvents"] is True
        assert params["orderBy"] == "startTime"
        assert params["maxResults"] == 50
        assert params["timeMin"].endswith("Z")
        assert params["timeMax"] is None

        assert page.events[0].summary == "Standup"
        assert page.next_page_token == "p2"

    @pytest.mark.asyncio
    async def test_calendar_id_is_url_quoted(self, calendar):
        calendar._make_request.return_value = {}

        await calendar.list_events(calendar_id="team@group.calendar.google.com", time_min="2024-01-01T00:00:00Z")

        url = calendar._make_request.await_args.args[1]
        assert url == f"{CALENDAR_API_BASE}/calendars/team%40group.calendar.google.com/events"
        assert calendar._make_request.await_args.kwargs["params"]["timeMin"] == "2024-01-01T00:00:00Z"


class TestEventCrud:
    @pytest.mark.asyncio
    async def test_create_passes_conference_version(self, calendar):
        calendar._make_request.return_value = {"id": "ev9", "summary": "Kickoff"}
        body = {
            "summary": "Kickoff",
            "start": {"dateTime": "2024-01-01T09:00:00Z"},
            "end": {"dateTime": "2024-01-01T10:00:00Z"},
        }

        event = await calendar.create_event(body, conference_data_version=1)

        assert event.id == "ev9"
        call = calendar._make_request.await_args
        assert call.args[0] == "POST"
        assert call.kwargs["data"] == body
        assert call.kwargs["params"] == {"conferenceDataVersion": 1}

    @pytest.mark.asyncio
    async def test_update_uses_patch(self, calendar):
        calendar._make_request.return_value = {"id": "ev1", "summary": "Renamed"}

        event = await calendar.update_event("ev1", {"summary": "Renamed"})

        call = calendar._make_request.await_args
        assert call.args == ("PATCH", f"{CALENDAR_API_BASE}/calendars/primary/events/ev1")
        assert call.kwargs["data"] == {"summary": "Renamed"}
        assert event.summary == "Renamed"

    @pytest.mark.asyncio
    async def test_delete(self, calendar):
        calendar._make_request.return_value = {}

        await calendar.delete_event("ev1", "work")

        calendar._make_request.assert_awaited_once_with(
            "DELETE", f"{CALENDAR_API_BASE}/calendars/work/events/ev1"
        )

    @pytest.mark.asyncio
    async def test_list_calendars(self, calendar):
        calendar._make_request.return_value = {
            "items": [{"id": "primary@example.com", "summary": "Me", "primary": True, "accessRole": "owner"}]
        }

        calendars = await calendar.list_calendars()

        assert calendars[0].primary is True
        assert calendars[0].to_dict()["accessRole"] == "owner"


class TestFindFreeSlots:
    @pytest.mark.asyncio
    async def test_single_busy_block(self, calendar):
        calendar._make_request.return_value = {
            "calendars": {
                "primary": {"busy": [{"start": "2024-01-01T10:00:00Z", "end": "2024-01-01T10:30:00Z"}]}
            }
        }

        slots = await calendar.find_free_slots("2024-01-01T09:00:00Z", "2024-01-01T17:00:00Z")

        assert [slot.to_dict() for slot in slots] == [
            {"start": "2024-01-01T09:00:00.000Z", "end": "2024-01-01T10:00:00.000Z"},
            {"start": "2024-01-01T10:30:00.000Z", "end": "2024-01-01T17:00:00.000Z"},
        ]
        call = calendar._make_request.await_args
        assert call.args == ("POST", f"{CALENDAR_API_BASE}/freeBusy")
        assert call.kwargs["data"]["items"] == [{"id": "primary"}]

    @pytest.mark.asyncio
    async def test_busy_pooled_across_calendars(self, calendar):
        calendar._make_request.return_value = {
            "calendars": {
                "a": {"busy": [{"start": "2024-01-01T09:00:00Z", "end": "2024-01-01T12:00:00Z"}]},
                "b": {"busy": [{"start": "2024-01-01T11:00:00Z", "end": "2024-01-01T13:00:00Z"}]},
            }
        }

        slots = await calendar.find_free_slots(
            "2024-01-01T09:00:00Z", "2024-01-01T17:00:00Z", calendar_ids=["a", "b"], duration_minutes=60
        )

        assert [(s.start, s.end) for s in slots] == [
            ("2024-01-01T13:00:00.000Z", "2024-01-01T17:00:00.000Z")
        ]

    @pytest.mark.asyncio
    async def test_calendar_missing_from_response_treated_as_free(self, calendar):
        calendar._make_request.return_value = {"calendars": {}}

        slots = await calendar.find_free_slots("2024-01-01T09:00:00Z", "2024-01-01T10:00:00Z")

        assert len(slots) == 1


class TestStartOfToday:
    def test_is_midnight_and_aware(self):
        midnight = start_of_today()
        assert (midnight.hour, midnight.minute, midnight.second) == (0, 0, 0)
        assert midnight.tzinfo is not None
