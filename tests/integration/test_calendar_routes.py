"""
Integration tests for /api/calendar routes.

Tests:
- Calendar and event listing, creation, update and delete
- Free slot lookup end to end through a real CalendarService whose HTTP
  layer is mocked
"""

from unittest.mock import AsyncMock

import pytest

from mailhub.api.dependencies import get_calendar
from mailhub.api.main import app
from mailhub.workspace.calendar import CalendarService
from mailhub.workspace.models import (
    CalendarEvent,
    CalendarListEntry,
    EventDateTime,
    EventPage,
    TimeSlot,
)


class TestEvents:
    def test_list_calendars(self, authed_client, calendar_service):
        calendar_service.list_calendars.return_value = [
            CalendarListEntry(id="primary@example.com", summary="Me", primary=True)
        ]

        response = authed_client.get("/api/calendar/list")

        assert response.json() == [{"id": "primary@example.com", "summary": "Me", "primary": True}]

    def test_list_events_defaults_to_primary(self, authed_client, calendar_service):
        calendar_service.list_events.return_value = EventPage(
            events=[CalendarEvent(id="ev1", summary="Standup", start=EventDateTime(date="2024-01-01"))]
        )

        response = authed_client.get("/api/calendar/events", params={"timeMax": "2024-01-31T00:00:00Z"})

        assert response.status_code == 200
        assert response.json()["events"][0]["start"] == {"date": "2024-01-01"}
        calendar_service.list_events.assert_awaited_once_with(
            calendar_id="primary", time_min=None, time_max="2024-01-31T00:00:00Z", max_results=None
        )

    def test_create_event(self, authed_client, calendar_service):
        calendar_service.create_event.return_value = CalendarEvent(id="ev9", summary="Kickoff")

        response = authed_client.post(
            "/api/calendar/events",
            json={
                "summary": "Kickoff",
                "start": {"dateTime": "2024-01-01T09:00:00Z", "timeZone": "UTC"},
                "end": {"dateTime": "2024-01-01T10:00:00Z"},
                "attendees": [{"email": "sam@example.com"}],
                "conferenceDataVersion": 1,
            },
        )

        assert response.status_code == 200
        assert response.json()["id"] == "ev9"
        body = calendar_service.create_event.await_args.args[0]
        assert body == {
            "summary": "Kickoff",
            "start": {"dateTime": "2024-01-01T09:00:00Z", "timeZone": "UTC"},
            "end": {"dateTime": "2024-01-01T10:00:00Z"},
            "attendees": [{"email": "sam@example.com"}],
        }
        assert calendar_service.create_event.await_args.kwargs == {
            "calendar_id": "primary",
            "conference_data_version": 1,
        }

    def test_create_event_requires_summary(self, authed_client, calendar_service):
        response = authed_client.post(
            "/api/calendar/events",
            json={"start": {"date": "2024-01-01"}, "end": {"date": "2024-01-02"}},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "summary is required"

    def test_update_event_sends_only_given_fields(self, authed_client, calendar_service):
        calendar_service.update_event.return_value = CalendarEvent(id="ev1", summary="Renamed")

        response = authed_client.patch(
            "/api/calendar/events/ev1", json={"summary": "Renamed", "calendarId": "work"}
        )

        assert response.status_code == 200
        calendar_service.update_event.assert_awaited_once_with("ev1", {"summary": "Renamed"}, "work")

    def test_delete_event(self, authed_client, calendar_service):
        response = authed_client.delete("/api/calendar/events/ev1", params={"calendarId": "work"})

        assert response.json() == {"success": True}
        calendar_service.delete_event.assert_awaited_once_with("ev1", "work")

    def test_upstream_failure(self, authed_client, calendar_service):
        calendar_service.list_events.side_effect = RuntimeError("boom")

        response = authed_client.get("/api/calendar/events")

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch calendar events"


class TestFreeBusy:
    @pytest.fixture
    def real_calendar(self, authed_client):
        service = CalendarService("token")
        service._make_request = AsyncMock()
        app.dependency_overrides[get_calendar] = lambda: service
        return service

    def test_free_slots_around_busy_block(self, authed_client, real_calendar):
        real_calendar._make_request.return_value = {
            "calendars": {
                "primary": {"busy": [{"start": "2024-01-01T10:00:00Z", "end": "2024-01-01T10:30:00Z"}]}
            }
        }

        response = authed_client.post(
            "/api/calendar/freebusy",
            json={"timeMin": "2024-01-01T09:00:00Z", "timeMax": "2024-01-01T17:00:00Z"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "freeSlots": [
                {"start": "2024-01-01T09:00:00.000Z", "end": "2024-01-01T10:00:00.000Z"},
                {"start": "2024-01-01T10:30:00.000Z", "end": "2024-01-01T17:00:00.000Z"},
            ]
        }

    def test_missing_time_min(self, authed_client, calendar_service):
        response = authed_client.post(
            "/api/calendar/freebusy", json={"timeMax": "2024-01-01T17:00:00Z"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "timeMin is required", "code": "HTTP_400"}
        calendar_service.find_free_slots.assert_not_awaited()

    def test_passes_calendars_and_duration(self, authed_client, calendar_service):
        calendar_service.find_free_slots.return_value = [TimeSlot(start="a", end="b")]

        response = authed_client.post(
            "/api/calendar/freebusy",
            json={
                "timeMin": "2024-01-01T09:00:00Z",
                "timeMax": "2024-01-01T17:00:00Z",
                "calendarIds": ["primary", "team"],
                "durationMinutes": 60,
            },
        )

        assert response.json() == {"freeSlots": [{"start": "a", "end": "b"}]}
        calendar_service.find_free_slots.assert_awaited_once_with(
            "2024-01-01T09:00:00Z",
            "2024-01-01T17:00:00Z",
            calendar_ids=["primary", "team"],
            duration_minutes=60,
        )

    def test_invalid_timestamp_is_400(self, authed_client, real_calendar):
        response = authed_client.post(
            "/api/calendar/freebusy", json={"timeMin": "soon", "timeMax": "2024-01-01T17:00:00Z"}
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("timeMin: ")
        assert "Invalid timestamp: soon" in response.json()["error"]
        real_calendar._make_request.assert_not_awaited()

    def test_upstream_failure_is_500(self, authed_client, calendar_service):
        calendar_service.find_free_slots.side_effect = RuntimeError("boom")

        response = authed_client.post(
            "/api/calendar/freebusy",
            json={"timeMin": "2024-01-01T09:00:00Z", "timeMax": "2024-01-01T17:00:00Z"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to find free slots"
