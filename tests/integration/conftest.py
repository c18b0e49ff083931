"""
Integration test fixtures for Mailhub.

Provides fixtures specific to integration testing:
- FastAPI test client with an access token
- Mocked workspace services swapped in through dependency overrides
- A fake LLM behind the assistant dependencies
"""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from mailhub.api import dependencies
from mailhub.api.main import app


TEST_TOKEN = "ya29.test-access-token"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def gmail_service() -> MagicMock:
    from mailhub.workspace.gmail import GmailService

    return AsyncMock(spec=GmailService)


@pytest.fixture
def calendar_service() -> MagicMock:
    from mailhub.workspace.calendar import CalendarService

    return AsyncMock(spec=CalendarService)


@pytest.fixture
def drive_service() -> MagicMock:
    from mailhub.workspace.drive import DriveService

    return AsyncMock(spec=DriveService)


@pytest.fixture
def docs_service() -> MagicMock:
    from mailhub.workspace.docs import DocsService

    return AsyncMock(spec=DocsService)


@pytest.fixture
def sheets_service() -> MagicMock:
    from mailhub.workspace.sheets import SheetsService

    return AsyncMock(spec=SheetsService)


@pytest.fixture
def forms_service() -> MagicMock:
    from mailhub.workspace.forms import FormsService

    return AsyncMock(spec=FormsService)


@pytest.fixture
def test_client(
    gmail_service,
    calendar_service,
    drive_service,
    docs_service,
    sheets_service,
    forms_service,
    fake_llm,
) -> Generator[TestClient, None, None]:
    """
    TestClient with every upstream dependency replaced.

    get_access_token is left in place, so requests without a token still
    get a 401. Pass AUTH_HEADERS (or use authed_client) otherwise.
    """
    app.dependency_overrides[dependencies.get_gmail] = lambda: gmail_service
    app.dependency_overrides[dependencies.get_calendar] = lambda: calendar_service
    app.dependency_overrides[dependencies.get_drive] = lambda: drive_service
    app.dependency_overrides[dependencies.get_docs] = lambda: docs_service
    app.dependency_overrides[dependencies.get_sheets] = lambda: sheets_service
    app.dependency_overrides[dependencies.get_forms] = lambda: forms_service
    app.dependency_overrides[dependencies.get_llm] = lambda: fake_llm

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def authed_client(test_client) -> TestClient:
    """test_client sending a bearer token on every request."""
    test_client.headers.update(AUTH_HEADERS)
    return test_client
