"""Shared test fixtures for Mailhub tests.

This module provides common fixtures used across all test modules:
- Gmail payload builders
- A fake LLM client with scripted replies
- Standard email context

Usage:
    def test_something(fake_llm):
        fake_llm.generate_text.return_value = '{"category": "work"}'
        ...
"""

import base64
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE_DIR = PROJECT_ROOT / "mailhub"


# ─────────────────────────────────────────────────────────────────────────────
# Gmail Payload Helpers
# ─────────────────────────────────────────────────────────────────────────────


def b64url(text: str) -> str:
    """Encode text the way Gmail does (base64url, padding stripped)."""
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def text_part(mime_type: str, text: str) -> dict:
    """A leaf part carrying inline body data."""
    return {"mimeType": mime_type, "body": {"data": b64url(text)}}


def attachment_part(
    filename: str,
    attachment_id: str,
    mime_type: str | None = "application/pdf",
    size: int | None = 2048,
) -> dict:
    """A leaf part referencing a separately stored attachment."""
    body = {"attachmentId": attachment_id}
    if size is not None:
        body["size"] = size
    part = {"filename": filename, "body": body}
    if mime_type is not None:
        part["mimeType"] = mime_type
    return part


@pytest.fixture
def multipart_payload() -> dict:
    """multipart/mixed with an alternative body and one PDF attachment."""
    return {
        "mimeType": "multipart/mixed",
        "headers": [
            {"name": "From", "value": "Ada Lovelace <ada@example.com>"},
            {"name": "To", "value": "me@example.com"},
            {"name": "Subject", "value": "Quarterly report"},
            {"name": "Date", "value": "Tue, 2 Jan 2024 15:04:05 +0000"},
        ],
        "body": {"size": 0},
        "parts": [
            {
                "mimeType": "multipart/alternative",
                "body": {"size": 0},
                "parts": [
                    text_part("text/plain", "Plain body"),
                    text_part("text/html", "<p>HTML body</p>"),
                ],
            },
            attachment_part("report.pdf", "att-1"),
        ],
    }


# ─────────────────────────────────────────────────────────────────────────────
# Assistant Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fake_llm() -> MagicMock:
    """LLM client double; set generate_text.return_value per test."""
    llm = MagicMock()
    llm.generate_text = AsyncMock(return_value="")
    return llm


@pytest.fixture
def sample_email():
    """Standard email context for assistant tests."""
    from mailhub.assistant.email import EmailContext

    return EmailContext(
        subject="Budget review on Friday",
        sender='"Sam Rivera" <sam@example.com>',
        body="Can you send the Q3 numbers before Friday's review?",
        to="me@example.com",
        date="2024-01-02T15:04:05",
    )
