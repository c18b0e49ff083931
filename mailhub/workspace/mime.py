"""
Tool: MIME Extraction
Purpose: Pull bodies and attachments out of Gmail message payloads

Gmail returns a message as a nested part tree. Each part carries a mimeType,
optional base64url body.data, optional body.attachmentId, optional filename
and optional child parts.

Usage:
    from mailhub.workspace.mime import extract_attachments, extract_body

    text, html = extract_body(message["payload"])
    attachments = extract_attachments(message["payload"])
"""

import base64
from typing import Any

from mailhub.workspace.models import Attachment


def decode_base64url(data: str) -> str:
    """Decode base64url to UTF-8 text, tolerating stripped padding."""
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def encode_base64url(data: str | bytes) -> str:
    """Encode as base64url with padding stripped (Gmail's raw format)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def get_header(headers: list[dict[str, str]] | None, name: str) -> str:
    """Case-insensitive header lookup. Missing headers yield ''."""
    name = name.lower()
    for header in headers or []:
        if header.get("name", "").lower() == name:
            return header.get("value", "")
    return ""


def extract_body(payload: dict[str, Any]) -> tuple[str, str]:
    """
    Resolve the plain-text and HTML bodies of a payload.

    Parts are walked in order and the last non-empty match wins, both at
    the current level and for values surfaced from nested multiparts.

    Returns:
        (text, html). Either may be empty.
    """
    text = ""
    html = ""

    data = payload.get("body", {}).get("data")
    if data:
        decoded = decode_base64url(data)
        if payload.get("mimeType") == "text/html":
            html = decoded
        else:
            text = decoded

    for part in payload.get("parts") or []:
        mime_type = part.get("mimeType", "")
        part_data = part.get("body", {}).get("data")

        if mime_type == "text/plain" and part_data:
            text = decode_base64url(part_data)
        elif mime_type == "text/html" and part_data:
            html = decode_base64url(part_data)
        elif mime_type.startswith("multipart/"):
            nested_text, nested_html = extract_body(part)
            if nested_text:
                text = nested_text
            if nested_html:
                html = nested_html

    return text, html


def extract_attachments(payload: dict[str, Any]) -> list[Attachment]:
    """Collect every part with a filename and attachmentId, depth first."""
    attachments: list[Attachment] = []

    def walk(part: dict[str, Any]) -> None:
        body = part.get("body", {})
        if part.get("filename") and body.get("attachmentId"):
            attachments.append(
                Attachment(
                    id=body["attachmentId"],
                    filename=part["filename"],
                    mime_type=part.get("mimeType") or "application/octet-stream",
                    size=body.get("size") or 0,
                )
            )
        for child in part.get("parts") or []:
            walk(child)

    walk(payload)
    return attachments


def has_attachments(payload: dict[str, Any]) -> bool:
    """True when any top-level part is a named attachment."""
    return any(
        part.get("filename") and part.get("body", {}).get("attachmentId")
        for part in payload.get("parts") or []
    )
