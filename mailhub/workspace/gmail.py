"""
Tool: Gmail Service
Purpose: Message listing, reading, sending and label changes via the Gmail API

Usage:
    from mailhub.workspace.gmail import GmailService

    gmail = GmailService(access_token)
    page = await gmail.list_messages(max_results=20, label_ids=["INBOX"])
    message = await gmail.get_message(page.messages[0].id)
    await gmail.mark_as_read(message.id)
"""

import asyncio
import logging
from email.mime.text import MIMEText
from email.policy import SMTP
from typing import Any

from mailhub.workspace.client import GMAIL_API_BASE, GoogleApiClient
from mailhub.workspace.mime import (
    encode_base64url,
    extract_attachments,
    extract_body,
    get_header,
    has_attachments,
)
from mailhub.workspace.models import EmailListItem, EmailMessage, EmailPage, Label


logger = logging.getLogger(__name__)

LIST_METADATA_HEADERS = ["From", "Subject", "Date"]


def _single_line(value: str) -> str:
    """Collapse CR/LF so a header value cannot start a new header."""
    return " ".join(value.splitlines())


class GmailService(GoogleApiClient):
    """Gmail wrapper bound to one access token."""

    async def get_profile(self) -> dict[str, Any]:
        url = f"{GMAIL_API_BASE}/users/me/profile"
        return await self._make_request("GET", url)

    async def list_messages(
        self,
        max_results: int = 20,
        page_token: str | None = None,
        label_ids: list[str] | None = None,
        q: str | None = None,
    ) -> EmailPage:
        """
        List messages with header metadata.

        The list endpoint only returns ids, so metadata for every message
        on the page is fetched concurrently. Output preserves list order.
        """
        url = f"{GMAIL_API_BASE}/users/me/messages"
        params = {
            "maxResults": max_results,
            "pageToken": page_token,
            "labelIds": label_ids or None,
            "q": q,
        }
        data = await self._make_request("GET", url, params=params)

        refs = data.get("messages") or []
        messages = await asyncio.gather(
            *(self._get_list_item(ref["id"], ref.get("threadId", "")) for ref in refs)
        )

        return EmailPage(
            messages=list(messages),
            next_page_token=data.get("nextPageToken"),
            result_size_estimate=data.get("resultSizeEstimate", 0),
        )

    async def _get_list_item(self, message_id: str, thread_id: str) -> EmailListItem:
        url = f"{GMAIL_API_BASE}/users/me/messages/{message_id}"
        params = {"format": "metadata", "metadataHeaders": LIST_METADATA_HEADERS}
        detail = await self._make_request("GET", url, params=params)

        payload = detail.get("payload") or {}
        headers = payload.get("headers", [])
        label_ids = detail.get("labelIds") or []

        return EmailListItem(
            id=message_id,
            thread_id=thread_id,
            subject=get_header(headers, "Subject") or "(No Subject)",
            sender=get_header(headers, "From"),
            snippet=detail.get("snippet", ""),
            date=get_header(headers, "Date"),
            is_unread="UNREAD" in label_ids,
            has_attachments=has_attachments(payload),
            label_ids=label_ids,
        )

    async def get_message(self, message_id: str) -> EmailMessage:
        """Get a full message with decoded body and attachment list."""
        url = f"{GMAIL_API_BASE}/users/me/messages/{message_id}"
        data = await self._make_request("GET", url, params={"format": "full"})

        payload = data.get("payload") or {}
        headers = payload.get("headers", [])
        label_ids = data.get("labelIds") or []
        text, html = extract_body(payload)
        attachments = extract_attachments(payload)

        return EmailMessage(
            id=data.get("id", message_id),
            thread_id=data.get("threadId", ""),
            label_ids=label_ids,
            snippet=data.get("snippet", ""),
            subject=get_header(headers, "Subject") or "(No Subject)",
            sender=get_header(headers, "From"),
            to=get_header(headers, "To"),
            date=get_header(headers, "Date"),
            body=text or html,
            body_html=html,
            is_unread="UNREAD" in label_ids,
            has_attachments=len(attachments) > 0,
            attachments=attachments,
        )

    async def send_message(
        self,
        to: str,
        subject: str,
        body: str,
        cc: str | None = None,
        bcc: str | None = None,
        thread_id: str | None = None,
        in_reply_to: str | None = None,
        references: str | None = None,
    ) -> dict[str, str]:
        """
        Send an HTML message from the authenticated account.

        The From header is the profile address. Reply threading uses
        threadId plus In-Reply-To/References when given.

        Returns:
            {"id": ..., "threadId": ...}
        """
        profile = await self.get_profile()
        from_email = profile.get("emailAddress", "")

        message = MIMEText(body, "html", "utf-8", policy=SMTP)
        message["From"] = from_email
        message["To"] = _single_line(to)
        if cc:
            message["Cc"] = _single_line(cc)
        if bcc:
            message["Bcc"] = _single_line(bcc)
        message["Subject"] = _single_line(subject)
        if in_reply_to:
            message["In-Reply-To"] = _single_line(in_reply_to)
        if references:
            message["References"] = _single_line(references)

        data: dict[str, Any] = {"raw": encode_base64url(message.as_bytes())}
        if thread_id:
            data["threadId"] = thread_id

        url = f"{GMAIL_API_BASE}/users/me/messages/send"
        result = await self._make_request("POST", url, data=data)
        logger.info(f"Sent message {result.get('id')}")
        return {"id": result.get("id", ""), "threadId": result.get("threadId", "")}

    async def trash_message(self, message_id: str) -> None:
        """Move a message to trash (recoverable)."""
        url = f"{GMAIL_API_BASE}/users/me/messages/{message_id}/trash"
        await self._make_request("POST", url)

    async def modify_labels(
        self,
        message_id: str,
        add_label_ids: list[str] | None = None,
        remove_label_ids: list[str] | None = None,
    ) -> None:
        url = f"{GMAIL_API_BASE}/users/me/messages/{message_id}/modify"
        data = {
            "addLabelIds": add_label_ids or [],
            "removeLabelIds": remove_label_ids or [],
        }
        await self._make_request("POST", url, data=data)

    async def mark_as_read(self, message_id: str) -> None:
        await self.modify_labels(message_id, remove_label_ids=["UNREAD"])

    async def mark_as_unread(self, message_id: str) -> None:
        await self.modify_labels(message_id, add_label_ids=["UNREAD"])

    async def list_labels(self) -> list[Label]:
        url = f"{GMAIL_API_BASE}/users/me/labels"
        data = await self._make_request("GET", url)
        return [Label.from_api(label) for label in data.get("labels") or []]

    async def get_attachment(self, message_id: str, attachment_id: str) -> dict[str, Any]:
        """Fetch attachment bytes. data stays base64url as Gmail returns it."""
        url = f"{GMAIL_API_BASE}/users/me/messages/{message_id}/attachments/{attachment_id}"
        data = await self._make_request("GET", url)
        return {"data": data.get("data", ""), "size": data.get("size", 0)}
