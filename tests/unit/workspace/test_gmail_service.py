"""Tests for mailhub/workspace/gmail.py - GmailService

All HTTP goes through GoogleApiClient._make_request, which is replaced with
an AsyncMock so the tests assert on the Gmail API calls made.
"""

import base64
import email
from email.message import Message
from email.policy import default as default_policy
from unittest.mock import AsyncMock

import pytest

from mailhub.workspace.client import GMAIL_API_BASE
from mailhub.workspace.gmail import GmailService
from tests.conftest import attachment_part


MESSAGES_URL = f"{GMAIL_API_BASE}/users/me/messages"


def b64decode_url(raw: str) -> bytes:
    return base64.urlsafe_b64decode(raw + "=" * (-len(raw) % 4))


def parse_raw(raw: str) -> Message:
    """Parse a Gmail `raw` field back into a message object."""
    return email.message_from_bytes(b64decode_url(raw), policy=default_policy)


@pytest.fixture
def gmail():
    service = GmailService("token-123")
    service._make_request = AsyncMock()
    return service


def metadata(subject: str | None, sender: str, labels: list[str], parts: list | None = None) -> dict:
    headers = [{"name": "From", "value": sender}, {"name": "Date", "value": "Tue, 2 Jan 2024"}]
    if subject is not None:
        headers.append({"name": "Subject", "value": subject})
    payload = {"headers": headers}
    if parts is not None:
        payload["parts"] = parts
    return {"snippet": f"snippet of {subject}", "labelIds": labels, "payload": payload}


class TestListMessages:
    @pytest.mark.asyncio
    async def test_fetches_metadata_for_each_message(self, gmail):
        details = {
            "m1": metadata("Hello", "ada@example.com", ["INBOX", "UNREAD"]),
            "m2": metadata(None, "sam@example.com", ["INBOX"], parts=[attachment_part("a.pdf", "att")]),
        }

        async def respond(method, url, data=None, params=None):
            if url == MESSAGES_URL:
                return {
                    "messages": [{"id": "m1", "threadId": "t1"}, {"id": "m2", "threadId": "t2"}],
                    "nextPageToken": "next",
                    "resultSizeEstimate": 42,
                }
            return details[url.rsplit("/", 1)[-1]]

        gmail._make_request.side_effect = respond

        page = await gmail.list_messages(max_results=2, label_ids=["INBOX"], q="from:ada")

        assert [m.id for m in page.messages] == ["m1", "m2"]
        assert page.next_page_token == "next"
        assert page.result_size_estimate == 42

        first, second = page.messages
        assert first.subject == "Hello"
        assert first.is_unread is True
        assert first.has_attachments is False
        assert second.subject == "(No Subject)"
        assert second.is_unread is False
        assert second.has_attachments is True

        list_call = gmail._make_request.await_args_list[0]
        assert list_call.kwargs["params"]["maxResults"] == 2
        assert list_call.kwargs["params"]["labelIds"] == ["INBOX"]
        assert list_call.kwargs["params"]["q"] == "from:ada"

        detail_call = gmail._make_request.await_args_list[1]
        assert detail_call.kwargs["params"]["format"] == "metadata"
        assert detail_call.kwargs["params"]["metadataHeaders"] == ["From", "Subject", "Date"]

    @pytest.mark.asyncio
    async def test_empty_mailbox(self, gmail):
        gmail._make_request.return_value = {"resultSizeEstimate": 0}

        page = await gmail.list_messages()

        assert page.messages == []
        assert page.to_dict() == {"messages": [], "resultSizeEstimate": 0}
        gmail._make_request.assert_awaited_once()


class TestGetMessage:
    @pytest.mark.asyncio
    async def test_decodes_body_and_attachments(self, gmail, multipart_payload):
        gmail._make_request.return_value = {
            "id": "m1",
            "threadId": "t1",
            "labelIds": ["INBOX"],
            "snippet": "Plain body",
            "payload": multipart_payload,
        }

        message = await gmail.get_message("m1")

        assert message.subject == "Quarterly report"
        assert message.sender == "Ada Lovelace <ada@example.com>"
        assert message.to == "me@example.com"
        assert message.body == "Plain body"
        assert message.body_html == "<p>HTML body</p>"
        assert message.has_attachments is True
        assert message.attachments[0].filename == "report.pdf"
        assert gmail._make_request.await_args.kwargs["params"] == {"format": "full"}

    @pytest.mark.asyncio
    async def test_html_only_body_used_as_body(self, gmail):
        from tests.conftest import text_part

        gmail._make_request.return_value = {
            "id": "m2",
            "threadId": "t2",
            "payload": {"headers": [], **text_part("text/html", "<p>Only HTML</p>")},
        }

        message = await gmail.get_message("m2")

        assert message.body == "<p>Only HTML</p>"
        assert message.subject == "(No Subject)"
        assert message.attachments == []


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_builds_raw_message(self, gmail):
        gmail._make_request.side_effect = [
            {"emailAddress": "me@example.com"},
            {"id": "sent-1", "threadId": "thread-9", "labelIds": ["SENT"]},
        ]

        result = await gmail.send_message(
            to="ada@example.com",
            subject="Re: Quarterly report",
            body="<p>Thanks!</p>",
            cc="sam@example.com",
            thread_id="thread-9",
            in_reply_to="<abc@mail.example.com>",
            references="<abc@mail.example.com>",
        )

        assert result == {"id": "sent-1", "threadId": "thread-9"}

        send_call = gmail._make_request.await_args_list[1]
        assert send_call.args[:2] == ("POST", f"{MESSAGES_URL}/send")
        sent = send_call.kwargs["data"]
        assert sent["threadId"] == "thread-9"

        message = parse_raw(sent["raw"])
        assert message["From"] == "me@example.com"
        assert message["To"] == "ada@example.com"
        assert message["Cc"] == "sam@example.com"
        assert message["Subject"] == "Re: Quarterly report"
        assert message["In-Reply-To"] == "<abc@mail.example.com>"
        assert message["References"] == "<abc@mail.example.com>"
        assert message.get_content_type() == "text/html"
        assert message.get_content_charset() == "utf-8"
        assert message.get_payload(decode=True).decode("utf-8") == "<p>Thanks!</p>"

    @pytest.mark.asyncio
    async def test_new_thread_omits_thread_id(self, gmail):
        gmail._make_request.side_effect = [{"emailAddress": "me@example.com"}, {"id": "s", "threadId": "t"}]

        await gmail.send_message(to="ada@example.com", subject="Hi", body="Hello")

        sent = gmail._make_request.await_args_list[1].kwargs["data"]
        assert "threadId" not in sent
        assert parse_raw(sent["raw"])["Cc"] is None

    @pytest.mark.asyncio
    async def test_non_ascii_subject_is_encoded(self, gmail):
        gmail._make_request.side_effect = [{"emailAddress": "me@example.com"}, {"id": "s", "threadId": "t"}]

        await gmail.send_message(to="ada@example.com", subject="Réunion ☕", body="<p>À demain</p>")

        raw = gmail._make_request.await_args_list[1].kwargs["data"]["raw"]
        header_block = b64decode_url(raw).split(b"\r\n\r\n", 1)[0]
        assert header_block.isascii()
        message = parse_raw(raw)
        assert message["Subject"] == "Réunion ☕"
        assert message.get_payload(decode=True).decode("utf-8") == "<p>À demain</p>"

    @pytest.mark.asyncio
    async def test_line_breaks_cannot_inject_headers(self, gmail):
        gmail._make_request.side_effect = [{"emailAddress": "me@example.com"}, {"id": "s", "threadId": "t"}]

        await gmail.send_message(
            to="ada@example.com",
            subject="Hi\r\nBcc: spy@evil.com",
            body="Hello",
            in_reply_to="<abc@mail.example.com>\nX-Evil: 1",
        )

        raw = gmail._make_request.await_args_list[1].kwargs["data"]["raw"]
        message = parse_raw(raw)
        assert message["Bcc"] is None
        assert message["X-Evil"] is None
        assert message["Subject"] == "Hi Bcc: spy@evil.com"
        header_lines = b64decode_url(raw).split(b"\r\n\r\n", 1)[0].split(b"\r\n")
        assert not any(line.startswith(b"Bcc:") for line in header_lines)


class TestLabelChanges:
    @pytest.mark.asyncio
    async def test_mark_as_read_removes_unread(self, gmail):
        await gmail.mark_as_read("m1")

        method, url = gmail._make_request.await_args.args
        assert (method, url) == ("POST", f"{MESSAGES_URL}/m1/modify")
        assert gmail._make_request.await_args.kwargs["data"] == {
            "addLabelIds": [],
            "removeLabelIds": ["UNREAD"],
        }

    @pytest.mark.asyncio
    async def test_mark_as_unread_adds_unread(self, gmail):
        await gmail.mark_as_unread("m1")

        assert gmail._make_request.await_args.kwargs["data"]["addLabelIds"] == ["UNREAD"]

    @pytest.mark.asyncio
    async def test_trash(self, gmail):
        await gmail.trash_message("m1")

        gmail._make_request.assert_awaited_once_with("POST", f"{MESSAGES_URL}/m1/trash")


class TestLabelsAndAttachments:
    @pytest.mark.asyncio
    async def test_list_labels(self, gmail):
        gmail._make_request.return_value = {
            "labels": [
                {"id": "INBOX", "name": "INBOX", "type": "system"},
                {"id": "Label_1", "name": "Receipts", "type": "user", "messagesUnread": 3},
            ]
        }

        labels = await gmail.list_labels()

        assert [label.name for label in labels] == ["INBOX", "Receipts"]
        assert labels[1].to_dict() == {
            "id": "Label_1",
            "name": "Receipts",
            "type": "user",
            "messagesUnread": 3,
        }

    @pytest.mark.asyncio
    async def test_get_attachment(self, gmail):
        gmail._make_request.return_value = {"attachmentId": "a1", "data": "SGk", "size": 2}

        assert await gmail.get_attachment("m1", "a1") == {"data": "SGk", "size": 2}
        assert gmail._make_request.await_args.args[1] == f"{MESSAGES_URL}/m1/attachments/a1"
