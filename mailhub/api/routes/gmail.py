"""
Gmail Routes - Mailbox access

Provides endpoints for:
- GET /api/gmail/messages
- GET/PATCH/DELETE /api/gmail/message/{message_id}
- POST /api/gmail/send
- GET /api/gmail/labels
- GET /api/gmail/attachments/{message_id}/{attachment_id}
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from mailhub.api.dependencies import get_gmail
from mailhub.api.models import (
    MarkReadAction,
    MarkUnreadAction,
    MessageAction,
    SendMessageRequest,
)
from mailhub.workspace.gmail import GmailService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/messages")
async def list_messages(
    max_results: int = Query(20, alias="maxResults", ge=1, le=500),
    page_token: str | None = Query(None, alias="pageToken"),
    label_ids: str | None = Query(None, alias="labelIds", description="Comma-separated label ids"),
    q: str | None = Query(None, description="Gmail search query"),
    gmail: GmailService = Depends(get_gmail),
):
    """List messages with sender, subject, date and flags."""
    labels = [label for label in (label_ids or "").split(",") if label] or None
    try:
        page = await gmail.list_messages(
            max_results=max_results, page_token=page_token, label_ids=labels, q=q or None
        )
    except Exception as e:
        logger.error(f"Error fetching messages: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch messages")
    return page.to_dict()


@router.get("/message/{message_id}")
async def get_message(message_id: str, gmail: GmailService = Depends(get_gmail)):
    """Get a full message with decoded body and attachments."""
    try:
        message = await gmail.get_message(message_id)
    except Exception as e:
        logger.error(f"Error fetching message {message_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch message")
    return message.to_dict()


@router.patch("/message/{message_id}")
async def update_message(
    message_id: str,
    payload: Annotated[MessageAction, Body(discriminator="action")],
    gmail: GmailService = Depends(get_gmail),
):
    """Mark read/unread or change labels."""
    try:
        if isinstance(payload, MarkReadAction):
            await gmail.mark_as_read(message_id)
        elif isinstance(payload, MarkUnreadAction):
            await gmail.mark_as_unread(message_id)
        else:
            await gmail.modify_labels(
                message_id, payload.add_label_ids, payload.remove_label_ids
            )
    except Exception as e:
        logger.error(f"Error updating message {message_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update message")
    return {"success": True}


@router.delete("/message/{message_id}")
async def delete_message(message_id: str, gmail: GmailService = Depends(get_gmail)):
    """Move a message to trash."""
    try:
        await gmail.trash_message(message_id)
    except Exception as e:
        logger.error(f"Error deleting message {message_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete message")
    return {"success": True}


@router.post("/send")
async def send_message(request: SendMessageRequest, gmail: GmailService = Depends(get_gmail)):
    """Send an HTML message, optionally threaded as a reply."""
    try:
        return await gmail.send_message(
            to=request.to,
            subject=request.subject,
            body=request.body,
            cc=request.cc,
            bcc=request.bcc,
            thread_id=request.thread_id,
            in_reply_to=request.in_reply_to,
            references=request.references,
        )
    except Exception as e:
        logger.error(f"Error sending message: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to send message")


@router.get("/labels")
async def list_labels(gmail: GmailService = Depends(get_gmail)):
    try:
        labels = await gmail.list_labels()
    except Exception as e:
        logger.error(f"Error fetching labels: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch labels")
    return [label.to_dict() for label in labels]


@router.get("/attachments/{message_id}/{attachment_id}")
async def get_attachment(
    message_id: str,
    attachment_id: str,
    gmail: GmailService = Depends(get_gmail),
):
    """Get attachment content as base64url data."""
    try:
        return await gmail.get_attachment(message_id, attachment_id)
    except Exception as e:
        logger.error(f"Error fetching attachment: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch attachment")
