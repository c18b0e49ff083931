"""
AI Routes - Assistant features

Provides endpoints for:
- POST /api/ai/summarize, /reply, /categorize, /actions, /analyze, /security, /improve
- POST /api/ai/calendar, /docs, /sheets, /forms, /drive (action-tagged bodies)

Model errors surface as 500s; malformed model output never does (the
assistant falls back to defaults).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException

from mailhub.api.dependencies import get_email_assistant, get_productivity_assistant
from mailhub.api.models import (
    AnalyzeSheetAction,
    CalendarAiAction,
    EmailContextRequest,
    FormsAiAction,
    GenerateQuestionsAction,
    ImproveRequest,
    OrganizeFilesAction,
    ReplyRequest,
    SuggestTimeAction,
    SummarizeDocumentAction,
)
from mailhub.assistant.email import EmailAssistant
from mailhub.assistant.productivity import ProductivityAssistant


logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Email Endpoints
# =============================================================================


@router.post("/summarize")
async def summarize(
    request: EmailContextRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    try:
        summary = await assistant.summarize_email(request.to_context())
    except Exception as e:
        logger.error(f"Error summarizing email: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to summarize email")
    return {"summary": summary}


@router.post("/reply")
async def reply(
    request: ReplyRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    try:
        text = await assistant.generate_reply(request.to_context(), request.tone, request.instructions)
    except Exception as e:
        logger.error(f"Error generating reply: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate reply")
    return {"reply": text}


@router.post("/categorize")
async def categorize(
    request: EmailContextRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    try:
        return await assistant.categorize_email(request.to_context())
    except Exception as e:
        logger.error(f"Error categorizing email: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to categorize email")


@router.post("/actions")
async def extract_actions(
    request: EmailContextRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    try:
        actions = await assistant.extract_action_items(request.to_context())
    except Exception as e:
        logger.error(f"Error extracting action items: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to extract action items")
    return {"actions": actions}


@router.post("/analyze")
async def analyze(
    request: EmailContextRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    """Categorization and action items in one round trip."""
    try:
        return await assistant.analyze_email(request.to_context())
    except Exception as e:
        logger.error(f"Error analyzing email: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to analyze email")


@router.post("/security")
async def security_scan(
    request: EmailContextRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    try:
        return await assistant.scan_email_security(request.to_context())
    except Exception as e:
        logger.error(f"Error scanning email security: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to scan email")


@router.post("/improve")
async def improve(
    request: ImproveRequest,
    assistant: EmailAssistant = Depends(get_email_assistant),
):
    try:
        improved = await assistant.improve_email_draft(request.draft, request.instructions)
    except Exception as e:
        logger.error(f"Error improving draft: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to improve draft")
    return {"improved": improved}


# =============================================================================
# Productivity Endpoints
# =============================================================================


@router.post("/calendar")
async def calendar_assist(
    payload: Annotated[CalendarAiAction, Body(discriminator="action")],
    assistant: ProductivityAssistant = Depends(get_productivity_assistant),
):
    """suggestTime picks a slot; generateAgenda drafts an agenda."""
    try:
        if isinstance(payload, SuggestTimeAction):
            return await assistant.suggest_meeting_time(
                payload.description, payload.free_slots, payload.preferences
            )
        agenda = await assistant.generate_meeting_agenda(payload.meeting_context)
    except Exception as e:
        logger.error(f"Calendar AI error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process calendar AI request")
    return {"agenda": agenda}


@router.post("/docs")
async def docs_assist(
    payload: SummarizeDocumentAction,
    assistant: ProductivityAssistant = Depends(get_productivity_assistant),
):
    try:
        summary = await assistant.summarize_document(payload.content)
    except Exception as e:
        logger.error(f"Docs AI error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process document AI request")
    return {"summary": summary}


@router.post("/sheets")
async def sheets_assist(
    payload: AnalyzeSheetAction,
    assistant: ProductivityAssistant = Depends(get_productivity_assistant),
):
    try:
        analysis = await assistant.analyze_spreadsheet_data(
            payload.headers, payload.data, payload.question
        )
    except Exception as e:
        logger.error(f"Sheets AI error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process spreadsheet AI request")
    return {"analysis": analysis}


@router.post("/forms")
async def forms_assist(
    payload: Annotated[FormsAiAction, Body(discriminator="action")],
    assistant: ProductivityAssistant = Depends(get_productivity_assistant),
):
    try:
        if isinstance(payload, GenerateQuestionsAction):
            return await assistant.generate_form_questions(
                payload.topic, payload.purpose, payload.question_count
            )
        return await assistant.analyze_form_responses(payload.questions, payload.responses)
    except Exception as e:
        logger.error(f"Forms AI error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process forms AI request")


@router.post("/drive")
async def drive_assist(
    payload: OrganizeFilesAction,
    assistant: ProductivityAssistant = Depends(get_productivity_assistant),
):
    try:
        return await assistant.suggest_file_organization(payload.files)
    except Exception as e:
        logger.error(f"Drive AI error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process drive AI request")
