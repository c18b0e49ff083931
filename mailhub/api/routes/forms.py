"""
Forms Routes - Google Forms

Provides endpoints for:
- GET/POST /api/forms
- GET/PATCH/POST /api/forms/{form_id}
- GET /api/forms/{form_id}/responses/{response_id}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from mailhub.api.dependencies import get_forms
from mailhub.api.models import AddQuestionAction, CreateFormRequest, UpdateFormRequest
from mailhub.workspace.forms import FormsService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_forms(
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=1000),
    forms: FormsService = Depends(get_forms),
):
    try:
        summaries, next_page_token = await forms.list_forms(page_token, page_size)
    except Exception as e:
        logger.error(f"Error fetching forms: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch forms")

    result = {"forms": [f.to_dict() for f in summaries]}
    if next_page_token:
        result["nextPageToken"] = next_page_token
    return result


@router.post("")
async def create_form(request: CreateFormRequest, forms: FormsService = Depends(get_forms)):
    try:
        form = await forms.create_form(request.title, request.document_title)
    except Exception as e:
        logger.error(f"Error creating form: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create form")
    return form.to_dict()


@router.get("/{form_id}")
async def get_form(
    form_id: str,
    responses: bool = Query(False, description="Return responses instead of the form"),
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=5000),
    forms: FormsService = Depends(get_forms),
):
    try:
        if responses:
            items, next_page_token = await forms.list_responses(form_id, page_token, page_size)
            result = {"responses": [r.to_dict() for r in items]}
            if next_page_token:
                result["nextPageToken"] = next_page_token
            return result

        form = await forms.get_form(form_id)
    except Exception as e:
        logger.error(f"Error fetching form {form_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch form")
    return form.to_dict()


@router.get("/{form_id}/responses/{response_id}")
async def get_form_response(
    form_id: str,
    response_id: str,
    forms: FormsService = Depends(get_forms),
):
    try:
        response = await forms.get_response(form_id, response_id)
    except Exception as e:
        logger.error(f"Error fetching response {response_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch form response")
    return response.to_dict()


@router.patch("/{form_id}")
async def update_form(
    form_id: str,
    request: UpdateFormRequest,
    forms: FormsService = Depends(get_forms),
):
    try:
        await forms.update_form(form_id, title=request.title, description=request.description)
    except Exception as e:
        logger.error(f"Error updating form {form_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update form")
    return {"success": True}


@router.post("/{form_id}")
async def form_action(
    form_id: str,
    payload: AddQuestionAction,
    forms: FormsService = Depends(get_forms),
):
    """Add a question item to the form."""
    question = payload.question.model_dump(by_alias=True, exclude_none=True, mode="json")
    try:
        await forms.add_question(form_id, question, payload.index)
    except Exception as e:
        logger.error(f"Error performing form action on {form_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to perform form action")
    return {"success": True}
