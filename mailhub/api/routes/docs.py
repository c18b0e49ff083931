"""
Docs Routes - Google Docs

Provides endpoints for:
- GET/POST /api/docs
- GET/POST /api/docs/{document_id}
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from mailhub.api.dependencies import get_docs
from mailhub.api.models import AppendTextAction, CreateDocumentRequest, DocumentAction
from mailhub.workspace.docs import DocsService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_documents(
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=1000),
    docs: DocsService = Depends(get_docs),
):
    try:
        documents, next_page_token = await docs.list_documents(page_token, page_size)
    except Exception as e:
        logger.error(f"Error fetching documents: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch documents")

    result = {"documents": [d.to_dict() for d in documents]}
    if next_page_token:
        result["nextPageToken"] = next_page_token
    return result


@router.post("")
async def create_document(request: CreateDocumentRequest, docs: DocsService = Depends(get_docs)):
    try:
        document = await docs.create_document(request.title, request.content)
    except Exception as e:
        logger.error(f"Error creating document: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create document")
    return document.to_dict()


@router.get("/{document_id}")
async def get_document(
    document_id: str,
    content: bool = Query(False, description="Return text runs instead of flat text"),
    docs: DocsService = Depends(get_docs),
):
    try:
        if content:
            result = await docs.get_document_content(document_id)
        else:
            result = await docs.get_document(document_id)
    except Exception as e:
        logger.error(f"Error fetching document {document_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch document")
    return result.to_dict()


@router.post("/{document_id}")
async def document_action(
    document_id: str,
    payload: Annotated[DocumentAction, Body(discriminator="action")],
    docs: DocsService = Depends(get_docs),
):
    """Append text at the end, or replace every occurrence of a string."""
    try:
        if isinstance(payload, AppendTextAction):
            await docs.append_to_document(document_id, payload.text)
        else:
            await docs.replace_text(
                document_id, payload.search_text, payload.replace_text, payload.match_case
            )
    except Exception as e:
        logger.error(f"Error updating document {document_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to perform document action")
    return {"success": True}
