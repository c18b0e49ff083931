"""
Sheets Routes - Google Sheets

Provides endpoints for:
- GET/POST /api/sheets
- GET/PUT/POST /api/sheets/{spreadsheet_id}
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from mailhub.api.dependencies import get_sheets
from mailhub.api.models import (
    AddSheetAction,
    AppendValuesAction,
    ClearValuesAction,
    CreateSpreadsheetRequest,
    DeleteSheetAction,
    SpreadsheetAction,
    UpdateValuesRequest,
)
from mailhub.workspace.sheets import SheetsService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_spreadsheets(
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=1000),
    sheets: SheetsService = Depends(get_sheets),
):
    try:
        spreadsheets, next_page_token = await sheets.list_spreadsheets(page_token, page_size)
    except Exception as e:
        logger.error(f"Error fetching spreadsheets: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch spreadsheets")

    result = {"spreadsheets": [s.to_dict() for s in spreadsheets]}
    if next_page_token:
        result["nextPageToken"] = next_page_token
    return result


@router.post("")
async def create_spreadsheet(
    request: CreateSpreadsheetRequest,
    sheets: SheetsService = Depends(get_sheets),
):
    try:
        spreadsheet = await sheets.create_spreadsheet(request.title, request.sheet_titles)
    except Exception as e:
        logger.error(f"Error creating spreadsheet: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create spreadsheet")
    return spreadsheet.to_dict()


@router.get("/{spreadsheet_id}")
async def get_spreadsheet(
    spreadsheet_id: str,
    range_: str | None = Query(None, alias="range", description="A1 notation, e.g. Sheet1!A1:D10"),
    sheets: SheetsService = Depends(get_sheets),
):
    """Values for a range, or spreadsheet metadata when no range is given."""
    try:
        if range_:
            result = await sheets.get_values(spreadsheet_id, range_)
        else:
            result = await sheets.get_spreadsheet(spreadsheet_id)
    except Exception as e:
        logger.error(f"Error fetching spreadsheet {spreadsheet_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch spreadsheet")
    return result.to_dict()


@router.put("/{spreadsheet_id}")
async def update_values(
    spreadsheet_id: str,
    request: UpdateValuesRequest,
    sheets: SheetsService = Depends(get_sheets),
):
    try:
        return await sheets.update_values(
            spreadsheet_id, request.range, request.values, request.input_option
        )
    except Exception as e:
        logger.error(f"Error updating spreadsheet {spreadsheet_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update spreadsheet")


@router.post("/{spreadsheet_id}")
async def spreadsheet_action(
    spreadsheet_id: str,
    payload: Annotated[SpreadsheetAction, Body(discriminator="action")],
    sheets: SheetsService = Depends(get_sheets),
):
    """Append or clear values, or add, delete and rename tabs."""
    try:
        if isinstance(payload, AppendValuesAction):
            return await sheets.append_values(
                spreadsheet_id, payload.range, payload.values, payload.input_option
            )
        if isinstance(payload, ClearValuesAction):
            return await sheets.clear_values(spreadsheet_id, payload.range)
        if isinstance(payload, AddSheetAction):
            sheet = await sheets.add_sheet(spreadsheet_id, payload.title)
            return sheet.to_dict()
        if isinstance(payload, DeleteSheetAction):
            await sheets.delete_sheet(spreadsheet_id, payload.sheet_id)
        else:
            await sheets.rename_sheet(spreadsheet_id, payload.sheet_id, payload.title)
    except Exception as e:
        logger.error(f"Error performing spreadsheet action {payload.action}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to perform spreadsheet action")
    return {"success": True}
