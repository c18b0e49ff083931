"""
Tool: Sheets Service
Purpose: Spreadsheet metadata, cell values and tab management via the Sheets API

Usage:
    from mailhub.workspace.sheets import SheetsService

    sheets = SheetsService(access_token)
    data = await sheets.get_values(spreadsheet_id, "Sheet1!A1:D10")
    await sheets.append_values(spreadsheet_id, "Sheet1", [["2024-01-01", 42]])
"""

import logging
from typing import Any
from urllib.parse import quote

from mailhub.workspace.client import SHEETS_API_BASE, GoogleApiClient
from mailhub.workspace.drive import DriveService
from mailhub.workspace.models import FileSummary, SheetData, SheetProperties, Spreadsheet


logger = logging.getLogger(__name__)

SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"

# USER_ENTERED parses input as if typed into the UI (formulas, dates);
# RAW stores strings verbatim.
VALUE_INPUT_OPTIONS = ("RAW", "USER_ENTERED")


class SheetsService(GoogleApiClient):
    """Sheets wrapper bound to one access token."""

    def _url(self, spreadsheet_id: str, suffix: str = "") -> str:
        return f"{SHEETS_API_BASE}/spreadsheets/{spreadsheet_id}{suffix}"

    def _values_url(self, spreadsheet_id: str, range_: str, suffix: str = "") -> str:
        return self._url(spreadsheet_id, f"/values/{quote(range_, safe='')}{suffix}")

    async def list_spreadsheets(
        self,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> tuple[list[FileSummary], str | None]:
        drive = DriveService(self.access_token)
        return await drive.list_by_mime_type(SPREADSHEET_MIME_TYPE, page_token, page_size)

    async def get_spreadsheet(self, spreadsheet_id: str) -> Spreadsheet:
        data = await self._make_request("GET", self._url(spreadsheet_id))
        return Spreadsheet.from_api(data)

    async def create_spreadsheet(
        self,
        title: str,
        sheet_titles: list[str] | None = None,
    ) -> Spreadsheet:
        body: dict[str, Any] = {"properties": {"title": title}}
        if sheet_titles:
            body["sheets"] = [{"properties": {"title": t}} for t in sheet_titles]

        data = await self._make_request("POST", f"{SHEETS_API_BASE}/spreadsheets", data=body)
        logger.info(f"Created spreadsheet {data.get('spreadsheetId')}")
        return Spreadsheet.from_api(data)

    async def get_values(self, spreadsheet_id: str, range_: str) -> SheetData:
        data = await self._make_request("GET", self._values_url(spreadsheet_id, range_))
        return SheetData(range=data.get("range") or range_, values=data.get("values") or [])

    async def update_values(
        self,
        spreadsheet_id: str,
        range_: str,
        values: list[list[Any]],
        input_option: str = "USER_ENTERED",
    ) -> dict[str, Any]:
        """Overwrite a range. Returns updatedRange/updatedRows/updatedColumns."""
        data = await self._make_request(
            "PUT",
            self._values_url(spreadsheet_id, range_),
            data={"values": values},
            params={"valueInputOption": input_option},
        )
        return {
            "updatedRange": data.get("updatedRange", ""),
            "updatedRows": data.get("updatedRows", 0),
            "updatedColumns": data.get("updatedColumns", 0),
        }

    async def append_values(
        self,
        spreadsheet_id: str,
        range_: str,
        values: list[list[Any]],
        input_option: str = "USER_ENTERED",
    ) -> dict[str, Any]:
        """Append rows after the table found in range, inserting new rows."""
        data = await self._make_request(
            "POST",
            self._values_url(spreadsheet_id, range_, ":append"),
            data={"values": values},
            params={"valueInputOption": input_option, "insertDataOption": "INSERT_ROWS"},
        )
        updates = data.get("updates") or {}
        return {
            "updatedRange": updates.get("updatedRange", ""),
            "updatedRows": updates.get("updatedRows", 0),
        }

    async def clear_values(self, spreadsheet_id: str, range_: str) -> dict[str, str]:
        data = await self._make_request(
            "POST", self._values_url(spreadsheet_id, range_, ":clear"), data={}
        )
        return {"clearedRange": data.get("clearedRange", "")}

    async def batch_update(self, spreadsheet_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        return await self._make_request(
            "POST", self._url(spreadsheet_id, ":batchUpdate"), data={"requests": requests}
        )

    async def add_sheet(self, spreadsheet_id: str, title: str) -> SheetProperties:
        data = await self.batch_update(
            spreadsheet_id, [{"addSheet": {"properties": {"title": title}}}]
        )
        replies = data.get("replies") or [{}]
        properties = (replies[0].get("addSheet") or {}).get("properties")
        return SheetProperties.from_api(properties, default_title=title)

    async def delete_sheet(self, spreadsheet_id: str, sheet_id: int) -> None:
        await self.batch_update(spreadsheet_id, [{"deleteSheet": {"sheetId": sheet_id}}])

    async def rename_sheet(self, spreadsheet_id: str, sheet_id: int, new_title: str) -> None:
        await self.batch_update(
            spreadsheet_id,
            [{
                "updateSheetProperties": {
                    "properties": {"sheetId": sheet_id, "title": new_title},
                    "fields": "title",
                }
            }],
        )
