"""
Tool: Forms Service
Purpose: Create and edit Google Forms and read their responses

Usage:
    from mailhub.workspace.forms import FormsService, QuestionType

    forms = FormsService(access_token)
    form = await forms.create_form("Team offsite survey")
    await forms.add_question(form.id, {"title": "Preferred dates", "type": QuestionType.CHECKBOXES,
                                       "options": ["May 3", "May 10"]})
"""

import logging
from enum import Enum
from typing import Any

from mailhub.workspace.client import FORMS_API_BASE, GoogleApiClient
from mailhub.workspace.drive import DriveService
from mailhub.workspace.models import FileSummary, Form, FormItem, FormResponse


logger = logging.getLogger(__name__)

FORM_MIME_TYPE = "application/vnd.google-apps.form"


class QuestionType(str, Enum):
    """Question kinds the client can add to a form."""

    SHORT_TEXT = "SHORT_TEXT"
    PARAGRAPH = "PARAGRAPH"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    CHECKBOXES = "CHECKBOXES"
    DROPDOWN = "DROPDOWN"
    SCALE = "SCALE"
    DATE = "DATE"
    TIME = "TIME"


# Choice question kinds map onto the Forms API choiceQuestion.type
CHOICE_TYPES = {
    QuestionType.MULTIPLE_CHOICE: "RADIO",
    QuestionType.CHECKBOXES: "CHECKBOX",
    QuestionType.DROPDOWN: "DROP_DOWN",
}


def build_question(question: dict[str, Any]) -> dict[str, Any]:
    """
    Translate a client question into a Forms API question body.

    Args:
        question: {title, type, required?, options?, scaleConfig?}

    Returns:
        The `question` object for a createItem request
    """
    question_type = QuestionType(question["type"])
    body: dict[str, Any] = {}
    if question.get("required") is not None:
        body["required"] = question["required"]

    if question_type in (QuestionType.SHORT_TEXT, QuestionType.PARAGRAPH):
        body["textQuestion"] = {"paragraph": question_type == QuestionType.PARAGRAPH}
    elif question_type in CHOICE_TYPES:
        body["choiceQuestion"] = {
            "type": CHOICE_TYPES[question_type],
            "options": [{"value": value} for value in question.get("options") or []],
        }
    elif question_type == QuestionType.SCALE:
        scale = question.get("scaleConfig") or {}
        body["scaleQuestion"] = {"low": scale.get("low") or 1, "high": scale.get("high") or 5}
        for label in ("lowLabel", "highLabel"):
            if scale.get(label):
                body["scaleQuestion"][label] = scale[label]
    elif question_type == QuestionType.DATE:
        body["dateQuestion"] = {"includeTime": False}
    elif question_type == QuestionType.TIME:
        body["timeQuestion"] = {}

    return body


def _parse_item(item: dict[str, Any]) -> FormItem:
    question_item = None
    if item.get("questionItem") is not None:
        question = dict((item["questionItem"].get("question") or {}))
        question.setdefault("questionId", "")
        scale = question.get("scaleQuestion")
        if scale is not None:
            question["scaleQuestion"] = {**scale, "low": scale.get("low") or 1, "high": scale.get("high") or 5}
        if "timeQuestion" in question:
            question["timeQuestion"] = True
        question_item = {"question": question}

    return FormItem(
        item_id=item.get("itemId", ""),
        title=item.get("title", ""),
        description=item.get("description"),
        question_item=question_item,
        page_break_item=item.get("pageBreakItem"),
        text_item=item.get("textItem"),
        image_item=item.get("imageItem"),
        video_item=item.get("videoItem"),
    )


class FormsService(GoogleApiClient):
    """Forms wrapper bound to one access token."""

    def _url(self, form_id: str, suffix: str = "") -> str:
        return f"{FORMS_API_BASE}/forms/{form_id}{suffix}"

    async def list_forms(
        self,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> tuple[list[FileSummary], str | None]:
        drive = DriveService(self.access_token)
        return await drive.list_by_mime_type(FORM_MIME_TYPE, page_token, page_size)

    async def get_form(self, form_id: str) -> Form:
        data = await self._make_request("GET", self._url(form_id))
        info = data.get("info") or {}
        items = data.get("items")
        return Form(
            id=data.get("formId", form_id),
            title=info.get("title", ""),
            description=info.get("description"),
            document_title=info.get("documentTitle"),
            responder_uri=data.get("responderUri"),
            linked_sheet_id=data.get("linkedSheetId"),
            items=[_parse_item(item) for item in items] if items is not None else None,
        )

    async def create_form(self, title: str, document_title: str | None = None) -> Form:
        """Create an empty form. Drive file name defaults to the title."""
        body = {"info": {"title": title, "documentTitle": document_title or title}}
        data = await self._make_request("POST", f"{FORMS_API_BASE}/forms", data=body)
        info = data.get("info") or {}
        logger.info(f"Created form {data.get('formId')}")
        return Form(
            id=data.get("formId", ""),
            title=info.get("title") or title,
            document_title=info.get("documentTitle"),
            responder_uri=data.get("responderUri"),
        )

    async def batch_update(self, form_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        return await self._make_request(
            "POST", self._url(form_id, ":batchUpdate"), data={"requests": requests}
        )

    async def update_form(
        self,
        form_id: str,
        title: str | None = None,
        description: str | None = None,
    ) -> None:
        """Update title and/or description. A no-op when neither is given."""
        info = {}
        if title is not None:
            info["title"] = title
        if description is not None:
            info["description"] = description
        if not info:
            return

        await self.batch_update(
            form_id,
            [{"updateFormInfo": {"info": info, "updateMask": ",".join(info)}}],
        )

    async def add_question(
        self,
        form_id: str,
        question: dict[str, Any],
        index: int | None = None,
    ) -> None:
        """Insert a question item at index (default: top of the form)."""
        item: dict[str, Any] = {
            "title": question["title"],
            "questionItem": {"question": build_question(question)},
        }
        if question.get("description"):
            item["description"] = question["description"]

        await self.batch_update(
            form_id,
            [{"createItem": {"item": item, "location": {"index": index or 0}}}],
        )

    async def list_responses(
        self,
        form_id: str,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> tuple[list[FormResponse], str | None]:
        params = {"pageToken": page_token, "pageSize": page_size or 100}
        data = await self._make_request("GET", self._url(form_id, "/responses"), params=params)
        responses = [FormResponse.from_api(r) for r in data.get("responses") or []]
        return responses, data.get("nextPageToken")

    async def get_response(self, form_id: str, response_id: str) -> FormResponse:
        data = await self._make_request("GET", self._url(form_id, f"/responses/{response_id}"))
        return FormResponse.from_api(data)
