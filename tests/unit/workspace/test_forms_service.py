"""Tests for mailhub/workspace/forms.py - question building and FormsService"""

from unittest.mock import AsyncMock

import pytest

from mailhub.workspace.client import FORMS_API_BASE
from mailhub.workspace.forms import FormsService, QuestionType, build_question


@pytest.fixture
def forms():
    service = FormsService("token-123")
    service._make_request = AsyncMock()
    return service


class TestBuildQuestion:
    def test_short_text(self):
        assert build_question({"title": "Name", "type": "SHORT_TEXT", "required": True}) == {
            "required": True,
            "textQuestion": {"paragraph": False},
        }

    def test_paragraph(self):
        assert build_question({"title": "Notes", "type": "PARAGRAPH"}) == {
            "textQuestion": {"paragraph": True}
        }

    @pytest.mark.parametrize(
        "question_type, api_type",
        [("MULTIPLE_CHOICE", "RADIO"), ("CHECKBOXES", "CHECKBOX"), ("DROPDOWN", "DROP_DOWN")],
    )
    def test_choice_types(self, question_type, api_type):
        body = build_question({"title": "Pick", "type": question_type, "options": ["A", "B"]})
        assert body == {
            "choiceQuestion": {"type": api_type, "options": [{"value": "A"}, {"value": "B"}]}
        }

    def test_scale_defaults(self):
        assert build_question({"title": "Rate", "type": QuestionType.SCALE}) == {
            "scaleQuestion": {"low": 1, "high": 5}
        }

    def test_scale_with_labels(self):
        body = build_question({
            "title": "Rate",
            "type": "SCALE",
            "scaleConfig": {"low": 0, "high": 10, "lowLabel": "Never", "highLabel": "Always"},
        })
        # low of 0 falls back to 1
        assert body["scaleQuestion"] == {"low": 1, "high": 10, "lowLabel": "Never", "highLabel": "Always"}

    def test_date_and_time(self):
        assert build_question({"title": "When", "type": "DATE"}) == {"dateQuestion": {"includeTime": False}}
        assert build_question({"title": "At", "type": "TIME"}) == {"timeQuestion": {}}

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            build_question({"title": "?", "type": "FILE_UPLOAD"})


class TestFormsService:
    @pytest.mark.asyncio
    async def test_create_defaults_document_title(self, forms):
        forms._make_request.return_value = {
            "formId": "f1",
            "info": {"title": "Survey", "documentTitle": "Survey"},
            "responderUri": "https://docs.google.com/forms/d/e/x/viewform",
        }

        form = await forms.create_form("Survey")

        assert forms._make_request.await_args.kwargs["data"] == {
            "info": {"title": "Survey", "documentTitle": "Survey"}
        }
        assert form.responder_uri.endswith("viewform")

    @pytest.mark.asyncio
    async def test_get_form_parses_items(self, forms):
        forms._make_request.return_value = {
            "formId": "f1",
            "info": {"title": "Survey"},
            "items": [
                {
                    "itemId": "i1",
                    "title": "Rate us",
                    "questionItem": {"question": {"questionId": "q1", "scaleQuestion": {"high": 10}}},
                },
                {"itemId": "i2", "title": "Section 2", "pageBreakItem": {}},
            ],
        }

        form = await forms.get_form("f1")

        first, second = form.items
        assert first.question_item["question"]["scaleQuestion"] == {"low": 1, "high": 10}
        assert second.page_break_item == {}
        assert second.to_dict() == {"itemId": "i2", "title": "Section 2", "pageBreakItem": {}}

    @pytest.mark.asyncio
    async def test_update_form_mask(self, forms):
        forms._make_request.return_value = {}

        await forms.update_form("f1", title="New title", description="Details")

        request = forms._make_request.await_args.kwargs["data"]["requests"][0]
        assert request == {
            "updateFormInfo": {
                "info": {"title": "New title", "description": "Details"},
                "updateMask": "title,description",
            }
        }

    @pytest.mark.asyncio
    async def test_update_form_noop(self, forms):
        await forms.update_form("f1")

        forms._make_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_question_defaults_to_top(self, forms):
        forms._make_request.return_value = {}

        await forms.add_question("f1", {"title": "Email", "type": "SHORT_TEXT", "description": "Work email"})

        call = forms._make_request.await_args
        assert call.args == ("POST", f"{FORMS_API_BASE}/forms/f1:batchUpdate")
        create = call.kwargs["data"]["requests"][0]["createItem"]
        assert create["location"] == {"index": 0}
        assert create["item"] == {
            "title": "Email",
            "description": "Work email",
            "questionItem": {"question": {"textQuestion": {"paragraph": False}}},
        }

    @pytest.mark.asyncio
    async def test_list_responses_page_size(self, forms):
        forms._make_request.return_value = {
            "responses": [{"responseId": "r1", "answers": {}}],
            "nextPageToken": "more",
        }

        responses, token = await forms.list_responses("f1")

        assert forms._make_request.await_args.kwargs["params"] == {"pageToken": None, "pageSize": 100}
        assert responses[0].response_id == "r1"
        assert token == "more"
