"""
Pydantic models for Mailhub API request/response types.

Request bodies use camelCase on the wire (populate_by_name lets tests and
internal callers use snake_case too). Bodies carrying an `action` field are
tagged variants: each action is its own model, several of them form a union
discriminated on `action`, and unknown actions fail validation.
"""

from datetime import datetime
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mailhub.assistant.email import EmailContext, Tone
from mailhub.workspace.forms import QuestionType
from mailhub.workspace.freebusy import parse_instant


class ApiModel(BaseModel):
    """Base for request bodies: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Common Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code")
    details: dict[str, Any] | None = Field(None, description="Additional error details")


class SuccessResponse(BaseModel):
    success: bool = True


class HealthCheck(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=datetime.now)
    services: dict[str, str] = Field(default_factory=dict, description="Status of individual services")


# =============================================================================
# Gmail Models
# =============================================================================


class MarkReadAction(ApiModel):
    action: Literal["markRead"]


class MarkUnreadAction(ApiModel):
    action: Literal["markUnread"]


class ModifyLabelsAction(ApiModel):
    action: Literal["modifyLabels"]
    add_label_ids: list[str] = Field(default_factory=list)
    remove_label_ids: list[str] = Field(default_factory=list)


MessageAction = Union[MarkReadAction, MarkUnreadAction, ModifyLabelsAction]


class SendMessageRequest(ApiModel):
    to: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    cc: str | None = None
    bcc: str | None = None
    thread_id: str | None = None
    in_reply_to: str | None = None
    references: str | None = None


# =============================================================================
# Calendar Models
# =============================================================================


class EventTime(ApiModel):
    date_time: str | None = None
    date: str | None = None
    time_zone: str | None = None


class AttendeeInput(ApiModel):
    email: str = Field(..., min_length=1)


class CreateEventRequest(ApiModel):
    calendar_id: str = "primary"
    summary: str = Field(..., min_length=1)
    start: EventTime
    end: EventTime
    description: str | None = None
    location: str | None = None
    attendees: list[AttendeeInput] | None = None
    recurrence: list[str] | None = None
    conference_data_version: int = 0

    def event_body(self) -> dict[str, Any]:
        """Calendar API insert body (camelCase, unset fields dropped)."""
        return self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={"calendar_id", "conference_data_version"},
        )


class UpdateEventRequest(ApiModel):
    calendar_id: str = "primary"
    summary: str | None = None
    description: str | None = None
    location: str | None = None
    start: EventTime | None = None
    end: EventTime | None = None
    attendees: list[AttendeeInput] | None = None

    def updates(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"calendar_id"})


class FreeBusyRequest(ApiModel):
    time_min: str = Field(..., min_length=1)
    time_max: str = Field(..., min_length=1)
    calendar_ids: list[str] = Field(default_factory=lambda: ["primary"])
    duration_minutes: int = Field(30, gt=0)

    @field_validator("time_min", "time_max")
    @classmethod
    def check_timestamp(cls, value: str) -> str:
        parse_instant(value)
        return value


# =============================================================================
# Drive Models
# =============================================================================


class CreateFolderRequest(ApiModel):
    name: str = Field(..., min_length=1)
    parent_id: str | None = None
    type: str | None = None


class UpdateFileRequest(ApiModel):
    name: str | None = None
    starred: bool | None = None
    trashed: bool | None = None
    add_parents: str | None = None
    remove_parents: str | None = None


# =============================================================================
# Docs Models
# =============================================================================


class CreateDocumentRequest(ApiModel):
    title: str = Field(..., min_length=1)
    content: str | None = None


class AppendTextAction(ApiModel):
    action: Literal["append"]
    text: str = Field(..., min_length=1)


class ReplaceTextAction(ApiModel):
    action: Literal["replace"]
    search_text: str = Field(..., min_length=1)
    replace_text: str
    match_case: bool = False


DocumentAction = Union[AppendTextAction, ReplaceTextAction]


# =============================================================================
# Sheets Models
# =============================================================================

InputOption = Literal["RAW", "USER_ENTERED"]


class CreateSpreadsheetRequest(ApiModel):
    title: str = Field(..., min_length=1)
    sheet_titles: list[str] | None = None


class UpdateValuesRequest(ApiModel):
    range: str = Field(..., min_length=1)
    values: list[list[Any]]
    input_option: InputOption = "USER_ENTERED"


class AppendValuesAction(ApiModel):
    action: Literal["append"]
    range: str = Field(..., min_length=1)
    values: list[list[Any]]
    input_option: InputOption = "USER_ENTERED"


class ClearValuesAction(ApiModel):
    action: Literal["clear"]
    range: str = Field(..., min_length=1)


class AddSheetAction(ApiModel):
    action: Literal["addSheet"]
    title: str = Field(..., min_length=1)


class DeleteSheetAction(ApiModel):
    action: Literal["deleteSheet"]
    sheet_id: int


class RenameSheetAction(ApiModel):
    action: Literal["renameSheet"]
    sheet_id: int
    title: str = Field(..., min_length=1)


SpreadsheetAction = Union[
    AppendValuesAction, ClearValuesAction, AddSheetAction, DeleteSheetAction, RenameSheetAction
]


# =============================================================================
# Forms Models
# =============================================================================


class CreateFormRequest(ApiModel):
    title: str = Field(..., min_length=1)
    document_title: str | None = None


class UpdateFormRequest(ApiModel):
    title: str | None = None
    description: str | None = None


class ScaleConfig(ApiModel):
    low: int = 1
    high: int = 5
    low_label: str | None = None
    high_label: str | None = None


class QuestionInput(ApiModel):
    title: str = Field(..., min_length=1)
    type: QuestionType
    description: str | None = None
    required: bool | None = None
    options: list[str] | None = None
    scale_config: ScaleConfig | None = None


class AddQuestionAction(ApiModel):
    action: Literal["addQuestion"]
    question: QuestionInput
    index: int | None = None


# =============================================================================
# AI Models
# =============================================================================


class EmailContextRequest(ApiModel):
    subject: str = Field(..., min_length=1)
    sender: str = Field(..., min_length=1, alias="from")
    body: str = Field(..., min_length=1)
    to: str = ""
    date: str | None = None

    def to_context(self) -> EmailContext:
        return EmailContext(
            subject=self.subject,
            sender=self.sender,
            body=self.body,
            to=self.to,
            date=self.date or datetime.now().isoformat(),
        )


class ReplyRequest(EmailContextRequest):
    tone: Tone = Tone.PROFESSIONAL
    instructions: str | None = None


class ImproveRequest(ApiModel):
    draft: str = Field(..., min_length=1)
    instructions: str | None = None


class SuggestTimeAction(ApiModel):
    action: Literal["suggestTime"]
    description: str = Field(..., min_length=1)
    free_slots: list[dict[str, str]]
    preferences: str | None = None


class GenerateAgendaAction(ApiModel):
    action: Literal["generateAgenda"]
    meeting_context: str = Field(..., min_length=1)


CalendarAiAction = Union[SuggestTimeAction, GenerateAgendaAction]


class SummarizeDocumentAction(ApiModel):
    action: Literal["summarize"]
    content: str = Field(..., min_length=1)


class AnalyzeSheetAction(ApiModel):
    action: Literal["analyze"]
    headers: list[str]
    data: list[list[Any]]
    question: str = Field(..., min_length=1)


class GenerateQuestionsAction(ApiModel):
    action: Literal["generateQuestions"]
    topic: str = Field(..., min_length=1)
    purpose: str = Field(..., min_length=1)
    question_count: int = Field(5, gt=0, le=50)


class AnalyzeResponsesAction(ApiModel):
    action: Literal["analyzeResponses"]
    questions: list[Any]
    responses: list[Any]


FormsAiAction = Union[GenerateQuestionsAction, AnalyzeResponsesAction]


class OrganizeFilesAction(ApiModel):
    action: Literal["organize"]
    files: list[dict[str, Any]]

