"""
Tool: Workspace Models
Purpose: Typed mirrors of Google Workspace resources

Usage:
    from mailhub.workspace.models import CalendarEvent, DriveFile, EmailMessage

    event = CalendarEvent.from_api(response_json)
    payload = event.to_dict()   # camelCase wire shape, unset fields omitted

These types carry no invariants of their own. They mirror the upstream
resource and nothing more: Google owns the lifecycle of every entity.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _wire_value(value: Any) -> Any:
    if isinstance(value, WireModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_wire_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _wire_value(v) for k, v in value.items()}
    return value


class WireModel:
    """
    Mixin giving dataclasses a camelCase to_dict().

    Fields set to None are omitted, matching how the upstream APIs leave
    out unset properties. WIRE_NAMES overrides the generated key.
    """

    WIRE_NAMES: ClassVar[dict[str, str]] = {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            key = self.WIRE_NAMES.get(f.name, _camel(f.name))
            d[key] = _wire_value(value)
        return d


# =============================================================================
# Gmail
# =============================================================================


@dataclass
class Attachment(WireModel):
    """Attachment metadata surfaced from a message part."""

    id: str
    filename: str
    mime_type: str = "application/octet-stream"
    size: int = 0


@dataclass
class EmailListItem(WireModel):
    """Lightweight message row for inbox listings."""

    WIRE_NAMES: ClassVar[dict[str, str]] = {"sender": "from"}

    id: str
    thread_id: str
    subject: str = "(No Subject)"
    sender: str = ""
    snippet: str = ""
    date: str = ""
    is_unread: bool = False
    has_attachments: bool = False
    label_ids: list[str] = field(default_factory=list)


@dataclass
class EmailMessage(WireModel):
    """Fully decoded message, body resolved from the MIME tree."""

    WIRE_NAMES: ClassVar[dict[str, str]] = {"sender": "from"}

    id: str
    thread_id: str
    label_ids: list[str] = field(default_factory=list)
    snippet: str = ""
    subject: str = "(No Subject)"
    sender: str = ""
    to: str = ""
    date: str = ""
    body: str = ""
    body_html: str | None = None
    is_unread: bool = False
    has_attachments: bool = False
    attachments: list[Attachment] = field(default_factory=list)


@dataclass
class EmailPage(WireModel):
    """One page of a message listing."""

    messages: list[EmailListItem] = field(default_factory=list)
    next_page_token: str | None = None
    result_size_estimate: int = 0


@dataclass
class Label(WireModel):
    id: str
    name: str
    type: str = "user"  # system, user
    message_list_visibility: str | None = None
    label_list_visibility: str | None = None
    messages_total: int | None = None
    messages_unread: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Label":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            type=data.get("type", "user"),
            message_list_visibility=data.get("messageListVisibility"),
            label_list_visibility=data.get("labelListVisibility"),
            messages_total=data.get("messagesTotal"),
            messages_unread=data.get("messagesUnread"),
        )


# =============================================================================
# Calendar
# =============================================================================


@dataclass
class EventDateTime(WireModel):
    """Either a date-only (all-day) value or a date-time with timezone."""

    date_time: str | None = None
    date: str | None = None
    time_zone: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "EventDateTime":
        data = data or {}
        return cls(
            date_time=data.get("dateTime"),
            date=data.get("date"),
            time_zone=data.get("timeZone"),
        )

    @property
    def all_day(self) -> bool:
        return self.date is not None and self.date_time is None


@dataclass
class Attendee(WireModel):
    email: str
    display_name: str | None = None
    response_status: str | None = None  # needsAction, accepted, declined, tentative

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Attendee":
        return cls(
            email=data.get("email", ""),
            display_name=data.get("displayName"),
            response_status=data.get("responseStatus"),
        )


@dataclass
class CalendarEvent(WireModel):
    """Calendar event as exposed to the client."""

    id: str
    summary: str = ""
    description: str | None = None
    location: str | None = None
    start: EventDateTime = field(default_factory=EventDateTime)
    end: EventDateTime = field(default_factory=EventDateTime)
    attendees: list[Attendee] | None = None
    status: str | None = None  # confirmed, tentative, cancelled
    html_link: str | None = None
    conference_data: dict[str, Any] | None = None
    recurrence: list[str] | None = None
    recurring_event_id: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CalendarEvent":
        """Parse a Google Calendar event resource."""
        conference = data.get("conferenceData")
        conference_data = None
        if conference:
            conference_data = {
                "conferenceId": conference.get("conferenceId"),
                "entryPoints": [
                    {"entryPointType": e.get("entryPointType", ""), "uri": e.get("uri", "")}
                    for e in conference.get("entryPoints", [])
                ],
            }
            if conference_data["conferenceId"] is None:
                del conference_data["conferenceId"]

        attendees = data.get("attendees")
        return cls(
            id=data.get("id", ""),
            summary=data.get("summary", ""),
            description=data.get("description"),
            location=data.get("location"),
            start=EventDateTime.from_api(data.get("start")),
            end=EventDateTime.from_api(data.get("end")),
            attendees=[Attendee.from_api(a) for a in attendees] if attendees is not None else None,
            status=data.get("status"),
            html_link=data.get("htmlLink"),
            conference_data=conference_data,
            recurrence=data.get("recurrence"),
            recurring_event_id=data.get("recurringEventId"),
        )


@dataclass
class EventPage(WireModel):
    events: list[CalendarEvent] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass
class CalendarListEntry(WireModel):
    id: str
    summary: str = ""
    description: str | None = None
    primary: bool = False
    background_color: str | None = None
    foreground_color: str | None = None
    access_role: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CalendarListEntry":
        return cls(
            id=data.get("id", ""),
            summary=data.get("summary", ""),
            description=data.get("description"),
            primary=bool(data.get("primary", False)),
            background_color=data.get("backgroundColor"),
            foreground_color=data.get("foregroundColor"),
            access_role=data.get("accessRole"),
        )


@dataclass
class TimeSlot(WireModel):
    """A free interval, ISO 8601 UTC strings."""

    start: str
    end: str


# =============================================================================
# Drive
# =============================================================================


@dataclass
class DriveOwner(WireModel):
    display_name: str | None = None
    email_address: str | None = None
    photo_link: str | None = None


@dataclass
class DriveFile(WireModel):
    id: str
    name: str = ""
    mime_type: str = ""
    size: str | None = None  # Drive reports int64 sizes as strings
    created_time: str | None = None
    modified_time: str | None = None
    parents: list[str] | None = None
    web_view_link: str | None = None
    web_content_link: str | None = None
    icon_link: str | None = None
    thumbnail_link: str | None = None
    starred: bool | None = None
    trashed: bool | None = None
    shared: bool | None = None
    owners: list[DriveOwner] | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "DriveFile":
        owners = data.get("owners")
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            mime_type=data.get("mimeType", ""),
            size=data.get("size"),
            created_time=data.get("createdTime"),
            modified_time=data.get("modifiedTime"),
            parents=data.get("parents"),
            web_view_link=data.get("webViewLink"),
            web_content_link=data.get("webContentLink"),
            icon_link=data.get("iconLink"),
            thumbnail_link=data.get("thumbnailLink"),
            starred=data.get("starred"),
            trashed=data.get("trashed"),
            shared=data.get("shared"),
            owners=[
                DriveOwner(
                    display_name=o.get("displayName"),
                    email_address=o.get("emailAddress"),
                    photo_link=o.get("photoLink"),
                )
                for o in owners
            ] if owners is not None else None,
        )


@dataclass
class DriveFolder(WireModel):
    id: str
    name: str = ""
    parents: list[str] | None = None


@dataclass
class FilePage(WireModel):
    files: list[DriveFile] = field(default_factory=list)
    next_page_token: str | None = None


@dataclass
class StorageQuota(WireModel):
    limit: str | None = None
    usage: str | None = None
    usage_in_drive: str | None = None
    usage_in_drive_trash: str | None = None


@dataclass
class FileSummary(WireModel):
    """Listing row for Docs, Sheets and Forms (backed by a Drive query)."""

    id: str
    name: str = ""
    modified_time: str | None = None


# =============================================================================
# Docs
# =============================================================================


@dataclass
class Document(WireModel):
    id: str
    title: str = ""
    body: str | None = None
    revision_id: str | None = None
    web_view_link: str | None = None


@dataclass
class DocumentContent(WireModel):
    """Plain text plus the paragraph/text-run structure it came from."""

    text: str = ""
    structural_elements: list[dict[str, Any]] = field(default_factory=list)


# =============================================================================
# Sheets
# =============================================================================


@dataclass
class SheetProperties(WireModel):
    sheet_id: int = 0
    title: str = ""
    index: int = 0
    grid_properties: dict[str, int] | None = None

    @classmethod
    def from_api(cls, properties: dict[str, Any] | None, default_title: str = "") -> "SheetProperties":
        properties = properties or {}
        grid = properties.get("gridProperties")
        return cls(
            sheet_id=properties.get("sheetId", 0),
            title=properties.get("title", default_title),
            index=properties.get("index", 0),
            grid_properties={
                "rowCount": grid.get("rowCount", 0),
                "columnCount": grid.get("columnCount", 0),
            } if grid else None,
        )


@dataclass
class Spreadsheet(WireModel):
    id: str
    title: str = ""
    locale: str | None = None
    time_zone: str | None = None
    sheets: list[SheetProperties] | None = None
    web_view_link: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Spreadsheet":
        properties = data.get("properties", {})
        sheets = data.get("sheets")
        return cls(
            id=data.get("spreadsheetId", ""),
            title=properties.get("title", ""),
            locale=properties.get("locale"),
            time_zone=properties.get("timeZone"),
            sheets=[SheetProperties.from_api(s.get("properties")) for s in sheets]
            if sheets is not None else None,
            web_view_link=data.get("spreadsheetUrl"),
        )


@dataclass
class SheetData(WireModel):
    range: str
    values: list[list[Any]] = field(default_factory=list)


# =============================================================================
# Forms
# =============================================================================


@dataclass
class FormItem(WireModel):
    """
    One form item. Exactly one of the *_item fields is set, mirroring the
    Forms API union. question_item keeps the upstream question shape.
    """

    item_id: str
    title: str = ""
    description: str | None = None
    question_item: dict[str, Any] | None = None
    page_break_item: dict[str, Any] | None = None
    text_item: dict[str, Any] | None = None
    image_item: dict[str, Any] | None = None
    video_item: dict[str, Any] | None = None


@dataclass
class Form(WireModel):
    id: str
    title: str = ""
    description: str | None = None
    document_title: str | None = None
    responder_uri: str | None = None
    linked_sheet_id: str | None = None
    items: list[FormItem] | None = None


@dataclass
class FormResponse(WireModel):
    response_id: str
    create_time: str = ""
    last_submitted_time: str = ""
    respondent_email: str | None = None
    answers: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "FormResponse":
        answers = {}
        for question_id, answer in (data.get("answers") or {}).items():
            entry: dict[str, Any] = {"questionId": answer.get("questionId", "")}
            text_answers = answer.get("textAnswers")
            if text_answers is not None:
                entry["textAnswers"] = {
                    "answers": [{"value": a.get("value", "")} for a in text_answers.get("answers", [])]
                }
            answers[question_id] = entry

        return cls(
            response_id=data.get("responseId", ""),
            create_time=data.get("createTime", ""),
            last_submitted_time=data.get("lastSubmittedTime", ""),
            respondent_email=data.get("respondentEmail"),
            answers=answers,
        )
