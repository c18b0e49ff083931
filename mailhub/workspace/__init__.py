"""Workspace: thin async wrappers over the Google Workspace REST APIs

Every service is constructed per request with the caller's OAuth access
token and holds no other state. Upstream failures raise WorkspaceApiError.

Components:
    client.py: GoogleApiClient base (bearer auth, aiohttp, error mapping)
    models.py: Dataclass mirrors of Google resources
    mime.py: Gmail payload body/attachment extraction, base64url codec
    freebusy.py: Free slot sweep over busy intervals
    gmail.py, calendar.py, drive.py, docs.py, sheets.py, forms.py: Services
"""

from mailhub.workspace.calendar import CalendarService
from mailhub.workspace.client import GoogleApiClient, WorkspaceApiError
from mailhub.workspace.docs import DocsService
from mailhub.workspace.drive import DriveService
from mailhub.workspace.forms import FormsService
from mailhub.workspace.gmail import GmailService
from mailhub.workspace.sheets import SheetsService


__all__ = [
    "CalendarService",
    "DocsService",
    "DriveService",
    "FormsService",
    "GmailService",
    "GoogleApiClient",
    "SheetsService",
    "WorkspaceApiError",
]
