"""
Request dependencies: access token extraction and per-request services.

Services are built from the caller's token on every request. Every /api
router except health also depends on get_access_token directly, so the
AI routes require a token too and overriding a service in tests keeps the
401 check in place.
"""

from fastapi import Depends, HTTPException, Request, status

from mailhub.assistant.email import EmailAssistant
from mailhub.assistant.llm import LLMClient
from mailhub.assistant.productivity import ProductivityAssistant
from mailhub.config import DEFAULT_TOKEN_COOKIE, get_section
from mailhub.workspace import (
    CalendarService,
    DocsService,
    DriveService,
    FormsService,
    GmailService,
    SheetsService,
)


async def get_access_token(request: Request) -> str:
    """
    Read the Google access token for this request.

    Checks the Authorization: Bearer header first, then the session cookie.

    Raises:
        HTTPException: 401 when neither is present
    """
    token = None
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()

    if not token:
        cookie_name = get_section("server").get("token_cookie_name", DEFAULT_TOKEN_COOKIE)
        token = request.cookies.get(cookie_name)

    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return token


def get_gmail(token: str = Depends(get_access_token)) -> GmailService:
    return GmailService(token)


def get_calendar(token: str = Depends(get_access_token)) -> CalendarService:
    return CalendarService(token)


def get_drive(token: str = Depends(get_access_token)) -> DriveService:
    return DriveService(token)


def get_docs(token: str = Depends(get_access_token)) -> DocsService:
    return DocsService(token)


def get_sheets(token: str = Depends(get_access_token)) -> SheetsService:
    return SheetsService(token)


def get_forms(token: str = Depends(get_access_token)) -> FormsService:
    return FormsService(token)


def get_llm() -> LLMClient:
    return LLMClient()


def get_email_assistant(
    llm: LLMClient = Depends(get_llm),
) -> EmailAssistant:
    return EmailAssistant(llm)


def get_productivity_assistant(
    llm: LLMClient = Depends(get_llm),
) -> ProductivityAssistant:
    return ProductivityAssistant(llm)
