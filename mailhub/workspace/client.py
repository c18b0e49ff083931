"""
Tool: Google API Client
Purpose: Authenticated async REST access to Google Workspace APIs

Every service wrapper subclasses GoogleApiClient and is constructed per
request with the caller's OAuth access token. Nothing is cached between
requests; each call opens its own aiohttp session.

Usage:
    from mailhub.workspace.client import GoogleApiClient, WorkspaceApiError

    class GmailService(GoogleApiClient):
        async def get_profile(self):
            return await self._make_request("GET", f"{GMAIL_API_BASE}/users/me/profile")

Dependencies:
    - aiohttp (pip install aiohttp)
"""

import json
import logging
from typing import Any

import aiohttp


logger = logging.getLogger(__name__)

# Google API endpoints
GMAIL_API_BASE = "https://gmail.googleapis.com/gmail/v1"
CALENDAR_API_BASE = "https://www.googleapis.com/calendar/v3"
DRIVE_API_BASE = "https://www.googleapis.com/drive/v3"
DRIVE_UPLOAD_BASE = "https://www.googleapis.com/upload/drive/v3"
DOCS_API_BASE = "https://docs.googleapis.com/v1"
SHEETS_API_BASE = "https://sheets.googleapis.com/v4"
FORMS_API_BASE = "https://forms.googleapis.com/v1"


class WorkspaceApiError(Exception):
    """A Google API call returned a non-2xx status."""

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.message = message
        self.status = status


def _encode_params(params: dict[str, Any] | None) -> list[tuple[str, str]] | None:
    """
    Flatten query params for aiohttp.

    None values are dropped, booleans become 'true'/'false', and lists
    become repeated keys (Gmail's labelIds, metadataHeaders).
    """
    if params is None:
        return None

    encoded: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for v in values:
            if isinstance(v, bool):
                v = "true" if v else "false"
            encoded.append((key, str(v)))
    return encoded


class GoogleApiClient:
    """Base class holding the bearer token and the request plumbing."""

    def __init__(self, access_token: str):
        self.access_token = access_token

    def _get_headers(self) -> dict[str, str]:
        """Get authorization headers for API requests."""
        return {"Authorization": f"Bearer {self.access_token}"}

    async def _make_request(
        self,
        method: str,
        url: str,
        data: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        """
        Make an authenticated JSON API request.

        Args:
            method: HTTP method
            url: Full API URL
            data: JSON request body
            params: Query parameters

        Returns:
            Decoded JSON body ({} for empty responses)

        Raises:
            WorkspaceApiError: On any non-2xx status
        """
        async with aiohttp.ClientSession() as session:
            async with session.request(
                method,
                url,
                headers=self._get_headers(),
                json=data,
                params=_encode_params(params),
            ) as resp:
                return await self._handle_response(resp)

    async def _download(self, url: str, params: dict | None = None) -> bytes:
        """Fetch a raw response body (file media)."""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url, headers=self._get_headers(), params=_encode_params(params)
            ) as resp:
                if resp.status >= 400:
                    await self._handle_response(resp)
                return await resp.read()

    async def _upload(
        self,
        url: str,
        metadata: dict[str, Any],
        content: bytes,
        content_type: str,
        params: dict | None = None,
    ) -> Any:
        """Multipart/related upload: JSON metadata part, then the media part."""
        with aiohttp.MultipartWriter("related") as writer:
            writer.append(
                json.dumps(metadata),
                {"Content-Type": "application/json; charset=UTF-8"},
            )
            writer.append(content, {"Content-Type": content_type})

            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    headers=self._get_headers(),
                    data=writer,
                    params=_encode_params(params),
                ) as resp:
                    return await self._handle_response(resp)

    async def _handle_response(self, resp: aiohttp.ClientResponse) -> Any:
        """Decode a response or raise WorkspaceApiError."""
        if resp.status == 204:
            return {}

        try:
            data = await resp.json(content_type=None)
        except (aiohttp.ContentTypeError, json.JSONDecodeError, UnicodeDecodeError):
            data = {}
        if data is None:
            data = {}

        if 200 <= resp.status < 300:
            return data

        if resp.status == 401:
            message = "Authentication failed - token may be expired"
        elif resp.status == 403:
            message = "Permission denied - insufficient scopes"
        elif resp.status == 404:
            message = "Resource not found"
        else:
            error = data.get("error") if isinstance(data, dict) else None
            if isinstance(error, dict):
                message = error.get("message", f"HTTP {resp.status}")
            else:
                message = f"HTTP {resp.status}"

        logger.warning(f"{resp.method} {resp.url} failed: {resp.status} {message}")
        raise WorkspaceApiError(message, resp.status)
