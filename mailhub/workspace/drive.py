"""
Tool: Drive Service
Purpose: File listing, search, upload, download and metadata changes via the Drive API

Usage:
    from mailhub.workspace.drive import DriveService

    drive = DriveService(access_token)
    page = await drive.list_files(folder_id="abc123")
    hits = await drive.search_files("quarterly report")
    folder = await drive.create_folder("Receipts")
"""

import logging
from typing import Any
from urllib.parse import quote

from mailhub.config import get_section
from mailhub.workspace.client import DRIVE_API_BASE, DRIVE_UPLOAD_BASE, GoogleApiClient
from mailhub.workspace.models import (
    DriveFile,
    DriveFolder,
    FilePage,
    FileSummary,
    StorageQuota,
)


logger = logging.getLogger(__name__)

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

FILE_FIELDS = (
    "id, name, mimeType, size, createdTime, modifiedTime, parents, webViewLink, "
    "webContentLink, iconLink, thumbnailLink, starred, trashed, shared, owners"
)
UPLOAD_FIELDS = "id, name, mimeType, size, createdTime, modifiedTime, webViewLink, webContentLink"
UPDATE_FIELDS = (
    "id, name, mimeType, size, createdTime, modifiedTime, parents, webViewLink, "
    "webContentLink, starred, trashed"
)
SHARED_FIELDS = (
    "id, name, mimeType, size, createdTime, modifiedTime, webViewLink, "
    "webContentLink, iconLink, thumbnailLink, starred, shared, owners"
)
STARRED_FIELDS = (
    "id, name, mimeType, size, createdTime, modifiedTime, parents, webViewLink, "
    "webContentLink, iconLink, thumbnailLink, starred, trashed, shared"
)


def _quote_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_query(
    folder_id: str | None = None,
    text: str | None = None,
    mime_type: str | None = None,
) -> str:
    """Build a Drive `q` expression. Trashed files are always excluded."""
    parts = []
    if folder_id:
        parts.append(f"'{_quote_literal(folder_id)}' in parents")
    if text:
        parts.append(f"fullText contains '{_quote_literal(text)}'")
    if mime_type:
        parts.append(f"mimeType = '{_quote_literal(mime_type)}'")
    parts.append("trashed = false")
    return " and ".join(parts)


class DriveService(GoogleApiClient):
    """Drive wrapper bound to one access token."""

    def _file_url(self, file_id: str) -> str:
        return f"{DRIVE_API_BASE}/files/{quote(file_id, safe='')}"

    async def _query_files(
        self,
        q: str,
        fields: str,
        page_token: str | None = None,
        page_size: int | None = None,
        order_by: str = "modifiedTime desc",
    ) -> dict[str, Any]:
        params = {
            "q": q,
            "pageToken": page_token,
            "pageSize": page_size or get_section("google").get("default_page_size", 50),
            "orderBy": order_by,
            "fields": f"nextPageToken, files({fields})",
        }
        return await self._make_request("GET", f"{DRIVE_API_BASE}/files", params=params)

    async def list_files(
        self,
        folder_id: str | None = None,
        query: str | None = None,
        page_token: str | None = None,
        page_size: int | None = None,
        order_by: str | None = None,
        mime_type: str | None = None,
    ) -> FilePage:
        """List non-trashed files, optionally scoped to a folder, text or type."""
        data = await self._query_files(
            build_query(folder_id, query, mime_type),
            FILE_FIELDS,
            page_token=page_token,
            page_size=page_size,
            order_by=order_by or "modifiedTime desc",
        )
        return FilePage(
            files=[DriveFile.from_api(f) for f in data.get("files") or []],
            next_page_token=data.get("nextPageToken"),
        )

    async def search_files(
        self,
        query: str,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> FilePage:
        """Full-text search across file names and content."""
        return await self.list_files(query=query, page_token=page_token, page_size=page_size)

    async def list_by_mime_type(
        self,
        mime_type: str,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> tuple[list[FileSummary], str | None]:
        """
        Lightweight listing used for Docs, Sheets and Forms.

        Returns:
            (summaries, next_page_token)
        """
        data = await self._query_files(
            build_query(mime_type=mime_type),
            "id, name, modifiedTime",
            page_token=page_token,
            page_size=page_size,
        )
        summaries = [
            FileSummary(
                id=f.get("id", ""),
                name=f.get("name", ""),
                modified_time=f.get("modifiedTime"),
            )
            for f in data.get("files") or []
        ]
        return summaries, data.get("nextPageToken")

    async def get_file(self, file_id: str) -> DriveFile:
        data = await self._make_request(
            "GET", self._file_url(file_id), params={"fields": FILE_FIELDS}
        )
        return DriveFile.from_api(data)

    async def download_file(self, file_id: str) -> bytes:
        return await self._download(self._file_url(file_id), params={"alt": "media"})

    async def create_folder(self, name: str, parent_id: str | None = None) -> DriveFolder:
        metadata: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_id:
            metadata["parents"] = [parent_id]

        data = await self._make_request(
            "POST",
            f"{DRIVE_API_BASE}/files",
            data=metadata,
            params={"fields": "id, name, parents"},
        )
        logger.info(f"Created folder {data.get('id')}")
        return DriveFolder(
            id=data.get("id", ""),
            name=data.get("name", ""),
            parents=data.get("parents"),
        )

    async def upload_file(
        self,
        name: str,
        mime_type: str,
        content: bytes,
        parent_id: str | None = None,
    ) -> DriveFile:
        """Upload file content with a multipart request."""
        metadata: dict[str, Any] = {"name": name}
        if parent_id:
            metadata["parents"] = [parent_id]

        data = await self._upload(
            f"{DRIVE_UPLOAD_BASE}/files",
            metadata,
            content,
            mime_type,
            params={"uploadType": "multipart", "fields": UPLOAD_FIELDS},
        )
        logger.info(f"Uploaded {name} ({len(content)} bytes) as {data.get('id')}")
        return DriveFile.from_api(data)

    async def update_file(
        self,
        file_id: str,
        name: str | None = None,
        starred: bool | None = None,
        trashed: bool | None = None,
        add_parents: str | None = None,
        remove_parents: str | None = None,
    ) -> DriveFile:
        """Rename, star, trash or move a file. Omitted fields stay unchanged."""
        body = {
            key: value
            for key, value in (("name", name), ("starred", starred), ("trashed", trashed))
            if value is not None
        }
        params = {
            "addParents": add_parents,
            "removeParents": remove_parents,
            "fields": UPDATE_FIELDS,
        }
        data = await self._make_request("PATCH", self._file_url(file_id), data=body, params=params)
        return DriveFile.from_api(data)

    async def move_to_trash(self, file_id: str) -> DriveFile:
        return await self.update_file(file_id, trashed=True)

    async def delete_file(self, file_id: str) -> None:
        """Permanently delete, bypassing trash."""
        await self._make_request("DELETE", self._file_url(file_id))
        logger.info(f"Permanently deleted file {file_id}")

    async def get_storage_quota(self) -> StorageQuota:
        data = await self._make_request(
            "GET", f"{DRIVE_API_BASE}/about", params={"fields": "storageQuota"}
        )
        quota = data.get("storageQuota") or {}
        return StorageQuota(
            limit=quota.get("limit"),
            usage=quota.get("usage"),
            usage_in_drive=quota.get("usageInDrive"),
            usage_in_drive_trash=quota.get("usageInDriveTrash"),
        )

    async def list_shared_with_me(
        self,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> FilePage:
        data = await self._query_files(
            "sharedWithMe = true and trashed = false",
            SHARED_FIELDS,
            page_token=page_token,
            page_size=page_size,
        )
        return FilePage(
            files=[DriveFile.from_api(f) for f in data.get("files") or []],
            next_page_token=data.get("nextPageToken"),
        )

    async def list_starred(
        self,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> FilePage:
        data = await self._query_files(
            "starred = true and trashed = false",
            STARRED_FIELDS,
            page_token=page_token,
            page_size=page_size,
        )
        return FilePage(
            files=[DriveFile.from_api(f) for f in data.get("files") or []],
            next_page_token=data.get("nextPageToken"),
        )
