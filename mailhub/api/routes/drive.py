"""
Drive Routes - Files, folders and storage

Provides endpoints for:
- GET/POST /api/drive/files
- GET/PATCH/DELETE /api/drive/files/{file_id}
- GET /api/drive/shared
- GET /api/drive/starred
- GET /api/drive/quota
"""

import json
import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from mailhub.api.dependencies import get_drive
from mailhub.api.models import CreateFolderRequest, UpdateFileRequest
from mailhub.workspace.drive import DriveService


logger = logging.getLogger(__name__)

router = APIRouter()


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 UTF-8 name."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.get("/files")
async def list_files(
    folder_id: str | None = Query(None, alias="folderId"),
    q: str | None = Query(None, description="Full-text search"),
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=1000),
    mime_type: str | None = Query(None, alias="mimeType"),
    drive: DriveService = Depends(get_drive),
):
    """List files, or search file content when q is given."""
    try:
        if q:
            page = await drive.search_files(q, page_token=page_token, page_size=page_size)
        else:
            page = await drive.list_files(
                folder_id=folder_id or None,
                page_token=page_token,
                page_size=page_size,
                mime_type=mime_type or None,
            )
    except Exception as e:
        logger.error(f"Error fetching files: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch files")
    return page.to_dict()


@router.post("/files")
async def create_file(request: Request, drive: DriveService = Depends(get_drive)):
    """
    Upload a file or create a folder.

    multipart/form-data with a `file` field (and optional `parentId`) is an
    upload; a JSON body {name, parentId?, type: "folder"} creates a folder.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise HTTPException(status_code=400, detail="No file provided")
        parent_id = form.get("parentId")
        content = await upload.read()
        try:
            created = await drive.upload_file(
                name=upload.filename or "untitled",
                mime_type=upload.content_type or "application/octet-stream",
                content=content,
                parent_id=parent_id if isinstance(parent_id, str) and parent_id else None,
            )
        except Exception as e:
            logger.error(f"Error uploading file: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create file/folder")
        return created.to_dict()

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid request body")
    try:
        folder_request = CreateFolderRequest.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError([{**err, "loc": ("body", *err["loc"])} for err in e.errors()])
    if folder_request.type != "folder":
        raise HTTPException(status_code=400, detail="Invalid request type")

    try:
        folder = await drive.create_folder(folder_request.name, folder_request.parent_id)
    except Exception as e:
        logger.error(f"Error creating folder: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create file/folder")
    return folder.to_dict()


@router.get("/files/{file_id}")
async def get_file(
    file_id: str,
    download: bool = Query(False),
    drive: DriveService = Depends(get_drive),
):
    """Get file metadata, or the file bytes when download=true."""
    try:
        file = await drive.get_file(file_id)
        if not download:
            return file.to_dict()
        content = await drive.download_file(file_id)
    except Exception as e:
        logger.error(f"Error fetching file {file_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch file")

    return Response(
        content=content,
        media_type=file.mime_type or "application/octet-stream",
        headers={"Content-Disposition": content_disposition(file.name)},
    )


@router.patch("/files/{file_id}")
async def update_file(
    file_id: str,
    request: UpdateFileRequest,
    drive: DriveService = Depends(get_drive),
):
    """Rename, star, trash or move a file."""
    try:
        file = await drive.update_file(
            file_id,
            name=request.name,
            starred=request.starred,
            trashed=request.trashed,
            add_parents=request.add_parents,
            remove_parents=request.remove_parents,
        )
    except Exception as e:
        logger.error(f"Error updating file {file_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update file")
    return file.to_dict()


@router.delete("/files/{file_id}")
async def delete_file(
    file_id: str,
    permanent: bool = Query(False),
    drive: DriveService = Depends(get_drive),
):
    """Move to trash, or delete outright with permanent=true."""
    try:
        if permanent:
            await drive.delete_file(file_id)
        else:
            await drive.move_to_trash(file_id)
    except Exception as e:
        logger.error(f"Error deleting file {file_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete file")
    return {"success": True}


@router.get("/shared")
async def list_shared(
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=1000),
    drive: DriveService = Depends(get_drive),
):
    try:
        page = await drive.list_shared_with_me(page_token=page_token, page_size=page_size)
    except Exception as e:
        logger.error(f"Error fetching shared files: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch shared files")
    return page.to_dict()


@router.get("/starred")
async def list_starred(
    page_token: str | None = Query(None, alias="pageToken"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=1000),
    drive: DriveService = Depends(get_drive),
):
    try:
        page = await drive.list_starred(page_token=page_token, page_size=page_size)
    except Exception as e:
        logger.error(f"Error fetching starred files: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch starred files")
    return page.to_dict()


@router.get("/quota")
async def get_quota(drive: DriveService = Depends(get_drive)):
    try:
        quota = await drive.get_storage_quota()
    except Exception as e:
        logger.error(f"Error fetching storage quota: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch storage quota")
    return quota.to_dict()
