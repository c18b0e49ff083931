"""
Tool: Docs Service
Purpose: Create, read and edit Google Docs

Documents are listed through Drive (there is no Docs list endpoint).
Edits go through documents.batchUpdate.

Usage:
    from mailhub.workspace.docs import DocsService

    docs = DocsService(access_token)
    doc = await docs.create_document("Meeting notes", "First line\n")
    await docs.append_to_document(doc.id, "Another line\n")
"""

import logging
from typing import Any

from mailhub.workspace.client import DOCS_API_BASE, GoogleApiClient
from mailhub.workspace.drive import DriveService
from mailhub.workspace.models import Document, DocumentContent, FileSummary


logger = logging.getLogger(__name__)

DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"


def document_link(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


def _text_runs(content: list[dict[str, Any]]):
    """Yield (structural element, paragraph element) for each text run."""
    for element in content:
        for text_element in (element.get("paragraph") or {}).get("elements") or []:
            if (text_element.get("textRun") or {}).get("content"):
                yield element, text_element


class DocsService(GoogleApiClient):
    """Docs wrapper bound to one access token."""

    async def list_documents(
        self,
        page_token: str | None = None,
        page_size: int | None = None,
    ) -> tuple[list[FileSummary], str | None]:
        drive = DriveService(self.access_token)
        return await drive.list_by_mime_type(DOCUMENT_MIME_TYPE, page_token, page_size)

    async def _get_raw(self, document_id: str) -> dict[str, Any]:
        return await self._make_request("GET", f"{DOCS_API_BASE}/documents/{document_id}")

    async def get_document(self, document_id: str) -> Document:
        """Get a document with its body flattened to plain text."""
        data = await self._get_raw(document_id)
        content = (data.get("body") or {}).get("content") or []
        body = "".join(run["textRun"]["content"] for _, run in _text_runs(content))

        doc_id = data.get("documentId", document_id)
        return Document(
            id=doc_id,
            title=data.get("title", ""),
            body=body,
            revision_id=data.get("revisionId"),
            web_view_link=document_link(doc_id),
        )

    async def get_document_content(self, document_id: str) -> DocumentContent:
        """Get plain text plus per-paragraph text runs with basic styling."""
        data = await self._get_raw(document_id)
        content = (data.get("body") or {}).get("content") or []

        text = ""
        structural_elements = []
        for element in content:
            paragraph = element.get("paragraph")
            if not paragraph or not paragraph.get("elements"):
                continue

            runs = []
            for text_element in paragraph["elements"]:
                text_run = text_element.get("textRun") or {}
                if not text_run.get("content"):
                    continue
                text += text_run["content"]
                style = text_run.get("textStyle") or {}
                run = {"content": text_run["content"]}
                for key in ("bold", "italic", "underline"):
                    if key in style:
                        run[key] = style[key]
                runs.append({
                    "startIndex": text_element.get("startIndex", 0),
                    "endIndex": text_element.get("endIndex", 0),
                    "textRun": run,
                })

            structural_elements.append({
                "startIndex": element.get("startIndex", 0),
                "endIndex": element.get("endIndex", 0),
                "paragraph": {"elements": runs},
            })

        return DocumentContent(text=text, structural_elements=structural_elements)

    async def batch_update(self, document_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        url = f"{DOCS_API_BASE}/documents/{document_id}:batchUpdate"
        return await self._make_request("POST", url, data={"requests": requests})

    async def create_document(self, title: str, content: str | None = None) -> Document:
        """Create a document, inserting initial content at index 1 if given."""
        data = await self._make_request("POST", f"{DOCS_API_BASE}/documents", data={"title": title})
        document_id = data.get("documentId", "")

        if content:
            await self.batch_update(
                document_id,
                [{"insertText": {"location": {"index": 1}, "text": content}}],
            )

        logger.info(f"Created document {document_id}")
        return Document(
            id=document_id,
            title=data.get("title") or title,
            body=content or "",
            web_view_link=document_link(document_id),
        )

    async def append_to_document(self, document_id: str, text: str) -> None:
        """Insert text before the document's trailing newline."""
        data = await self._get_raw(document_id)
        content = (data.get("body") or {}).get("content") or []
        end_index = max((element.get("endIndex", 0) for element in content), default=0) or 1

        await self.batch_update(
            document_id,
            [{"insertText": {"location": {"index": end_index - 1}, "text": text}}],
        )

    async def replace_text(
        self,
        document_id: str,
        search_text: str,
        replace_text: str,
        match_case: bool = False,
    ) -> None:
        """Replace every occurrence of search_text."""
        await self.batch_update(
            document_id,
            [{
                "replaceAllText": {
                    "containsText": {"text": search_text, "matchCase": match_case},
                    "replaceText": replace_text,
                }
            }],
        )
