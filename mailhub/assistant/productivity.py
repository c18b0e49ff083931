"""
Tool: Productivity Assistant
Purpose: LLM helpers for Calendar, Docs, Sheets, Forms and Drive

Usage:
    from mailhub.assistant.productivity import ProductivityAssistant

    assistant = ProductivityAssistant(LLMClient())
    pick = await assistant.suggest_meeting_time("1:1 with Sam", free_slots)
    answer = await assistant.analyze_spreadsheet_data(headers, rows, "Which region grew fastest?")

Large inputs are clipped before prompting (see MAX_* constants).
"""

import json
import logging
from typing import Any

from mailhub.assistant.llm import LLMClient, extract_json
from mailhub.utils import truncate


logger = logging.getLogger(__name__)

MAX_DOCUMENT_CHARS = 15000
MAX_SHEET_ROWS = 100
MAX_FORM_RESPONSES = 50

QUESTION_TYPES = [
    "SHORT_TEXT", "PARAGRAPH", "MULTIPLE_CHOICE", "CHECKBOXES",
    "DROPDOWN", "SCALE", "DATE", "TIME",
]


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


class ProductivityAssistant:
    """Assistant capabilities for the non-mail workspace apps."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    # =========================================================================
    # Calendar
    # =========================================================================

    async def suggest_meeting_time(
        self,
        description: str,
        free_slots: list[dict[str, str]],
        preferences: str | None = None,
    ) -> dict[str, Any]:
        """
        Pick the best slot for a meeting from the given free slots.

        Returns:
            {suggestedSlot: {start, end} | None, reason, alternatives}
        """
        fallback = {
            "suggestedSlot": free_slots[0] if free_slots else None,
            "reason": "Earliest available slot.",
            "alternatives": [],
        }

        system = """You are a scheduling assistant. Choose the best time for a meeting from the free slots provided.

Return a JSON object with:
- suggestedSlot: object with "start" and "end" (ISO 8601), within one of the free slots
- reason: one sentence explaining the choice
- alternatives: array of up to 2 other {"start", "end"} objects

Return ONLY valid JSON, no other text."""
        prompt = (
            f"Meeting: {description}\n\n"
            f"Free slots:\n{json.dumps(free_slots, indent=2)}"
        )
        if preferences:
            prompt += f"\n\nPreferences: {preferences}"

        text = await self.llm.generate_text(system, prompt)
        result = extract_json(text, dict)
        if result is None:
            return fallback

        slot = result.get("suggestedSlot")
        if not (isinstance(slot, dict) and slot.get("start") and slot.get("end")):
            return fallback

        alternatives = result.get("alternatives")
        return {
            "suggestedSlot": {"start": slot["start"], "end": slot["end"]},
            "reason": result.get("reason") if isinstance(result.get("reason"), str) else fallback["reason"],
            "alternatives": [
                a for a in alternatives
                if isinstance(a, dict) and a.get("start") and a.get("end")
            ] if isinstance(alternatives, list) else [],
        }

    async def generate_meeting_agenda(self, meeting_context: str) -> str:
        system = (
            "You are a meeting facilitator. Write a concise, time-boxed agenda "
            "for the meeting described. Use a short bulleted list with durations "
            "and end with a line listing expected outcomes."
        )
        text = await self.llm.generate_text(system, f"Meeting context:\n\n{meeting_context}")
        return text or "Unable to generate agenda."

    # =========================================================================
    # Docs
    # =========================================================================

    async def summarize_document(self, content: str) -> str:
        system = (
            "You are a document assistant. Summarize the document in a short "
            "paragraph followed by its key points as bullets."
        )
        text = await self.llm.generate_text(
            system, f"Summarize this document:\n\n{content[:MAX_DOCUMENT_CHARS]}"
        )
        return text or "Unable to generate summary."

    # =========================================================================
    # Sheets
    # =========================================================================

    async def analyze_spreadsheet_data(
        self,
        headers: list[str],
        rows: list[list[Any]],
        question: str,
    ) -> str:
        """Answer a question about tabular data. Only the first rows are sent."""
        clipped = rows[:MAX_SHEET_ROWS]
        table = "\n".join(
            [" | ".join(str(h) for h in headers)]
            + [" | ".join("" if cell is None else str(cell) for cell in row) for row in clipped]
        )
        note = ""
        if len(rows) > MAX_SHEET_ROWS:
            note = f"\n\n(Showing the first {MAX_SHEET_ROWS} of {len(rows)} rows.)"

        system = (
            "You are a data analyst. Answer the question using only the table "
            "provided. Show the figures you rely on and say so when the data "
            "cannot answer the question."
        )
        text = await self.llm.generate_text(system, f"Data:\n{table}{note}\n\nQuestion: {question}")
        return text or "Unable to analyze data."

    # =========================================================================
    # Forms
    # =========================================================================

    async def generate_form_questions(
        self,
        topic: str,
        purpose: str,
        question_count: int = 5,
    ) -> dict[str, Any]:
        fallback = {"title": topic, "description": "", "questions": []}

        system = f"""You are a survey designer. Create form questions for the topic and purpose given.

Return a JSON object with:
- title: form title
- description: one-sentence form description
- questions: array of {question_count} objects with "title", "type" (one of {", ".join(QUESTION_TYPES)}), "required" (boolean) and, for MULTIPLE_CHOICE, CHECKBOXES and DROPDOWN, "options" (array of strings)

Return ONLY valid JSON, no other text."""
        text = await self.llm.generate_text(system, f"Topic: {topic}\nPurpose: {purpose}")
        result = extract_json(text, dict)
        if result is None or not isinstance(result.get("questions"), list):
            return fallback

        questions = []
        for q in result["questions"]:
            if not isinstance(q, dict) or not isinstance(q.get("title"), str):
                continue
            question = {
                "title": q["title"],
                "type": q.get("type") if q.get("type") in QUESTION_TYPES else "SHORT_TEXT",
                "required": q.get("required") is True,
            }
            if "options" in q:
                question["options"] = _string_list(q["options"])
            questions.append(question)

        return {
            "title": result.get("title") if isinstance(result.get("title"), str) else topic,
            "description": result.get("description") if isinstance(result.get("description"), str) else "",
            "questions": questions,
        }

    async def analyze_form_responses(
        self,
        questions: list[Any],
        responses: list[Any],
    ) -> dict[str, Any]:
        """Summarize form responses. Only the first responses are sent."""
        fallback = {"summary": "", "insights": [], "trends": [], "recommendations": []}

        system = """You are a survey analyst. Analyze the form responses.

Return a JSON object with:
- summary: a short paragraph
- insights: array of strings
- trends: array of strings
- recommendations: array of strings

Return ONLY valid JSON, no other text."""
        prompt = (
            f"Questions:\n{json.dumps(questions, indent=2)}\n\n"
            f"Responses ({min(len(responses), MAX_FORM_RESPONSES)} of {len(responses)}):\n"
            f"{json.dumps(responses[:MAX_FORM_RESPONSES], indent=2)}"
        )
        text = await self.llm.generate_text(system, prompt)
        result = extract_json(text, dict)
        if result is None:
            return fallback

        return {
            "summary": result.get("summary") if isinstance(result.get("summary"), str) else "",
            "insights": _string_list(result.get("insights")),
            "trends": _string_list(result.get("trends")),
            "recommendations": _string_list(result.get("recommendations")),
        }

    # =========================================================================
    # Drive
    # =========================================================================

    async def suggest_file_organization(self, files: list[dict[str, Any]]) -> dict[str, Any]:
        """Propose folders grouping the given files by id."""
        fallback = {"folders": [], "suggestions": []}

        listing = "\n".join(
            f"- {f.get('id', '')}: {truncate(str(f.get('name', '')), 120)} ({f.get('mimeType', 'unknown')})"
            for f in files
        )
        system = """You are a file organization assistant. Group the files into a small set of sensible folders.

Return a JSON object with:
- folders: array of objects with "name", "description" and "fileIds" (ids from the list)
- suggestions: array of short strings with further tidy-up advice

Return ONLY valid JSON, no other text."""
        text = await self.llm.generate_text(system, f"Files:\n{listing}")
        result = extract_json(text, dict)
        if result is None:
            return fallback

        known_ids = {f.get("id") for f in files}
        raw_folders = result.get("folders")
        if not isinstance(raw_folders, list):
            raw_folders = []

        folders = []
        for folder in raw_folders:
            if not isinstance(folder, dict) or not isinstance(folder.get("name"), str):
                continue
            folders.append({
                "name": folder["name"],
                "description": folder.get("description") if isinstance(folder.get("description"), str) else "",
                "fileIds": [i for i in _string_list(folder.get("fileIds")) if i in known_ids],
            })

        return {"folders": folders, "suggestions": _string_list(result.get("suggestions"))}
