"""
Tool: Email Assistant
Purpose: LLM-backed summaries, replies, triage and security scans for email

Every capability returns a usable value even when the model answers with
something unparseable: JSON capabilities fall back to fixed defaults and
text capabilities to a fixed message. Model API errors still propagate.

Usage:
    from mailhub.assistant.email import EmailAssistant, EmailContext

    assistant = EmailAssistant(LLMClient())
    email = EmailContext(subject="Q3 plan", sender="Ada <ada@example.com>", body="...")
    summary = await assistant.summarize_email(email)
    triage = await assistant.categorize_email(email)
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mailhub.assistant.llm import LLMClient, extract_json
from mailhub.utils import parse_email_address


logger = logging.getLogger(__name__)


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    BRIEF = "brief"


TONE_DESCRIPTIONS = {
    Tone.PROFESSIONAL: "formal and professional",
    Tone.FRIENDLY: "warm and friendly while remaining professional",
    Tone.BRIEF: "concise and to the point",
}

CATEGORIES = [
    "work", "personal", "newsletter", "promotional", "social",
    "finance", "travel", "shopping", "updates", "other",
]

DEFAULT_CATEGORIZATION = {
    "category": "other",
    "priority": "medium",
    "suggestedLabels": [],
    "actionRequired": False,
}

DEFAULT_SECURITY_SCAN = {
    "riskLevel": "suspicious",
    "riskScore": 50,
    "threats": [],
    "recommendations": ["Unable to complete security scan. Proceed with caution."],
    "summary": "Security scan could not be completed.",
    "shouldOpen": True,
}

SUMMARIZE_SYSTEM = (
    "You are an AI email assistant. Summarize emails concisely in 2-3 sentences, "
    "highlighting the key points and any action items. Be direct and professional."
)

CATEGORIZE_SYSTEM = f"""You are an AI email assistant that categorizes emails. Analyze the email and return a JSON object with:
- category: one of {", ".join(f'"{c}"' for c in CATEGORIES)}
- priority: "high", "medium", or "low" based on urgency and importance
- suggestedLabels: array of 1-3 relevant labels
- actionRequired: boolean indicating if the email requires a response or action
- actionSummary: if actionRequired is true, a brief description of what action is needed

Return ONLY valid JSON, no other text."""

ACTIONS_SYSTEM = """You are an AI email assistant that extracts action items from emails. List any tasks, requests, deadlines, or follow-ups mentioned in the email.

Return a JSON array of strings, each being a specific action item. If no action items, return an empty array [].
Return ONLY the JSON array, no other text."""

SECURITY_SYSTEM = """You are an email security analyst. Examine the email for phishing, impersonation, malicious links, credential harvesting, urgent payment requests, spoofed senders and social engineering.

Return a JSON object with:
- riskLevel: "safe", "suspicious", or "dangerous"
- riskScore: integer from 0 (no risk) to 100 (certainly malicious)
- threats: array of objects with "type", "description" and "severity" ("low", "medium", "high")
- recommendations: array of short strings telling the reader what to do
- summary: one or two sentences explaining the verdict
- shouldOpen: boolean, whether it is reasonably safe to open links and attachments

Return ONLY valid JSON, no other text."""


@dataclass
class EmailContext:
    """The slice of a message the assistant reasons about."""

    subject: str
    sender: str
    body: str
    to: str = ""
    date: str = ""

    def render(self, include_to: bool = False, include_date: bool = True) -> str:
        lines = [f"From: {self.sender}"]
        if include_to:
            lines.append(f"To: {self.to}")
        lines.append(f"Subject: {self.subject}")
        if include_date:
            lines.append(f"Date: {self.date}")
        return "\n".join(lines) + f"\n\n{self.body}"


def _is_categorization(value: dict[str, Any]) -> bool:
    return (
        isinstance(value.get("category"), str)
        and value.get("priority") in ("high", "medium", "low")
        and isinstance(value.get("suggestedLabels"), list)
        and isinstance(value.get("actionRequired"), bool)
    )


def _is_security_scan(value: dict[str, Any]) -> bool:
    return (
        value.get("riskLevel") in ("safe", "suspicious", "dangerous")
        and isinstance(value.get("riskScore"), (int, float))
        and isinstance(value.get("threats"), list)
        and isinstance(value.get("recommendations"), list)
        and isinstance(value.get("summary"), str)
        and isinstance(value.get("shouldOpen"), bool)
    )


class EmailAssistant:
    """Email capabilities over a shared LLM client."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def summarize_email(self, email: EmailContext) -> str:
        text = await self.llm.generate_text(
            SUMMARIZE_SYSTEM,
            f"Please summarize this email:\n\n{email.render(include_to=True)}",
        )
        return text or "Unable to generate summary."

    async def generate_reply(
        self,
        email: EmailContext,
        tone: Tone = Tone.PROFESSIONAL,
        instructions: str | None = None,
    ) -> str:
        """Draft a reply body in the given tone, addressed to the sender."""
        sender_name, _ = parse_email_address(email.sender)
        system = f"""You are an AI email assistant helping to draft email replies. Write replies that are {TONE_DESCRIPTIONS[Tone(tone)]}.

Rules:
- Do NOT include subject line
- Do NOT include "Dear" or formal salutations unless appropriate
- Start directly with the response content
- End with an appropriate sign-off
- Keep the response relevant and helpful
- The reply is addressed to {sender_name}"""
        if instructions:
            system += f"\n\nAdditional instructions: {instructions}"

        text = await self.llm.generate_text(
            system, f"Please draft a reply to this email:\n\n{email.render()}"
        )
        return text or "Unable to generate reply."

    async def categorize_email(self, email: EmailContext) -> dict[str, Any]:
        text = await self.llm.generate_text(
            CATEGORIZE_SYSTEM, f"Categorize this email:\n\n{email.render()}"
        )
        result = extract_json(text, dict)
        if result is None or not _is_categorization(result):
            logger.warning("Categorization response unusable, returning default")
            return dict(DEFAULT_CATEGORIZATION, suggestedLabels=[])
        return result

    async def extract_action_items(self, email: EmailContext) -> list[str]:
        text = await self.llm.generate_text(
            ACTIONS_SYSTEM,
            f"Extract action items from this email:\n\n{email.render(include_date=False)}",
        )
        result = extract_json(text, list)
        if result is None or not all(isinstance(item, str) for item in result):
            return []
        return result

    async def analyze_email(self, email: EmailContext) -> dict[str, Any]:
        """Categorize and extract actions concurrently; merge the results."""
        categorization, actions = await asyncio.gather(
            self.categorize_email(email),
            self.extract_action_items(email),
        )
        return {**categorization, "actions": actions}

    async def scan_email_security(self, email: EmailContext) -> dict[str, Any]:
        """
        Assess phishing/malware risk.

        An unusable response yields the "suspicious" default, never "safe".
        """
        text = await self.llm.generate_text(
            SECURITY_SYSTEM,
            f"Scan this email for security threats:\n\n{email.render(include_to=True)}",
        )
        result = extract_json(text, dict)
        if result is None or not _is_security_scan(result):
            logger.warning("Security scan response unusable, returning cautious default")
            return dict(
                DEFAULT_SECURITY_SCAN,
                threats=[],
                recommendations=list(DEFAULT_SECURITY_SCAN["recommendations"]),
            )
        return result

    async def improve_email_draft(self, draft: str, instructions: str | None = None) -> str:
        system = (
            "You are an AI email assistant that improves email drafts. Make the email "
            "clearer, more professional, and more effective while preserving the "
            "original intent and meaning."
        )
        if instructions:
            system += f"\n\nSpecific instructions: {instructions}"
        system += "\n\nReturn only the improved email text, no explanations."

        text = await self.llm.generate_text(system, f"Please improve this email draft:\n\n{draft}")
        return text or draft
