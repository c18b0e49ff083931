"""Assistant: LLM-backed features for mail and the productivity apps

Components:
    llm.py: Anthropic client wrapper and JSON extraction
    email.py: Summaries, replies, categorization, actions, security scan
    productivity.py: Scheduling, agendas, document/sheet/form/drive helpers
"""

from mailhub.assistant.email import EmailAssistant, EmailContext, Tone
from mailhub.assistant.llm import LLMClient, extract_json
from mailhub.assistant.productivity import ProductivityAssistant


__all__ = [
    "EmailAssistant",
    "EmailContext",
    "LLMClient",
    "ProductivityAssistant",
    "Tone",
    "extract_json",
]
