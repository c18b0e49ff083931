"""Mailhub - Google Workspace client backend with an AI assistant

Components:
    workspace/: Gmail, Calendar, Drive, Docs, Sheets and Forms wrappers
    assistant/: LLM-backed email and productivity features
    api/: FastAPI application and route handlers
    config.py: YAML + environment configuration
    logging_config.py: structlog setup
    utils.py: Address and date formatting helpers

Mailhub holds no state of its own. Every request carries the caller's Google
access token, which is passed explicitly into each wrapper.
"""

from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent

# Version
__version__ = "0.1.0"
