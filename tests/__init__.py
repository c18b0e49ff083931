"""Mailhub Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - workspace/: Google API wrappers (MIME handling, free slots, services)
  - assistant/: LLM-backed email and productivity helpers
- integration/: HTTP-level tests of the FastAPI routes

Running tests:
    # All tests
    pytest

    # Specific package
    pytest tests/unit/workspace/

    # With coverage
    pytest --cov=mailhub --cov-report=term-missing
"""
