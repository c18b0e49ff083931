"""
Formatting helpers for addresses, dates and display strings.

Usage:
    from mailhub.utils import format_date, parse_email_address, truncate

    format_date("Tue, 2 Jan 2024 15:04:05 +0000")   # "Jan 2" (this year)
    parse_email_address('"Ada Lovelace" <ada@example.com>')
    truncate("A long subject line", 10)             # "A long ..."
"""

import email.utils
import re
from datetime import datetime


_ADDRESS_RE = re.compile(r"^(.+?)\s*<(.+?)>$")


def parse_date(date_string: str) -> datetime | None:
    """
    Parse an RFC 2822 (email header) or ISO 8601 date string.

    Returns:
        datetime, or None when the string is not a recognisable date
    """
    if not date_string:
        return None

    try:
        return email.utils.parsedate_to_datetime(date_string)
    except (TypeError, ValueError, IndexError):
        pass

    try:
        return datetime.fromisoformat(date_string.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(date_string: str, now: datetime | None = None) -> str:
    """
    Format a message date for list display.

    Today's dates show the time ("3:05 PM"), dates from this year show
    month and day ("Jan 5"), older dates add the year ("Jan 5, 2021").
    Unparseable input is returned unchanged.
    """
    parsed = parse_date(date_string)
    if parsed is None:
        return date_string

    if now is None:
        now = datetime.now(parsed.tzinfo)
    elif parsed.tzinfo is not None and now.tzinfo is not None:
        parsed = parsed.astimezone(now.tzinfo)

    if parsed.date() == now.date():
        return f"{parsed.strftime('%I').lstrip('0')}:{parsed.strftime('%M %p')}"
    if parsed.year == now.year:
        return f"{parsed.strftime('%b')} {parsed.day}"
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def parse_email_address(address: str) -> tuple[str, str]:
    """
    Split 'Name <email>' into (name, email).

    Quotes around the display name are dropped. A bare address is returned
    as both name and email.
    """
    match = _ADDRESS_RE.match(address.strip())
    if match:
        return match.group(1).replace('"', "").strip(), match.group(2)
    return address, address


def truncate(text: str, max_length: int) -> str:
    """Shorten text to max_length characters, ending with '...' when cut."""
    if len(text) <= max_length:
        return text
    if max_length < 3:
        return text[: max(max_length, 0)]
    return text[: max_length - 3] + "..."
