"""Renders feed entries as the Markdown list placed in the README."""

from collections.abc import Sequence

from .config import DATE_FORMAT, MAX_BLOG_COUNT
from .models import FeedEntry

UNKNOWN_DATE = "unknown"


def format_entry(entry: FeedEntry, date_format: str = DATE_FORMAT) -> str:
    """Format one entry as ``- [title](link) - date \\n``."""
    date = entry.published.strftime(date_format) if entry.published else UNKNOWN_DATE
    # The space before the newline is part of the line format
    return f"- [{entry.title}]({entry.link}) - {date} \n"


def format_entries(
    entries: Sequence[FeedEntry],
    max_count: int = MAX_BLOG_COUNT,
    date_format: str = DATE_FORMAT,
) -> str:
    """Build the region block: one line per entry, then one blank line."""
    lines = [format_entry(entry, date_format) for entry in entries[: max(max_count, 0)]]
    return "".join(lines) + "\n"
