"""Data models for the blog README updater."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FeedEntry:
    """A single RSS/Atom entry, as much of it as the README needs."""

    title: str
    link: str
    published: datetime | None  # None when missing or unparseable


@dataclass
class CommandResult:
    """Outcome of one external process invocation."""

    exit_code: int
    output: str = ""


@dataclass
class PublishResult:
    """Outcome of one publisher run."""

    updated: bool
    commands: list[CommandResult] = field(default_factory=list)
