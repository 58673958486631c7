"""Locates the marked region in the README and replaces its content."""

from pathlib import Path

from .config import END_TAG, START_TAG


class ReadmeConfigurationError(ValueError):
    """The document does not carry a usable marker pair."""


class MarkerNotFoundError(ReadmeConfigurationError):
    """One or both markers are absent from the document."""


class MarkerOrderError(ReadmeConfigurationError):
    """The end marker appears before the start marker has finished."""


def locate_region(document: str, start_tag: str, end_tag: str) -> tuple[int, int]:
    """Return ``(region_start, region_end)`` for the text between the markers.

    ``region_start`` is the index just past the first ``start_tag`` and
    ``region_end`` is the index of the first ``end_tag``, so
    ``document[region_start:region_end]`` is the current region content.

    Raises:
        MarkerNotFoundError: If either marker is missing
        MarkerOrderError: If ``end_tag`` starts before ``start_tag`` ends
    """
    start = document.find(start_tag)
    end = document.find(end_tag)
    missing = [tag for tag, index in ((start_tag, start), (end_tag, end)) if index == -1]
    if missing:
        raise MarkerNotFoundError(
            "Replacement markers not found in document: "
            + ", ".join(repr(tag) for tag in missing)
        )

    region_start = start + len(start_tag)
    if end < region_start:
        raise MarkerOrderError(
            f"End marker {end_tag!r} (index {end}) must follow start marker "
            f"{start_tag!r} (index {start})"
        )
    return region_start, end


def current_region(document: str, start_tag: str = START_TAG, end_tag: str = END_TAG) -> str:
    region_start, region_end = locate_region(document, start_tag, end_tag)
    return document[region_start:region_end]


def build_new_readme(
    previous: str,
    new_block: str,
    start_tag: str = START_TAG,
    end_tag: str = END_TAG,
) -> str | None:
    """Splice ``new_block`` between the markers of ``previous``.

    Returns ``None`` when the current region content equals ``new_block``
    exactly. Otherwise returns everything up to and including ``start_tag``,
    a newline, ``new_block``, then everything from ``end_tag`` onward.
    """
    region_start, region_end = locate_region(previous, start_tag, end_tag)
    if previous[region_start:region_end] == new_block:
        return None
    return previous[:region_start] + "\n" + new_block + previous[region_end:]


def read_document(path: str | Path) -> str:
    # newline="" keeps CRLF files byte-identical outside the region
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: str | Path, content: str) -> None:
    """Overwrite ``path`` with ``content``. Not atomic."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
