"""Feed fetching module for the blog README updater."""

from urllib.parse import urlparse

import feedparser
import requests
from dateutil import parser as date_parser

from .config import MAX_BLOG_COUNT
from .logging_config import create_execution_logger
from .models import FeedEntry


class FeedParseError(ValueError):
    """Raised when the downloaded document is not a usable feed."""


class FeedProcessor:
    """Downloads one RSS/Atom feed and normalizes its newest entries."""

    def __init__(self, timeout: int = 30, execution_id: str | None = None):
        """Initialize FeedProcessor with configuration.

        Args:
            timeout: HTTP request timeout in seconds
            execution_id: Execution ID for logging context
        """
        self.timeout = timeout
        self.logger = create_execution_logger("feed_processor", execution_id)
        self.session = requests.Session()
        self.session.headers.update(
            {"User-Agent": "Blog-README-Updater/1.0 (+https://github.com)"}
        )

        self.logger.info("FeedProcessor initialized", timeout=timeout)

    def fetch_entries(
        self, feed_url: str, max_entries: int = MAX_BLOG_COUNT
    ) -> list[FeedEntry]:
        """Fetch a feed and return its first ``max_entries`` entries.

        Args:
            feed_url: URL of the RSS/Atom feed
            max_entries: Upper bound on the number of entries returned

        Returns:
            FeedEntry objects in the order the feed lists them

        Raises:
            ValueError: If feed URL is not HTTPS
            requests.RequestException: If feed download fails
            FeedParseError: If the response cannot be parsed as a feed
        """
        self.logger.info("Starting to fetch feed", feed_url=feed_url)

        parsed_url = urlparse(feed_url)
        if parsed_url.scheme != "https":
            error_msg = f"Feed URL must use HTTPS protocol: {feed_url}"
            self.logger.error(error_msg, feed_url=feed_url, scheme=parsed_url.scheme)
            raise ValueError(error_msg)

        try:
            response = self.session.get(feed_url, timeout=self.timeout)
            response.raise_for_status()
            self.logger.info(
                "Feed downloaded successfully",
                feed_url=feed_url,
                status_code=response.status_code,
                content_length=len(response.content),
            )
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download feed {feed_url}: {e}",
                feed_url=feed_url,
                error=str(e),
            )
            raise

        entries = self.parse_entries(response.content, feed_url)[:max_entries]
        self.logger.log_feed_processing(feed_url, len(entries))
        return entries

    def parse_entries(self, content: bytes | str, feed_url: str = "") -> list[FeedEntry]:
        """Parse raw feed content into FeedEntry objects, preserving order."""
        feed = feedparser.parse(content)

        if feed.bozo:
            reason = str(getattr(feed, "bozo_exception", "malformed feed"))
            if not feed.entries:
                self.logger.error(
                    f"Feed could not be parsed: {reason}",
                    feed_url=feed_url,
                    bozo_exception=reason,
                )
                raise FeedParseError(f"Feed could not be parsed {feed_url}: {reason}")
            self.logger.warning(
                f"Feed parsing warning for {feed_url}: {reason}",
                feed_url=feed_url,
                bozo_exception=reason,
            )

        entries = [self.normalize_entry(entry) for entry in feed.entries]
        self.logger.info(
            "Successfully parsed feed",
            feed_url=feed_url,
            total_entries=len(entries),
        )
        return entries

    def normalize_entry(self, raw_entry) -> FeedEntry:
        """Normalize a raw feedparser entry into a FeedEntry.

        Missing title or link become empty strings. A missing or unparseable
        date becomes ``None``. Dates carrying an offset are converted to local
        time; naive dates are kept as they are.
        """
        title = getattr(raw_entry, "title", None) or ""
        link = getattr(raw_entry, "link", None) or ""

        published_str = getattr(raw_entry, "published", None) or getattr(
            raw_entry, "updated", None
        )
        published = None
        if published_str:
            try:
                published = date_parser.parse(published_str)
                # Dates are shown in the runner's local time zone
                if published.tzinfo is not None:
                    published = published.astimezone()
            except (ValueError, OverflowError, TypeError):
                self.logger.warning(
                    "Unparseable published date",
                    item_title=title,
                    published=str(published_str),
                )
        else:
            self.logger.warning("Entry has no published date", item_title=title)

        return FeedEntry(title=title, link=link, published=published)
