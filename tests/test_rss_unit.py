"""Unit tests for the feed processor."""

import time
from datetime import datetime
from unittest.mock import Mock

import pytest
import requests

from blog_readme.formatter import format_entries
from blog_readme.models import FeedEntry
from blog_readme.rss import FeedParseError, FeedProcessor

@pytest.fixture(autouse=True)
def utc_runner(monkeypatch):
    """Run with the UTC local time zone used by CI runners."""
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def build_rss(count: int) -> bytes:
    items = "".join(
        f"""
        <item>
          <title>Post {i}</title>
          <link>https://blog.example.com/posts/{i}</link>
          <pubDate>Mon, {i + 1:02d} Jan 2024 10:00:00 GMT</pubDate>
        </item>"""
        for i in range(count)
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Blog</title>
    <link>https://blog.example.com</link>
    <description>Posts</description>{items}
  </channel>
</rss>""".encode("utf-8")

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Example Atom</title>
  <id>urn:example:feed</id>
  <updated>2024-03-05T08:00:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <link href="https://blog.example.com/atom-entry"/>
    <id>urn:example:1</id>
    <updated>2024-03-05T08:00:00Z</updated>
  </entry>
</feed>"""

def mock_response(content: bytes, status_code: int = 200) -> Mock:
    response = Mock()
    response.content = content
    response.status_code = status_code
    response.raise_for_status = Mock()
    return response

class TestFeedProcessorUnit:
    """Unit tests for FeedProcessor."""

    def test_fetch_entries_parses_rss_in_order(self):
        processor = FeedProcessor()
        processor.session.get = Mock(return_value=mock_response(build_rss(3)))

        entries = processor.fetch_entries("https://blog.example.com/feed.xml")

        assert [entry.title for entry in entries] == ["Post 0", "Post 1", "Post 2"]
        assert entries[0].link == "https://blog.example.com/posts/0"
        assert entries[2].published.date() == datetime(2024, 1, 3).date()
        processor.session.get.assert_called_once_with(
            "https://blog.example.com/feed.xml", timeout=30
        )

    def test_fetch_entries_bounds_result(self):
        processor = FeedProcessor()
        processor.session.get = Mock(return_value=mock_response(build_rss(12)))

        entries = processor.fetch_entries("https://blog.example.com/feed.xml")

        assert len(entries) == 8
        assert entries[-1].title == "Post 7"

    def test_fetch_entries_custom_bound(self):
        processor = FeedProcessor()
        processor.session.get = Mock(return_value=mock_response(build_rss(5)))

        entries = processor.fetch_entries("https://blog.example.com/feed.xml", 2)

        assert [entry.title for entry in entries] == ["Post 0", "Post 1"]

    def test_atom_entry_falls_back_to_updated(self):
        processor = FeedProcessor()

        entries = processor.parse_entries(ATOM_FEED, "https://blog.example.com/atom")

        assert entries == [
            FeedEntry(
                title="Atom entry",
                link="https://blog.example.com/atom-entry",
                published=entries[0].published,
            )
        ]
        assert entries[0].published.strftime("%Y-%m-%d") == "2024-03-05"

    def test_non_https_url_rejected(self):
        processor = FeedProcessor()
        processor.session.get = Mock()

        with pytest.raises(ValueError, match="HTTPS"):
            processor.fetch_entries("http://blog.example.com/feed.xml")

        processor.session.get.assert_not_called()

    def test_network_error_propagates(self):
        processor = FeedProcessor()
        processor.session.get = Mock(side_effect=requests.ConnectionError("down"))

        with pytest.raises(requests.ConnectionError):
            processor.fetch_entries("https://blog.example.com/feed.xml")

    def test_http_error_status_propagates(self):
        processor = FeedProcessor()
        response = mock_response(b"", status_code=503)
        response.raise_for_status.side_effect = requests.HTTPError("503")
        processor.session.get = Mock(return_value=response)

        with pytest.raises(requests.HTTPError):
            processor.fetch_entries("https://blog.example.com/feed.xml")

    def test_unparseable_document_raises(self):
        processor = FeedProcessor()
        processor.session.get = Mock(
            return_value=mock_response(b"this is definitely not a feed")
        )

        with pytest.raises(FeedParseError):
            processor.fetch_entries("https://blog.example.com/feed.xml")

    def test_normalize_entry_full(self):
        processor = FeedProcessor()
        raw = Mock()
        raw.title = "Hello"
        raw.link = "https://blog.example.com/hello"
        raw.published = "2024-01-01T10:00:00+08:00"
        raw.updated = None

        entry = processor.normalize_entry(raw)

        assert entry.title == "Hello"
        assert entry.link == "https://blog.example.com/hello"
        assert entry.published.strftime("%Y-%m-%d") == "2024-01-01"

    def test_normalize_entry_missing_fields(self):
        """Missing fields are left empty rather than rejected."""
        processor = FeedProcessor()
        raw = Mock()
        raw.title = None
        raw.link = None
        raw.published = None
        raw.updated = None

        entry = processor.normalize_entry(raw)

        assert entry == FeedEntry(title="", link="", published=None)

    def test_normalize_entry_unparseable_date(self):
        processor = FeedProcessor()
        raw = Mock()
        raw.title = "Bad date"
        raw.link = "https://blog.example.com/bad"
        raw.published = "not a date at all"
        raw.updated = None

        assert processor.normalize_entry(raw).published is None

    def test_offset_date_converted_to_local_day(self):
        """A late-evening post west of UTC lands on the next UTC day."""
        processor = FeedProcessor()
        rss = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Blog</title>
  <item>
    <title>Late post</title>
    <link>https://blog.example.com/late</link>
    <pubDate>Mon, 01 Jan 2024 23:30:00 -0800</pubDate>
  </item>
</channel></rss>"""

        entries = processor.parse_entries(rss, "https://blog.example.com/feed.xml")

        assert format_entries(entries) == (
            "- [Late post](https://blog.example.com/late) - 2024-01-02 \n\n"
        )

    def test_naive_date_kept_as_is(self):
        processor = FeedProcessor()
        raw = Mock()
        raw.title = "Naive"
        raw.link = "https://blog.example.com/naive"
        raw.published = "2024-01-01 23:30:00"
        raw.updated = None

        published = processor.normalize_entry(raw).published

        assert published == datetime(2024, 1, 1, 23, 30)
        assert published.tzinfo is None
