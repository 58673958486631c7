"""Configuration management for the blog README updater."""

import os
from dataclasses import dataclass, field

from . import actions

RSS_URL = "https://blog.abbenyyy.cn/feed.xml"
MAX_BLOG_COUNT = 8
DATE_FORMAT = "%Y-%m-%d"
README_FILE_PATH = "./README.md"
START_TAG = "博客最近更新"
END_TAG = "  [more]"
COMMIT_MESSAGE = ":auto update"


@dataclass
class FeedConfig:
    """Configuration for the feed source."""

    url: str = RSS_URL
    max_entries: int = MAX_BLOG_COUNT
    date_format: str = DATE_FORMAT
    timeout: int = 30


@dataclass
class ReadmeConfig:
    """Configuration for the target document and its markers."""

    path: str = README_FILE_PATH
    start_tag: str = START_TAG
    end_tag: str = END_TAG


@dataclass
class CommitterConfig:
    """Configuration for the automated commit."""

    username: str = ""
    email: str = ""
    token: str = field(default="", repr=False)
    repository: str = ""
    commit_message: str = COMMIT_MESSAGE


@dataclass
class Config:
    """Main configuration passed to the publisher."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    readme: ReadmeConfig = field(default_factory=ReadmeConfig)
    committer: CommitterConfig = field(default_factory=CommitterConfig)
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Build configuration from action inputs and environment variables."""
        return cls(
            committer=CommitterConfig(
                username=actions.get_input("committer_username"),
                email=actions.get_input("committer_email"),
                token=actions.get_input("gh_token"),
                repository=os.getenv("GITHUB_REPOSITORY", ""),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def authenticated_remote_url(self) -> str:
        """Remote URL with the access token embedded, for pushing."""
        return (
            f"https://{self.committer.token}@github.com/"
            f"{self.committer.repository}.git"
        )
