"""Pipeline orchestration: refresh the README from the feed and push it."""

from dataclasses import dataclass

from . import actions
from .commands import CommandRunner
from .config import Config
from .formatter import format_entries
from .logging_config import create_execution_logger
from .models import CommandResult, PublishResult
from .readme import build_new_readme, current_region, read_document, write_document
from .rss import FeedProcessor


@dataclass(frozen=True)
class GitStep:
    """One git invocation in the publish sequence."""

    name: str
    args: tuple[str, ...]


def build_git_steps(config: Config) -> list[GitStep]:
    """Return the git commands that commit and push the README, in order.

    The remote rewrite is only included when an access token is configured.
    """
    committer = config.committer
    steps = [GitStep("set_email", ("config", "--global", "user.email", committer.email))]
    if committer.token:
        steps.append(
            GitStep(
                "set_remote",
                ("remote", "set-url", "origin", config.authenticated_remote_url()),
            )
        )
    steps += [
        GitStep("set_username", ("config", "--global", "user.name", committer.username)),
        GitStep("stage", ("add", config.readme.path)),
        GitStep("commit", ("commit", "-m", committer.commit_message)),
        GitStep("push", ("push",)),
    ]
    return steps


class ReadmePublisher:
    """Fetches the feed, splices it into the README and publishes the change."""

    def __init__(
        self,
        config: Config,
        feed_processor: FeedProcessor | None = None,
        runner: CommandRunner | None = None,
        execution_id: str | None = None,
    ):
        self.config = config
        self.logger = create_execution_logger("publisher", execution_id)
        self.feed_processor = feed_processor or FeedProcessor(
            timeout=config.feed.timeout, execution_id=execution_id
        )
        self.runner = runner or CommandRunner(execution_id=execution_id)

    def render_block(self) -> str:
        """Fetch the feed and format its newest entries."""
        feed = self.config.feed
        entries = self.feed_processor.fetch_entries(feed.url, feed.max_entries)
        block = format_entries(entries, feed.max_entries, feed.date_format)
        self.logger.info("New region content rendered", new_content=block)
        actions.notice(f"New region content:\n{block}")
        return block

    def build_document(self, block: str) -> str | None:
        """Return the updated README text, or None if nothing would change."""
        readme = self.config.readme
        previous = read_document(readme.path)
        current = current_region(previous, readme.start_tag, readme.end_tag)
        self.logger.info("Current region content", current_content=current)
        actions.notice(f"Current region content:\n{current}")
        document = build_new_readme(previous, block, readme.start_tag, readme.end_tag)
        # A region this tool wrote starts with "\n", so it never equals the
        # block itself; it splices back to an identical document instead.
        if document is None or document == previous:
            return None
        return document

    def commit_and_push(self) -> list[CommandResult]:
        """Run the git sequence; the first failing step raises CommandError."""
        results = []
        for step in build_git_steps(self.config):
            self.logger.debug(f"Git step: {step.name}", step=step.name)
            results.append(self.runner.run("git", step.args))
        return results

    def run(self) -> PublishResult:
        self.logger.log_execution_start(feed_url=self.config.feed.url)

        document = self.build_document(self.render_block())
        if document is None:
            self.logger.info("README already up to date, nothing to publish")
            self.logger.log_execution_end(success=True, updated=False)
            return PublishResult(updated=False)

        write_document(self.config.readme.path, document)
        self.logger.info("README written", path=self.config.readme.path)
        actions.notice(f"Writing new README {self.config.readme.path}:\n{document}")

        commands = self.commit_and_push()
        self.logger.info("README update pushed", commands_run=len(commands))
        self.logger.log_execution_end(success=True, updated=True)
        return PublishResult(updated=True, commands=commands)
