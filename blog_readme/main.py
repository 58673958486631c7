"""Entry point for the blog README updater."""

import sys
from datetime import UTC, datetime

from . import actions
from .commands import CommandError
from .config import Config
from .logging_config import create_execution_logger, setup_structured_logging
from .publisher import ReadmePublisher


def main(config: Config | None = None) -> int:
    """
    Run one update of the README and return the process exit code.

    Args:
        config: Configuration to use; read from the environment when omitted

    Returns:
        0 on success (including when nothing changed), the failing command's
        exit code on a command failure, 1 on any other error
    """
    if config is None:
        config = Config.from_environment()
    # Must happen before anything can log the token
    actions.set_secret(config.committer.token)

    execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)

    try:
        setup_structured_logging(config.log_level)
        main_logger.log_execution_start(
            feed_url=config.feed.url, readme=config.readme.path
        )
        result = ReadmePublisher(config, execution_id=execution_id).run()
    except CommandError as e:
        error_msg = f"Git command failed: {e}"
        main_logger.error(error_msg, exit_code=e.exit_code, output=e.output)
        main_logger.log_execution_end(success=False, error=error_msg)
        actions.set_failed(error_msg)
        return e.exit_code
    except Exception as e:
        error_msg = f"README update failed: {type(e).__name__}: {e}"
        main_logger.error(error_msg, error=str(e))
        main_logger.log_execution_end(success=False, error=error_msg)
        actions.set_failed(error_msg)
        return 1

    if result.updated:
        actions.notice("README updated with the latest blog posts")
    main_logger.log_metrics(
        {"updated": result.updated, "commands_run": len(result.commands)}
    )
    main_logger.log_execution_end(success=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
