"""External process execution for the blog README updater."""

import subprocess
from collections.abc import Sequence
from pathlib import Path

from .logging_config import create_execution_logger, redact
from .models import CommandResult

# Exit code reported when the process could not be started at all
GENERIC_ERROR_CODE = 1


class CommandError(RuntimeError):
    """An external command exited non-zero or could not be started."""

    def __init__(
        self,
        command: str,
        exit_code: int,
        output: str = "",
        start_failed: bool = False,
    ):
        self.command = command
        self.exit_code = exit_code
        self.output = output
        self.start_failed = start_failed
        if start_failed:
            message = f"Failed to start command: {command}"
        else:
            message = f"Command failed with exit code {exit_code}: {command}"
        super().__init__(message)

    @property
    def result(self) -> CommandResult:
        return CommandResult(exit_code=self.exit_code, output=self.output)


class CommandRunner:
    """Runs external commands one at a time and reports their outcome."""

    def __init__(self, execution_id: str | None = None):
        self.logger = create_execution_logger("command_runner", execution_id)

    def run(
        self,
        command: str,
        args: Sequence[str] = (),
        cwd: str | Path | None = None,
        capture_output: bool = False,
    ) -> CommandResult:
        """Run ``command`` with ``args`` and wait for it to exit.

        By default the child shares this process's stdin, stdout and stderr,
        so nothing is captured. With ``capture_output`` its stdout is read
        line by line into the result while it runs.

        Args:
            command: Executable name or path
            args: Arguments passed to the executable
            cwd: Working directory for the child
            capture_output: Pipe and accumulate the child's stdout

        Returns:
            CommandResult with exit code 0 and the captured output

        Raises:
            CommandError: On a non-zero exit, or if the process cannot start
        """
        args = [str(arg) for arg in args]
        display = redact(" ".join([command, *args]))
        self.logger.info(f"Running command: {display}", cwd=str(cwd) if cwd else None)

        chunks: list[str] = []
        try:
            with subprocess.Popen(
                [command, *args],
                cwd=cwd,
                stdout=subprocess.PIPE if capture_output else None,
                text=True,
                encoding="utf-8",
                errors="replace",
            ) as process:
                if process.stdout is not None:
                    for line in process.stdout:
                        chunks.append(line)
                exit_code = process.wait()
        except OSError as e:
            self.logger.error(
                f"Failed to start command {display}: {e}",
                command=command,
                error=str(e),
            )
            raise CommandError(
                display, GENERIC_ERROR_CODE, "".join(chunks), start_failed=True
            ) from e

        output = "".join(chunks)
        self.logger.log_command(command, [redact(arg) for arg in args], exit_code)
        if exit_code != 0:
            raise CommandError(display, exit_code, output)
        return CommandResult(exit_code=exit_code, output=output)
