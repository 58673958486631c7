"""GitHub Actions runtime helpers: inputs, secret masking and annotations."""

import os
import sys

from .logging_config import register_secret


def get_input(name: str, default: str = "") -> str:
    """Read an action input the way the runner exposes it (``INPUT_<NAME>``)."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return os.getenv(key, default).strip()


def set_secret(value: str | None) -> None:
    """Mask ``value`` in the runner's log and in this process's log output."""
    if not value:
        return
    register_secret(value)
    _issue_command("add-mask", value)


def notice(message: str) -> None:
    """Emit a notice annotation shown on the workflow run summary."""
    _issue_command("notice", message)


def set_failed(message: str) -> None:
    """Emit an error annotation; the caller is responsible for the exit code."""
    _issue_command("error", message)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _issue_command(command: str, message: str) -> None:
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()
