"""Platform abstraction layer."""

from .files import atomic_write_text, copy_tree, remove_tree, reset_dir
from .process import (
    CommandError,
    CommandFailed,
    CommandNotFound,
    CommandOutput,
    Runner,
    format_command,
    run,
)
from .terminal import RawSession, is_interactive_terminal, raw_session

__all__ = [
    # files
    "atomic_write_text",
    "copy_tree",
    "remove_tree",
    "reset_dir",
    # process
    "CommandError",
    "CommandFailed",
    "CommandNotFound",
    "CommandOutput",
    "Runner",
    "format_command",
    "run",
    # terminal
    "RawSession",
    "is_interactive_terminal",
    "raw_session",
]
