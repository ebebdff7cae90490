"""Process exit codes.

Every command maps its outcome to one of these values. Cancellation by the
user is not an error and exits with OK.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    The numeric values are part of the command-line contract:
    - 0: Success (including user-initiated cancellation)
    - 1: User error (bad version, bad release kind, missing source directory)
    - 2: Environment error (git or registry client not installed, bad config)
    - 3: Command error (an external command exited non-zero)
    - 5: I/O error (manifest unreadable, staging copy failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    COMMAND_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
