"""Process exit codes.

The values are part of the CI contract: pipelines key off them, so they
must stay stable.
- 0: success, including the skipped (non-release) case
- 1: bad input (unreadable manifest, unresolved service or version, missing token)
- 4: the remote configuration service failed or was unreachable
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
