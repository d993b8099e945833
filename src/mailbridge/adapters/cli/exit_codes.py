"""POSIX-conventional exit codes for CLI error paths.

Signal codes (130, 141, 143) are informational; ``lib_cli_exit_tools``
translates signals itself and the commands never raise them.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno conventions.

    * 2: ENOENT, an attachment file is missing
    * 22: EINVAL, the message is incomplete or over a provider ceiling
    * 69: EX_UNAVAILABLE, the provider rejected the message or is unreachable
    * 78: EX_CONFIG, credentials or driver missing
    * 110: ETIMEDOUT, the provider did not answer in time

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    CONFIG_ERROR = 78
    TIMEOUT = 110
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
