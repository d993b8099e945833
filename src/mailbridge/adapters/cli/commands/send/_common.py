"""Shared helpers for the ``send`` command.

Contains address parsing, settings resolution and the exception to exit
code mapping.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from email.utils import parseaddr
from typing import Any

import httpx
import rich_click as click
from customerio.client_base import CustomerIOException
from pydantic import ValidationError

from mailbridge import __init__conf__
from mailbridge.adapters.mail.config import Configs, MailSettings
from mailbridge.domain.enums import Driver
from mailbridge.domain.errors import (
    AttachmentTooLargeError,
    ConfigurationError,
    DeliveryError,
    InvalidMessageError,
    UnsupportedDriverError,
)

from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def parse_address(raw: str) -> tuple[str, str]:
    """Split ``"Name <email>"`` or a bare address into ``(name, email)``.

    Raises:
        click.BadParameter: No address could be found.

    Examples:
        >>> parse_address("Jane Doe <jane@example.com>")
        ('Jane Doe', 'jane@example.com')
        >>> parse_address("ops@example.com")
        ('', 'ops@example.com')
    """
    name, email = parseaddr(raw)
    if not email or "@" not in email:
        raise click.BadParameter(f"not an email address: {raw!r}")
    return name, email


def apply_validated_overrides(base: Configs, overrides: dict[str, Any]) -> Configs:
    """Merge CLI overrides into ``base`` with full Pydantic validation.

    Raises:
        ValidationError: An override value is invalid.

    Example:
        >>> apply_validated_overrides(Configs(), {"request_timeout": 5}).request_timeout
        5.0
    """
    if not overrides:
        return base
    return Configs.model_validate({**base.model_dump(), **overrides})


def select_driver(cli_driver: str | None, settings: MailSettings) -> Driver:
    """Pick the ``--driver`` value, falling back to ``mail.driver``.

    Raises:
        ConfigurationError: Neither source names a provider.
    """
    if cli_driver:
        return Driver(cli_driver.lower())
    if settings.driver is not None:
        return settings.driver
    raise ConfigurationError(
        f"No mail driver configured. Pass --driver or set mail.driver "
        f"(see: {__init__conf__.shell_command} config --section mail)"
    )


def execute_with_send_error_handling(*, operation: Callable[[], None]) -> None:
    """Run ``operation`` and translate failures into exit codes.

    Handlers run most specific first:

    1. ConfigurationError, UnsupportedDriverError -> CONFIG_ERROR (78)
    2. AttachmentTooLargeError, InvalidMessageError, ValidationError -> INVALID_ARGUMENT (22)
    3. FileNotFoundError -> FILE_NOT_FOUND (2)
    4. httpx.TimeoutException -> TIMEOUT (110)
    5. DeliveryError, httpx.TransportError, CustomerIOException -> DELIVERY_FAILURE (69)
    6. anything else -> GENERAL_ERROR (1), re-raised when DEVELOPMENT_MODE is set

    Raises:
        SystemExit: On any error.
    """
    try:
        operation()
    except (ConfigurationError, UnsupportedDriverError) as exc:
        _handle_send_error(exc, "Mail configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR)
    except (AttachmentTooLargeError, InvalidMessageError, ValidationError) as exc:
        _handle_send_error(exc, "Invalid message", "Invalid message", exit_code=ExitCode.INVALID_ARGUMENT)
    except FileNotFoundError as exc:
        _handle_send_error(
            exc, "Attachment file not found", "Attachment file not found", exit_code=ExitCode.FILE_NOT_FOUND
        )
    except httpx.TimeoutException as exc:
        _handle_send_error(exc, "Provider request timed out", "Request timed out", exit_code=ExitCode.TIMEOUT)
    except DeliveryError as exc:
        _handle_send_error(
            exc,
            "Provider rejected message",
            f"Provider rejected the message (HTTP {exc.status_code})",
            exit_code=ExitCode.DELIVERY_FAILURE,
        )
    except (httpx.TransportError, CustomerIOException) as exc:
        _handle_send_error(exc, "Delivery failed", "Failed to send email", exit_code=ExitCode.DELIVERY_FAILURE)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _handle_send_error(
            exc,
            "Unexpected error sending email",
            "Unexpected error",
            exit_code=ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )


def _handle_send_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    log_traceback: bool = False,
) -> None:
    """Log ``exc``, print it for the user and exit with ``exit_code``."""
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "apply_validated_overrides",
    "execute_with_send_error_handling",
    "parse_address",
    "select_driver",
]
