"""Factory mapping a provider name to its adapter."""

from __future__ import annotations

import logging

import httpx

from ...domain.enums import Driver
from ...domain.errors import UnsupportedDriverError
from .base import BaseMailer
from .config import Configs
from .customerio import CustomerIOMailer
from .mailgun import MailgunMailer
from .mailjet import MailjetMailer
from .postmark import PostmarkMailer
from .sendgrid import SendGridMailer

logger = logging.getLogger(__name__)

MAILERS: dict[Driver, type[BaseMailer]] = {
    Driver.MAILGUN: MailgunMailer,
    Driver.SENDGRID: SendGridMailer,
    Driver.POSTMARK: PostmarkMailer,
    Driver.MAILJET: MailjetMailer,
    Driver.CUSTOMERIO: CustomerIOMailer,
}


def resolve_driver(driver: Driver | str) -> Driver:
    """Normalize a driver name (case-insensitive) to a :class:`Driver`.

    Raises:
        UnsupportedDriverError: The name is not a known provider.

    Examples:
        >>> resolve_driver("Mailgun")
        <Driver.MAILGUN: 'mailgun'>
        >>> resolve_driver("smtp")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        UnsupportedDriverError: unsupported mail driver: 'smtp'
    """
    if isinstance(driver, Driver):
        return driver
    try:
        return Driver(str(driver).strip().lower())
    except ValueError as exc:
        raise UnsupportedDriverError(f"unsupported mail driver: {driver!r}") from exc


def new_mailer(
    driver: Driver | str,
    configs: Configs,
    *,
    transport: httpx.BaseTransport | None = None,
) -> BaseMailer:
    """Return a fresh mailer for ``driver`` holding ``configs``.

    Credentials are not checked here; a mailer with incomplete configs fails
    with ConfigurationError when ``send()`` is called.

    Args:
        driver: Provider to use.
        configs: Provider credentials and options.
        transport: Optional httpx transport, used by the HTTP-based adapters.

    Example:
        >>> mailer = new_mailer("postmark", Configs(server_token="t"))
        >>> type(mailer).__name__
        'PostmarkMailer'
    """
    resolved = resolve_driver(driver)
    logger.debug("Creating mailer", extra={"driver": resolved.value})
    return MAILERS[resolved](configs, transport=transport)


__all__ = [
    "MAILERS",
    "new_mailer",
    "resolve_driver",
]
