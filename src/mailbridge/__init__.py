"""Unified client facade for transactional email providers.

Compose a message once and send it through Mailgun, SendGrid, Postmark,
Mailjet or Customer.io:

    >>> from mailbridge import Configs, new_mailer
    >>> mailer = new_mailer("postmark", Configs(server_token="..."))
    >>> mailer.sender("Shop", "shop@example.com").to("Jane", "jane@example.com")  # doctest: +ELLIPSIS
    PostmarkMailer(...)

The public surface routes through the architectural layers:
- Domain exports: drivers, message model and typed errors
- Adapter exports: credential model and the mailer factory
- Composition exports: wired configuration loading
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .adapters.mail import BaseMailer, Configs, new_mailer
from .application.ports import Mailer
from .composition import build_production
from .domain.enums import Disposition, Driver
from .domain.errors import (
    AttachmentTooLargeError,
    ConfigurationError,
    DeliveryError,
    InvalidMessageError,
    MailerError,
    RecipientLimitError,
    UnsupportedDriverError,
)
from .domain.limits import PROVIDER_LIMITS, ProviderLimits
from .domain.message import Address

__all__ = [
    "PROVIDER_LIMITS",
    "Address",
    "AttachmentTooLargeError",
    "BaseMailer",
    "ConfigurationError",
    "Configs",
    "DeliveryError",
    "Disposition",
    "Driver",
    "InvalidMessageError",
    "Mailer",
    "MailerError",
    "ProviderLimits",
    "RecipientLimitError",
    "UnsupportedDriverError",
    "build_production",
    "new_mailer",
    "print_info",
]
