"""Domain layer - pure message model and rules with no I/O or framework dependencies.

Contents:
    * :mod:`.enums` - Domain enumerations (Driver, Disposition, OutputFormat)
    * :mod:`.errors` - Domain exception types
    * :mod:`.message` - Address, attachment and message model
    * :mod:`.limits` - Provider ceilings and send-time validation
"""

from __future__ import annotations

from .enums import Disposition, Driver, OutputFormat
from .errors import (
    AttachmentTooLargeError,
    ConfigurationError,
    DeliveryError,
    InvalidMessageError,
    MailerError,
    RecipientLimitError,
    UnsupportedDriverError,
)
from .limits import PROVIDER_LIMITS, ProviderLimits, check_attachment_size, verify_message
from .message import Address, Attachment, AttachmentSource, Message

__all__ = [
    # Enums
    "Disposition",
    "Driver",
    "OutputFormat",
    # Errors
    "AttachmentTooLargeError",
    "ConfigurationError",
    "DeliveryError",
    "InvalidMessageError",
    "MailerError",
    "RecipientLimitError",
    "UnsupportedDriverError",
    # Model
    "Address",
    "Attachment",
    "AttachmentSource",
    "Message",
    # Limits
    "PROVIDER_LIMITS",
    "ProviderLimits",
    "check_attachment_size",
    "verify_message",
]
