"""Domain-specific exceptions for typed error handling at boundaries.

Every failure detected by mailbridge itself derives from :class:`MailerError`.
Filesystem errors (``FileNotFoundError``) and transport errors raised by
httpx are not wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class MailerError(Exception):
    """Base class for all errors raised by mailbridge."""


class ConfigurationError(MailerError):
    """Credentials or settings required by the selected provider are missing.

    Example:
        >>> err = ConfigurationError("mailgun requires a domain")
        >>> str(err)
        'mailgun requires a domain'
    """


class InvalidMessageError(MailerError, ValueError):
    """The composed message cannot be sent as-is.

    Raised for a missing sender, no ``to`` recipients or an empty body.
    Inherits from ValueError so generic argument handlers still apply.

    Example:
        >>> isinstance(InvalidMessageError("no sender"), ValueError)
        True
    """


class RecipientLimitError(InvalidMessageError):
    """Combined to/cc/bcc count exceeds the provider's ceiling."""

    def __init__(self, message: str, *, count: int, limit: int) -> None:
        super().__init__(message)
        self.count = count
        self.limit = limit


class AttachmentTooLargeError(MailerError):
    """Total attachment size exceeds the provider's ceiling.

    Example:
        >>> err = AttachmentTooLargeError("too big", total=6, limit=5)
        >>> (err.total, err.limit)
        (6, 5)
    """

    def __init__(self, message: str, *, total: int, limit: int) -> None:
        super().__init__(message)
        self.total = total
        self.limit = limit


class DeliveryError(MailerError):
    """The provider answered with a non-success HTTP status.

    ``str(err)`` is the raw response body so callers see the provider's own
    explanation verbatim.

    Example:
        >>> err = DeliveryError('{"message": "Forbidden"}', status_code=401)
        >>> str(err)
        '{"message": "Forbidden"}'
        >>> err.status_code
        401
    """

    def __init__(self, body: str, *, status_code: int) -> None:
        super().__init__(body)
        self.body = body
        self.status_code = status_code


class UnsupportedDriverError(MailerError, ValueError):
    """The factory was asked for a provider it does not know."""


__all__ = [
    "AttachmentTooLargeError",
    "ConfigurationError",
    "DeliveryError",
    "InvalidMessageError",
    "MailerError",
    "RecipientLimitError",
    "UnsupportedDriverError",
]
