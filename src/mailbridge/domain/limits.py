"""Provider ceilings and the pre-dispatch message validation step.

Validation is pure: it inspects a :class:`~mailbridge.domain.message.Message`
and raises typed errors before any file or network I/O happens.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import Driver
from .errors import AttachmentTooLargeError, InvalidMessageError, RecipientLimitError
from .message import Message

#: Providers document attachment ceilings in decimal megabytes.
MEGABYTE = 1_000_000


@dataclass(frozen=True, slots=True)
class ProviderLimits:
    """Recipient and attachment-size ceilings for one provider.

    Both ceilings are inclusive: a value equal to the limit is accepted.
    """

    driver: Driver
    max_recipients: int
    max_attachment_bytes: int

    @property
    def max_attachment_megabytes(self) -> int:
        return self.max_attachment_bytes // MEGABYTE


PROVIDER_LIMITS: dict[Driver, ProviderLimits] = {
    Driver.MAILGUN: ProviderLimits(Driver.MAILGUN, max_recipients=1000, max_attachment_bytes=25 * MEGABYTE),
    Driver.SENDGRID: ProviderLimits(Driver.SENDGRID, max_recipients=1000, max_attachment_bytes=30 * MEGABYTE),
    Driver.POSTMARK: ProviderLimits(Driver.POSTMARK, max_recipients=50, max_attachment_bytes=5 * MEGABYTE),
    Driver.MAILJET: ProviderLimits(Driver.MAILJET, max_recipients=50, max_attachment_bytes=15 * MEGABYTE),
    Driver.CUSTOMERIO: ProviderLimits(Driver.CUSTOMERIO, max_recipients=1000, max_attachment_bytes=30 * MEGABYTE),
}


def verify_message(message: Message, limits: ProviderLimits) -> None:
    """Check the send-time invariants of a message.

    Args:
        message: Message assembled by the builder.
        limits: Ceilings of the provider that will carry the message.

    Raises:
        InvalidMessageError: Sender missing, no ``to`` recipient, or both
            bodies empty.
        RecipientLimitError: to+cc+bcc exceeds ``limits.max_recipients``.

    Example:
        >>> from mailbridge.domain.message import Address
        >>> msg = Message(sender=Address("", "a@x.io"), to=[Address("", "b@x.io")], body_text="hi")
        >>> verify_message(msg, PROVIDER_LIMITS[Driver.POSTMARK])
        >>> verify_message(Message(), PROVIDER_LIMITS[Driver.POSTMARK])  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidMessageError: a sender address is required
    """
    if message.sender is None or not message.sender.email:
        raise InvalidMessageError("a sender address is required")
    if not message.to:
        raise InvalidMessageError("at least one recipient is required")
    count = message.recipient_count
    if count > limits.max_recipients:
        raise RecipientLimitError(
            f"total number of recipients including to/cc/bcc can not be greater than "
            f"{limits.max_recipients} for {limits.driver.value}",
            count=count,
            limit=limits.max_recipients,
        )
    if not message.body_text and not message.body_html:
        raise InvalidMessageError("a text or HTML body is required")


def check_attachment_size(total: int, limits: ProviderLimits) -> None:
    """Reject attachment payloads above the provider ceiling.

    Raises:
        AttachmentTooLargeError: When ``total`` exceeds ``limits.max_attachment_bytes``.

    Example:
        >>> check_attachment_size(5 * MEGABYTE, PROVIDER_LIMITS[Driver.POSTMARK])
        >>> check_attachment_size(5 * MEGABYTE + 1, PROVIDER_LIMITS[Driver.POSTMARK])  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        mailbridge.domain.errors.AttachmentTooLargeError: max attachment size for postmark is 5MB...
    """
    if total > limits.max_attachment_bytes:
        raise AttachmentTooLargeError(
            f"max attachment size for {limits.driver.value} is {limits.max_attachment_megabytes}MB "
            f"(got {total} bytes)",
            total=total,
            limit=limits.max_attachment_bytes,
        )


__all__ = [
    "MEGABYTE",
    "PROVIDER_LIMITS",
    "ProviderLimits",
    "check_attachment_size",
    "verify_message",
]
