"""Shared builder and send template for every provider adapter.

:class:`BaseMailer` owns the message state and implements all fluent
builder methods. ``send()`` runs the same pipeline for every provider:
credential check, message validation, attachment resolution, then the
provider-specific dispatch implemented by subclasses.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, ClassVar, Self

import httpx

from ...domain.enums import Disposition, Driver
from ...domain.errors import InvalidMessageError
from ...domain.limits import PROVIDER_LIMITS, ProviderLimits, verify_message
from ...domain.message import Address, Attachment, AttachmentSource, Message
from .attachments import load_attachments
from .config import Configs
from .transport import build_http_client

logger = logging.getLogger(__name__)


class BaseMailer(ABC):
    """Fluent message builder with a template ``send()``.

    Subclasses set :attr:`driver`, and implement :meth:`_check_credentials`
    and :meth:`_dispatch`.
    """

    driver: ClassVar[Driver]
    default_base_url: ClassVar[str] = ""

    def __init__(self, configs: Configs, *, transport: httpx.BaseTransport | None = None) -> None:
        self._configs = configs
        self._transport = transport
        self._message = Message()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(configs={self._configs!r})"

    @property
    def configs(self) -> Configs:
        return self._configs

    @property
    def message(self) -> Message:
        """The message assembled so far."""
        return self._message

    @property
    def limits(self) -> ProviderLimits:
        return PROVIDER_LIMITS[self.driver]

    @property
    def base_url(self) -> str:
        """Configured base URL, or the provider's public endpoint."""
        return self._configs.base_url or self.default_base_url

    # Builder

    def sender(self, name: str, email: str) -> Self:
        self._message.sender = Address(name, email)
        return self

    from_ = sender

    def to(self, name: str, email: str) -> Self:
        self._message.to.append(Address(name, email))
        return self

    def cc(self, name: str, email: str) -> Self:
        self._message.cc.append(Address(name, email))
        return self

    def bcc(self, name: str, email: str) -> Self:
        self._message.bcc.append(Address(name, email))
        return self

    def reply_to(self, name: str, email: str) -> Self:
        self._message.reply_to = Address(name, email)
        return self

    def subject(self, subject: str) -> Self:
        self._message.subject = subject
        return self

    def body_html(self, html: str) -> Self:
        self._message.body_html = html
        return self

    def body_text(self, text: str) -> Self:
        self._message.body_text = text
        return self

    def attachment_file(self, path: str | Path) -> Self:
        self._message.attachments.append(AttachmentSource.from_path(path, Disposition.ATTACHMENT))
        return self

    def attachment_inline_file(self, path: str | Path) -> Self:
        """Attach a file to be referenced from the HTML body as ``cid:<filename>``."""
        self._message.attachments.append(AttachmentSource.from_path(path, Disposition.INLINE))
        return self

    def attachment_reader(self, filename: str, stream: IO[bytes]) -> Self:
        """Attach the contents of a binary stream under ``filename``.

        The stream is read when the message is sent, not when it is added.
        """
        self._message.attachments.append(AttachmentSource.from_stream(filename, stream, Disposition.ATTACHMENT))
        return self

    def attachment_inline_reader(self, filename: str, stream: IO[bytes]) -> Self:
        self._message.attachments.append(AttachmentSource.from_stream(filename, stream, Disposition.INLINE))
        return self

    # Dispatch

    def send(self) -> None:
        """Validate the message and deliver it with a single provider request.

        Raises:
            ConfigurationError: Required credentials are missing.
            InvalidMessageError: Sender, ``to`` recipient or body missing.
            RecipientLimitError: Too many recipients for the provider.
            FileNotFoundError: A file attachment does not exist.
            AttachmentTooLargeError: Attachments exceed the provider ceiling.
            DeliveryError: The provider answered with a non-success status.
            httpx.TransportError: Network failure or timeout.
        """
        self._check_credentials()
        verify_message(self._message, self.limits)
        attachments = load_attachments(self._message.attachments, self.limits)

        log_extra = {
            "driver": self.driver.value,
            "recipients": self._message.recipient_count,
            "attachments": len(attachments),
        }
        logger.info("Sending email", extra=log_extra)
        self._dispatch(self._message, attachments)
        logger.info("Email sent", extra=log_extra)

    @staticmethod
    def _require_sender(message: Message) -> Address:
        """Return the sender of ``message``; the payload builders are public.

        Raises:
            InvalidMessageError: No sender is set.
        """
        if message.sender is None or not message.sender.email:
            raise InvalidMessageError("a sender address is required")
        return message.sender

    def _http_client(self) -> httpx.Client:
        return build_http_client(timeout=self._configs.request_timeout, transport=self._transport)

    @abstractmethod
    def _check_credentials(self) -> None:
        """Raise ConfigurationError when provider credentials are incomplete."""

    @abstractmethod
    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        """Serialize ``message`` and deliver it."""


__all__ = ["BaseMailer"]
