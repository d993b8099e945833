"""Customer.io adapter: transactional email through the ``customerio`` client.

The HTTP exchange is owned by :class:`customerio.APIClient`, which reports
every failure (non-2xx answers and network errors alike) as
``CustomerIOException``; it reaches the caller unchanged.
"""

from __future__ import annotations

import uuid
from typing import Any

from customerio import APIClient, SendEmailRequest

from ...domain.enums import Driver
from ...domain.errors import ConfigurationError
from ...domain.message import Attachment, Message, join_addresses
from .base import BaseMailer


class CustomerIOMailer(BaseMailer):
    """Send through the Customer.io transactional API.

    Each message gets a fresh random identifier.
    """

    driver = Driver.CUSTOMERIO

    def _check_credentials(self) -> None:
        if not self._configs.api_key:
            raise ConfigurationError("customerio requires api_key in configs")

    def build_request(self, message: Message, attachments: list[Attachment]) -> SendEmailRequest:
        """Return the :class:`customerio.SendEmailRequest` for ``message``."""
        sender = self._require_sender(message)
        request = SendEmailRequest(
            _from=sender.format(),
            to=join_addresses(message.to),
            subject=message.subject,
            identifiers={"id": str(uuid.uuid4())},
            **self._optional_fields(message),
        )
        for attachment in attachments:
            request.attach(attachment.filename, attachment.content, encode=False)
        return request

    @staticmethod
    def _optional_fields(message: Message) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if message.cc:
            fields["cc"] = join_addresses(message.cc)
        if message.bcc:
            fields["bcc"] = join_addresses(message.bcc)
        if message.reply_to is not None and message.reply_to.email:
            fields["reply_to"] = message.reply_to.format()
        if message.body_text:
            fields["body_plain"] = message.body_text
        if message.body_html:
            fields["body"] = message.body_html
        return fields

    def _build_client(self) -> APIClient:
        client_kwargs: dict[str, Any] = {"retries": 0, "timeout": self._configs.request_timeout}
        if self._configs.base_url:
            client_kwargs["url"] = self._configs.base_url
        return APIClient(self._configs.api_key, **client_kwargs)

    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        request = self.build_request(message, attachments)
        with self._build_client() as client:
            client.send_email(request)


__all__ = ["CustomerIOMailer"]
