"""Mailgun adapter: multipart form POST to the domain's messages endpoint."""

from __future__ import annotations

from typing import Any

from ...domain.enums import Driver
from ...domain.errors import ConfigurationError
from ...domain.message import Attachment, Message, join_addresses
from .base import BaseMailer
from .transport import check_response

MAILGUN_BASE_URL = "https://api.mailgun.net/v3"


class MailgunMailer(BaseMailer):
    """Send through the Mailgun messages API.

    Addresses are sent as comma-joined ``Name <email>`` strings; attachments
    are uploaded as ``attachment[i]`` and ``inline[i]`` file parts, with the
    index counted separately per disposition.
    """

    driver = Driver.MAILGUN
    default_base_url = MAILGUN_BASE_URL

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/{self._configs.domain}/messages"

    def _check_credentials(self) -> None:
        if not self._configs.api_key:
            raise ConfigurationError("mailgun requires api_key in configs")
        if not self._configs.domain:
            raise ConfigurationError("mailgun requires domain in configs")

    def build_form(self, message: Message) -> dict[str, str]:
        """Return the form fields for ``message``; empty optional fields are left out."""
        sender = self._require_sender(message)
        form = {
            "from": sender.format(),
            "to": join_addresses(message.to),
            "subject": message.subject,
        }
        if message.cc:
            form["cc"] = join_addresses(message.cc)
        if message.bcc:
            form["bcc"] = join_addresses(message.bcc)
        if message.reply_to is not None and message.reply_to.email:
            form["h:Reply-To"] = message.reply_to.format()
        if message.body_text:
            form["text"] = message.body_text
        if message.body_html:
            form["html"] = message.body_html
        return form

    @staticmethod
    def build_files(attachments: list[Attachment]) -> list[tuple[str, tuple[str, bytes, str]]]:
        """Return httpx multipart file parts in attachment order."""
        counters = {"attachment": 0, "inline": 0}
        files: list[tuple[str, tuple[str, bytes, str]]] = []
        for attachment in attachments:
            field = attachment.disposition.value
            files.append(
                (
                    f"{field}[{counters[field]}]",
                    (attachment.filename, attachment.data, attachment.mime_type or "application/octet-stream"),
                )
            )
            counters[field] += 1
        return files

    def build_parts(self, message: Message, attachments: list[Attachment]) -> list[tuple[str, Any]]:
        """Return every multipart part: form fields first, then files.

        Form fields are sent as parts without a filename so the body is
        ``multipart/form-data`` even when there is nothing attached.
        """
        parts: list[tuple[str, Any]] = [(name, (None, value)) for name, value in self.build_form(message).items()]
        parts.extend(self.build_files(attachments))
        return parts

    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        auth = ("api", self._configs.api_key or "")
        with self._http_client() as client:
            response = client.post(self.messages_url, files=self.build_parts(message, attachments), auth=auth)
        check_response(response, driver=self.driver.value, success_status=200)


__all__ = ["MAILGUN_BASE_URL", "MailgunMailer"]
