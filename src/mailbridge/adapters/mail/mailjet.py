"""Mailjet adapter: v3.1 send API with a single-entry ``Messages`` list."""

from __future__ import annotations

from typing import Any

from ...domain.enums import Driver
from ...domain.errors import ConfigurationError
from ...domain.message import Address, Attachment, Message
from .base import BaseMailer
from .transport import check_response, post_json

MAILJET_BASE_URL = "https://api.mailjet.com/v3.1"


def _address(address: Address) -> dict[str, str]:
    """Mailjet address object; ``Name`` is omitted when empty.

    Examples:
        >>> _address(Address("", "a@x.io"))
        {'Email': 'a@x.io'}
    """
    entry = {"Email": address.email}
    if address.name:
        entry["Name"] = address.name
    return entry


def _attachment(attachment: Attachment) -> dict[str, str]:
    entry = {
        "Filename": attachment.filename,
        "Base64Content": attachment.content,
        "ContentType": attachment.mime_type,
    }
    if attachment.is_inline:
        entry["ContentID"] = attachment.content_id
    return entry


class MailjetMailer(BaseMailer):
    """Send through Mailjet's ``/send`` endpoint with public/private key auth.

    Regular attachments go to ``Attachments``; inline ones go to
    ``InlinedAttachments`` and carry a ``ContentID``.
    """

    driver = Driver.MAILJET
    default_base_url = MAILJET_BASE_URL

    @property
    def send_url(self) -> str:
        return f"{self.base_url}/send"

    def _check_credentials(self) -> None:
        if not self._configs.public_key or not self._configs.private_key:
            raise ConfigurationError("mailjet requires public_key and private_key in configs")

    def build_payload(self, message: Message, attachments: list[Attachment]) -> dict[str, Any]:
        sender = self._require_sender(message)
        entry: dict[str, Any] = {
            "From": _address(sender),
            "To": [_address(a) for a in message.to],
            "Subject": message.subject,
        }
        if message.cc:
            entry["Cc"] = [_address(a) for a in message.cc]
        if message.bcc:
            entry["Bcc"] = [_address(a) for a in message.bcc]
        if message.reply_to is not None and message.reply_to.email:
            entry["ReplyTo"] = _address(message.reply_to)
        if message.body_text:
            entry["TextPart"] = message.body_text
        if message.body_html:
            entry["HTMLPart"] = message.body_html

        regular = [_attachment(a) for a in attachments if not a.is_inline]
        inlined = [_attachment(a) for a in attachments if a.is_inline]
        if regular:
            entry["Attachments"] = regular
        if inlined:
            entry["InlinedAttachments"] = inlined
        return {"Messages": [entry]}

    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        auth = (self._configs.public_key or "", self._configs.private_key or "")
        with self._http_client() as client:
            response = post_json(client, self.send_url, self.build_payload(message, attachments), auth=auth)
        check_response(response, driver=self.driver.value, success_status=200)


__all__ = ["MAILJET_BASE_URL", "MailjetMailer"]
