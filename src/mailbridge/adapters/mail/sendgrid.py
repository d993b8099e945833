"""SendGrid adapter: v3 mail/send JSON API."""

from __future__ import annotations

from typing import Any

from ...domain.enums import Driver
from ...domain.errors import ConfigurationError
from ...domain.message import Address, Attachment, Message
from .base import BaseMailer
from .transport import check_response, post_json

SENDGRID_BASE_URL = "https://api.sendgrid.com/v3"


def _address(address: Address) -> dict[str, str]:
    return {"name": address.name, "email": address.email}


class SendGridMailer(BaseMailer):
    """Send through the SendGrid v3 API; success is ``202 Accepted``."""

    driver = Driver.SENDGRID
    default_base_url = SENDGRID_BASE_URL

    @property
    def send_url(self) -> str:
        return f"{self.base_url}/mail/send"

    def _check_credentials(self) -> None:
        if not self._configs.api_key:
            raise ConfigurationError("sendgrid requires api_key in configs")

    def build_payload(self, message: Message, attachments: list[Attachment]) -> dict[str, Any]:
        """Return the JSON body for ``message``.

        Empty ``cc``/``bcc`` lists are omitted from the personalization; the
        ``text/plain`` part always precedes ``text/html``.
        """
        sender = self._require_sender(message)
        personalization: dict[str, Any] = {
            "to": [_address(a) for a in message.to],
            "subject": message.subject,
        }
        if message.cc:
            personalization["cc"] = [_address(a) for a in message.cc]
        if message.bcc:
            personalization["bcc"] = [_address(a) for a in message.bcc]

        payload: dict[str, Any] = {
            "personalizations": [personalization],
            "from": _address(sender),
        }
        if message.reply_to is not None and message.reply_to.email:
            payload["reply_to"] = _address(message.reply_to)

        content: list[dict[str, str]] = []
        if message.body_text:
            content.append({"type": "text/plain", "value": message.body_text})
        if message.body_html:
            content.append({"type": "text/html", "value": message.body_html})
        payload["content"] = content

        if attachments:
            payload["attachments"] = [
                {
                    "content": a.content,
                    "type": a.mime_type,
                    "filename": a.filename,
                    "content_id": a.content_id,
                    "disposition": a.disposition.value,
                }
                for a in attachments
            ]
        return payload

    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        headers = {"Authorization": f"Bearer {self._configs.api_key}"}
        with self._http_client() as client:
            response = post_json(client, self.send_url, self.build_payload(message, attachments), headers=headers)
        check_response(response, driver=self.driver.value, success_status=202)


__all__ = ["SENDGRID_BASE_URL", "SendGridMailer"]
