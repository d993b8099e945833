"""Postmark adapter: single-message email API with token headers."""

from __future__ import annotations

from typing import Any

from ...domain.enums import Driver
from ...domain.errors import ConfigurationError
from ...domain.message import Attachment, Message, join_addresses
from .base import BaseMailer
from .transport import check_response, post_json

POSTMARK_BASE_URL = "https://api.postmarkapp.com"

ACCOUNT_TOKEN_HEADER = "X-Postmark-Account-Token"
SERVER_TOKEN_HEADER = "X-Postmark-Server-Token"


class PostmarkMailer(BaseMailer):
    """Send through the Postmark ``/email`` endpoint.

    Either an account token or a server token must be configured; whichever
    tokens are present are sent as their respective headers.
    """

    driver = Driver.POSTMARK
    default_base_url = POSTMARK_BASE_URL

    @property
    def email_url(self) -> str:
        return f"{self.base_url}/email"

    def _check_credentials(self) -> None:
        if not self._configs.account_token and not self._configs.server_token:
            raise ConfigurationError("postmark requires account_token or server_token in configs")

    def build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._configs.account_token:
            headers[ACCOUNT_TOKEN_HEADER] = self._configs.account_token
        if self._configs.server_token:
            headers[SERVER_TOKEN_HEADER] = self._configs.server_token
        return headers

    def build_payload(self, message: Message, attachments: list[Attachment]) -> dict[str, Any]:
        """Return the JSON body for ``message``; address fields are formatted strings."""
        sender = self._require_sender(message)
        payload: dict[str, Any] = {
            "From": sender.format(),
            "To": join_addresses(message.to),
            "Subject": message.subject,
        }
        if message.cc:
            payload["Cc"] = join_addresses(message.cc)
        if message.bcc:
            payload["Bcc"] = join_addresses(message.bcc)
        if message.reply_to is not None and message.reply_to.email:
            payload["ReplyTo"] = message.reply_to.format()
        if message.body_text:
            payload["TextBody"] = message.body_text
        if message.body_html:
            payload["HtmlBody"] = message.body_html
        if attachments:
            payload["Attachments"] = [
                {
                    "Name": a.filename,
                    "Content": a.content,
                    "ContentType": a.mime_type,
                    "ContentID": a.content_id,
                }
                for a in attachments
            ]
        return payload

    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        with self._http_client() as client:
            response = post_json(
                client, self.email_url, self.build_payload(message, attachments), headers=self.build_headers()
            )
        check_response(response, driver=self.driver.value, success_status=200)


__all__ = [
    "ACCOUNT_TOKEN_HEADER",
    "POSTMARK_BASE_URL",
    "SERVER_TOKEN_HEADER",
    "PostmarkMailer",
]
