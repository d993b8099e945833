"""In-memory mail adapters for testing.

Contents:
    * :class:`MailerSpy` - factory satisfying ``NewMailer`` that records sends.
    * :func:`load_mail_settings_from_dict_in_memory` - settings loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from ...domain.enums import Driver
from ...domain.message import Attachment, Message
from ..mail.base import BaseMailer
from ..mail.config import Configs, MailSettings, load_mail_settings_from_dict
from ..mail.factory import resolve_driver


@dataclass
class SentMessage:
    """A message captured by :class:`MailerSpy`."""

    driver: Driver
    configs: Configs
    message: Message
    attachments: list[Attachment]


class _RecordingMailer(BaseMailer):
    """Runs the full validation pipeline, then records instead of dispatching."""

    def __init__(self, spy: MailerSpy, driver: Driver, configs: Configs) -> None:
        super().__init__(configs)
        self._spy = spy
        self.driver = driver  # type: ignore[misc]

    def _check_credentials(self) -> None:
        """Credentials are not required by the spy."""

    def _dispatch(self, message: Message, attachments: list[Attachment]) -> None:
        self._spy.sent.append(SentMessage(self.driver, self._configs, message, attachments))
        if self._spy.raise_exception is not None:
            raise self._spy.raise_exception


@dataclass
class MailerSpy:
    """Captures sends for test assertions.

    Calling the spy returns a mailer for the requested driver. The mailer
    validates messages and resolves attachments like a real one, then
    appends a :class:`SentMessage` to :attr:`sent`.

    Attributes:
        sent: Captured messages in send order.
        raise_exception: When set, ``send()`` raises it after recording.

    Example:
        >>> spy = MailerSpy()
        >>> spy("postmark", Configs()).sender("", "a@x.io").to("", "b@x.io").body_text("hi").send()
        >>> spy.sent[0].message.to[0].email
        'b@x.io'
    """

    sent: list[SentMessage] = field(default_factory=list)
    raise_exception: Exception | None = None

    def __call__(
        self,
        driver: Driver | str,
        configs: Configs,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> BaseMailer:
        return _RecordingMailer(self, resolve_driver(driver), configs)

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.raise_exception = None


def load_mail_settings_from_dict_in_memory(config_dict: Mapping[str, Any]) -> MailSettings:
    """Parse mail settings from dict using the real Pydantic models."""
    return load_mail_settings_from_dict(config_dict)


__all__ = [
    "MailerSpy",
    "SentMessage",
    "load_mail_settings_from_dict_in_memory",
]
