"""Mail adapter - provider-backed email delivery.

Structure:
    * :mod:`.config` - Credential model and ``[mail]`` section loader
    * :mod:`.attachments` - Attachment sizing, reading and MIME detection
    * :mod:`.transport` - httpx client and orjson helpers
    * :mod:`.base` - Shared builder and send template
    * :mod:`.mailgun`, :mod:`.sendgrid`, :mod:`.postmark`, :mod:`.mailjet`,
      :mod:`.customerio` - One adapter per provider
    * :mod:`.factory` - Driver to adapter mapping

Contents:
    * :class:`.config.Configs` - Provider credentials
    * :func:`.factory.new_mailer` - Build a mailer for a provider
"""

from __future__ import annotations

from .base import BaseMailer
from .config import Configs, MailSettings, load_mail_settings_from_dict
from .customerio import CustomerIOMailer
from .factory import new_mailer, resolve_driver
from .mailgun import MailgunMailer
from .mailjet import MailjetMailer
from .postmark import PostmarkMailer
from .sendgrid import SendGridMailer

__all__ = [
    "BaseMailer",
    "Configs",
    "CustomerIOMailer",
    "MailSettings",
    "MailgunMailer",
    "MailjetMailer",
    "PostmarkMailer",
    "SendGridMailer",
    "load_mail_settings_from_dict",
    "new_mailer",
    "resolve_driver",
]
