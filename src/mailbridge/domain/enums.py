"""Type-safe domain enums for providers, attachment disposition and output formats."""

from __future__ import annotations

from enum import Enum


class Driver(str, Enum):
    """Closed set of supported transactional email providers.

    Inherits from str so configuration values and CLI choices compare
    directly against members.

    Example:
        >>> Driver.MAILGUN.value
        'mailgun'
        >>> Driver("postmark") is Driver.POSTMARK
        True
        >>> Driver.SENDGRID == "sendgrid"
        True
    """

    MAILGUN = "mailgun"
    SENDGRID = "sendgrid"
    POSTMARK = "postmark"
    MAILJET = "mailjet"
    CUSTOMERIO = "customerio"


class Disposition(str, Enum):
    """How an attachment is presented to the recipient.

    Attributes:
        ATTACHMENT: Separate downloadable file.
        INLINE: Rendered inside the HTML body, referenced by ``cid:``.

    Example:
        >>> Disposition.INLINE.value
        'inline'
    """

    ATTACHMENT = "attachment"
    INLINE = "inline"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Example:
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "Disposition",
    "Driver",
    "OutputFormat",
]
