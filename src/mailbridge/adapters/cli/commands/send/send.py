"""Send email CLI command.

Composes one message from command-line options and dispatches it through
the configured provider.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from mailbridge.adapters.mail.config import MailSettings
from mailbridge.domain.enums import Driver
from mailbridge.domain.errors import ConfigurationError

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import CLIContext, get_cli_context
from ._common import apply_validated_overrides, execute_with_send_error_handling, parse_address, select_driver

logger = logging.getLogger(__name__)


def _parse_addresses(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...] | str | None
) -> tuple[tuple[str, str], ...] | tuple[str, str] | None:
    """Click callback turning address strings into ``(name, email)`` pairs."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_address(value)
    return tuple(parse_address(v) for v in value)


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--driver",
    type=click.Choice([d.value for d in Driver], case_sensitive=False),
    default=None,
    help="Provider to send through (uses mail.driver if not specified)",
)
@click.option(
    "--from",
    "sender",
    default=None,
    callback=_parse_addresses,
    help='Sender, "Name <email>" or a bare address (uses mail.from_address if not specified)',
)
@click.option("--to", "to", multiple=True, required=True, callback=_parse_addresses, help="Recipient (repeatable)")
@click.option("--cc", "cc", multiple=True, callback=_parse_addresses, help="Carbon-copy recipient (repeatable)")
@click.option("--bcc", "bcc", multiple=True, callback=_parse_addresses, help="Blind-copy recipient (repeatable)")
@click.option("--reply-to", "reply_to", default=None, callback=_parse_addresses, help="Reply-To address")
@click.option("--subject", required=True, help="Email subject line")
@click.option("--text", "text", default="", help="Plain-text body")
@click.option("--html", "html", default="", help="HTML body")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to attach (repeatable)",
)
@click.option(
    "--inline",
    "inline",
    multiple=True,
    type=click.Path(path_type=str),
    help="File to embed, referenced from the HTML body as cid:<filename> (repeatable)",
)
@click.option("--timeout", type=float, default=None, help="Override mail.request_timeout in seconds")
@click.pass_context
def cli_send(
    ctx: click.Context,
    driver: str | None,
    sender: tuple[str, str] | None,
    to: tuple[tuple[str, str], ...],
    cc: tuple[tuple[str, str], ...],
    bcc: tuple[tuple[str, str], ...],
    reply_to: tuple[str, str] | None,
    subject: str,
    text: str,
    html: str,
    attachments: tuple[str, ...],
    inline: tuple[str, ...],
    timeout: float | None,
) -> None:
    """Send an email through Mailgun, SendGrid, Postmark, Mailjet or Customer.io.

    Credentials come from the [mail] configuration section; see
    ``mailbridge config --section mail``.
    """
    cli_ctx = get_cli_context(ctx)
    driver_label = driver or "configured"
    extra = {"command": "send", "driver": driver_label, "recipients": len(to) + len(cc) + len(bcc)}

    def _send() -> None:
        settings = _load_settings(cli_ctx)
        resolved = select_driver(driver, settings)
        overrides = {"request_timeout": timeout} if timeout is not None else {}
        configs = apply_validated_overrides(settings.configs, overrides)
        mailer = cli_ctx.services.new_mailer(resolved, configs)

        from_pair = sender or _default_sender(settings)
        if from_pair is not None:
            mailer.sender(*from_pair)
        for name, email in to:
            mailer.to(name, email)
        for name, email in cc:
            mailer.cc(name, email)
        for name, email in bcc:
            mailer.bcc(name, email)
        if reply_to is not None:
            mailer.reply_to(*reply_to)
        mailer.subject(subject).body_text(text).body_html(html)
        for path in attachments:
            mailer.attachment_file(path)
        for path in inline:
            mailer.attachment_inline_file(path)

        mailer.send()
        click.echo(f"\nEmail sent successfully via {resolved.value}!")
        logger.info("Email sent via CLI", extra={"driver": resolved.value})

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        _log_send_start(cli_ctx, driver_label, subject, attachments, inline)
        execute_with_send_error_handling(operation=_send)


def _load_settings(cli_ctx: CLIContext) -> MailSettings:
    try:
        return cli_ctx.services.load_mail_settings(cli_ctx.config.as_dict())
    except ValidationError as exc:
        raise ConfigurationError(f"invalid [mail] configuration: {exc}") from exc


def _default_sender(settings: MailSettings) -> tuple[str, str] | None:
    """Return the configured default sender, if any.

    Raises:
        ConfigurationError: ``mail.from_address`` is not an address.
    """
    if settings.from_address is None:
        return None
    try:
        return parse_address(settings.from_address)
    except click.BadParameter as exc:
        raise ConfigurationError(f"mail.from_address is invalid: {settings.from_address!r}") from exc


def _log_send_start(
    cli_ctx: CLIContext, driver: str, subject: str, attachments: tuple[str, ...], inline: tuple[str, ...]
) -> None:
    logger.info(
        "Sending email",
        extra={
            "driver": driver,
            "subject": subject,
            "profile": cli_ctx.profile,
            "attachment_count": len(attachments) + len(inline),
        },
    )


__all__ = ["cli_send"]
