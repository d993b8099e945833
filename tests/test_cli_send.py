"""CLI send stories: option parsing, settings resolution and exit codes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
import httpx
import pytest
from click.testing import CliRunner, Result

from mailbridge.adapters import cli as cli_mod
from mailbridge.adapters.cli.commands.send._common import parse_address, select_driver
from mailbridge.adapters.mail.config import MailSettings
from mailbridge.domain.enums import Disposition, Driver
from mailbridge.domain.errors import ConfigurationError, DeliveryError

if TYPE_CHECKING:
    from conftest import SendCliContext

POSTMARK_MAIL = {"driver": "postmark", "server_token": "srv", "from_address": "Shop <shop@example.com>"}
BASE_ARGS = ["send", "--to", "Jane <jane@example.com>", "--subject", "Hello", "--text", "Hi Jane"]


def _invoke(runner: CliRunner, ctx: SendCliContext, args: list[str]) -> Result:
    return runner.invoke(cli_mod.cli, args, obj=ctx.factory)


# ======================== Address parsing ========================


@pytest.mark.os_agnostic
def test_parse_address_splits_display_name() -> None:
    """A ``Name <email>`` string splits into its parts."""
    assert parse_address("Jane Doe <jane@example.com>") == ("Jane Doe", "jane@example.com")


@pytest.mark.os_agnostic
def test_parse_address_accepts_bare_address() -> None:
    """A bare address yields an empty name."""
    assert parse_address("jane@example.com") == ("", "jane@example.com")


@pytest.mark.os_agnostic
@pytest.mark.parametrize("raw", ["", "not-an-address", "Jane <>"])
def test_parse_address_rejects_non_addresses(raw: str) -> None:
    """Strings without an email address are rejected."""
    with pytest.raises(click.BadParameter):
        parse_address(raw)


# ======================== Driver selection ========================


@pytest.mark.os_agnostic
def test_cli_driver_wins_over_configured_driver() -> None:
    """--driver takes precedence over mail.driver."""
    assert select_driver("SendGrid", MailSettings(driver=Driver.POSTMARK)) is Driver.SENDGRID


@pytest.mark.os_agnostic
def test_configured_driver_is_used_without_cli_driver() -> None:
    """mail.driver applies when --driver is absent."""
    assert select_driver(None, MailSettings(driver=Driver.MAILJET)) is Driver.MAILJET


@pytest.mark.os_agnostic
def test_missing_driver_everywhere_raises_configuration_error() -> None:
    """Neither --driver nor mail.driver is a configuration error."""
    with pytest.raises(ConfigurationError, match="No mail driver configured"):
        select_driver(None, MailSettings())


# ======================== Successful sends ========================


@pytest.mark.os_agnostic
def test_when_send_succeeds_it_reports_the_driver(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """A successful send prints a confirmation naming the provider."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 0, result.output
    assert "Email sent successfully via postmark!" in result.output
    assert len(ctx.spy.sent) == 1


@pytest.mark.os_agnostic
def test_when_send_succeeds_the_message_carries_every_option(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Recipients, reply-to, subject and bodies reach the mailer."""
    ctx = send_cli_context(POSTMARK_MAIL)
    args = [
        *BASE_ARGS,
        "--to",
        "bob@example.com",
        "--cc",
        "Carol <carol@example.com>",
        "--bcc",
        "dave@example.com",
        "--reply-to",
        "Support <support@example.com>",
        "--html",
        "<p>Hi</p>",
    ]

    result = _invoke(cli_runner, ctx, args)

    assert result.exit_code == 0, result.output
    message = ctx.spy.sent[0].message
    assert message.sender is not None and message.sender.format() == "Shop <shop@example.com>"
    assert [a.format() for a in message.to] == ["Jane <jane@example.com>", "bob@example.com"]
    assert [a.format() for a in message.cc] == ["Carol <carol@example.com>"]
    assert [a.email for a in message.bcc] == ["dave@example.com"]
    assert message.reply_to is not None and message.reply_to.name == "Support"
    assert message.subject == "Hello"
    assert message.body_text == "Hi Jane"
    assert message.body_html == "<p>Hi</p>"


@pytest.mark.os_agnostic
def test_from_option_overrides_configured_sender(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """--from replaces mail.from_address."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--from", "ops@example.com"])

    assert result.exit_code == 0, result.output
    sender = ctx.spy.sent[0].message.sender
    assert sender is not None and sender.format() == "ops@example.com"


@pytest.mark.os_agnostic
def test_driver_option_overrides_configured_driver(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """--driver picks another provider than mail.driver."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--driver", "mailjet"])

    assert result.exit_code == 0, result.output
    assert ctx.spy.sent[0].driver is Driver.MAILJET
    assert "via mailjet" in result.output


@pytest.mark.os_agnostic
def test_configured_credentials_reach_the_mailer(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Configs are built from the [mail] section."""
    ctx = send_cli_context({**POSTMARK_MAIL, "request_timeout": 20})

    _invoke(cli_runner, ctx, BASE_ARGS)

    configs = ctx.spy.sent[0].configs
    assert configs.server_token == "srv"
    assert configs.request_timeout == 20.0


@pytest.mark.os_agnostic
def test_timeout_option_overrides_configured_timeout(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """--timeout replaces mail.request_timeout."""
    ctx = send_cli_context(POSTMARK_MAIL)

    _invoke(cli_runner, ctx, [*BASE_ARGS, "--timeout", "5"])

    assert ctx.spy.sent[0].configs.request_timeout == 5.0


@pytest.mark.os_agnostic
def test_zero_timeout_option_uses_the_default(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """--timeout 0 means "no explicit timeout" and falls back to sixty seconds."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--timeout", "0"])

    assert result.exit_code == 0
    assert ctx.spy.sent[0].configs.request_timeout == 60.0


@pytest.mark.os_agnostic
def test_attachment_and_inline_files_are_resolved(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
    attachment_file: Callable[[str, bytes], Path],
) -> None:
    """--attachment and --inline files are read with their disposition."""
    report = attachment_file("report.pdf", b"%PDF")
    logo = attachment_file("logo.png", b"PNG")
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--attachment", str(report), "--inline", str(logo)])

    assert result.exit_code == 0, result.output
    attachments = ctx.spy.sent[0].attachments
    assert [(a.filename, a.disposition) for a in attachments] == [
        ("report.pdf", Disposition.ATTACHMENT),
        ("logo.png", Disposition.INLINE),
    ]
    assert attachments[0].data == b"%PDF"


@pytest.mark.os_agnostic
def test_set_override_changes_the_driver(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Root --set overrides apply to the send command's settings."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = cli_runner.invoke(cli_mod.cli, ["--set", "mail.driver=sendgrid", *BASE_ARGS], obj=ctx.factory)

    assert result.exit_code == 0, result.output
    assert ctx.spy.sent[0].driver is Driver.SENDGRID


# ======================== Exit codes ========================


@pytest.mark.os_agnostic
def test_when_no_driver_is_configured_it_exits_with_code_78(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Missing driver is a configuration error (78)."""
    ctx = send_cli_context({"from_address": "shop@example.com"})

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 78
    assert "No mail driver configured" in result.output
    assert ctx.spy.sent == []


@pytest.mark.os_agnostic
def test_when_configured_driver_is_unknown_it_exits_with_code_78(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """An invalid [mail] section is a configuration error (78)."""
    ctx = send_cli_context({"driver": "smtp"})

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 78
    assert "invalid [mail] configuration" in result.output


@pytest.mark.os_agnostic
def test_when_from_address_is_invalid_it_exits_with_code_78(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """A malformed mail.from_address is a configuration error (78)."""
    ctx = send_cli_context({"driver": "postmark", "from_address": "nobody"})

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 78
    assert "mail.from_address is invalid" in result.output


@pytest.mark.os_agnostic
def test_when_no_sender_is_available_it_exits_with_code_22(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """No --from and no mail.from_address leaves the message invalid (22)."""
    ctx = send_cli_context({"driver": "postmark"})

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 22
    assert "sender" in result.output


@pytest.mark.os_agnostic
def test_when_no_body_is_given_it_exits_with_code_22(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Neither --text nor --html leaves the message invalid (22)."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, ["send", "--to", "jane@example.com", "--subject", "Hello"])

    assert result.exit_code == 22
    assert "body" in result.output


@pytest.mark.os_agnostic
def test_when_too_many_recipients_it_exits_with_code_22(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Exceeding the provider's recipient ceiling is invalid input (22)."""
    ctx = send_cli_context(POSTMARK_MAIL)
    args = [*BASE_ARGS]
    for index in range(50):
        args.extend(["--bcc", f"bcc{index}@example.com"])

    result = _invoke(cli_runner, ctx, args)

    assert result.exit_code == 22
    assert ctx.spy.sent == []


@pytest.mark.os_agnostic
def test_when_attachment_is_missing_it_exits_with_code_2(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
    tmp_path: Path,
) -> None:
    """A missing attachment file exits with FILE_NOT_FOUND (2)."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--attachment", str(tmp_path / "missing.pdf")])

    assert result.exit_code == 2
    assert "Attachment file not found" in result.output


@pytest.mark.os_agnostic
def test_when_attachments_exceed_the_ceiling_it_exits_with_code_22(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
    sized_file: Callable[[str, int], Path],
) -> None:
    """Attachments over the provider ceiling exit with INVALID_ARGUMENT (22)."""
    big = sized_file("big.bin", 5_000_001)
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--attachment", str(big)])

    assert result.exit_code == 22
    assert "max attachment size for postmark is 5MB" in result.output


@pytest.mark.os_agnostic
def test_when_provider_rejects_it_exits_with_code_69(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """A provider rejection exits with DELIVERY_FAILURE (69) and shows the body."""
    ctx = send_cli_context(POSTMARK_MAIL)
    ctx.spy.raise_exception = DeliveryError('{"Message":"Invalid token"}', status_code=401)

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 69
    assert "Provider rejected the message (HTTP 401)" in result.output
    assert "Invalid token" in result.output


@pytest.mark.os_agnostic
def test_when_provider_is_unreachable_it_exits_with_code_69(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Connection failures exit with DELIVERY_FAILURE (69)."""
    ctx = send_cli_context(POSTMARK_MAIL)
    ctx.spy.raise_exception = httpx.ConnectError("connection refused")

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 69
    assert "Failed to send email" in result.output


@pytest.mark.os_agnostic
def test_when_provider_times_out_it_exits_with_code_110(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """Timeouts exit with TIMEOUT (110)."""
    ctx = send_cli_context(POSTMARK_MAIL)
    ctx.spy.raise_exception = httpx.ReadTimeout("timed out")

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 110
    assert "Request timed out" in result.output


@pytest.mark.os_agnostic
def test_when_unexpected_error_occurs_it_exits_with_code_1(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Unexpected errors exit with GENERAL_ERROR (1)."""
    monkeypatch.delenv("DEVELOPMENT_MODE", raising=False)
    ctx = send_cli_context(POSTMARK_MAIL)
    ctx.spy.raise_exception = RuntimeError("boom")

    result = _invoke(cli_runner, ctx, BASE_ARGS)

    assert result.exit_code == 1
    assert "Unexpected error - boom" in result.output


@pytest.mark.os_agnostic
def test_when_timeout_option_is_negative_it_exits_with_code_22(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """A negative --timeout fails validation (22)."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, [*BASE_ARGS, "--timeout=-1"])

    assert result.exit_code == 22
    assert ctx.spy.sent == []


@pytest.mark.os_agnostic
def test_when_to_is_missing_click_reports_usage_error(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """--to is required by the command line."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, ["send", "--subject", "Hello", "--text", "x"])

    assert result.exit_code == 2
    assert "--to" in result.output


@pytest.mark.os_agnostic
def test_when_recipient_is_malformed_click_reports_bad_parameter(
    cli_runner: CliRunner,
    send_cli_context: Callable[[dict[str, Any]], SendCliContext],
) -> None:
    """An unparseable --to value is rejected before sending."""
    ctx = send_cli_context(POSTMARK_MAIL)

    result = _invoke(cli_runner, ctx, ["send", "--to", "nobody", "--subject", "Hello", "--text", "x"])

    assert result.exit_code == 2
    assert ctx.spy.sent == []
