"""Shared pytest fixtures for mailer, CLI and module-entry tests.

Fixtures read as plain English: ``mock_transport`` records outgoing
requests, ``mailer_factory`` builds a provider mailer wired to it, and
``send_cli_context`` wires the CLI to an in-memory MailerSpy.
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from mailbridge.adapters.mail.base import BaseMailer
    from mailbridge.adapters.mail.config import Configs
    from mailbridge.adapters.memory.mail import MailerSpy
    from mailbridge.composition import AppServices

_COVERAGE_BASENAME = ".coverage.mailbridge"


def pytest_configure(config: pytest.Config) -> None:
    """Keep the coverage database on a local temp directory.

    SQLite locking is unreliable on network mounts, and stale journal files
    from a crashed run make the next run fail with "database is locked".
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        for suffix in ("", "-journal", "-wal", "-shm"):
            with contextlib.suppress(FileNotFoundError):
                Path(str(cov_path) + suffix).unlink()
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(type(lib_cli_exit_tools.config)))


# ======================== HTTP capture ========================


@dataclass
class RecordingTransport:
    """Wraps ``httpx.MockTransport`` and keeps every request it served.

    Attributes:
        status_code: Status returned for every request.
        body: Response body returned for every request.
        error: When set, raised instead of returning a response.
        requests: Requests received, in order.
    """

    status_code: int = 200
    body: str = ""
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def mock_transport() -> RecordingTransport:
    """Provide a transport that answers 200 and records requests.

    Example:
        def test_post(mock_transport: RecordingTransport) -> None:
            mock_transport.status_code = 202
            ...
            assert mock_transport.last.url.path == "/v3/mail/send"
    """
    return RecordingTransport()


@pytest.fixture
def mailer_factory(mock_transport: RecordingTransport) -> Callable[..., BaseMailer]:
    """Return a factory building a mailer wired to ``mock_transport``.

    Example:
        def test_x(mailer_factory) -> None:
            mailer = mailer_factory("sendgrid", Configs(api_key="k"))
    """
    from mailbridge.adapters.mail.factory import new_mailer

    def _factory(driver: str, configs: Configs) -> BaseMailer:
        return new_mailer(driver, configs, transport=mock_transport.transport)

    return _factory


@pytest.fixture
def attachment_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Return a helper that writes ``data`` to ``tmp_path / name``."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def sized_file(tmp_path: Path) -> Callable[[str, int], Path]:
    """Return a helper creating a sparse file of exactly ``size`` bytes.

    Sparse files keep the multi-megabyte boundary tests cheap on disk.
    """

    def _create(name: str, size: int) -> Path:
        path = tmp_path / name
        with path.open("wb") as handle:
            handle.truncate(size)
        return path

    return _create


# ======================== CLI helpers ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test."""
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for tests."""
    from mailbridge.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}
    try:
        yield
    finally:
        for name, value in snapshot.items():
            setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test."""
    from mailbridge.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory producing production services with an injected Config.

    Only the I/O boundary (``get_config``) is replaced.
    """
    from mailbridge.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        prod = build_production()
        services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_mail_settings=prod.load_mail_settings,
            new_mailer=prod.new_mailer,
            init_logging=prod.init_logging,
        )
        return lambda: services

    return _inject


@dataclass
class SendCliContext:
    """Services factory and spy for ``send`` command tests.

    Attributes:
        factory: Callable returning wired AppServices for CLI invocation.
        spy: MailerSpy capturing sent messages.
    """

    factory: Callable[[], Any]
    spy: MailerSpy


@pytest.fixture
def send_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], SendCliContext]:
    """Create a ``send`` test context from a ``[mail]`` section dict.

    Example:
        def test_send(cli_runner, send_cli_context) -> None:
            ctx = send_cli_context({"driver": "postmark", "server_token": "t"})
            result = cli_runner.invoke(cli, ["send", ...], obj=ctx.factory)
            assert ctx.spy.sent[0].driver is Driver.POSTMARK
    """
    from mailbridge.adapters.memory import MailerSpy as MailerSpyImpl
    from mailbridge.composition import AppServices, build_production

    def _create(mail_data: dict[str, Any]) -> SendCliContext:
        spy = MailerSpyImpl()
        config = Config({"mail": mail_data}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_mail_settings=prod.load_mail_settings,
            new_mailer=spy,
            init_logging=prod.init_logging,
        )
        return SendCliContext(factory=lambda: services, spy=spy)

    return _create
