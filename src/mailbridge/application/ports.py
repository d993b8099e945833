"""Application ports - Protocol definitions for mailers and adapter functions.

:class:`Mailer` is the capability contract every provider adapter satisfies.
The remaining Protocol classes define a ``__call__`` method whose signature
matches the corresponding adapter function, so plain module-level functions
satisfy them via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``Configs``, ``MailSettings``, ``httpx.BaseTransport``) are imported under
    ``TYPE_CHECKING`` only so the layering stays intact at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Protocol, Self

from ..domain.enums import Driver, OutputFormat

if TYPE_CHECKING:
    import httpx
    from lib_layered_config import Config

    from ..adapters.mail.config import Configs, MailSettings


class Mailer(Protocol):
    """Fluent message builder plus a single ``send()`` dispatch.

    Every builder method mutates the mailer's message and returns the same
    mailer so calls can be chained.
    """

    def sender(self, name: str, email: str) -> Self: ...

    def to(self, name: str, email: str) -> Self: ...

    def cc(self, name: str, email: str) -> Self: ...

    def bcc(self, name: str, email: str) -> Self: ...

    def reply_to(self, name: str, email: str) -> Self: ...

    def subject(self, subject: str) -> Self: ...

    def body_html(self, html: str) -> Self: ...

    def body_text(self, text: str) -> Self: ...

    def attachment_file(self, path: str | Path) -> Self: ...

    def attachment_inline_file(self, path: str | Path) -> Self: ...

    def attachment_reader(self, filename: str, stream: IO[bytes]) -> Self: ...

    def attachment_inline_reader(self, filename: str, stream: IO[bytes]) -> Self: ...

    def send(self) -> None: ...


class NewMailer(Protocol):
    """Build the adapter for a provider from its credentials."""

    def __call__(
        self,
        driver: Driver | str,
        configs: Configs,
        *,
        transport: httpx.BaseTransport | None = ...,
    ) -> Mailer: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadMailSettings(Protocol):
    """Load MailSettings from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailSettings: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadMailSettings",
    "Mailer",
    "NewMailer",
]
