"""In-memory adapter implementations for testing.

Lightweight implementations of the application ports that operate
entirely in memory: no filesystem, no HTTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.mail` - Recording mailer factory (MailerSpy)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .logging import init_logging_in_memory
from .mail import MailerSpy, SentMessage, load_mail_settings_from_dict_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from mailbridge.application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadMailSettings,
        NewMailer,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_mail_settings: LoadMailSettings = load_mail_settings_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_new_mailer: NewMailer = MailerSpy()

__all__ = [
    "MailerSpy",
    "SentMessage",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_mail_settings_from_dict_in_memory",
]
