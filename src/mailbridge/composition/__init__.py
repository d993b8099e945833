"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config
from ..adapters.logging.setup import init_logging
from ..adapters.mail.config import load_mail_settings_from_dict
from ..adapters.mail.factory import new_mailer

if TYPE_CHECKING:
    from ..adapters.memory.mail import MailerSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadMailSettings,
        NewMailer,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_load_mail_settings: LoadMailSettings = load_mail_settings_from_dict
    _assert_new_mailer: NewMailer = new_mailer
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    load_mail_settings: LoadMailSettings
    new_mailer: NewMailer
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        load_mail_settings=load_mail_settings_from_dict,
        new_mailer=new_mailer,
        init_logging=init_logging,
    )


def build_testing(*, spy: MailerSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: MailerSpy capturing sends. A fresh one is created when None;
            pass your own to assert on captured messages.
    """
    from ..adapters.memory import (
        MailerSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_mail_settings_from_dict_in_memory,
    )

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        load_mail_settings=load_mail_settings_from_dict_in_memory,
        new_mailer=spy if spy is not None else MailerSpy(),
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
]
