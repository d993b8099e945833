"""Application layer - port definitions.

Contains the port protocols that define the interfaces the adapters
implement and the composition root wires together.

Contents:
    * :mod:`.ports` - Mailer contract and callable Protocol definitions
"""

from __future__ import annotations

from .ports import (
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadMailSettings,
    Mailer,
    NewMailer,
)

__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadMailSettings",
    "Mailer",
    "NewMailer",
]
