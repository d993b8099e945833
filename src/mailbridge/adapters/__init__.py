"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.mail` - Provider adapters and the mailer factory
    * :mod:`.config` - Configuration loading and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory doubles for the application ports
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
