"""CLI command implementations.

Contents:
    * :func:`.info.cli_info` - Package metadata
    * :func:`.config.cli_config` - Merged configuration display
    * :func:`.send.cli_send` - Compose and send one message
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .send import cli_send

__all__ = [
    "cli_config",
    "cli_info",
    "cli_send",
]
