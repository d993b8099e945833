"""Email sending CLI command.

Contents:
    * :func:`.send.cli_send` - Compose and send one message through a provider.
"""

from __future__ import annotations

from .send import cli_send

__all__ = ["cli_send"]
