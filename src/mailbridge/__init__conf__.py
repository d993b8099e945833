"""Static package metadata surfaced to the CLI and configuration layers.

Contents:
    * Distribution identifiers (``name``, ``version``, ``title`` ...)
    * ``LAYEREDCONF_*`` identifiers used by lib_layered_config to locate
      platform-specific configuration directories.
    * :func:`print_info` - Render the metadata block for ``mailbridge info``.
"""

from __future__ import annotations

name = "mailbridge"
title = "Unified client facade for transactional email providers"
version = "0.1.0"
homepage = "https://github.com/mailbridge/mailbridge"
author = "mailbridge maintainers"
author_email = "maintainers@mailbridge.dev"
shell_command = "mailbridge"

#: Vendor, application and slug identifiers for lib_layered_config paths.
LAYEREDCONF_VENDOR = "mailbridge"
LAYEREDCONF_APP = "mailbridge"
LAYEREDCONF_SLUG = "mailbridge"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for mailbridge:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
