"""Parse and apply ``--set SECTION.KEY=VALUE`` CLI overrides to Config.

Overrides are the highest-precedence layer: ``--set mail.driver=postmark``
wins over every file and environment layer for the current invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue

    @property
    def dotted_key(self) -> str:
        """Full dotted path, e.g. ``mail.request_timeout``."""
        return ".".join((self.section, *self.key_path))


def parse_override(raw: str) -> ConfigOverride:
    """Split a ``SECTION.KEY[.SUBKEY...]=VALUE`` string into a ConfigOverride.

    The first ``=`` ends the dotted path; everything after it is the value,
    coerced via :func:`coerce_value`.

    Raises:
        ValueError: Missing ``=``, no dot in the path, or an empty component.

    Examples:
        >>> override = parse_override("mail.driver=postmark")
        >>> (override.section, override.key_path, override.value)
        ('mail', ('driver',), 'postmark')

        >>> parse_override("mail.request_timeout=15").value
        15

        >>> parse_override("mail.api_key=abc=def").value
        'abc=def'
    """
    path_part, sep, value_str = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    section, dot, key_str = path_part.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")

    key_path = tuple(key_str.split("."))
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value_str))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret a CLI value as JSON, falling back to the raw string.

    Examples:
        >>> coerce_value("30.5")
        30.5
        >>> coerce_value("false")
        False
        >>> coerce_value('["ops@example.com"]')
        ['ops@example.com']
        >>> coerce_value("mg.example.com")
        'mg.example.com'
        >>> coerce_value("")
        ''
    """
    if not raw:
        return raw
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Place ``override.value`` at its key path inside ``target``.

    Raises:
        TypeError: An intermediate key already holds a scalar.

    Examples:
        >>> d: dict[str, dict[str, object]] = {}
        >>> _nest_override(d, ConfigOverride(section="mail", key_path=("domain",), value="mg.io"))
        >>> d
        {'mail': {'domain': 'mg.io'}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    *parents, leaf = override.key_path
    for part in parents:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Cannot set {override.dotted_key}: {part!r} is not a table")
        node = cast("dict[str, object]", existing)
    node[leaf] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge CLI overrides into a Config instance.

    Returns the original instance when there is nothing to apply.

    Raises:
        ValueError: If any override string is malformed.

    Examples:
        >>> cfg = Config({"mail": {"driver": "mailgun"}}, {})
        >>> apply_overrides(cfg, ("mail.driver=sendgrid",))["mail"]["driver"]
        'sendgrid'
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))
    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
