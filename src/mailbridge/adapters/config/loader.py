"""Layered configuration loading with profile validation and caching.

Sources are merged in precedence order ``defaults -> app -> host -> user ->
dotenv -> env``; the bundled ``defaultconfig.toml`` next to this module is
the lowest layer. Environment variables use the ``MAILBRIDGE___`` prefix,
e.g. ``MAILBRIDGE___MAIL__API_KEY``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from mailbridge import __init__conf__


class ConfigLoaderProtocol(Protocol):
    """Config loader callable exposing ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are empty, too long or path-like.

    Raises:
        ValueError: From ``lib_layered_config.validate_profile_name``.

    Examples:
        >>> validate_profile("staging")

        >>> validate_profile("../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../secrets
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / "defaultconfig.toml"


# One short-lived CLI process reads its configuration once per profile.
@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged configuration.

    Args:
        profile: Optional profile name; inserts a ``profile/<name>/``
            directory into every layer path.
        start_dir: Directory that seeds ``.env`` discovery, defaults to the
            current working directory.

    Raises:
        ValueError: ``profile`` is not a valid profile name.

    Example:
        >>> config = get_config()
        >>> config.get("mail", default={}).get("request_timeout")
        60.0
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Drop cached configuration so the next call re-reads every layer."""
    _read_layers.cache_clear()


_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
