"""Provider credential model and the ``[mail]`` configuration loader.

Provides the :class:`Configs` Pydantic model holding every credential any
provider may need, and :class:`MailSettings`, the validated view of the
``[mail]`` configuration section consumed by the CLI.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...domain.enums import Driver

#: Default HTTP request timeout in seconds.
DEFAULT_REQUEST_TIMEOUT = 60.0

_SECRET_FIELDS = frozenset({"server_token", "account_token", "api_key", "private_key", "password"})


class Configs(BaseModel):
    """Validated, immutable provider credentials.

    Only the fields relevant to the selected provider are consulted; which
    ones are required is checked when a message is sent.

    Example:
        >>> configs = Configs(api_key="key-123", domain="mg.example.com")
        >>> configs.domain
        'mg.example.com'
        >>> configs.request_timeout
        60.0
    """

    model_config = ConfigDict(frozen=True)

    server_token: str | None = None
    account_token: str | None = None
    api_key: str | None = None
    private_key: str | None = None
    public_key: str | None = None
    base_url: str | None = None
    domain: str | None = None
    username: str | None = None
    password: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @field_validator(
        "server_token",
        "account_token",
        "api_key",
        "private_key",
        "public_key",
        "base_url",
        "domain",
        "username",
        "password",
        mode="before",
    )
    @classmethod
    def _normalize_text(cls, v: Any) -> Any:
        """Coerce empty strings to None and numbers to strings.

        Config files and environment variables commonly carry empty values for
        credentials that are not in use; those mean "not configured". Numeric
        keys arrive as ints after ``--set`` JSON coercion.

        Examples:
            >>> Configs._normalize_text("  ")
            >>> Configs._normalize_text("abc")
            'abc'
            >>> Configs._normalize_text(12345)
            '12345'
        """
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str | None) -> str | None:
        """Drop a trailing slash so endpoint paths join cleanly.

        Examples:
            >>> Configs._strip_trailing_slash("http://localhost:8080/")
            'http://localhost:8080'
        """
        if v is None:
            return None
        return v.rstrip("/")

    @field_validator("request_timeout", mode="before")
    @classmethod
    def _zero_timeout_to_default(cls, v: Any) -> Any:
        """Treat an unset (zero) timeout as the default.

        Examples:
            >>> Configs(request_timeout=0).request_timeout
            60.0
        """
        if isinstance(v, int | float) and not isinstance(v, bool) and v == 0:
            return DEFAULT_REQUEST_TIMEOUT
        return v

    @model_validator(mode="after")
    def _validate_timeout(self) -> Configs:
        """Reject negative request timeouts.

        Example:
            >>> Configs(request_timeout=-1)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must not be negative, got {self.request_timeout}")
        return self

    def __repr__(self) -> str:
        """Return string representation with tokens and keys redacted.

        Example:
            >>> configs = Configs(api_key="secret123")
            >>> "secret123" in repr(configs)
            False
            >>> "[REDACTED]" in repr(configs)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name in _SECRET_FIELDS and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"Configs({', '.join(fields)})"

    def __str__(self) -> str:
        return self.__repr__()


class MailSettings(BaseModel):
    """The ``[mail]`` configuration section.

    Attributes:
        driver: Provider used when the CLI is not told otherwise.
        from_address: Default sender, ``"Name <email>"`` or a bare address.
        configs: Provider credentials.

    Example:
        >>> settings = MailSettings(driver="postmark", configs=Configs(server_token="t"))
        >>> settings.driver
        <Driver.POSTMARK: 'postmark'>
    """

    model_config = ConfigDict(frozen=True)

    driver: Driver | None = None
    from_address: str | None = None
    configs: Configs = Field(default_factory=Configs)

    @field_validator("driver", "from_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def load_mail_settings_from_dict(config_dict: Mapping[str, Any]) -> MailSettings:
    """Load MailSettings from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed models.
    ``driver`` and ``from_address`` are settings of their own; every other key
    in the ``[mail]`` section is a :class:`Configs` field.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have a 'mail' section.

    Returns:
        Validated settings with defaults for missing values.

    Example:
        >>> settings = load_mail_settings_from_dict({
        ...     "mail": {"driver": "mailgun", "api_key": "k", "domain": "mg.example.com"}
        ... })
        >>> settings.driver.value
        'mailgun'
        >>> settings.configs.domain
        'mg.example.com'
        >>> load_mail_settings_from_dict({}).driver is None
        True
    """
    mail_section: Any = config_dict.get("mail", {})

    # Non-dict mail section (e.g. "mail": "invalid") fails model validation
    if not isinstance(mail_section, Mapping):
        return MailSettings.model_validate(mail_section)

    mail_raw: dict[str, Any] = dict(cast(Mapping[str, Any], mail_section))
    settings_raw: dict[str, Any] = {}
    for key in ("driver", "from_address"):
        if key in mail_raw:
            settings_raw[key] = mail_raw.pop(key)
    settings_raw["configs"] = Configs.model_validate(mail_raw)
    return MailSettings.model_validate(settings_raw)


__all__ = [
    "DEFAULT_REQUEST_TIMEOUT",
    "Configs",
    "MailSettings",
    "load_mail_settings_from_dict",
]
