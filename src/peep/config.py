"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation. Keywords passed
to ``activate()`` that AppConfig does not know about are kept, untouched, in
``AppConfig.options``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any

from peep.errors import ConfigurationError


def _empty_options() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)

    or, from a flat keyword mapping as ``activate()`` receives it::

        config = AppConfig.from_options(mode="production", db_url="sqlite://")
        config.options["db_url"]  # "sqlite://"
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    mode: str = "development"

    # Reload (development server)
    reload_dirs: tuple[str, ...] = ()

    # Templates
    template_dir: str | Path = "templates"
    template_ext: str = ".html"
    autoescape: bool = True

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Everything else, passed through unchanged
    options: Mapping[str, Any] = field(default_factory=_empty_options)

    @classmethod
    def from_options(cls, **options: Any) -> "AppConfig":
        """Split *options* into known fields and opaque pass-through options.

        Raises ``ConfigurationError`` if a known field has an invalid value.
        """
        known = {f.name for f in fields(cls)} - {"options"}
        kwargs = {k: v for k, v in options.items() if k in known}
        extra = {k: v for k, v in options.items() if k not in known}
        if "reload_dirs" in kwargs:
            kwargs["reload_dirs"] = tuple(kwargs["reload_dirs"])
        config = cls(**kwargs, options=MappingProxyType(extra))
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for values the app cannot start with."""
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            msg = f"port must be an integer, got {self.port!r}"
            raise ConfigurationError(msg)
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if not isinstance(self.template_ext, str) or not self.template_ext.startswith("."):
            msg = f"template_ext must be a string starting with '.', got {self.template_ext!r}"
            raise ConfigurationError(msg)
        if isinstance(self.max_content_length, bool) or not isinstance(
            self.max_content_length, int
        ):
            msg = f"max_content_length must be an integer, got {self.max_content_length!r}"
            raise ConfigurationError(msg)
        if self.max_content_length < 0:
            msg = f"max_content_length must not be negative, got {self.max_content_length}"
            raise ConfigurationError(msg)
