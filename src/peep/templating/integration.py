"""Kida environment setup and rendering.

The environment is created on the first render and shared by all
requests.
"""

from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any

from kida import Environment, FileSystemLoader

from peep.config import AppConfig


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration."""
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def template_name(name: str, default_ext: str) -> str:
    """Append *default_ext* to *name* when it has no suffix.

    ``"hello"`` -> ``"hello.html"``; ``"hello.txt"`` is left alone.
    """
    if PurePosixPath(name).suffix:
        return name
    return f"{name}{default_ext}"


def render_template(
    env: Environment,
    name: str,
    data: Mapping[str, Any],
    *,
    default_ext: str = ".html",
) -> str:
    """Render template *name* with *data* to a string."""
    template = env.get_template(template_name(name, default_ext))
    return template.render(dict(data))
