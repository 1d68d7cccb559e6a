"""Kida environment setup and rendering.

Creates a kida Environment from quest's AppConfig. The environment is
created once when the app freezes and passed through the request
pipeline.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, FileSystemLoader

from quest.config import AppConfig
from quest.templating.returns import Template


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment rooted at ``config.template_dir``.

    Called once during ``App._freeze()``. Templates are reloaded from disk
    on change only in debug mode.
    """
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def render(env: Environment, name: str, data: Mapping[str, Any]) -> bytes:
    """Render template *name* with *data* and return UTF-8 bytes."""
    template = env.get_template(name)
    return template.render(dict(data)).encode("utf-8")


def render_template(env: Environment, tpl: Template) -> bytes:
    """Render a ``Template`` return value."""
    return render(env, tpl.name, tpl.context)
