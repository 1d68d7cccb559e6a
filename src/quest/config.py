"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation and autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, log_level="info")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8090
    debug: bool = False

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Static files (served from the site root, like a public/ folder)
    static_dir: str | Path | None = "public"
    static_url: str = "/"

    # Logging
    log_level: str = "error"

    # URL reachability checks
    reachability_timeout: float = 5.0
    reachability_cache_size: int = 1024
