"""Renderer configuration.

RendererConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.  Per-module cache
settings are not part of it: they are read on every request from a
:class:`~soffit.properties.PropertySource` so they can be reloaded.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RendererConfig:
    """Renderer configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RendererConfig(template_dir="views", view_suffix="kida")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Endpoint
    mount_path: str = "/soffit"
    max_content_length: int = 1024 * 1024  # 1 MB

    # Templates
    template_dir: str | Path = "templates"
    views_location: str = "soffit/"  # Final slash is optional
    view_suffix: str = "html"
    model_name: str = "soffit"
    autoescape: bool = True

    # Per-module properties (<prefix>.<module>.cache.scope, ...)
    property_prefix: str = "soffit"
