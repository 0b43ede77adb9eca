"""Soffit — server-side renderer for portal payloads.

A producer POSTs a JSON payload to ``/soffit/<module>`` and names its
schema in the ``X-Soffit-PayloadClass`` header.  Soffit decodes it,
picks the most specific template for the payload's mode and window
state, renders it with kida and sets ``Cache-Control`` from per-module
properties.

Basic usage::

    from soffit import RendererConfig, SoffitApp

    app = SoffitApp(RendererConfig(template_dir="templates"))

Or without the transport::

    from soffit import RenderDispatcher, RendererConfig, MapProperties

    dispatcher = RenderDispatcher.from_config(RendererConfig(), MapProperties())
    result = dispatcher.dispatch(PAYLOAD_V1_0, body, "weather")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "PAYLOAD_V1_0",
    "CachePolicyResolver",
    "ConfigurationError",
    "DecodeFailure",
    "DispatchResult",
    "EnvironProperties",
    "FileSystemCatalog",
    "HTTPError",
    "MalformedPayload",
    "MapProperties",
    "MissingTypeIdentifier",
    "NoMatchingView",
    "Payload",
    "PayloadDecoder",
    "RenderDispatcher",
    "RendererConfig",
    "SoffitApp",
    "SoffitError",
    "StaticCatalog",
    "ViewCache",
    "ViewSelector",
]

# Public name -> defining module.  Keeps ``import soffit`` fast and
# kida-free until the ASGI app is actually requested.
_LAZY_IMPORTS: dict[str, str] = {
    "PAYLOAD_V1_0": "soffit.model.decoding",
    "CachePolicyResolver": "soffit.cache_policy",
    "ConfigurationError": "soffit.errors",
    "DecodeFailure": "soffit.errors",
    "DispatchResult": "soffit.dispatch",
    "EnvironProperties": "soffit.properties",
    "FileSystemCatalog": "soffit.resources",
    "HTTPError": "soffit.errors",
    "MalformedPayload": "soffit.errors",
    "MapProperties": "soffit.properties",
    "MissingTypeIdentifier": "soffit.errors",
    "NoMatchingView": "soffit.errors",
    "Payload": "soffit.model.payload",
    "PayloadDecoder": "soffit.model.decoding",
    "RenderDispatcher": "soffit.dispatch",
    "RendererConfig": "soffit.config",
    "SoffitApp": "soffit.server.app",
    "SoffitError": "soffit.errors",
    "StaticCatalog": "soffit.resources",
    "ViewCache": "soffit.views",
    "ViewSelector": "soffit.views",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
