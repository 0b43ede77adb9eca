"""Render dispatch — from (type identifier, body, module) to a render instruction.

Stateless orchestration over the decoder, view selector and cache
policy.  Safe to call from any number of concurrent requests; the only
shared mutable state is the selector's view cache, which guards itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from soffit.cache_policy import CachePolicyResolver
from soffit.errors import MalformedPayload, MissingTypeIdentifier
from soffit.model.decoding import PayloadDecoder
from soffit.resources import FileSystemCatalog, ResourceCatalog
from soffit.views import ViewCache, ViewSelector, module_path_for

if TYPE_CHECKING:
    from soffit.config import RendererConfig
    from soffit.properties import PropertySource

logger = logging.getLogger("soffit.dispatch")

PAYLOAD_CLASS_HEADER = "X-Soffit-PayloadClass"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """What to render, how the response may be cached, and the model."""

    view_path: str
    cache_control: str
    payload: object


def _required_facet(payload: object, attr: str, facet: str) -> str:
    value = getattr(payload, attr, None)
    if not isinstance(value, str) or not value.strip():
        raise MalformedPayload(facet)
    return value.strip()


class RenderDispatcher:
    """Decode the payload, pick its view, compute its cache policy."""

    __slots__ = ("_cache_policy", "_decoder", "_selector", "_views_location")

    def __init__(
        self,
        decoder: PayloadDecoder,
        selector: ViewSelector,
        cache_policy: CachePolicyResolver,
        *,
        views_location: str = "soffit/",
    ) -> None:
        self._decoder = decoder
        self._selector = selector
        self._cache_policy = cache_policy
        self._views_location = views_location

    @classmethod
    def from_config(
        cls,
        config: RendererConfig,
        properties: PropertySource,
        *,
        catalog: ResourceCatalog | None = None,
        decoder: PayloadDecoder | None = None,
        cache: ViewCache | None = None,
    ) -> RenderDispatcher:
        """Wire a dispatcher with the defaults for *config*.

        The catalog defaults to the template directory on disk so that
        selected view paths are valid template names for the renderer.
        """
        selector = ViewSelector(
            catalog if catalog is not None else FileSystemCatalog(config.template_dir),
            suffix=config.view_suffix,
            cache=cache,
        )
        return cls(
            decoder if decoder is not None else PayloadDecoder(),
            selector,
            CachePolicyResolver(properties, prefix=config.property_prefix),
            views_location=config.views_location,
        )

    @property
    def selector(self) -> ViewSelector:
        return self._selector

    def dispatch(
        self,
        type_identifier: str | None,
        raw_body: bytes | str,
        module: str,
    ) -> DispatchResult:
        """Turn one render request into a :class:`DispatchResult`.

        Raises:
            MissingTypeIdentifier: *type_identifier* is absent or blank.
            DecodeFailure: The body does not decode as the declared type.
            MalformedPayload: The payload has no mode or window state.
            NoMatchingView: No template exists for the payload's facets.
        """
        if not type_identifier or not type_identifier.strip():
            raise MissingTypeIdentifier(PAYLOAD_CLASS_HEADER)
        type_identifier = type_identifier.strip()
        logger.debug("Dispatching module %r with payload class %r", module, type_identifier)

        payload = self._decoder.decode(type_identifier, raw_body)

        mode = _required_facet(payload, "mode", "mode")
        window_state = _required_facet(payload, "window_state", "window state")

        module_path = module_path_for(self._views_location, module)
        logger.debug("Calculated module path %r", module_path)

        view_path = self._selector.resolve(module_path, mode, window_state)
        cache_control = self._cache_policy.resolve(module)

        return DispatchResult(view_path=view_path, cache_control=cache_control, payload=payload)
