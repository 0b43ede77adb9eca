"""``Cache-Control`` derivation from per-module properties.

A module opts into HTTP caching by setting *both*::

    soffit.<module>.cache.scope = public
    soffit.<module>.cache.max-age = 300

which yields ``public, max-age=300``.  Anything less yields ``no-cache``.
Properties are read on every call so reloaded values take effect at once.
"""

import logging

from soffit.properties import PropertySource, cache_max_age_key, cache_scope_key

logger = logging.getLogger("soffit.cache")

CACHE_CONTROL_HEADER = "Cache-Control"
CACHE_CONTROL_NOCACHE = "no-cache"


class CachePolicyResolver:
    """Compute the ``Cache-Control`` value for a module. Never fails."""

    __slots__ = ("_prefix", "_properties")

    def __init__(self, properties: PropertySource, prefix: str = "soffit") -> None:
        self._properties = properties
        self._prefix = prefix

    def _lookup(self, key: str) -> str:
        value = self._properties.get(key)
        logger.debug("Selecting %r for property %r", value, key)
        return (value or "").strip()

    def resolve(self, module: str) -> str:
        scope = self._lookup(cache_scope_key(self._prefix, module))
        max_age = self._lookup(cache_max_age_key(self._prefix, module))

        # Both must be specified, else the default applies
        cache_control = f"{scope}, max-age={max_age}" if scope and max_age else CACHE_CONTROL_NOCACHE
        logger.debug("Using cache-control=%r for module %r", cache_control, module)
        return cache_control
