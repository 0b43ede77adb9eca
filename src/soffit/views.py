"""View selection for render requests.

Picks the template for a (module, mode, window state) triple, most
specific first:

1. ``<module_path><mode>.<window_state>.<suffix>``
2. ``<module_path><mode>.<suffix>``

Anything else is a :class:`~soffit.errors.NoMatchingView`.  Successful
choices are memoized in a process-wide :class:`ViewCache`; failures are
not, so a template deployed later is found on the next request.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from soffit.errors import ConfigurationError, NoMatchingView
from soffit.resources import ResourceCatalog

logger = logging.getLogger("soffit.views")


def module_path_for(views_location: str, module: str) -> str:
    """Directory prefix holding *module*'s templates, ending in exactly one ``/``."""
    base = views_location if views_location.endswith("/") else f"{views_location}/"
    return f"{base}{module.strip('/')}/"


def complete_path(*parts: str, suffix: str) -> str:
    """Join a directory prefix and name parts into a template path.

    ``complete_path("mod/", "view", "normal", suffix="jsp")`` is
    ``"mod/view.normal.jsp"``.
    """
    path = "".join(part if part.endswith("/") else f"{part}." for part in parts)
    return f"{path}{suffix}"


@dataclass(frozen=True, slots=True)
class ViewKey:
    """Cache key for a view choice. Build it from lower-cased mode and state."""

    module_path: str
    mode: str
    window_state: str

    @classmethod
    def normalized(cls, module_path: str, mode: str, window_state: str) -> ViewKey:
        return cls(module_path, mode.lower(), window_state.lower())


class ViewCache:
    """Thread-safe map from :class:`ViewKey` to the chosen template path.

    Grows for the life of the process: template files for a deployment
    are assumed static.  Concurrent writers for one key always carry the
    same value, so the last write wins.
    """

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[ViewKey, str] = {}

    def get(self, key: ViewKey) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: ViewKey, view_path: str) -> None:
        with self._lock:
            self._entries[key] = view_path

    def snapshot(self) -> dict[ViewKey, str]:
        """Copy of the current entries, for diagnostics."""
        with self._lock:
            return dict(self._entries)

    def clear(self) -> None:
        """Forget every choice. Only tests and admin tooling should need this."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ViewSelector:
    """Resolve the template for a module, mode and window state.

    Usage::

        selector = ViewSelector(FileSystemCatalog("templates"), suffix="html")
        selector.resolve("soffit/weather/", "VIEW", "normal")
        # "soffit/weather/view.normal.html" or "soffit/weather/view.html"
    """

    __slots__ = ("_cache", "_catalog", "_suffix")

    def __init__(
        self,
        catalog: ResourceCatalog,
        suffix: str = "html",
        cache: ViewCache | None = None,
    ) -> None:
        suffix = suffix.lstrip(".")
        if not suffix:
            raise ConfigurationError("View suffix must not be empty")
        self._catalog = catalog
        self._suffix = suffix
        self._cache = cache if cache is not None else ViewCache()

    @property
    def cache(self) -> ViewCache:
        return self._cache

    @property
    def suffix(self) -> str:
        return self._suffix

    def resolve(self, module_path: str, mode: str, window_state: str) -> str:
        """Return the most specific template path for the triple.

        Raises:
            NoMatchingView: Neither the mode+state nor the mode-only
                template exists under *module_path*.
        """
        key = ViewKey.normalized(module_path, mode, window_state)

        cached = self._cache.get(key)
        if cached is not None:
            logger.info(
                "Selected view %r for mode=%r and windowState=%r (cached)",
                cached,
                key.mode,
                key.window_state,
            )
            return cached

        resources = self._catalog.list_resources(key.module_path)

        for candidate in (
            complete_path(key.module_path, key.mode, key.window_state, suffix=self._suffix),
            complete_path(key.module_path, key.mode, suffix=self._suffix),
        ):
            logger.debug("Checking candidate view %r", candidate)
            if candidate in resources:
                self._cache.put(key, candidate)
                logger.info(
                    "Selected view %r for mode=%r and windowState=%r",
                    candidate,
                    key.mode,
                    key.window_state,
                )
                return candidate

        raise NoMatchingView(key.module_path, key.mode, key.window_state)
