"""Key/value property sources for per-module settings.

The dispatcher never reads the environment directly; it asks an
injected :class:`PropertySource`.  Lookups happen on every request, so a
source that reflects live state (``EnvironProperties``) picks up changes
without a restart.
"""

import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, runtime_checkable


@runtime_checkable
class PropertySource(Protocol):
    """Anything that can answer ``get(key)`` with a string or ``None``."""

    def get(self, key: str) -> str | None: ...


def cache_scope_key(prefix: str, module: str) -> str:
    """Property key holding the ``Cache-Control`` scope for *module*."""
    return f"{prefix}.{module}.cache.scope"


def cache_max_age_key(prefix: str, module: str) -> str:
    """Property key holding the ``Cache-Control`` max-age for *module*."""
    return f"{prefix}.{module}.cache.max-age"


class MapProperties(Mapping[str, str]):
    """Immutable snapshot of a string mapping."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data = MappingProxyType(dict(data or {}))

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MapProperties({dict(self._data)!r})"


class EnvironProperties:
    """Live view of process environment variables.

    ``soffit.weather.cache.max-age`` is looked up verbatim first, then as
    ``SOFFIT_WEATHER_CACHE_MAX_AGE``.
    """

    __slots__ = ("_environ",)

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    @staticmethod
    def env_name(key: str) -> str:
        """Translate a dotted property key to an environment variable name."""
        return key.replace(".", "_").replace("-", "_").upper()

    def get(self, key: str) -> str | None:
        value = self._environ.get(key)
        if value is None:
            value = self._environ.get(self.env_name(key))
        return value


class ChainProperties:
    """Consult several sources in order; the first non-``None`` answer wins."""

    __slots__ = ("_sources",)

    def __init__(self, *sources: PropertySource) -> None:
        self._sources = sources

    def get(self, key: str) -> str | None:
        for source in self._sources:
            value = source.get(key)
            if value is not None:
                return value
        return None


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style ``.properties`` text.

    Supports ``key=value`` and ``key: value``, ``#`` and ``!`` comments,
    and blank lines.  Keys and values are stripped.  Line continuations
    and unicode escapes are not supported.
    """
    result: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        sep = min(
            (i for i in (line.find("="), line.find(":")) if i != -1),
            default=-1,
        )
        if sep == -1:
            result[line] = ""
            continue
        result[line[:sep].strip()] = line[sep + 1 :].strip()
    return result


def load_properties(path: str | Path) -> MapProperties:
    """Load a ``.properties`` file into an immutable :class:`MapProperties`."""
    text = Path(path).read_text(encoding="utf-8")
    return MapProperties(parse_properties(text))
