"""Render payload — the data a producer sends along with each request.

Every type here is a frozen dataclass whose bulk fields are immutable
containers (``tuple``, ``frozenset``, read-only mappings of
``str -> tuple[str, ...]``).  Inputs are normalized once in
``__post_init__``, so callers can pass lists and plain dicts and still
get a value that nobody can mutate afterwards.  Updates go through the
``with_*()`` / ``without_*()`` methods, each returning a new instance.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Protocol, Self, TypeAlias, runtime_checkable

MultiValueMap: TypeAlias = Mapping[str, tuple[str, ...]]


def _empty_map() -> MultiValueMap:
    return MappingProxyType({})


def freeze_multimap(data: Mapping[str, Iterable[str] | str] | None) -> MultiValueMap:
    """Copy *data* into a read-only ``str -> tuple[str, ...]`` mapping.

    A bare string value is treated as a single-element list.
    """
    if not data:
        return _empty_map()
    frozen: dict[str, tuple[str, ...]] = {}
    for key, values in data.items():
        frozen[str(key)] = (values,) if isinstance(values, str) else tuple(values)
    return MappingProxyType(frozen)


def _set_frozen(obj: object, name: str, value: object) -> None:
    object.__setattr__(obj, name, value)


@runtime_checkable
class Renderable(Protocol):
    """The two facets a payload must expose for view selection."""

    @property
    def mode(self) -> str | None: ...

    @property
    def window_state(self) -> str | None: ...


@dataclass(frozen=True, slots=True)
class Request:
    """Portal request context for one render."""

    etag: str | None = None
    window_id: str | None = None
    namespace: str | None = None
    auth_type: str | None = None
    portal_info: str | None = None
    mode: str | None = None
    window_state: str | None = None
    scheme: str | None = None
    server_name: str | None = None
    server_port: int = 0
    secure: bool = False

    preferences: MultiValueMap = field(default_factory=_empty_map)
    parameters: MultiValueMap = field(default_factory=_empty_map)
    properties: MultiValueMap = field(default_factory=_empty_map)
    supported_modes: frozenset[str] = frozenset()
    supported_window_states: frozenset[str] = frozenset()
    supported_locales: tuple[str, ...] = ()
    supported_content_types: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _set_frozen(self, "preferences", freeze_multimap(self.preferences))
        _set_frozen(self, "parameters", freeze_multimap(self.parameters))
        _set_frozen(self, "properties", freeze_multimap(self.properties))
        _set_frozen(self, "supported_modes", frozenset(self.supported_modes))
        _set_frozen(self, "supported_window_states", frozenset(self.supported_window_states))
        _set_frozen(self, "supported_locales", tuple(self.supported_locales))
        _set_frozen(self, "supported_content_types", tuple(self.supported_content_types))

    @property
    def preferred_locale(self) -> str | None:
        """The first supported locale, or None when none were sent."""
        return self.supported_locales[0] if self.supported_locales else None

    def evolve(self, **changes: Any) -> Self:
        """Return a copy with *changes* applied (normalized like the constructor)."""
        return replace(self, **changes)

    def with_parameter(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, parameters={**self.parameters, key: tuple(values)})

    def without_parameter(self, key: str) -> Self:
        return replace(self, parameters={k: v for k, v in self.parameters.items() if k != key})

    def with_preference(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, preferences={**self.preferences, key: tuple(values)})

    def without_preference(self, key: str) -> Self:
        return replace(self, preferences={k: v for k, v in self.preferences.items() if k != key})

    def with_property(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, properties={**self.properties, key: tuple(values)})

    def without_property(self, key: str) -> Self:
        return replace(self, properties={k: v for k, v in self.properties.items() if k != key})

    def with_supported_mode(self, mode: str) -> Self:
        return replace(self, supported_modes=self.supported_modes | {mode})

    def without_supported_mode(self, mode: str) -> Self:
        return replace(self, supported_modes=self.supported_modes - {mode})

    def with_supported_window_state(self, window_state: str) -> Self:
        return replace(
            self, supported_window_states=self.supported_window_states | {window_state}
        )

    def without_supported_window_state(self, window_state: str) -> Self:
        return replace(
            self, supported_window_states=self.supported_window_states - {window_state}
        )

    def with_supported_locale(self, locale: str) -> Self:
        return replace(self, supported_locales=(*self.supported_locales, locale))

    def without_supported_locale(self, locale: str) -> Self:
        """Drop the first occurrence of *locale*."""
        locales = list(self.supported_locales)
        if locale in locales:
            locales.remove(locale)
        return replace(self, supported_locales=tuple(locales))

    def with_supported_content_type(self, content_type: str) -> Self:
        return replace(
            self, supported_content_types=(*self.supported_content_types, content_type)
        )

    def without_supported_content_type(self, content_type: str) -> Self:
        """Drop the first occurrence of *content_type*."""
        types = list(self.supported_content_types)
        if content_type in types:
            types.remove(content_type)
        return replace(self, supported_content_types=tuple(types))


@dataclass(frozen=True, slots=True)
class Bearer:
    """The user on whose behalf the portal asked for a render."""

    username: str | None = None
    attributes: MultiValueMap = field(default_factory=_empty_map)
    groups: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        _set_frozen(self, "attributes", freeze_multimap(self.attributes))
        _set_frozen(self, "groups", tuple(self.groups))

    def is_member_of(self, group: str) -> bool:
        return group in self.groups

    def with_attribute(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, attributes={**self.attributes, key: tuple(values)})

    def without_attribute(self, key: str) -> Self:
        return replace(self, attributes={k: v for k, v in self.attributes.items() if k != key})


@dataclass(frozen=True, slots=True)
class Preferences:
    """Per-user preference values for this publication."""

    preferences_map: MultiValueMap = field(default_factory=_empty_map)

    def __post_init__(self) -> None:
        _set_frozen(self, "preferences_map", freeze_multimap(self.preferences_map))

    def get_values(self, key: str) -> tuple[str, ...]:
        return self.preferences_map.get(key, ())

    def get(self, key: str, default: str | None = None) -> str | None:
        """First value for *key*, or *default*."""
        values = self.preferences_map.get(key)
        return values[0] if values else default

    def with_preference(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, preferences_map={**self.preferences_map, key: tuple(values)})

    def without_preference(self, key: str) -> Self:
        return replace(
            self, preferences_map={k: v for k, v in self.preferences_map.items() if k != key}
        )


@dataclass(frozen=True, slots=True)
class Definition:
    """The publication record of this module within the portal."""

    title: str | None = None
    fname: str | None = None
    description: str | None = None
    categories: frozenset[str] = frozenset()
    parameters: MultiValueMap = field(default_factory=_empty_map)
    preferences: MultiValueMap = field(default_factory=_empty_map)

    def __post_init__(self) -> None:
        _set_frozen(self, "categories", frozenset(self.categories))
        _set_frozen(self, "parameters", freeze_multimap(self.parameters))
        _set_frozen(self, "preferences", freeze_multimap(self.preferences))

    def with_category(self, category: str) -> Self:
        return replace(self, categories=self.categories | {category})

    def without_category(self, category: str) -> Self:
        return replace(self, categories=self.categories - {category})

    def with_parameter(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, parameters={**self.parameters, key: tuple(values)})

    def without_parameter(self, key: str) -> Self:
        return replace(self, parameters={k: v for k, v in self.parameters.items() if k != key})

    def with_preference(self, key: str, values: Iterable[str]) -> Self:
        return replace(self, preferences={**self.preferences, key: tuple(values)})

    def without_preference(self, key: str) -> Self:
        return replace(self, preferences={k: v for k, v in self.preferences.items() if k != key})


@dataclass(frozen=True, slots=True)
class Payload:
    """Everything a module needs to render: request, user, preferences, definition.

    Exposed to templates under the configured model name (``soffit`` by
    default), e.g. ``{{ soffit.bearer.username }}``.
    """

    request: Request = field(default_factory=Request)
    bearer: Bearer = field(default_factory=Bearer)
    preferences: Preferences = field(default_factory=Preferences)
    definition: Definition = field(default_factory=Definition)

    @property
    def mode(self) -> str | None:
        return self.request.mode

    @property
    def window_state(self) -> str | None:
        return self.request.window_state

    def with_request(self, request: Request) -> Self:
        return replace(self, request=request)

    def with_bearer(self, bearer: Bearer) -> Self:
        return replace(self, bearer=bearer)

    def with_preferences(self, preferences: Preferences) -> Self:
        return replace(self, preferences=preferences)

    def with_definition(self, definition: Definition) -> Self:
        return replace(self, definition=definition)
