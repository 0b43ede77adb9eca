"""Tests for soffit.cache_policy — Cache-Control derivation."""

from soffit.cache_policy import CACHE_CONTROL_NOCACHE, CachePolicyResolver
from soffit.properties import EnvironProperties, MapProperties


def _resolver(**props: str) -> CachePolicyResolver:
    return CachePolicyResolver(MapProperties(props))


class TestCachePolicyResolver:
    def test_no_configuration_is_no_cache(self) -> None:
        assert _resolver().resolve("x") == "no-cache"
        assert CACHE_CONTROL_NOCACHE == "no-cache"

    def test_scope_and_max_age(self) -> None:
        resolver = _resolver(**{"soffit.x.cache.scope": "public", "soffit.x.cache.max-age": "300"})
        assert resolver.resolve("x") == "public, max-age=300"

    def test_scope_only(self) -> None:
        resolver = _resolver(**{"soffit.x.cache.scope": "public"})
        assert resolver.resolve("x") == "no-cache"

    def test_max_age_only(self) -> None:
        resolver = _resolver(**{"soffit.x.cache.max-age": "300"})
        assert resolver.resolve("x") == "no-cache"

    def test_empty_values_count_as_missing(self) -> None:
        resolver = _resolver(**{"soffit.x.cache.scope": "", "soffit.x.cache.max-age": "300"})
        assert resolver.resolve("x") == "no-cache"

    def test_blank_values_count_as_missing(self) -> None:
        resolver = _resolver(**{"soffit.x.cache.scope": "  ", "soffit.x.cache.max-age": "300"})
        assert resolver.resolve("x") == "no-cache"

    def test_values_are_stripped(self) -> None:
        resolver = _resolver(
            **{"soffit.x.cache.scope": " private ", "soffit.x.cache.max-age": " 60 "}
        )
        assert resolver.resolve("x") == "private, max-age=60"

    def test_settings_are_per_module(self) -> None:
        resolver = _resolver(**{"soffit.x.cache.scope": "public", "soffit.x.cache.max-age": "300"})
        assert resolver.resolve("y") == "no-cache"

    def test_custom_prefix(self) -> None:
        resolver = CachePolicyResolver(
            MapProperties({"acme.x.cache.scope": "public", "acme.x.cache.max-age": "10"}),
            prefix="acme",
        )
        assert resolver.resolve("x") == "public, max-age=10"

    def test_reloaded_properties_take_effect(self) -> None:
        environ: dict[str, str] = {}
        resolver = CachePolicyResolver(EnvironProperties(environ))
        assert resolver.resolve("x") == "no-cache"

        environ["SOFFIT_X_CACHE_SCOPE"] = "public"
        environ["SOFFIT_X_CACHE_MAX_AGE"] = "120"
        assert resolver.resolve("x") == "public, max-age=120"
