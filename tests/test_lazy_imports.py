"""Tests for soffit.__init__ — lazy import registry covers all public names."""

import pytest

import soffit


@pytest.mark.parametrize("name", soffit.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(soffit, name)
    assert obj is not None, f"soffit.{name} resolved to None"


def test_registry_matches_all() -> None:
    assert set(soffit.__all__) == set(soffit._LAZY_IMPORTS)


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        soffit.__getattr__("ThisDoesNotExist")
