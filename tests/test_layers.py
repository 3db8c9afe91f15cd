# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

from typing import Any

import pytest

from coreason_oauth2_env.layers import (
    AliasLayer,
    ComputedLayer,
    ConditionalLayer,
    ConfigLayer,
    StaticLayer,
    bind_scopes,
)
from coreason_oauth2_env.store import ConfigStore


def test_static_layer() -> None:
    layer = StaticLayer("static", {"a": 1})
    assert layer.has("a")
    assert layer.get("a") == 1
    assert not layer.has("b")
    assert layer.get("b") is None


def test_static_layer_copies_its_values() -> None:
    values = {"a": 1}
    layer = StaticLayer("static", values)
    values["b"] = 2
    assert not layer.has("b")
    with pytest.raises(TypeError):
        layer.values["c"] = 3  # type: ignore[index]


def test_layers_are_frozen() -> None:
    layer = StaticLayer("static", {})
    with pytest.raises(AttributeError):
        layer.name = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    "layer",
    [
        StaticLayer("s", {}),
        ConditionalLayer("c", {}, ConfigStore()),
        AliasLayer("a", {}, ConfigStore()),
        ComputedLayer("f", {}, ConfigStore()),
    ],
)
def test_variants_satisfy_protocol(layer: Any) -> None:
    assert isinstance(layer, ConfigLayer)


def test_conditional_layer_required_keys() -> None:
    store = ConfigStore([StaticLayer("raw", {"x": "1"})])
    layer = ConditionalLayer("cond", {"out": "value"}, store, required=("x", "y"))

    assert not layer.has("out")
    assert layer.get("out") is None

    store.add_first(StaticLayer("late", {"y": "2"}))
    assert layer.has("out")
    assert layer.get("out") == "value"


def test_conditional_layer_forbidden_keys() -> None:
    store = ConfigStore([StaticLayer("raw", {"x": "1"})])
    layer = ConditionalLayer("cond", {"out": "value"}, store, required=("x",), forbidden=("secret",))
    assert layer.get("out") == "value"

    store.add_last(StaticLayer("secrets", {"secret": "s"}))
    assert not layer.has("out")


def test_conditional_layer_ignores_unknown_keys_without_consulting_resolver() -> None:
    class Exploding:
        def has(self, key: str) -> bool:
            raise AssertionError("resolver consulted")

        def get(self, key: str) -> Any:
            raise AssertionError("resolver consulted")

    layer = ConditionalLayer("cond", {"out": "value"}, Exploding(), required=("x",))
    assert not layer.has("other")


def test_alias_layer_follows_live_value() -> None:
    raw = StaticLayer("raw", {"vendor.id": "abc"})
    store = ConfigStore([raw])
    layer = AliasLayer("alias", {"standard.id": "vendor.id", "standard.secret": "vendor.secret"}, store)

    assert layer.get("standard.id") == "abc"
    assert not layer.has("standard.secret")
    assert layer.get("standard.secret") is None

    store.add_first(StaticLayer("override", {"vendor.id": "xyz"}))
    assert layer.get("standard.id") == "xyz"


def test_computed_layer_is_recomputed_per_lookup() -> None:
    store = ConfigStore([StaticLayer("raw", {"n": 1})])
    layer = ComputedLayer(
        "computed",
        {"double": lambda resolver: resolver.get("n") * 2},
        store,
        when=lambda resolver: resolver.has("n"),
    )
    assert layer.get("double") == 2

    store.add_first(StaticLayer("override", {"n": 5}))
    assert layer.get("double") == 10


def test_computed_layer_when_predicate() -> None:
    store = ConfigStore()
    layer = ComputedLayer("computed", {"k": lambda resolver: "v"}, store, when=lambda resolver: resolver.has("gate"))
    assert not layer.has("k")
    assert layer.get("k") is None
    assert not layer.has("unknown")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("openid", ("openid",)),
        ("openid,profile,email", ("openid", "profile", "email")),
        (" openid , profile ,, ", ("openid", "profile")),
        (["openid", "profile"], ("openid", "profile")),
        (["openid,profile", "email"], ("openid", "profile", "email")),
        ("email,openid,email", ("email", "openid")),
        (("openid", "openid"), ("openid",)),
        ("", ()),
    ],
)
def test_bind_scopes(value: Any, expected: tuple[str, ...] | None) -> None:
    assert bind_scopes(value) == expected
