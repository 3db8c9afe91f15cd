# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

from coreason_oauth2_env.layers import ComputedLayer, StaticLayer
from coreason_oauth2_env.store import ConfigStore


def test_first_layer_wins() -> None:
    store = ConfigStore([StaticLayer("high", {"k": "high"}), StaticLayer("low", {"k": "low", "other": 1})])
    assert store.get("k") == "high"
    assert store.get("other") == 1
    assert store.has("other")
    assert not store.has("missing")
    assert store.get("missing") is None
    assert store.get("missing", "fallback") == "fallback"


def test_add_first_and_last() -> None:
    store = ConfigStore.from_mapping({"k": "app"})
    store.add_last(StaticLayer("defaults", {"k": "default"}))
    store.add_first(StaticLayer("overrides", {"k": "override"}))

    assert store.names == ["overrides", "application", "defaults"]
    assert store.get("k") == "override"
    assert len(store) == 3


def test_adding_same_name_replaces_layer() -> None:
    store = ConfigStore.from_mapping({"k": 1}, name="raw")
    store.add_last(StaticLayer("raw", {"k": 2}))
    assert store.names == ["raw"]
    assert store.get("k") == 2


def test_claimed_but_none_value_falls_through() -> None:
    store = ConfigStore(
        [
            ComputedLayer("computed", {"k": lambda resolver: None}, ConfigStore()),
            StaticLayer("raw", {"k": "fallback"}),
        ]
    )
    assert store.get("k") == "fallback"


def test_layer_lookup() -> None:
    raw = StaticLayer("raw", {})
    store = ConfigStore([raw])
    assert store.layer("raw") is raw
    assert store.layer("missing") is None
    assert list(store) == [raw]
