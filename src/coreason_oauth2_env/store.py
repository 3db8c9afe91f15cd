# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oauth2_env

"""
Ordered, layered configuration store.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from coreason_oauth2_env.layers import ConfigLayer, StaticLayer


class ConfigStore:
    """
    An ordered list of layers; earlier layers take precedence.

    A key is present when any layer claims it. Its value is the first non-None value
    among the layers that claim it, so a layer claiming a key it cannot currently
    compute defers to the layers after it.
    """

    def __init__(self, layers: Iterable[ConfigLayer] = ()) -> None:
        self._layers: list[ConfigLayer] = list(layers)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], name: str = "application") -> "ConfigStore":
        """
        Creates a store holding a single static layer.

        Args:
            values: Raw key/value pairs (e.g. ``{"okta.oauth2.issuer": "https://..."}``).
            name: The layer name.
        """
        return cls([StaticLayer(name, values)])

    def __iter__(self) -> Iterator[ConfigLayer]:
        return iter(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)

    @property
    def names(self) -> list[str]:
        return [layer.name for layer in self._layers]

    def add_first(self, layer: ConfigLayer) -> None:
        self._remove(layer.name)
        self._layers.insert(0, layer)

    def add_last(self, layer: ConfigLayer) -> None:
        self._remove(layer.name)
        self._layers.append(layer)

    def layer(self, name: str) -> ConfigLayer | None:
        return next((layer for layer in self._layers if layer.name == name), None)

    def has(self, key: str) -> bool:
        return any(layer.has(key) for layer in self._layers)

    def get(self, key: str, default: Any = None) -> Any:
        for layer in self._layers:
            if layer.has(key):
                value = layer.get(key)
                if value is not None:
                    return value
        return default

    def _remove(self, name: str) -> None:
        self._layers = [layer for layer in self._layers if layer.name != name]
