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
Read-only configuration layers.

A layer answers two questions at lookup time: does it define a key, and what value
does it give for it. Visibility is evaluated against the live resolver on every call
and never cached, because the keys a layer depends on may be produced by other layers.
A ``get`` result of None means the layer does not supply the key.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable


class PropertyResolver(Protocol):
    """The full chain a layer consults for its prerequisites."""

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Any | None: ...


@runtime_checkable
class ConfigLayer(Protocol):
    name: str

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Any | None: ...


def _frozen(values: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(values))


def _always(resolver: PropertyResolver) -> bool:
    return True


@dataclass(frozen=True, eq=False)
class StaticLayer:
    """Fixed key/value mapping, always visible."""

    name: str
    values: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _frozen(self.values))

    def has(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str) -> Any | None:
        return self.values.get(key)


@dataclass(frozen=True, eq=False)
class ConditionalLayer:
    """
    Fixed key/value mapping, visible only while every ``required`` key is present in
    the resolver and none of the ``forbidden`` keys is.
    """

    name: str
    values: Mapping[str, Any]
    resolver: PropertyResolver
    required: tuple[str, ...] = ()
    forbidden: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _frozen(self.values))

    def has(self, key: str) -> bool:
        # Own keys first: prerequisites are looked up through the same resolver.
        if key not in self.values:
            return False
        return all(self.resolver.has(k) for k in self.required) and not any(
            self.resolver.has(k) for k in self.forbidden
        )

    def get(self, key: str) -> Any | None:
        return self.values[key] if self.has(key) else None


@dataclass(frozen=True, eq=False)
class AliasLayer:
    """Resolves each key to the live value of the key it aliases."""

    name: str
    aliases: Mapping[str, str]
    resolver: PropertyResolver

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", _frozen(self.aliases))

    def has(self, key: str) -> bool:
        return key in self.aliases and self.resolver.has(self.aliases[key])

    def get(self, key: str) -> Any | None:
        return self.resolver.get(self.aliases[key]) if self.has(key) else None


@dataclass(frozen=True, eq=False)
class ComputedLayer:
    """
    Each key maps to a function of the resolver, recomputed on every lookup.
    The layer is visible only while ``when`` holds.
    """

    name: str
    functions: Mapping[str, Callable[[PropertyResolver], Any]]
    resolver: PropertyResolver
    when: Callable[[PropertyResolver], bool] = field(default=_always)

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", _frozen(self.functions))

    def has(self, key: str) -> bool:
        return key in self.functions and self.when(self.resolver)

    def get(self, key: str) -> Any | None:
        return self.functions[key](self.resolver) if self.has(key) else None


def bind_scopes(value: Any) -> tuple[str, ...] | None:
    """
    Binds a scopes value to an ordered set of strings.

    Accepts a comma-separated string or an iterable whose elements may themselves be
    comma-separated. Blank entries are dropped and repeats collapse onto their first
    occurrence.

    Args:
        value: The raw scopes value.

    Returns:
        tuple[str, ...] | None: The bound scopes, or None when the value is None.
    """
    if value is None:
        return None
    items: Iterable[Any] = [value] if isinstance(value, str) else value
    scopes = (part.strip() for item in items for part in str(item).split(","))
    return tuple(dict.fromkeys(s for s in scopes if s))
