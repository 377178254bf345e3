# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models for ``nix flake show`` output.

Two layers live here. The pydantic models mirror the JSON emitted by
``nix flake show --json`` and only exist long enough to be validated. The
frozen dataclasses are the normalised index handed to callers.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .system import current_nix_system


class DetailRecord(BaseModel):
    """Per-output metadata reported by nix for a single invocation name."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: str = Field(alias="type")
    description: str | None = None


FieldGroup: TypeAlias = dict[str, DetailRecord]


class RawFlakeShowOutput(BaseModel):
    """Tool-native image of the top-level ``nix flake show`` document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    dev_shells: dict[str, FieldGroup] = Field(default_factory=dict, alias="devShells")
    packages: dict[str, FieldGroup] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Derivation:
    """Normalised flake output addressable by its invocation name."""

    name: str
    kind: str
    description: str | None
    invocation: str

    @classmethod
    def from_detail(cls, invocation: str, detail: DetailRecord) -> Derivation:
        """Promote the mapping key ``invocation`` into a field next to ``detail``."""

        return cls(
            name=detail.name,
            kind=detail.kind,
            description=detail.description,
            invocation=invocation,
        )


SystemIndex: TypeAlias = Mapping[str, tuple[Derivation, ...]]


def _freeze(index: Mapping[str, tuple[Derivation, ...]]) -> SystemIndex:
    return MappingProxyType({system: tuple(entries) for system, entries in index.items()})


@dataclass(frozen=True, slots=True)
class PlatformView:
    """Outputs of both categories for a single system."""

    dev_shells: tuple[Derivation, ...] = ()
    packages: tuple[Derivation, ...] = ()

    def is_empty(self) -> bool:
        """Return ``True`` when neither category holds an output."""

        return not self.dev_shells and not self.packages


@dataclass(frozen=True, slots=True)
class FlakeInfo:
    """Flattened ``nix flake show`` output keyed by system.

    Each category maps a system such as ``x86_64-linux`` to every output nix
    reported for it. Entry order within a system mirrors the JSON document and
    should not be relied upon. Instances are read-only once built and, because
    their mappings are views, not hashable.
    """

    dev_shells: SystemIndex = field(default_factory=dict)
    packages: SystemIndex = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "dev_shells", _freeze(self.dev_shells))
        object.__setattr__(self, "packages", _freeze(self.packages))

    def systems(self) -> list[str]:
        """Return every system present in either category, sorted."""

        return sorted({*self.dev_shells, *self.packages})

    def for_system(self, system: str) -> PlatformView:
        """Return the outputs recorded for ``system``.

        Unknown systems produce an empty view rather than an error.
        """

        return PlatformView(
            dev_shells=self.dev_shells.get(system, ()),
            packages=self.packages.get(system, ()),
        )

    def for_current_system(self, resolver: Callable[[], str] | None = None) -> PlatformView:
        """Return the outputs for the running system.

        The system is resolved on every call; nothing is cached.

        Args:
            resolver: Callable returning the current system, defaults to asking nix.

        Returns:
            PlatformView: Outputs recorded for the current system.
        """

        return self.for_system((resolver or current_nix_system)())


__all__ = [
    "Derivation",
    "DetailRecord",
    "FieldGroup",
    "FlakeInfo",
    "PlatformView",
    "RawFlakeShowOutput",
    "SystemIndex",
]
