# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn ``nix flake show --json`` output into a per-system index."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TypeVar

from pydantic import ValidationError

from .errors import FlakeOutputError
from .models import Derivation, FlakeInfo, PlatformView, RawFlakeShowOutput
from .system import current_nix_system

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
EntryT = TypeVar("EntryT")

SystemResolver = Callable[[], str]


def flatten_groups(
    groups: Mapping[str, Mapping[str, RecordT]],
    promote: Callable[[str, RecordT], EntryT],
) -> dict[str, tuple[EntryT, ...]]:
    """Flatten a mapping of mappings into a mapping of sequences.

    Every inner ``(key, record)`` pair becomes exactly one entry under its outer
    key. Outer keys with no inner pairs are kept with an empty tuple.

    Args:
        groups: Outer key (system) to inner key (invocation name) to record.
        promote: Callable combining an inner key with its record.

    Returns:
        dict[str, tuple[EntryT, ...]]: Entries grouped by outer key.
    """

    flattened: dict[str, list[EntryT]] = {}
    for outer, inner in groups.items():
        bucket = flattened.setdefault(outer, [])
        for key, record in inner.items():
            bucket.append(promote(key, record))
    return {outer: tuple(entries) for outer, entries in flattened.items()}


def _summarise(exc: ValidationError) -> list[str]:
    summary: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        summary.append(f"{location}: {error['msg']}")
    return summary


def parse_flake_show(data: bytes | str) -> FlakeInfo:
    """Parse captured ``nix flake show --json`` stdout into a :class:`FlakeInfo`.

    Args:
        data: Raw stdout bytes (or text) produced by nix.

    Returns:
        FlakeInfo: Outputs of both categories grouped by system.

    Raises:
        FlakeOutputError: If ``data`` is not valid JSON or does not match the
            expected shape. No partial index is produced.
    """

    try:
        raw = RawFlakeShowOutput.model_validate_json(data)
    except ValidationError as exc:
        errors = _summarise(exc)
        raise FlakeOutputError(
            f"nix flake show output did not match the expected schema ({exc.error_count()} error(s))",
            errors=errors,
        ) from exc

    info = FlakeInfo(
        dev_shells=flatten_groups(raw.dev_shells, Derivation.from_detail),
        packages=flatten_groups(raw.packages, Derivation.from_detail),
    )
    LOGGER.debug(
        "parsed flake outputs systems=%s dev_shells=%d packages=%d",
        info.systems(),
        sum(len(entries) for entries in info.dev_shells.values()),
        sum(len(entries) for entries in info.packages.values()),
    )
    return info


def view(index: FlakeInfo, system: str) -> PlatformView:
    """Return the outputs ``index`` holds for ``system``.

    Unknown systems produce an empty view rather than an error.
    """

    return index.for_system(system)


def view_for_current_platform(index: FlakeInfo, resolver: SystemResolver | None = None) -> PlatformView:
    """Return the outputs for the running system.

    The system is resolved on every call; nothing is cached.

    Args:
        index: Parsed flake outputs.
        resolver: Callable returning the current system, defaults to asking nix.

    Returns:
        PlatformView: Outputs recorded for the current system.
    """

    return index.for_current_system(resolver or current_nix_system)


__all__ = [
    "SystemResolver",
    "flatten_groups",
    "parse_flake_show",
    "view",
    "view_for_current_platform",
]
