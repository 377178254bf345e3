# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build and run ``nix flake show`` invocations."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any, Final

from .config import NixSettings
from .models import FlakeInfo
from .normalize import parse_flake_show
from .process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)

SUBCOMMAND: Final[tuple[str, str]] = ("flake", "show")


class LogFormat(str, Enum):
    """Values accepted by ``nix --log-format``."""

    RAW = "raw"
    INTERNAL_JSON = "internal-json"
    BAR = "bar"
    BAR_WITH_LOGS = "bar-with-logs"


@dataclass(frozen=True, slots=True)
class FlakeShowOptions:
    """Immutable flag set for a ``nix flake show`` call.

    Every field defaults to nix's own behaviour. Use :meth:`with_options` to
    derive a modified copy.
    """

    all_systems: bool = False
    json: bool = False
    legacy: bool = False
    impure: bool = False
    recreate_lock_file: bool = False
    debug: bool = False
    verbosity_level: int = 0
    log_format: LogFormat | None = None
    target: Path | str | None = None

    def __post_init__(self) -> None:
        if self.verbosity_level < 0:
            raise ValueError("verbosity_level must be non-negative")
        if self.log_format is not None and not isinstance(self.log_format, LogFormat):
            object.__setattr__(self, "log_format", LogFormat(self.log_format))

    def with_options(self, **changes: Any) -> FlakeShowOptions:
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)


_BOOLEAN_FLAGS: Final[tuple[tuple[str, str], ...]] = (
    ("all_systems", "--all-systems"),
    ("json", "--json"),
    ("legacy", "--legacy"),
    ("impure", "--impure"),
    ("recreate_lock_file", "--recreate-lock-file"),
    ("debug", "--debug"),
)


def build_args(options: FlakeShowOptions) -> list[str]:
    """Render ``options`` into the argument list following the nix binary.

    The order is fixed: subcommand, target, boolean flags, verbosity, log format.

    Args:
        options: Flags to render.

    Returns:
        list[str]: Arguments such as ``["flake", "show", ".", "--json"]``.
    """

    args = list(SUBCOMMAND)
    if options.target is not None:
        args.append(str(options.target))
    args.extend(flag for attr, flag in _BOOLEAN_FLAGS if getattr(options, attr))
    if options.verbosity_level > 0:
        args.append("-" + "v" * options.verbosity_level)
    if options.log_format is not None:
        args.extend(("--log-format", options.log_format.value))
    return args


@dataclass(frozen=True, slots=True)
class FlakeShowCommand:
    """Executable description of a ``nix flake show`` call.

    Stdout is captured for parsing while stderr stays attached to the calling
    process.
    """

    argv: tuple[str, ...]
    options: CommandOptions = field(default_factory=CommandOptions)

    def __str__(self) -> str:
        return shlex.join(self.argv)

    def run(self) -> CompletedProcess[bytes]:
        """Execute the command, blocking until nix exits.

        Raises:
            ToolLaunchError: If nix cannot be started.
        """

        return run_command(self.argv, options=self.options)


def build(options: FlakeShowOptions, settings: NixSettings | None = None) -> FlakeShowCommand:
    """Return the command for ``options`` without executing it."""

    resolved = settings or NixSettings.from_environment()
    return FlakeShowCommand(
        argv=(str(resolved.nix_binary), *build_args(options)),
        options=CommandOptions(cwd=resolved.cwd, env=resolved.process_env(), capture_stdout=True),
    )


def run_and_parse(options: FlakeShowOptions, settings: NixSettings | None = None) -> FlakeInfo | None:
    """Run ``nix flake show`` and parse its stdout.

    A non-zero exit from nix returns ``None``: nix does not distinguish a
    broken flake from an absent one in a machine-readable way, so both mean
    "nothing to report". Pass ``json=True`` in ``options`` for parseable output.

    Args:
        options: Flags for the invocation.
        settings: Nix location and environment.

    Returns:
        FlakeInfo | None: Parsed outputs, or ``None`` when nix exited non-zero.

    Raises:
        ToolLaunchError: If nix cannot be started.
        FlakeOutputError: If nix succeeded but its output could not be parsed.
    """

    command = build(options, settings)
    LOGGER.debug("command=%s", command)
    completed = command.run()
    if completed.returncode != 0:
        LOGGER.warning("nix flake show exited with status %s; no outputs reported", completed.returncode)
        return None
    return parse_flake_show(completed.stdout)


def flake_show(**options: Any) -> FlakeShowOptions:
    """Return :class:`FlakeShowOptions` built from keyword flags."""

    return FlakeShowOptions(**options)


__all__ = [
    "FlakeShowCommand",
    "FlakeShowOptions",
    "LogFormat",
    "SUBCOMMAND",
    "build",
    "build_args",
    "flake_show",
    "run_and_parse",
]
