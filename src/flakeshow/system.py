# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ask nix which system (architecture and OS pair) it is running on."""

from __future__ import annotations

from typing import Final

from .config import NixSettings
from .errors import SystemResolutionError
from .process import CommandOptions, run_command

CURRENT_SYSTEM_EXPR: Final[str] = "builtins.currentSystem"


def current_system_args(settings: NixSettings) -> list[str]:
    """Return the argv evaluating ``builtins.currentSystem`` with ``settings``."""

    return [str(settings.nix_binary), "eval", "--impure", "--raw", "--expr", CURRENT_SYSTEM_EXPR]


def current_nix_system(settings: NixSettings | None = None) -> str:
    """Return the current nix system, e.g. ``x86_64-linux``.

    Nix is invoked on every call. Results are intentionally not cached.

    Args:
        settings: Nix location and environment, defaults to :meth:`NixSettings.from_environment`.

    Returns:
        str: System identifier as reported by nix.

    Raises:
        ToolLaunchError: If the nix executable cannot be started.
        SystemResolutionError: If the evaluation exits with a non-zero status.
    """

    resolved = settings or NixSettings.from_environment()
    completed = run_command(
        current_system_args(resolved),
        options=CommandOptions(cwd=resolved.cwd, env=resolved.process_env(), discard_stdin=True),
    )
    if completed.returncode != 0:
        raise SystemResolutionError(completed.returncode)
    return completed.stdout.decode("utf-8", errors="replace").strip()


__all__ = ["CURRENT_SYSTEM_EXPR", "current_nix_system", "current_system_args"]
