# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy for nix invocation and output parsing failures."""

from __future__ import annotations

from collections.abc import Sequence


class FlakeShowError(RuntimeError):
    """Base class for every error raised by :mod:`flakeshow`."""


class ConfigError(FlakeShowError):
    """Raised when settings input is invalid."""


class ToolLaunchError(FlakeShowError):
    """Raised when the nix executable cannot be started at all."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        """Initialise the error with the command that failed to launch.

        Args:
            command: Argument vector that was being executed.
            reason: Human-readable explanation from the operating system.
        """

        head = command[0] if command else "<empty>"
        super().__init__(f"Unable to launch '{head}': {reason}")
        self.command = tuple(command)
        self.reason = reason


class FlakeOutputError(FlakeShowError):
    """Raised when ``nix flake show`` output does not match the expected shape."""

    def __init__(self, message: str, *, errors: Sequence[str] = ()) -> None:
        """Initialise the error with a summary and per-location details.

        Args:
            message: Summary of the parse failure.
            errors: Individual validation failures rendered as strings.
        """

        super().__init__(message)
        self.errors = tuple(errors)


class SystemResolutionError(FlakeShowError):
    """Raised when nix fails to report the current system."""

    def __init__(self, returncode: int) -> None:
        """Initialise the error with the exit status of the evaluation.

        Args:
            returncode: Exit status reported by ``nix eval``.
        """

        super().__init__(f"nix eval for builtins.currentSystem exited with status {returncode}")
        self.returncode = returncode


__all__ = [
    "ConfigError",
    "FlakeOutputError",
    "FlakeShowError",
    "SystemResolutionError",
    "ToolLaunchError",
]
