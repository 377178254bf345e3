# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; commands are argument lists built by
# this package and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

from .errors import ToolLaunchError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options.

    ``stderr`` is never captured: whatever the child writes there goes straight
    to the caller's own error stream so diagnostics stay visible to operators.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_stdout: bool = True
    discard_stdin: bool = False


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable in ``args`` to an absolute path.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Argument list whose first element is an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        ToolLaunchError: If a bare executable name cannot be found on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise ToolLaunchError(args, f"executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[bytes]:
    """Execute ``args`` synchronously and return the completed process.

    The call blocks until the child exits; no timeout is applied. A non-zero
    exit status is returned to the caller rather than raised.

    Args:
        args: Command and argument sequence to execute.
        options: Execution options, defaults to capturing stdout only.

    Returns:
        CompletedProcess[bytes]: Exit status and captured stdout bytes.

    Raises:
        ToolLaunchError: If the executable is missing or cannot be started.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args)
    LOGGER.debug("running command=%s cwd=%s", normalized, resolved_options.cwd)
    try:
        # Bandit: arguments originate from typed option models, not shell strings.
        completed: CompletedProcess[bytes] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            stdout=subprocess.PIPE if resolved_options.capture_stdout else None,
            stderr=None,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except OSError as exc:
        raise ToolLaunchError(normalized, exc.strerror or str(exc)) from exc
    LOGGER.debug("command=%s exited returncode=%s", normalized[0], completed.returncode)
    return completed


__all__ = ["CommandOptions", "run_command"]
