# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run ``nix flake show`` and index its outputs by system."""

from __future__ import annotations

from importlib import metadata

from .command import FlakeShowCommand, FlakeShowOptions, LogFormat, build, build_args, flake_show, run_and_parse
from .config import NixSettings
from .errors import ConfigError, FlakeOutputError, FlakeShowError, SystemResolutionError, ToolLaunchError
from .models import Derivation, FlakeInfo, PlatformView
from .normalize import flatten_groups, parse_flake_show, view, view_for_current_platform
from .system import current_nix_system

try:
    __version__ = metadata.version("flakeshow")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "ConfigError",
    "Derivation",
    "FlakeInfo",
    "FlakeOutputError",
    "FlakeShowCommand",
    "FlakeShowError",
    "FlakeShowOptions",
    "LogFormat",
    "NixSettings",
    "PlatformView",
    "SystemResolutionError",
    "ToolLaunchError",
    "__version__",
    "build",
    "build_args",
    "current_nix_system",
    "flake_show",
    "flatten_groups",
    "parse_flake_show",
    "run_and_parse",
    "view",
    "view_for_current_platform",
]
