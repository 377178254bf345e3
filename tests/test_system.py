# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for resolving the current nix system."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from flakeshow.config import NixSettings
from flakeshow.errors import SystemResolutionError, ToolLaunchError
from flakeshow.system import current_nix_system, current_system_args

if TYPE_CHECKING:
    from conftest import FakeNixFactory


def test_current_system_args() -> None:
    args = current_system_args(NixSettings(nix_binary="nix"))

    assert args == ["nix", "eval", "--impure", "--raw", "--expr", "builtins.currentSystem"]


def test_current_system_reads_stdout(fake_nix: FakeNixFactory) -> None:
    nix = fake_nix(system="aarch64-darwin")

    assert current_nix_system(nix.settings) == "aarch64-darwin"
    assert nix.calls() == ["eval --impure --raw --expr builtins.currentSystem"]


def test_current_system_is_not_cached(fake_nix: FakeNixFactory) -> None:
    nix = fake_nix(system="x86_64-linux")

    current_nix_system(nix.settings)
    current_nix_system(nix.settings)

    assert len(nix.calls()) == 2


def test_current_system_failure_raises(fake_nix: FakeNixFactory) -> None:
    nix = fake_nix(eval_status=1)

    with pytest.raises(SystemResolutionError) as excinfo:
        current_nix_system(nix.settings)

    assert excinfo.value.returncode == 1


def test_current_system_missing_binary(tmp_path: Path) -> None:
    with pytest.raises(ToolLaunchError):
        current_nix_system(NixSettings(nix_binary=tmp_path / "nix"))


def test_current_system_defaults_to_environment(fake_nix: FakeNixFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    nix = fake_nix(system="i686-linux")
    monkeypatch.setenv("FLAKESHOW_NIX_BIN", str(nix.binary))

    assert current_nix_system() == "i686-linux"
