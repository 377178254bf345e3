# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

from flakeshow.config import NixSettings

_SCRIPT_TEMPLATE = """#!/bin/sh
echo "$*" >> "{calls}"
if [ "$1" = "eval" ]; then
    printf '%s' "{system}"
    exit {eval_status}
fi
case " $* " in
    *" --all-systems "*) cat "{payload}" ;;
    *) cat "{partial}" ;;
esac
printf '%s' "{stderr}" >&2
exit {status}
"""


@dataclass(slots=True)
class FakeNix:
    """Shell script standing in for the nix binary during tests."""

    binary: Path
    calls_file: Path

    @property
    def settings(self) -> NixSettings:
        return NixSettings(nix_binary=self.binary)

    def calls(self) -> list[str]:
        if not self.calls_file.exists():
            return []
        return self.calls_file.read_text(encoding="utf-8").splitlines()


FakeNixFactory = Callable[..., FakeNix]


@pytest.fixture
def fake_nix(tmp_path: Path) -> FakeNixFactory:
    """Return a factory writing a fake nix executable into ``tmp_path``."""

    def _make(
        stdout: str = "{}",
        *,
        partial_stdout: str | None = None,
        status: int = 0,
        stderr: str = "",
        system: str = "x86_64-linux",
        eval_status: int = 0,
    ) -> FakeNix:
        payload = tmp_path / "payload.json"
        payload.write_text(stdout, encoding="utf-8")
        partial = tmp_path / "partial.json"
        partial.write_text(stdout if partial_stdout is None else partial_stdout, encoding="utf-8")
        calls = tmp_path / "calls.log"
        binary = tmp_path / "nix"
        binary.write_text(
            _SCRIPT_TEMPLATE.format(
                calls=calls,
                system=system,
                eval_status=eval_status,
                payload=payload,
                partial=partial,
                stderr=stderr,
                status=status,
            ),
            encoding="utf-8",
        )
        binary.chmod(binary.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeNix(binary=binary, calls_file=calls)

    return _make
