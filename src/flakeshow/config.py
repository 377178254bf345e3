# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings describing where nix lives and how it is spawned."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

DEFAULT_NIX_BINARY: Final[Path] = Path("/nix/var/nix/profiles/default/bin/nix")
NIX_BINARY_ENV: Final[str] = "FLAKESHOW_NIX_BIN"


class NixSettings(BaseModel):
    """Location of the nix executable and the environment it runs in."""

    model_config = ConfigDict(frozen=True)

    nix_binary: Path | str = DEFAULT_NIX_BINARY
    cwd: Path | None = None
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("nix_binary", mode="before")
    @classmethod
    def _validate_binary(cls, value: Path | str) -> Path | str:
        """Reject empty binary names and keep bare names for ``PATH`` lookup.

        Args:
            value: Executable path or bare command name.

        Returns:
            Path | str: ``Path`` for anything containing a separator, else the bare name.

        Raises:
            ConfigError: If ``value`` is blank.
        """

        text = str(value).strip()
        if not text:
            raise ConfigError("nix binary must not be empty")
        if os.sep in text or (os.altsep and os.altsep in text):
            return Path(text).expanduser()
        return text

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> NixSettings:
        """Build settings honouring ``FLAKESHOW_NIX_BIN`` when present.

        Args:
            environ: Environment mapping to consult, defaults to :data:`os.environ`.

        Returns:
            NixSettings: Settings with environment overrides applied.
        """

        source = os.environ if environ is None else environ
        override = source.get(NIX_BINARY_ENV)
        if override:
            return cls(nix_binary=override)
        return cls()

    def process_env(self) -> dict[str, str] | None:
        """Return the environment for spawned processes, or ``None`` to inherit."""

        if not self.env:
            return None
        merged = dict(os.environ)
        merged.update(self.env)
        return merged


__all__ = ["DEFAULT_NIX_BINARY", "NIX_BINARY_ENV", "NixSettings"]
