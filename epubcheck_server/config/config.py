# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""
Configuration class for EPUBCheck Server.

A ``ServerConfig`` is built once at startup (from defaults, the environment,
an optional dotenv file and command-line flags) and then handed to the app
factory and the server runner. It is frozen; use :meth:`with_overrides` to
derive a changed copy.
"""

from __future__ import annotations

import dataclasses
import math
import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from ..core.exceptions import ConfigurationError
from .constants import EpubcheckServerConstants


@dataclass(frozen=True)
class ServerConfig:
    """Immutable configuration for one server process."""

    host: str = EpubcheckServerConstants.DEFAULT_HOSTNAME
    port: int = EpubcheckServerConstants.DEFAULT_PORT
    threads: int = EpubcheckServerConstants.DEFAULT_THREADS

    # No timeout by default: a validation may block its worker indefinitely.
    validation_timeout: float | None = None

    epubcheck_command: tuple[str, ...] = EpubcheckServerConstants.DEFAULT_EPUBCHECK_COMMAND

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ConfigurationError(f"Port must be between 0 and 65535, got {self.port}")
        if self.threads < 1:
            raise ConfigurationError(f"Thread count must be a positive integer, got {self.threads}")
        if self.validation_timeout is not None and not (
            math.isfinite(self.validation_timeout) and self.validation_timeout > 0
        ):
            raise ConfigurationError(f"Validation timeout must be a positive finite number, got {self.validation_timeout}")
        if not self.epubcheck_command:
            raise ConfigurationError("epubcheck command must not be empty")

    def with_overrides(self, **overrides) -> ServerConfig:
        """Return a copy with the given fields replaced, skipping ``None`` values."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Mapping[str, str | None] | None = None) -> ServerConfig:
        """
        Create configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            ServerConfig instance; unset variables keep their defaults
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        if host := env.get(EpubcheckServerConstants.ENV_HOSTNAME):
            kwargs["host"] = host
        if port := env.get(EpubcheckServerConstants.ENV_PORT):
            kwargs["port"] = _parse_number(EpubcheckServerConstants.ENV_PORT, port, int)
        if threads := env.get(EpubcheckServerConstants.ENV_THREADS):
            kwargs["threads"] = _parse_number(EpubcheckServerConstants.ENV_THREADS, threads, int)
        if timeout := env.get(EpubcheckServerConstants.ENV_TIMEOUT):
            kwargs["validation_timeout"] = _parse_number(EpubcheckServerConstants.ENV_TIMEOUT, timeout, float)
        if command := env.get(EpubcheckServerConstants.ENV_COMMAND):
            kwargs["epubcheck_command"] = tuple(shlex.split(command))

        return cls(**kwargs)

    @classmethod
    def from_file(cls, config_file: Path) -> ServerConfig:
        """
        Load configuration from a .env file.

        Values in the file take precedence over the process environment.

        Args:
            config_file: Path to .env file

        Returns:
            ServerConfig instance
        """
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found: {config_file}")
        return cls.from_env({**os.environ, **dotenv_values(config_file)})


def _parse_number(name: str, raw: str, kind: type):
    try:
        return kind(raw.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from None
