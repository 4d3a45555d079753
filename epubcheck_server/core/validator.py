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
Validator interface and the EPUBCheck command-line adapter.

The validator is an opaque collaborator: given a file and the report sink
settings it returns a JSON-serialisable report. It runs synchronously on the
calling worker thread.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..config.constants import EpubcheckServerConstants
from .exceptions import ValidatorError

logger = logging.getLogger("epubcheck_server.validator")


class ReportingLevel(Enum):
    """Minimum severity included in a report, from least to most verbose."""

    FATAL = 1
    ERROR = 2
    WARNING = 3
    INFO = 4
    USAGE = 5

    @property
    def cli_flags(self) -> list[str]:
        """epubcheck flags selecting this level (INFO is the tool's default)."""
        return {
            ReportingLevel.FATAL: ["--fatal"],
            ReportingLevel.ERROR: ["--error"],
            ReportingLevel.WARNING: ["--warn"],
            ReportingLevel.INFO: [],
            ReportingLevel.USAGE: ["--usage"],
        }[self]


@dataclass(frozen=True)
class ReportSettings:
    """Settings of the report sink handed to the validator."""

    label: str
    locale: str = EpubcheckServerConstants.REPORT_LOCALE
    reporting_level: ReportingLevel = ReportingLevel.INFO


class Validator(ABC):
    """Abstract base class for file validators."""

    @abstractmethod
    def validate(self, path: Path, settings: ReportSettings) -> dict[str, Any]:
        """
        Validate a file.

        Args:
            path: Existing file (or expanded publication directory)
            settings: Report sink settings

        Returns:
            The full diagnostic report as a JSON-serialisable mapping
        """
        pass


class EpubcheckValidator(Validator):
    """Runs the ``epubcheck`` executable and returns its JSON report."""

    def __init__(
        self,
        command: Sequence[str] = EpubcheckServerConstants.DEFAULT_EPUBCHECK_COMMAND,
        timeout: float | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            command: Executable and leading arguments, e.g.
                ``("java", "-jar", "/opt/epubcheck/epubcheck.jar")``
            timeout: Seconds before the epubcheck process is killed;
                ``None`` waits forever
        """
        self.command = tuple(command)
        self.timeout = timeout

    def build_command(self, path: Path, settings: ReportSettings, report_path: Path) -> list[str]:
        """Build the argument vector for one run.

        The target is passed by its label relative to the file's directory so
        that the report names the file by its base name.
        """
        target = settings.label or str(path.absolute())
        if target.startswith("-"):
            target = os.curdir + os.sep + target
        cmd = [*self.command, target, "--json", str(report_path), "--locale", settings.locale]
        if path.is_dir():
            cmd.extend(["--mode", "exp"])
        cmd.extend(settings.reporting_level.cli_flags)
        return cmd

    def validate(self, path: Path, settings: ReportSettings) -> dict[str, Any]:
        with tempfile.TemporaryDirectory(prefix="epubcheck_server_") as temp_dir:
            report_path = Path(temp_dir) / "report.json"
            cmd = self.build_command(path, settings, report_path)
            logger.debug("Running %s", cmd)

            # epubcheck exits non-zero when the publication has errors; the
            # report is still written, so the exit status is not checked.
            result = subprocess.run(
                cmd,
                cwd=str(path.absolute().parent),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )

            if not report_path.exists():
                raise ValidatorError(
                    f"epubcheck exited with status {result.returncode} without writing a report: "
                    f"{result.stderr.strip()[-500:]}"
                )
            try:
                report: dict[str, Any] = json.loads(report_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ValidatorError(f"epubcheck wrote an invalid JSON report: {e}") from e

        return report
