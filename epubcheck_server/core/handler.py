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
Validation request handler.

Turns one inbound request (method + body) into one response. The handler is
transport-agnostic and holds no per-request state, so a single instance is
shared by every worker.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..config.constants import EpubcheckServerConstants
from .encoding import decode_path, not_found_body
from .validator import ReportingLevel, ReportSettings, Validator

logger = logging.getLogger("epubcheck_server.handler")


@dataclass(frozen=True)
class ValidationResponse:
    """Status, body and content type of one response."""

    status_code: int
    body: bytes = b""
    content_type: str | None = None
    path: str | None = None


class ValidationRequestHandler:
    """Validates the file named by a POST body and encodes the outcome."""

    def __init__(self, validator: Validator):
        self.validator = validator

    def check_method(self, method: str) -> ValidationResponse | None:
        """Return a 405 response for any method other than POST, else ``None``."""
        if method == EpubcheckServerConstants.VALIDATION_METHOD:
            return None
        return self._log(method, ValidationResponse(status_code=405))

    def handle(self, method: str, body: bytes) -> ValidationResponse:
        """Process one request.

        Validator failures are not caught; they propagate to the caller and
        fail this request only.
        """
        rejection = self.check_method(method)
        if rejection is not None:
            return rejection

        path = decode_path(body)

        if not os.path.exists(path):
            return self._log(
                method,
                ValidationResponse(
                    status_code=400,
                    body=not_found_body(path),
                    content_type=EpubcheckServerConstants.JSON_CONTENT_TYPE,
                    path=path,
                ),
            )

        # Logged before the (possibly long) validation, as the status is known.
        self._log(method, ValidationResponse(status_code=200, path=path))
        report = self.validator.validate(Path(path), self.report_settings(path))
        return ValidationResponse(
            status_code=200,
            body=json.dumps(report).encode(),
            content_type=EpubcheckServerConstants.JSON_CONTENT_TYPE,
            path=path,
        )

    @staticmethod
    def report_settings(path: str) -> ReportSettings:
        """Report sink settings for ``path``: English, Info and up, base-name label."""
        return ReportSettings(
            label=Path(path).name,
            locale=EpubcheckServerConstants.REPORT_LOCALE,
            reporting_level=ReportingLevel.INFO,
        )

    @staticmethod
    def _log(method: str, response: ValidationResponse) -> ValidationResponse:
        target = f" ({response.path})" if response.path is not None else ""
        logger.info(
            "Request %s%s - Response %s",
            method,
            target,
            EpubcheckServerConstants.status_line(response.status_code),
        )
        return response
