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
Constants for EPUBCheck Server.
"""

from http import HTTPStatus

try:
    from .._version import __version__ as PACKAGE_VERSION
except Exception:  # pragma: no cover
    PACKAGE_VERSION = "0.0.0-dev"


class EpubcheckServerConstants:
    """Constants used throughout the server."""

    VERSION = PACKAGE_VERSION

    # Default values
    DEFAULT_HOSTNAME = "localhost"
    DEFAULT_PORT = 8003
    DEFAULT_THREADS = 4
    DEFAULT_EPUBCHECK_COMMAND = ("epubcheck",)

    # Wire protocol
    VALIDATION_METHOD = "POST"
    JSON_CONTENT_TYPE = "application/json"
    NOT_FOUND_PREFIX = "File not found: "

    # Report sink
    REPORT_LOCALE = "en"

    # Environment variables
    ENV_HOSTNAME = "EPUBCHECK_SERVER_HOSTNAME"
    ENV_PORT = "EPUBCHECK_SERVER_PORT"
    ENV_THREADS = "EPUBCHECK_SERVER_THREADS"
    ENV_TIMEOUT = "EPUBCHECK_SERVER_TIMEOUT"
    ENV_COMMAND = "EPUBCHECK_SERVER_COMMAND"

    @classmethod
    def status_line(cls, status_code: int) -> str:
        """Return ``"<code> <reason>"`` for a status code, e.g. ``"200 OK"``."""
        try:
            return f"{status_code} {HTTPStatus(status_code).phrase}"
        except ValueError:
            return str(status_code)
