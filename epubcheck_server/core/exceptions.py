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


"""EPUBCheck Server exceptions.

This module defines custom exceptions for server startup and validation.
All exceptions inherit from EpubcheckServerError for easy catching.

Example:
    >>> from epubcheck_server.api.api_server import run_server
    >>> from epubcheck_server.config.config import ServerConfig
    >>> from epubcheck_server.core.exceptions import BindError
    >>>
    >>> try:
    ...     run_server(ServerConfig(port=80))
    ... except BindError as e:
    ...     print(f"Cannot start: {e}")
"""


class EpubcheckServerError(Exception):
    """Base exception for all EPUBCheck Server errors."""

    pass


class ConfigurationError(EpubcheckServerError, ValueError):
    """Raised when server configuration is invalid.

    This can indicate:
    - Port outside 0-65535
    - Non-positive worker count
    - Malformed environment variable value
    """

    pass


class BindError(EpubcheckServerError):
    """Raised when the listening socket cannot be bound.

    This typically indicates:
    - Address already in use
    - Hostname that cannot be resolved
    - Insufficient privileges for the port
    """

    def __init__(self, host: str, port: int, reason: str):
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(f"Cannot bind to {host}:{port}: {reason}")


class ValidatorError(EpubcheckServerError):
    """Raised when the validator produced no usable report.

    This indicates:
    - The epubcheck executable wrote no JSON report
    - The report file is not valid JSON
    """

    pass
