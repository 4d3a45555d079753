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
Standalone server for EPUBCheck Server.

Binds the listening socket up front, so that an unusable address surfaces as
a ``BindError`` before any worker is started, then serves the app with
uvicorn on that socket until the process is terminated.
"""

from __future__ import annotations

import logging
import socket

import uvicorn

from ..config.config import ServerConfig
from ..core.exceptions import BindError
from ..core.validator import Validator
from .api import create_app

logger = logging.getLogger("epubcheck_server.server")


def bind_socket(config: ServerConfig) -> socket.socket:
    """Bind and listen on ``config.host:config.port``.

    Raises:
        BindError: The host cannot be resolved or the address is unavailable.
    """
    try:
        family = socket.getaddrinfo(config.host, config.port, type=socket.SOCK_STREAM)[0][0]
    except socket.gaierror as e:
        raise BindError(config.host, config.port, e.strerror or str(e)) from e

    try:
        sock = socket.create_server((config.host, config.port), family=family)
    except OSError as e:
        raise BindError(config.host, config.port, e.strerror or str(e)) from e

    logger.debug("Listening on %s", sock.getsockname())
    return sock


def build_server(config: ServerConfig, validator: Validator | None = None) -> uvicorn.Server:
    """Create (but do not start) the uvicorn server for ``config``."""
    app = create_app(config, validator)
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_config=None,
        access_log=False,
        server_header=False,
        date_header=False,
    )
    return uvicorn.Server(uvicorn_config)


def run_server(config: ServerConfig, validator: Validator | None = None) -> None:
    """Bind and serve until the process ends.

    Raises:
        BindError: The listening socket could not be bound.
    """
    sock = bind_socket(config)
    server = build_server(config, validator)
    server.run(sockets=[sock])
