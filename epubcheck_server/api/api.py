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


"""API module for EPUBCheck Server.

This module provides the FastAPI application factory. Each app owns its
worker pool and request handler, built from an explicit ``ServerConfig``.
Run it directly with ``uvicorn --factory epubcheck_server.api.api:create_app``
or through :func:`epubcheck_server.api.api_server.run_server`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__ as PACKAGE_VERSION
from ..config.config import ServerConfig
from ..core.handler import ValidationRequestHandler
from ..core.pool import WorkerPool
from ..core.validator import EpubcheckValidator, Validator
from .router import router as api_router
from .router import to_response


async def _reject_unrouted_method(request: Request, exc: StarletteHTTPException) -> Response:
    # Methods outside ROUTED_METHODS get the same empty 405 as routed ones.
    if exc.status_code == 405:
        handler: ValidationRequestHandler = request.app.state.handler
        rejection = handler.check_method(request.method)
        if rejection is not None:
            return to_response(rejection)
    return await http_exception_handler(request, exc)


def create_app(config: ServerConfig | None = None, validator: Validator | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        config: Server configuration; read from the environment when omitted
        validator: Validator to delegate to; defaults to an
            :class:`EpubcheckValidator` built from ``config``

    Returns:
        FastAPI app with ``state.config``, ``state.pool`` and ``state.handler``
    """
    if config is None:
        config = ServerConfig.from_env()
    if validator is None:
        validator = EpubcheckValidator(config.epubcheck_command, timeout=config.validation_timeout)

    pool = WorkerPool(config.threads)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        pool.shutdown(wait=False)

    app = FastAPI(
        title="EPUBCheck Server",
        description="Validates EPUB files named in POST bodies",
        version=PACKAGE_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.pool = pool
    app.state.handler = ValidationRequestHandler(validator)

    app.add_exception_handler(StarletteHTTPException, _reject_unrouted_method)
    app.include_router(api_router)
    return app
