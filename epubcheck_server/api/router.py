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


"""API router for EPUBCheck Server.

A single catch-all route serves every path. POST requests are handed to the
app's worker pool; any other method is rejected with an empty 405 before the
body is read.
"""

import asyncio

from fastapi import APIRouter, Request, Response

from ..core.handler import ValidationRequestHandler, ValidationResponse
from ..core.pool import WorkerPool

router = APIRouter()

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def to_response(result: ValidationResponse) -> Response:
    """Convert a handler result into a FastAPI response."""
    return Response(content=result.body, status_code=result.status_code, media_type=result.content_type)


@router.api_route("/{path:path}", methods=ROUTED_METHODS, include_in_schema=False)
async def validate(request: Request) -> Response:
    """Validate the file whose path is the request body."""
    handler: ValidationRequestHandler = request.app.state.handler
    pool: WorkerPool = request.app.state.pool

    rejection = handler.check_method(request.method)
    if rejection is not None:
        return to_response(rejection)

    body = await request.body()
    result = await asyncio.wrap_future(pool.submit(handler.handle, request.method, body))
    return to_response(result)
