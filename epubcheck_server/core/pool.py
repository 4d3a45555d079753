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
Fixed-size worker pool for request handlers.

At most ``workers`` submitted tasks run at the same time. Further submissions
wait in the executor's queue, which has no upper bound: a saturated pool adds
latency but never rejects work.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

from .exceptions import ConfigurationError

logger = logging.getLogger("epubcheck_server.pool")

T = TypeVar("T")


class WorkerPool:
    """Bounded pool of worker threads with a ``submit`` operation."""

    def __init__(self, workers: int, name: str = "epubcheck-worker"):
        if workers < 1:
            raise ConfigurationError(f"Worker count must be a positive integer, got {workers}")
        self.workers = workers
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=name)

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future[T]:
        """Queue ``fn(*args, **kwargs)`` for the next idle worker."""
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting work; queued tasks that have not started are dropped."""
        logger.debug("Shutting down worker pool (%d workers)", self.workers)
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown(wait=True)
