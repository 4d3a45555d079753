# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from epubcheck_server.api.api import create_app
from epubcheck_server.config.config import ServerConfig
from epubcheck_server.core.validator import ReportSettings, Validator

# ---------------------------------------------------------------------------
# Fake validators
# ---------------------------------------------------------------------------


class FakeValidator(Validator):
    """Validator that records its calls and returns a canned EPUBCheck-like report."""

    def __init__(self):
        self.calls: list[tuple[Path, ReportSettings]] = []
        self._lock = threading.Lock()

    def validate(self, path: Path, settings: ReportSettings) -> dict[str, Any]:
        with self._lock:
            self.calls.append((path, settings))
        return {
            "checker": {"path": str(path), "filename": settings.label, "nFatal": 0, "nError": 0, "nWarning": 0},
            "publication": {"title": "Test Book", "language": settings.locale},
            "messages": [],
        }


class FailingValidator(Validator):
    """Validator that fails internally instead of writing a report."""

    def validate(self, path: Path, settings: ReportSettings) -> dict[str, Any]:
        raise RuntimeError(f"validator crashed on {settings.label}")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_validator() -> FakeValidator:
    return FakeValidator()


@pytest.fixture
def failing_validator() -> FailingValidator:
    return FailingValidator()


@pytest.fixture
def server_config() -> ServerConfig:
    """Default configuration, independent of the test environment."""
    return ServerConfig()


@pytest.fixture
def app(server_config, fake_validator):
    return create_app(server_config, validator=fake_validator)


@pytest.fixture
def client(app):
    """Create test client with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def epub_file(tmp_path) -> Path:
    """An existing file to validate; its content is irrelevant to the fake validator."""
    path = tmp_path / "book.epub"
    path.write_bytes(b"PK\x03\x04mimetypeapplication/epub+zip")
    return path
