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
Tests for the HTTP surface.

Tests cover the three outcomes (200, 400, 405), response framing and
request isolation under concurrency.
"""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from epubcheck_server.api.api import create_app
from epubcheck_server.config.config import ServerConfig
from epubcheck_server.core.validator import ReportSettings, Validator


# =============================================================================
# Success path
# =============================================================================
class TestValidFile:
    """POST with the path of an existing file."""

    def test_returns_report(self, client, epub_file):
        response = client.post("/", content=str(epub_file))

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        data = response.json()
        assert data["checker"]["filename"] == "book.epub"
        assert data["messages"] == []

    def test_any_path_is_served(self, client, epub_file):
        response = client.post("/validate/some/where", content=str(epub_file))

        assert response.status_code == 200

    def test_trailing_newline_in_body(self, client, fake_validator, epub_file):
        response = client.post("/", content=f"{epub_file}\n")

        assert response.status_code == 200
        assert fake_validator.calls[0][0] == Path(epub_file)

    def test_repeated_requests_are_identical(self, client, epub_file):
        first = client.post("/", content=str(epub_file))
        second = client.post("/", content=str(epub_file))

        assert first.json() == second.json()


# =============================================================================
# Not-found path
# =============================================================================
class TestMissingFile:
    """POST with a path that does not exist."""

    def test_returns_not_found_payload(self, client, fake_validator):
        response = client.post("/", content="/tmp/missing-epubcheck-server-test.epub")

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        assert response.text == '{ "message": "File not found: /tmp/missing-epubcheck-server-test.epub" }'
        assert fake_validator.calls == []

    def test_empty_body(self, client):
        response = client.post("/")

        assert response.status_code == 400
        assert response.text == '{ "message": "File not found: " }'

    def test_quotes_and_backslashes_stay_valid_json(self, client):
        response = client.post("/", content='a"b\\c')

        assert response.status_code == 400
        assert response.text == '{ "message": "File not found: a\\"b\\\\c" }'
        assert response.json() == {"message": 'File not found: a"b\\c'}


# =============================================================================
# Method check
# =============================================================================
class TestMethodNotAllowed:
    """Every method other than POST gets an empty 405."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"])
    def test_routed_methods(self, client, fake_validator, epub_file, method):
        response = client.request(method, "/", content=str(epub_file))

        assert response.status_code == 405
        assert response.content == b""
        assert "content-type" not in response.headers
        assert fake_validator.calls == []

    @pytest.mark.parametrize("method", ["TRACE", "PROPFIND"])
    def test_unrouted_methods(self, client, method):
        response = client.request(method, "/anything")

        assert response.status_code == 405
        assert response.content == b""

    @pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json", "/health"])
    def test_no_get_endpoints(self, client, path):
        response = client.get(path)

        assert response.status_code == 405
        assert response.content == b""


# =============================================================================
# Validator failures
# =============================================================================
class TestValidatorFailure:
    """A failing validator fails its own request only."""

    def test_failure_is_isolated(self, server_config, failing_validator, epub_file, tmp_path):
        client = TestClient(create_app(server_config, validator=failing_validator), raise_server_exceptions=False)

        failed = client.post("/", content=str(epub_file))
        missing = client.post("/", content=str(tmp_path / "missing.epub"))

        assert failed.status_code == 500
        assert missing.status_code == 400


# =============================================================================
# Concurrency
# =============================================================================
class _BarrierValidator(Validator):
    """Only completes once ``parties`` validations are in flight at the same time."""

    def __init__(self, parties: int):
        self.barrier = threading.Barrier(parties, timeout=10)

    def validate(self, path: Path, settings: ReportSettings):
        self.barrier.wait()
        return {"checker": {"filename": settings.label}, "messages": []}


class TestConcurrency:
    """Requests run in parallel on the worker pool."""

    def test_requests_up_to_worker_count_run_in_parallel(self, tmp_path):
        threads = 4
        files = []
        for i in range(threads):
            path = tmp_path / f"book-{i}.epub"
            path.write_bytes(b"epub")
            files.append(path)

        app = create_app(ServerConfig(threads=threads), validator=_BarrierValidator(threads))
        with TestClient(app) as client, ThreadPoolExecutor(max_workers=threads) as executor:
            responses = list(executor.map(lambda p: client.post("/", content=str(p)), files))

        assert [r.status_code for r in responses] == [200] * threads
        assert [r.json()["checker"]["filename"] for r in responses] == [p.name for p in files]

    def test_missing_file_does_not_affect_concurrent_validation(self, tmp_path, epub_file):
        release = threading.Event()

        class _SlowValidator(Validator):
            def validate(self, path, settings):
                release.wait(timeout=10)
                return {"checker": {"filename": settings.label}, "messages": []}

        app = create_app(ServerConfig(threads=2), validator=_SlowValidator())
        with TestClient(app) as client, ThreadPoolExecutor(max_workers=2) as executor:
            slow = executor.submit(client.post, "/", content=str(epub_file))
            missing = client.post("/", content=str(tmp_path / "missing.epub"))
            release.set()
            ok = slow.result(timeout=15)

        assert missing.status_code == 400
        assert ok.status_code == 200
        assert json.loads(ok.content)["checker"]["filename"] == "book.epub"


class TestAppFactory:
    """create_app wiring."""

    def test_lifespan_exit_shuts_down_pool(self, server_config, fake_validator):
        app = create_app(server_config, validator=fake_validator)
        with TestClient(app) as client:
            assert client.post("/").status_code == 400

        with pytest.raises(RuntimeError):
            app.state.pool.submit(str, 1)

    def test_state(self, server_config, fake_validator):
        app = create_app(server_config, validator=fake_validator)

        assert app.state.config is server_config
        assert app.state.pool.workers == server_config.threads
        assert app.state.handler.validator is fake_validator

    def test_defaults_to_epubcheck_validator(self):
        from epubcheck_server.core.validator import EpubcheckValidator

        app = create_app(ServerConfig(validation_timeout=30, epubcheck_command=("java", "-jar", "epubcheck.jar")))

        validator = app.state.handler.validator
        assert isinstance(validator, EpubcheckValidator)
        assert validator.command == ("java", "-jar", "epubcheck.jar")
        assert validator.timeout == 30
