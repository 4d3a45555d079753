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
EPUBCheck Server - HTTP front end for EPUBCheck file validation.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m epubcheck_server.cli.cli`` from importing FastAPI and
    uvicorn before the arguments are parsed.
    """
    _lazy_map = {
        "ServerConfig": (".config.config", "ServerConfig"),
        "EpubcheckServerConstants": (".config.constants", "EpubcheckServerConstants"),
        "ValidationRequestHandler": (".core.handler", "ValidationRequestHandler"),
        "ValidationResponse": (".core.handler", "ValidationResponse"),
        "WorkerPool": (".core.pool", "WorkerPool"),
        "EpubcheckValidator": (".core.validator", "EpubcheckValidator"),
        "ReportSettings": (".core.validator", "ReportSettings"),
        "ReportingLevel": (".core.validator", "ReportingLevel"),
        "Validator": (".core.validator", "Validator"),
        "create_app": (".api.api", "create_app"),
        "run_server": (".api.api_server", "run_server"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ServerConfig",
    "EpubcheckServerConstants",
    "ValidationRequestHandler",
    "ValidationResponse",
    "WorkerPool",
    "EpubcheckValidator",
    "ReportSettings",
    "ReportingLevel",
    "Validator",
    "create_app",
    "run_server",
]
