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


"""Command-line interface for EPUBCheck Server."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from ..config.config import ServerConfig
from ..config.constants import EpubcheckServerConstants
from ..core.exceptions import BindError, ConfigurationError

logger = logging.getLogger("epubcheck_server.cli")


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def _timeout(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if not math.isfinite(seconds) or seconds <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of seconds: {value!r}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Defaults are ``None`` so that unset flags keep the config values."""
    parser = _ArgumentParser(
        prog="epubcheck-server",
        allow_abbrev=False,
        description="EPUBCheck Server - validate EPUB files over HTTP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  epubcheck-server
  epubcheck-server --hostname 0.0.0.0 --port 8080 --threads 8
  curl -X POST --data /tmp/book.epub http://localhost:8003/
        """,
    )
    parser.add_argument(
        "-H",
        "--hostname",
        metavar="HOSTNAME",
        help=f"Hostname to bind to (default: {EpubcheckServerConstants.DEFAULT_HOSTNAME})",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        metavar="PORT",
        help=f"Port to bind to (default: {EpubcheckServerConstants.DEFAULT_PORT})",
    )
    parser.add_argument(
        "-t",
        "--threads",
        type=_positive_int,
        metavar="THREADS",
        help=f"Number of threads to use (default: {EpubcheckServerConstants.DEFAULT_THREADS})",
    )
    parser.add_argument(
        "--timeout", type=_timeout, metavar="SECONDS", help="Abort a validation after this many seconds (default: never)"
    )
    parser.add_argument("--env-file", metavar="PATH", help="Load EPUBCHECK_SERVER_* settings from a .env file")
    return parser


def load_config(args: argparse.Namespace) -> ServerConfig:
    """Resolve the configuration: defaults, then environment / .env file, then flags."""
    base = ServerConfig.from_file(Path(args.env_file)) if args.env_file else ServerConfig.from_env()
    return base.with_overrides(
        host=args.hostname,
        port=args.port,
        threads=args.threads,
        validation_timeout=args.timeout,
    )


def _configure_logging() -> None:
    logging.basicConfig(stream=sys.stdout, format="%(message)s", level=logging.INFO)


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        parser.error(str(e))

    _configure_logging()

    # Deferred so that --help and usage errors do not pay for the FastAPI import.
    from ..api.api_server import run_server

    logger.info("Starting server on %s:%d", config.host, config.port)
    try:
        run_server(config)
    except BindError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
