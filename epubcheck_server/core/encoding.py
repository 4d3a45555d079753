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
Request body decoding and the not-found payload encoder.
"""

import re

from ..config.constants import EpubcheckServerConstants

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def decode_path(body: bytes) -> str:
    """Decode a request body into a candidate file path.

    The body is read as UTF-8 lines which are rejoined with ``"\\n"``: any
    line terminator becomes ``"\\n"`` and a single trailing terminator is
    dropped. An empty body yields ``""``.

    >>> decode_path(b"/tmp/book.epub\\r\\n")
    '/tmp/book.epub'
    """
    text = body.decode("utf-8", errors="replace")
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return "\n".join(lines)


def escape_json_string(value: str) -> str:
    """Escape backslashes and double quotes, and nothing else.

    Backslashes are escaped first so the quote escapes are not doubled.
    Control characters pass through unchanged; the result is only valid JSON
    string content when ``value`` contains none.

    >>> escape_json_string('a"b\\\\c')
    'a\\\\"b\\\\\\\\c'
    """
    return value.replace("\\", "\\\\").replace('"', '\\"')


def not_found_body(path: str) -> bytes:
    """Build the 400 payload ``{ "message": "File not found: <path>" }``."""
    message = escape_json_string(EpubcheckServerConstants.NOT_FOUND_PREFIX + path)
    return f'{{ "message": "{message}" }}'.encode()
