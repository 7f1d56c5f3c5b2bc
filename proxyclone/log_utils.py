# log_utils.py -- Logging utilities for proxyclone
# Copyright (C) 2026 The proxyclone authors
#
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later
# proxyclone is dual-licensed under the Apache License, Version 2.0 and the GNU
# General Public License as published by the Free Software Foundation; version 2.0
# or (at your option) any later version. You can redistribute it and/or
# modify it under the terms of either of these two licenses.
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# You should have received a copy of the licenses; if not, see
# <http://www.gnu.org/licenses/> for a copy of the GNU General Public License
# and <http://www.apache.org/licenses/LICENSE-2.0> for a copy of the Apache
# License, Version 2.0.
#

"""Logging utilities for proxyclone.

The package is usable as a library, so by default nothing it logs reaches
the user: the ``proxyclone`` logger carries a no-op handler until an
application configures logging, for example through
:func:`default_logging_config` as the command line interface does.

Tracing follows git's convention: when ``GIT_TRACE`` is ``1``, ``2`` or
``true`` debug output goes to stderr, and when it is an absolute path the
output is appended to that file.
"""

import logging
import os
import sys
from typing import Optional, Union

getLogger = logging.getLogger

TRACE_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


class _NullHandler(logging.Handler):
    """No-op logging handler to avoid unexpected logging warnings."""

    def emit(self, record: logging.LogRecord) -> None:
        pass


_NULL_HANDLER = _NullHandler()
_PROXYCLONE_LOGGER = getLogger("proxyclone")
_PROXYCLONE_LOGGER.addHandler(_NULL_HANDLER)


def _get_trace_target() -> Optional[Union[str, int]]:
    """Work out where GIT_TRACE output should go.

    Returns:
      None when tracing is disabled, 2 for stderr, or the path of a file.
    """
    trace_value = os.environ.get("GIT_TRACE", "")
    if trace_value.lower() in ("", "0", "false"):
        return None
    if trace_value.lower() in ("1", "2", "true"):
        return 2
    if os.path.isabs(trace_value):
        return trace_value
    return None


def default_logging_config(verbose: bool = False) -> None:
    """Set up the default proxyclone loggers.

    Args:
      verbose: Log at DEBUG rather than INFO level.
    """
    remove_null_handler()

    trace_target = _get_trace_target()
    if trace_target == 2:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=TRACE_FORMAT)
    elif isinstance(trace_target, str):
        try:
            logging.basicConfig(
                level=logging.DEBUG,
                filename=trace_target,
                filemode="a",
                format=TRACE_FORMAT,
            )
        except OSError as e:
            sys.stderr.write(
                f"Warning: Failed to open GIT_TRACE file {trace_target}: {e}\n"
            )
            trace_target = None
    if trace_target is None:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            stream=sys.stderr,
            format="%(levelname)s: %(message)s",
        )


def remove_null_handler() -> None:
    """Remove the null handler from the proxyclone logger."""
    _PROXYCLONE_LOGGER.removeHandler(_NULL_HANDLER)
