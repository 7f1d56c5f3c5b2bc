# test_log_utils.py -- Tests for log_utils.py
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

"""Tests for proxyclone.log_utils."""

import logging
import os
import shutil
import tempfile

from proxyclone.log_utils import (
    _NULL_HANDLER,
    _PROXYCLONE_LOGGER,
    _get_trace_target,
    _NullHandler,
    default_logging_config,
    getLogger,
    remove_null_handler,
)

from . import TestCase


class LogUtilsTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.original_handlers = list(_PROXYCLONE_LOGGER.handlers)
        root_logger = logging.getLogger()
        self.original_root_handlers = list(root_logger.handlers)
        self.original_root_level = root_logger.level
        root_logger.handlers = []

    def tearDown(self) -> None:
        _PROXYCLONE_LOGGER.handlers = self.original_handlers
        root_logger = logging.getLogger()
        for handler in root_logger.handlers:
            if handler not in self.original_root_handlers:
                handler.close()
        root_logger.handlers = self.original_root_handlers
        root_logger.setLevel(self.original_root_level)
        super().tearDown()

    def test_null_handler(self) -> None:
        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="test_log_utils.py",
            lineno=1,
            msg="Test message",
            args=(),
            exc_info=None,
        )
        _NullHandler().emit(record)

    def test_get_logger(self) -> None:
        logger = getLogger("proxyclone.test")
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual("proxyclone.test", logger.name)

    def test_remove_null_handler(self) -> None:
        if _NULL_HANDLER not in _PROXYCLONE_LOGGER.handlers:
            _PROXYCLONE_LOGGER.addHandler(_NULL_HANDLER)
        remove_null_handler()
        self.assertNotIn(_NULL_HANDLER, _PROXYCLONE_LOGGER.handlers)

    def test_trace_target_disabled(self) -> None:
        for value in (None, "", "0", "false", "FALSE", "relative/path"):
            self.overrideEnv("GIT_TRACE", value)
            self.assertIsNone(_get_trace_target())

    def test_trace_target_stderr(self) -> None:
        for value in ("1", "2", "true", "True"):
            self.overrideEnv("GIT_TRACE", value)
            self.assertEqual(2, _get_trace_target())

    def test_trace_target_file(self) -> None:
        path = os.path.join(tempfile.gettempdir(), "proxyclone-trace.log")
        self.overrideEnv("GIT_TRACE", path)
        self.assertEqual(path, _get_trace_target())

    def test_default_logging_config(self) -> None:
        default_logging_config()
        self.assertNotIn(_NULL_HANDLER, _PROXYCLONE_LOGGER.handlers)
        root_logger = logging.getLogger()
        self.assertTrue(root_logger.handlers)
        self.assertEqual(logging.INFO, root_logger.level)

    def test_default_logging_config_verbose(self) -> None:
        default_logging_config(verbose=True)
        self.assertEqual(logging.DEBUG, logging.getLogger().level)

    def test_default_logging_config_trace_file(self) -> None:
        tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, tmpdir)
        path = os.path.join(tmpdir, "trace.log")
        self.overrideEnv("GIT_TRACE", path)
        default_logging_config()
        getLogger("proxyclone.test").debug("traced message")
        for handler in logging.getLogger().handlers:
            handler.flush()
        with open(path) as f:
            self.assertIn("traced message", f.read())
