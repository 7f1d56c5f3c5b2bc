# __init__.py -- The tests for proxyclone
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

"""Tests for proxyclone."""

import os
import shutil
import tempfile
import unittest
from typing import Optional
from unittest import SkipTest, skipIf  # noqa: F401
from unittest import TestCase as _TestCase

PROXY_VARIABLES = ("http_proxy", "https_proxy", "HTTPS_PROXY", "GIT_TRACE")


class TestCase(_TestCase):
    """Base test case with an isolated HOME and proxy environment."""

    def setUp(self) -> None:
        super().setUp()
        self._old_env: dict[str, Optional[str]] = {}
        home = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, home)
        self.overrideEnv("HOME", home)
        for name in PROXY_VARIABLES:
            self.overrideEnv(name, None)

    def tearDown(self) -> None:
        for name, value in self._old_env.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
        super().tearDown()

    def overrideEnv(self, name: str, value: Optional[str]) -> None:
        """Set (or with None, unset) an environment variable for this test."""
        if name not in self._old_env:
            self._old_env[name] = os.environ.get(name)
        if value is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = value


def self_test_suite() -> unittest.TestSuite:
    names = [
        "cli",
        "client",
        "config",
        "credentials",
        "log_utils",
        "proxy",
    ]
    module_names = ["tests.test_" + name for name in names]
    loader = unittest.TestLoader()
    return loader.loadTestsFromNames(module_names)


def test_suite() -> unittest.TestSuite:
    return self_test_suite()
