# errors.py -- errors for proxyclone
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

"""proxyclone exception classes."""

__all__ = [
    "ConfigFrozenError",
    "InvalidConfigOption",
    "InvalidProxySpec",
]


class InvalidProxySpec(Exception):
    """A proxy environment value can not be used as an HTTP(S) proxy."""

    def __init__(self, value: str, reason: str) -> None:
        """Initialize an InvalidProxySpec exception.

        Args:
            value: The offending value, as found in the environment.
            reason: Why the value was rejected.
        """
        Exception.__init__(self, f"Invalid proxy specification {value!r}: {reason}")
        self.value = value
        self.reason = reason


class InvalidConfigOption(ValueError):
    """A configuration option is not of the form key=value."""

    def __init__(self, option: str, reason: str = "expected key=value") -> None:
        ValueError.__init__(self, f"Invalid configuration option {option!r}: {reason}")
        self.option = option


class ConfigFrozenError(Exception):
    """Configuration was changed after it was handed to a client."""

    def __init__(self, key: str) -> None:
        Exception.__init__(
            self, f"Configuration is frozen, can not set {key!r}"
        )
        self.key = key
