# config.py -- Proxy configuration for proxyclone
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

"""Process-wide proxy configuration.

A :class:`ProxyConfig` holds ``<scheme>.proxyHost`` and
``<scheme>.proxyPort`` settings. Values may come from the command line
(``-c http.proxyHost=proxy.example.com``) or be filled in from the
environment by :func:`proxyclone.proxy.configure_http_proxy`.

The configuration is written once, on the startup path, and then handed to
a :class:`proxyclone.client.RepositoryClient`, which freezes it. Any later
write raises :class:`proxyclone.errors.ConfigFrozenError`.
"""

__all__ = [
    "PROXY_HOST",
    "PROXY_PORT",
    "ProxyConfig",
    "parse_config_option",
    "scheme_key",
]

from collections.abc import Iterable, Iterator, Mapping
from typing import Optional

from .errors import ConfigFrozenError, InvalidConfigOption

PROXY_HOST = "proxyHost"
PROXY_PORT = "proxyPort"


def scheme_key(scheme: str, name: str) -> str:
    """Return the scheme-qualified configuration key, e.g. ``http.proxyHost``."""
    return f"{scheme}.{name}"


def parse_config_option(option: str) -> tuple[str, str]:
    """Parse a ``key=value`` command line option.

    Args:
      option: Option string, split on the first ``=``
    Returns: Tuple with key and value
    Raises:
      InvalidConfigOption: if there is no ``=`` or the key is empty
    """
    key, sep, value = option.partition("=")
    key = key.strip()
    if not sep:
        raise InvalidConfigOption(option)
    if not key:
        raise InvalidConfigOption(option, "empty key")
    return key, value.strip()


class ProxyConfig:
    """Proxy settings keyed by ``<scheme>.<name>``."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: dict[str, str] = {}
        self._frozen = False
        if values:
            for key, value in values.items():
                self.set(key, value)

    @classmethod
    def from_options(cls, options: Iterable[str]) -> "ProxyConfig":
        """Create a configuration from ``key=value`` strings.

        Later options override earlier ones for the same key.
        """
        config = cls()
        for option in options:
            config.set(*parse_config_option(option))
        return config

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._values!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__) and other._values == self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def get(self, key: str) -> str:
        """Retrieve a setting.

        Raises:
          KeyError: if the key is not set
        """
        return self._values[key]

    def set(self, key: str, value: str) -> None:
        """Set a setting.

        Raises:
          ConfigFrozenError: if the configuration has been frozen
          InvalidConfigOption: if a port value is not an integer
        """
        if self._frozen:
            raise ConfigFrozenError(key)
        if key.endswith("." + PROXY_PORT):
            try:
                port = int(value)
            except ValueError:
                raise InvalidConfigOption(
                    f"{key}={value}", "port must be an integer"
                ) from None
            if not 0 <= port <= 65535:
                raise InvalidConfigOption(
                    f"{key}={value}", "port out of range 0-65535"
                )
        self._values[key] = str(value)

    def freeze(self) -> None:
        """Reject any further writes."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_set(self, scheme: str) -> bool:
        """Check whether a proxy host was configured for ``scheme``."""
        return scheme_key(scheme, PROXY_HOST) in self._values

    def proxy_host(self, scheme: str) -> Optional[str]:
        return self._values.get(scheme_key(scheme, PROXY_HOST))

    def proxy_port(self, scheme: str) -> int:
        """Return the configured proxy port, or 0 when none was set."""
        try:
            return int(self._values[scheme_key(scheme, PROXY_PORT)])
        except KeyError:
            return 0
