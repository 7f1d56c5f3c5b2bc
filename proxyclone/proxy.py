# proxy.py -- HTTP proxy configuration from the environment
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

"""Configure HTTP(S) proxies from ``http_proxy`` and ``https_proxy``.

libcurl, and therefore C git, honours the ``http_proxy`` and
``https_proxy`` environment variables to reach the network from behind a
firewall. This module copies the information found in those variables into
a :class:`proxyclone.config.ProxyConfig`, unless the configuration already
has a proxy host for the scheme: explicit configuration takes precedence
over the environment.

Values follow the usual ``[scheme://][user:pass@]host[:port]`` convention.
A value without a scheme is interpreted using the scheme it configures.
"""

__all__ = [
    "PROXY_ENVIRONMENT_VARIABLES",
    "ProtocolScheme",
    "ProxySetting",
    "apply",
    "configure_http_proxy",
    "parse_proxy_spec",
    "resolve",
]

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
from urllib.parse import unquote, urlsplit

from .config import PROXY_HOST, PROXY_PORT, ProxyConfig, scheme_key
from .credentials import CredentialStore
from .errors import InvalidProxySpec
from .log_utils import getLogger

logger = getLogger(__name__)


class ProtocolScheme(Enum):
    """URL schemes a proxy can be configured for."""

    HTTP = "http"
    HTTPS = "https"

    @property
    def default_port(self) -> int:
        return 443 if self is ProtocolScheme.HTTPS else 80


# Variables are consulted in order; a later one only when the earlier ones
# are unset. HTTPS_PROXY is a historical alias with no http counterpart.
PROXY_ENVIRONMENT_VARIABLES: dict[ProtocolScheme, tuple[str, ...]] = {
    ProtocolScheme.HTTP: ("http_proxy",),
    ProtocolScheme.HTTPS: ("https_proxy", "HTTPS_PROXY"),
}

SUPPORTED_PROXY_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class ProxySetting:
    """Proxy to use for one scheme.

    Attributes:
      host: Proxy host name
      port: Proxy port, 0 for the default port of the scheme
      credentials: Optional (username, password) pair
    """

    host: str
    port: int = 0
    credentials: Optional[tuple[str, str]] = field(default=None, repr=False)


SchemeLike = Union[ProtocolScheme, str]


def _lookup_proxy_value(
    scheme: ProtocolScheme, env_lookup: Callable[[str], Optional[str]]
) -> Optional[str]:
    for name in PROXY_ENVIRONMENT_VARIABLES[scheme]:
        value = env_lookup(name)
        if value is not None:
            return value
    return None


def parse_proxy_spec(value: str, scheme: SchemeLike) -> ProxySetting:
    """Parse a proxy specification such as ``user:pass@proxy:3128``.

    Args:
      value: Proxy specification, with or without a scheme
      scheme: Scheme the proxy is for; used when ``value`` has none
    Returns: A ProxySetting
    Raises:
      InvalidProxySpec: if value is not usable as an HTTP(S) proxy URL
    """
    scheme = ProtocolScheme(scheme)
    url = value if "://" in value else f"{scheme.value}://{value}"
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError as e:
        raise InvalidProxySpec(value, str(e)) from e

    if parsed.scheme not in SUPPORTED_PROXY_SCHEMES:
        raise InvalidProxySpec(value, "only HTTP proxies are supported")
    if not parsed.hostname:
        raise InvalidProxySpec(value, "no proxy host given")

    credentials = None
    userinfo, sep, _ = parsed.netloc.rpartition("@")
    if sep and ":" in userinfo:
        # Passwords may contain colons, usernames may not.
        username, _, password = userinfo.partition(":")
        credentials = (unquote(username), unquote(password))
        # Basic proxy authentication is sent latin-1 encoded.
        try:
            ":".join(credentials).encode("latin-1")
        except UnicodeEncodeError:
            raise InvalidProxySpec(
                value, "credentials must be representable in latin-1"
            ) from None

    return ProxySetting(parsed.hostname, port or 0, credentials)


def resolve(
    scheme: SchemeLike,
    existing_config: Callable[[ProtocolScheme], bool],
    env_lookup: Callable[[str], Optional[str]],
) -> Optional[ProxySetting]:
    """Work out the proxy to use for a scheme.

    Args:
      scheme: Scheme to resolve the proxy for
      existing_config: Callable returning whether a proxy is already
        configured for a scheme
      env_lookup: Callable mapping an environment variable name to its
        value, or None when unset (e.g. ``os.environ.get``)
    Returns: A ProxySetting, or None if no proxy should be configured
    Raises:
      InvalidProxySpec: if the environment value is not an HTTP(S) proxy
    """
    scheme = ProtocolScheme(scheme)
    if existing_config(scheme):
        return None
    value = _lookup_proxy_value(scheme, env_lookup)
    if not value:
        return None
    return parse_proxy_spec(value, scheme)


def apply(
    setting: ProxySetting,
    scheme: SchemeLike,
    config_sink: ProxyConfig,
    credential_store: CredentialStore,
) -> None:
    """Record a proxy setting in the configuration and credential store."""
    scheme = ProtocolScheme(scheme)
    config_sink.set(scheme_key(scheme.value, PROXY_HOST), setting.host)
    if setting.port > 0:
        config_sink.set(scheme_key(scheme.value, PROXY_PORT), str(setting.port))
    if setting.credentials is not None:
        username, password = setting.credentials
        credential_store.add(setting.host, setting.port, username, password)


def configure_http_proxy(
    config: ProxyConfig,
    credential_store: CredentialStore,
    environ: Optional[Mapping[str, str]] = None,
) -> dict[ProtocolScheme, ProxySetting]:
    """Configure proxies for all schemes from the environment.

    This has to run before the first request is sent. Schemes that already
    have a proxy host in ``config`` are left alone.

    Args:
      config: Configuration to update
      credential_store: Store to record proxy credentials in
      environ: Environment to read, defaults to ``os.environ``
    Returns: Dictionary mapping schemes to the settings that were applied
    Raises:
      InvalidProxySpec: if a proxy variable is malformed. Settings for
        schemes handled before the malformed one have been applied.
    """
    if environ is None:
        environ = os.environ

    applied: dict[ProtocolScheme, ProxySetting] = {}
    for scheme in ProtocolScheme:
        setting = resolve(
            scheme, lambda s: config.is_set(s.value), environ.get
        )
        if setting is None:
            continue
        apply(setting, scheme, config, credential_store)
        logger.debug(
            "Using %s proxy %s:%d%s",
            scheme.value,
            setting.host,
            setting.port or scheme.default_port,
            " with credentials" if setting.credentials else "",
        )
        applied[scheme] = setting
    return applied
