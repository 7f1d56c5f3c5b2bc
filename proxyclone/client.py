# client.py -- Proxy aware repository client
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

"""Repository client that sends its HTTP(S) traffic through configured proxies.

The git side of things (smart HTTP protocol, object store, checkout) is
handled by dulwich. This module only decides which urllib3 pool manager
dulwich gets to use, based on a :class:`proxyclone.config.ProxyConfig` and
the proxy credentials in a :class:`proxyclone.credentials.CredentialStore`.
"""

__all__ = [
    "RepositoryClient",
    "default_pool_manager",
    "humanish_name",
    "is_empty",
    "proxy_url_for",
    "working_branch",
]

from typing import BinaryIO, Optional, Union
from urllib.parse import urlsplit

import urllib3
from dulwich import porcelain
from dulwich.repo import Repo

from . import version_string
from .config import ProxyConfig
from .credentials import CredentialStore
from .log_utils import getLogger
from .proxy import ProtocolScheme

logger = getLogger(__name__)

HEAD = b"HEAD"
LOCAL_BRANCH_PREFIX = b"refs/heads/"


def default_user_agent_string() -> str:
    return "proxyclone/" + version_string()


def _format_host(host: str) -> str:
    if ":" in host:
        # IPv6 literal
        return f"[{host}]"
    return host


def proxy_url_for(config: ProxyConfig, scheme: str) -> Optional[str]:
    """Return the URL of the proxy configured for ``scheme``, if any.

    Proxies are always spoken to in plain HTTP; for https the proxy is
    asked to tunnel with CONNECT.
    """
    host = config.proxy_host(scheme)
    if not host:
        return None
    port = config.proxy_port(scheme) or ProtocolScheme(scheme).default_port
    return f"http://{_format_host(host)}:{port}"


def default_pool_manager(
    config: ProxyConfig,
    credential_store: CredentialStore,
    base_url: str,
    pool_manager_cls: Optional[type] = None,
    proxy_manager_cls: Optional[type] = None,
) -> Union["urllib3.ProxyManager", "urllib3.PoolManager"]:
    """Return urllib3 connection pool manager for requests to ``base_url``.

    Args:
      config: Proxy configuration
      credential_store: Proxy credentials
      base_url: URL of the repository that will be accessed
      pool_manager_cls: Pool manager class to use
      proxy_manager_cls: Proxy manager class to use

    Returns:
      Either proxy_manager_cls (defaults to `urllib3.ProxyManager`) instance
      when a proxy is configured for the scheme of base_url, or
      pool_manager_cls (defaults to `urllib3.PoolManager`) instance otherwise
    """
    headers = {"User-agent": default_user_agent_string()}
    scheme = urlsplit(base_url).scheme.lower()

    proxy_server = None
    if scheme in ("http", "https"):
        proxy_server = proxy_url_for(config, scheme)

    if proxy_server is not None:
        if proxy_manager_cls is None:
            proxy_manager_cls = urllib3.ProxyManager
        host = config.proxy_host(scheme)
        # Credentials are cached under the port exactly as configured.
        proxy_headers = credential_store.proxy_headers(
            host, config.proxy_port(scheme)
        )
        logger.debug("Using proxy %s for %s", proxy_server, base_url)
        return proxy_manager_cls(
            proxy_server, proxy_headers=proxy_headers, headers=headers
        )

    if pool_manager_cls is None:
        pool_manager_cls = urllib3.PoolManager
    return pool_manager_cls(headers=headers)


def humanish_name(url: str) -> str:
    """Guess the directory-like name of a repository from its URL.

    ``https://example.com/jelmer/dulwich.git`` gives ``dulwich``.

    Raises:
      ValueError: if the URL has no usable path component
    """
    path = urlsplit(url).path if "://" in url else url
    path = path.replace("\\", "/").rstrip("/")
    if path.endswith("/.git"):
        path = path[: -len("/.git")]
    name = path.rsplit("/", 1)[-1]
    # scp-style locations (host:path/to/repo)
    name = name.rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise ValueError(f"Unable to derive a repository name from {url!r}")
    return name


def working_branch(repo: Repo) -> str:
    """Return the short name of the branch HEAD points at.

    When HEAD is detached, the hex SHA it points at is returned instead.
    """
    refnames, sha = repo.refs.follow(HEAD)
    target = refnames[-1]
    if target.startswith(LOCAL_BRANCH_PREFIX):
        return target[len(LOCAL_BRANCH_PREFIX) :].decode("utf-8")
    if target == HEAD and sha is not None:
        return sha.decode("ascii")
    return target.decode("utf-8")


def is_empty(repo: Repo) -> bool:
    """Check whether HEAD of a repository does not resolve to a commit."""
    try:
        repo.head()
    except KeyError:
        return True
    return False


class RepositoryClient:
    """Clone repositories, using the proxies from a ProxyConfig.

    The configuration is frozen when the client is created: proxy settings
    have to be complete before the first request goes out.
    """

    def __init__(
        self,
        config: ProxyConfig,
        credential_store: CredentialStore,
        errstream: Optional[BinaryIO] = None,
    ) -> None:
        config.freeze()
        self.config = config
        self.credential_store = credential_store
        self.errstream = errstream

    def pool_manager(self, url: str) -> Union["urllib3.ProxyManager", "urllib3.PoolManager"]:
        return default_pool_manager(self.config, self.credential_store, url)

    def clone(
        self,
        url: str,
        target: str,
        branch: Optional[str] = None,
        origin: str = "origin",
        bare: bool = False,
        checkout: Optional[bool] = None,
    ) -> Repo:
        """Clone a repository.

        Args:
          url: URL of the repository to clone
          target: Directory to clone into; may already exist if empty
          branch: Branch to check out instead of the remote HEAD
          origin: Name of the remote
          bare: Whether to create a bare repository
          checkout: Whether to check out HEAD, defaults to not bare
        Returns: The new repository
        """
        errstream = self.errstream
        if errstream is None:
            errstream = porcelain.NoneStream()
        transport_kwargs = {}
        if urlsplit(url).scheme.lower() in ("http", "https"):
            transport_kwargs["pool_manager"] = self.pool_manager(url)
        logger.debug("Cloning %s into %s", url, target)
        return porcelain.clone(
            url,
            target,
            bare=bare,
            checkout=checkout,
            errstream=errstream,
            origin=origin,
            branch=branch,
            **transport_kwargs,
        )
