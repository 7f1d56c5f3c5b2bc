#
# proxyclone - Clone a git repository through environment-configured proxies
# Copyright (C) 2026 The proxyclone authors
# vim: expandtab
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

"""Command-line interface to proxyclone.

Configures HTTP(S) proxies from the environment, clones a repository and
reports the branch that ended up checked out.
"""

__all__ = ["main"]

import argparse
import signal
import sys
import tempfile
from collections.abc import Sequence
from typing import Optional

import urllib3.exceptions
from dulwich import porcelain
from dulwich.client import HTTPProxyUnauthorized, HTTPUnauthorized
from dulwich.errors import GitProtocolError, NotGitRepository

from . import log_utils, version_string
from .client import RepositoryClient, humanish_name, is_empty, working_branch
from .config import ProxyConfig
from .credentials import CredentialStore
from .errors import InvalidConfigOption, InvalidProxySpec
from .proxy import configure_http_proxy

logger = log_utils.getLogger(__name__)

CLONE_ERRORS = (
    GitProtocolError,
    NotGitRepository,
    porcelain.Error,
    HTTPUnauthorized,
    HTTPProxyUnauthorized,
    urllib3.exceptions.HTTPError,
    OSError,
)


def signal_int(signal: int, frame: object) -> None:
    """Handle interrupt signal by exiting.

    Args:
      signal: Signal number
      frame: Current stack frame
    """
    sys.exit(1)


def _error(message: object) -> int:
    sys.stderr.write(f"error: {message}\n")
    return 1


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proxyclone",
        description="Clone a git repository, honouring http_proxy and https_proxy",
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="options",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Set a proxy option, e.g. https.proxyHost=proxy.example.com. "
        "Options set here take precedence over the environment.",
    )
    parser.add_argument(
        "-b",
        "--branch",
        type=str,
        help="Check out branch instead of branch pointed to by remote HEAD",
    )
    parser.add_argument(
        "--origin", type=str, default="origin", help="Name of the remote"
    )
    parser.add_argument(
        "--bare",
        help="Whether to create a bare repository.",
        action="store_true",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Do not report progress"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output"
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + version_string()
    )
    parser.add_argument("source", help="Repository to clone from")
    parser.add_argument(
        "target",
        nargs="?",
        help="Directory to clone into, defaults to a new temporary directory",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the proxyclone CLI.

    Args:
      argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
      Exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    parsed_args = _make_parser().parse_args(argv)
    log_utils.default_logging_config(verbose=parsed_args.verbose)

    # Proxy configuration has to be complete before anything touches the
    # network.
    try:
        config = ProxyConfig.from_options(parsed_args.options)
    except InvalidConfigOption as e:
        return _error(e)
    credential_store = CredentialStore()
    try:
        configure_http_proxy(config, credential_store)
    except InvalidProxySpec as e:
        return _error(e)

    try:
        name = humanish_name(parsed_args.source)
    except ValueError as e:
        return _error(e)
    target = parsed_args.target
    if target is None:
        target = tempfile.mkdtemp(prefix=name)

    out = sys.stdout
    out.write(f"Cloning repository {name} to the target path : {target}\n")
    out.flush()

    errstream = None if parsed_args.quiet else getattr(out, "buffer", None)
    client = RepositoryClient(config, credential_store, errstream=errstream)
    try:
        repo = client.clone(
            parsed_args.source,
            target,
            branch=parsed_args.branch,
            origin=parsed_args.origin,
            bare=parsed_args.bare,
        )
    except CLONE_ERRORS as e:
        logger.debug("Clone of %s failed", parsed_args.source, exc_info=True)
        return _error(e)

    with repo:
        out.write(f"Working branch after clone : {working_branch(repo)}\n")
        if is_empty(repo):
            out.write("Clone empty repository\n")
        out.flush()
    return 0


def _main() -> None:
    signal.signal(signal.SIGINT, signal_int)
    sys.exit(main())


if __name__ == "__main__":
    _main()
