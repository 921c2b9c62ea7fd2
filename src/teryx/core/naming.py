# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/teryx/core/naming.py

"""
Name, URL and path construction shared by the workflows.

Everything here is pure string/path manipulation; nothing touches the
filesystem or runs a program.
"""

import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from teryx.system.exceptions import ValidationError

FOSSIL_SUFFIX = ".fossil"
WEB_UI_SUFFIX = "/home"


def normalize_repo_name(name: str) -> str:
    """Append .fossil unless the name already ends with it."""
    if name.endswith(FOSSIL_SUFFIX):
        return name
    return name + FOSSIL_SUFFIX


def strip_fossil_suffix(name: str) -> str:
    if name.endswith(FOSSIL_SUFFIX):
        return name[:-len(FOSSIL_SUFFIX)]
    return name


def relative_repo_path(repo_file: str) -> str:
    """Path of a repository file as seen from its sibling checkout directory."""
    return str(Path("..") / repo_file)


def strip_home_suffix(url: str) -> str:
    """Remove one trailing /home segment (the web UI landing page) from a URL."""
    if url.endswith(WEB_UI_SUFFIX):
        return url[:-len(WEB_UI_SUFFIX)]
    return url


def split_destination(destination: str) -> tuple[str, str]:
    """Split user@host:path on the first colon.

    Returns:
        (user_host, remote_path)

    Raises:
        ValidationError: If there is no colon or nothing before it
    """
    user_host, sep, remote_path = destination.partition(":")
    if not sep:
        raise ValidationError(
            f"Invalid destination format '{destination}'. Expected user@host:path"
        )
    if not user_host:
        raise ValidationError(
            f"Invalid destination format '{destination}': missing user@host before ':'"
        )
    return user_host, remote_path


def remote_file_path(remote_path: str, local_file: str) -> str:
    """Where a transferred file ends up on the server."""
    return posixpath.join(remote_path, posixpath.basename(local_file))


def build_remediation_command(user_host: str, remote_path: str, remote_user: str) -> str:
    """Shell command that fixes ownership and mode of a transferred repository.

    ssh -t forces a pseudo-terminal so sudo on the server can prompt for a
    password.
    """
    owner = f"{remote_user}:{remote_user}"
    return (
        f'ssh -t {user_host} "sudo chown {owner} {remote_path} '
        f'&& sudo chmod 664 {remote_path}"'
    )


@dataclass(frozen=True)
class CloneLayout:
    """Local placement of a cloned repository.

    target_dir mirrors the server side: <fossils>/<host>/<parent of url path>.
    The repository file lives in target_dir, its checkout in
    target_dir/<repo_base>.
    """
    clean_url: str
    host: str
    auth_url: str
    target_dir: Path
    repo_base: str

    @property
    def repo_file(self) -> str:
        return self.repo_base + FOSSIL_SUFFIX

    @property
    def checkout_dir(self) -> Path:
        return self.target_dir / self.repo_base


@dataclass(frozen=True)
class CloneSource:
    """A validated clone URL, split into the pieces the layout needs.

    url_path is percent-decoded and has no leading or trailing "/";
    host keeps the case it was given in.
    """
    clean_url: str
    scheme: str
    host: str
    host_port: str
    raw_path: str
    url_path: str
    query: str
    fragment: str


def _hostname(host_port: str) -> str:
    if host_port.startswith("["):
        end = host_port.find("]")
        return host_port[1:end] if end != -1 else host_port[1:]
    return host_port.partition(":")[0]


def parse_clone_url(clean_url: str) -> CloneSource:
    """Validate a URL, already stripped of its /home suffix, as a clone source.

    Raises:
        ValidationError: If the URL has no scheme, no host, or a bad port
    """
    try:
        parts = urlsplit(clean_url)
        parts.port  # raises ValueError for a non-numeric or out of range port
    except ValueError as e:
        raise ValidationError(f"Invalid URL '{clean_url}': {e}") from e

    host_port = parts.netloc.rpartition("@")[2]
    host = _hostname(host_port)
    if not parts.scheme or not host:
        raise ValidationError(f"Invalid URL '{clean_url}': expected scheme://host/path")

    return CloneSource(
        clean_url=clean_url,
        scheme=parts.scheme,
        host=host,
        host_port=host_port,
        raw_path=parts.path,
        url_path=unquote(parts.path).strip("/"),
        query=parts.query,
        fragment=parts.fragment
    )


def layout_for_source(source: CloneSource, username: str, fossils_dir: Path) -> CloneLayout:
    """Place an already validated clone source under fossils_dir.

    Raises:
        ValidationError: If the URL path names no repository
    """
    repo_base = strip_fossil_suffix(posixpath.basename(source.url_path))
    if not repo_base:
        raise ValidationError(f"Invalid URL '{source.clean_url}': no repository name in path")

    target_dir = fossils_dir / source.host
    parent = posixpath.dirname(source.url_path)
    if parent:
        target_dir = target_dir / parent

    # Replace any existing user info, keep host, port and path exactly as given
    netloc = f"{quote(username, safe='')}@{source.host_port}"
    auth_url = urlunsplit((source.scheme, netloc, source.raw_path, source.query, source.fragment))

    return CloneLayout(
        clean_url=source.clean_url,
        host=source.host,
        auth_url=auth_url,
        target_dir=target_dir,
        repo_base=repo_base
    )


def compute_clone_layout(url: str, username: str, fossils_dir: Path) -> CloneLayout:
    """Work out where a remote repository is cloned to and how it is addressed.

    Args:
        url: Repository URL as given by the user, possibly ending in /home
        username: Embedded as URL user info; no password is ever embedded
        fossils_dir: Root of the local clone layout (usually ~/fossils)

    Raises:
        ValidationError: If the URL has no scheme, no host, a bad port, or no
            repository path
    """
    return layout_for_source(parse_clone_url(strip_home_suffix(url)), username, fossils_dir)
