import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..utils import default_location, resolve_path

_OWNER = r"[A-Za-z0-9-]+"
# all-dot names ("." or "..") are not repositories
_REPO = r"(?!\.*\.git$)[A-Za-z0-9_.-]+?"

_SSH_URL_RE = re.compile(rf"git@github\.com:(?P<owner>{_OWNER})/(?P<repo>{_REPO})\.git")
_HTTPS_URL_RE = re.compile(
    rf"https://github\.com/(?P<owner>{_OWNER})/(?P<repo>{_REPO})\.git"
)
_SHORTHAND_RE = re.compile(
    rf"(?P<owner>{_OWNER})/(?P<repo>(?!\.*(?:\.git)?$)[A-Za-z0-9_.-]+)"
)


class InvalidOriginError(ValueError):
    pass


@dataclass(frozen=True)
class DirectoryOrigin:
    path: Path


@dataclass(frozen=True)
class RepositoryOrigin:
    clone_url: str
    destination: Path


DotfilesOrigin = Union[DirectoryOrigin, RepositoryOrigin]


def _log(message: str) -> None:
    from ..runtime import get_verbose_logging

    if get_verbose_logging():
        print(f"[origin] {message}", file=sys.stderr, flush=True)


def is_repo_url(value: str) -> bool:
    return any(
        pattern.fullmatch(value) is not None for pattern in (_SSH_URL_RE, _HTTPS_URL_RE)
    )


def is_repo_shorthand(value: str) -> bool:
    """``<owner>/<repo>`` that does not also name an existing path."""
    if os.path.exists(value):
        return False
    return _SHORTHAND_RE.fullmatch(value) is not None


def ssh_url_from_shorthand(value: str) -> str:
    match = _SHORTHAND_RE.fullmatch(value)
    if match is None:
        raise InvalidOriginError(f"Not a <owner>/<repo> shorthand: {value}")
    repo = match["repo"]
    if repo.endswith(".git"):
        repo = repo[:-4]
    return f"git@github.com:{match['owner']}/{repo}.git"


def classify_origin(raw: str, destination: str | Path | None = None) -> DotfilesOrigin:
    """
    Classify ``raw`` as a local directory or a GitHub repository.

    Checked in order: an existing directory (after ``~`` expansion), a full
    SSH/HTTPS clone URL, then the ``<owner>/<repo>`` shorthand which is
    expanded to the SSH form. Repository origins are materialized at
    ``destination``, or the configured default location when omitted.
    """
    if not raw:
        raise InvalidOriginError("Invalid path or url: empty origin")

    resolved = resolve_path(raw)
    if resolved.is_dir():
        origin: DotfilesOrigin = DirectoryOrigin(resolved)
    elif is_repo_url(raw):
        origin = RepositoryOrigin(raw, _destination(destination))
    elif is_repo_shorthand(raw):
        origin = RepositoryOrigin(ssh_url_from_shorthand(raw), _destination(destination))
    else:
        raise InvalidOriginError(f"Invalid path or url: {raw}")

    _log(f"{raw!r} -> {origin}")
    return origin


def _destination(destination: str | Path | None) -> Path:
    if destination is None:
        return default_location()
    return resolve_path(destination)
