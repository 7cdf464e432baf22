import os
import subprocess
import sys
from pathlib import Path
from typing import Callable

from .origin import DirectoryOrigin, DotfilesOrigin, RepositoryOrigin

Runner = Callable[..., subprocess.CompletedProcess]
CloneFn = Callable[[str, Path], Path]


class CloneError(RuntimeError):
    pass


class PullError(CloneError):
    pass


class TargetExistsError(FileExistsError):
    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(f"Target path {os.fspath(path)} already exists")
        self.path = Path(path)


def _log(message: str) -> None:
    from ..runtime import get_verbose_logging

    if get_verbose_logging():
        print(f"[git] {message}", file=sys.stderr, flush=True)


def clone_repo(
    url: str, destination: str | os.PathLike[str], runner: Runner | None = None
) -> Path:
    """
    Clone ``url`` into ``destination`` with a single ``git clone``.

    Refuses to touch an existing destination; git is never spawned in that
    case.
    """
    dest = Path(destination)
    if os.path.lexists(dest):
        raise TargetExistsError(dest)

    run = runner or subprocess.run
    os.makedirs(dest.parent, exist_ok=True)
    _log(f"cloning {url} into {dest}")
    try:
        result = run(["git", "clone", url, str(dest)], check=False)
    except OSError as exc:
        raise CloneError(f"Failed to clone repository {url}: {exc}") from exc
    if result.returncode != 0:
        raise CloneError(f"Failed to clone repository {url}")
    _log("done")
    return dest


def pull_repo(directory: str | os.PathLike[str], runner: Runner | None = None) -> None:
    run = runner or subprocess.run
    _log(f"pulling {directory}")
    try:
        result = run(["git", "-C", os.fspath(directory), "pull"], check=False)
    except OSError as exc:
        raise PullError(f"git pull failed in {directory}: {exc}") from exc
    if result.returncode != 0:
        raise PullError(f"git pull failed in {directory}")


def ensure_local(origin: DotfilesOrigin, clone: CloneFn | None = None) -> Path:
    """Return a local directory for ``origin``, cloning repositories on first use."""
    if isinstance(origin, DirectoryOrigin):
        return origin.path
    if not isinstance(origin, RepositoryOrigin):
        raise TypeError(f"Unknown dotfiles origin: {origin!r}")

    # an existing destination is assumed to be a previous clone
    if os.path.exists(origin.destination):
        _log(f"using existing clone at {origin.destination}")
        return origin.destination

    do_clone = clone or clone_repo
    do_clone(origin.clone_url, origin.destination)
    return origin.destination
