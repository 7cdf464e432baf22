from .cache import (
    CloneError,
    PullError,
    TargetExistsError,
    clone_repo,
    ensure_local,
    pull_repo,
)
from .origin import (
    DirectoryOrigin,
    DotfilesOrigin,
    InvalidOriginError,
    RepositoryOrigin,
    classify_origin,
    is_repo_shorthand,
    is_repo_url,
    ssh_url_from_shorthand,
)

__all__ = [
    "CloneError",
    "PullError",
    "TargetExistsError",
    "clone_repo",
    "ensure_local",
    "pull_repo",
    "DirectoryOrigin",
    "DotfilesOrigin",
    "InvalidOriginError",
    "RepositoryOrigin",
    "classify_origin",
    "is_repo_shorthand",
    "is_repo_url",
    "ssh_url_from_shorthand",
]
