from pathlib import Path


def link(
    origin: str,
    *,
    destination: str | Path | None = None,
    jobs: int | None = None,
    installed_check=None,
    progress=None,
    clone=None,
):
    """
    Materialize ``origin``, expand its magefile and link every entry.

    Returns one Outcome per manifest entry, in manifest order.
    """
    from .git import classify_origin, ensure_local
    from .link import is_installed, link_all
    from .manifest import expand_manifest, find_manifest

    directory = ensure_local(classify_origin(origin, destination), clone=clone)
    descriptors = expand_manifest(find_manifest(directory), directory)
    return link_all(
        descriptors,
        jobs=jobs,
        installed_check=installed_check or is_installed,
        progress=progress,
    )


def clean(
    directory: str | Path,
    *,
    jobs: int | None = None,
    progress=None,
):
    from .link import unlink_all
    from .manifest import expand_manifest, find_manifest
    from .utils import resolve_path

    full_path = resolve_path(directory)
    if not full_path.exists():
        raise FileNotFoundError(f"invalid path: {directory}")
    descriptors = expand_manifest(find_manifest(full_path), full_path)
    return unlink_all(descriptors, jobs=jobs, progress=progress)


def clone(repository: str, directory: str | Path, *, runner=None) -> Path:
    from .git import InvalidOriginError, RepositoryOrigin, classify_origin, clone_repo
    from .utils import resolve_path

    target = resolve_path(directory)
    origin = classify_origin(repository, target)
    if not isinstance(origin, RepositoryOrigin):
        raise InvalidOriginError(f"Invalid repository: {repository}")
    return clone_repo(origin.clone_url, target, runner=runner)


def init(directory: str | Path = ".", *, overwrite: bool = False) -> Path:
    from .manifest import write_example_manifest
    from .utils import resolve_path

    return write_example_manifest(resolve_path(directory), overwrite=overwrite)


def sync(
    directory: str | Path | None = None,
    *,
    jobs: int | None = None,
    installed_check=None,
    progress=None,
    pull=None,
):
    """
    Pull the dotfiles repository, then clean and relink it.

    Returns ``(clean_outcomes, link_outcomes)``.
    """
    from .git import pull_repo
    from .utils import default_location, resolve_path

    full_path = resolve_path(directory) if directory is not None else default_location()
    (pull or pull_repo)(full_path)
    cleaned = clean(full_path, jobs=jobs, progress=progress)
    linked = link(
        str(full_path),
        jobs=jobs,
        installed_check=installed_check,
        progress=progress,
    )
    return cleaned, linked


__all__ = [
    "link",
    "clean",
    "clone",
    "init",
    "sync",
]
