import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from ..utils import resolve_path
from .types import (
    LinkDescriptor,
    Manifest,
    MissingManifestEntryError,
    MissingTargetPathError,
)

TARGET_PATH_KEY = "target_path"
INSTALLED_CMD_KEY = "is_installed_cmd"


def _log(message: str) -> None:
    from ..runtime import get_verbose_logging

    if get_verbose_logging():
        print(f"[manifest] {message}", file=sys.stderr, flush=True)


def expand_entry(name: str, value: Any, base_dir: Path) -> LinkDescriptor:
    if not isinstance(value, Mapping):
        raise MissingManifestEntryError(name)

    target = value.get(TARGET_PATH_KEY)
    if not isinstance(target, str):
        raise MissingTargetPathError(name)

    cmd = value.get(INSTALLED_CMD_KEY)
    return LinkDescriptor(
        origin_path=resolve_path(base_dir / name),
        target_path=resolve_path(target),
        is_installed_cmd=str(cmd) if cmd is not None else None,
    )


def expand_manifest(
    manifest: Union[Manifest, Mapping[str, Any]],
    base_dir: Union[str, os.PathLike[str]],
) -> list[LinkDescriptor]:
    """
    Turn every manifest entry into a LinkDescriptor, in file order.

    Expansion is all-or-nothing: the first malformed entry raises and no
    descriptors are returned.
    """
    entries = manifest.entries if isinstance(manifest, Manifest) else manifest
    base = Path(base_dir)
    descriptors: list[LinkDescriptor] = []
    for name in list(entries.keys()):
        if name not in entries:
            raise MissingManifestEntryError(name)
        descriptor = expand_entry(name, entries[name], base)
        _log(f"{name}: {descriptor.origin_path} -> {descriptor.target_path}")
        descriptors.append(descriptor)
    return descriptors
