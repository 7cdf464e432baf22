from .expand import INSTALLED_CMD_KEY, TARGET_PATH_KEY, expand_entry, expand_manifest
from .init import EXAMPLE_MANIFEST, MANIFEST_FILENAME, write_example_manifest
from .types import (
    MANIFEST_PREFIX,
    InvalidManifestError,
    LinkDescriptor,
    Manifest,
    ManifestNotFoundError,
    MissingManifestEntryError,
    MissingTargetPathError,
    find_manifest,
    load_manifest,
    parse_manifest,
)

__all__ = [
    "LinkDescriptor",
    "Manifest",
    "parse_manifest",
    "load_manifest",
    "find_manifest",
    "expand_manifest",
    "expand_entry",
    "write_example_manifest",
    "InvalidManifestError",
    "ManifestNotFoundError",
    "MissingManifestEntryError",
    "MissingTargetPathError",
    "MANIFEST_PREFIX",
    "MANIFEST_FILENAME",
    "EXAMPLE_MANIFEST",
    "TARGET_PATH_KEY",
    "INSTALLED_CMD_KEY",
]
