import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Union

MANIFEST_PREFIX = "magefile"


class ManifestNotFoundError(FileNotFoundError):
    def __init__(self, directory: str | os.PathLike[str] | None = None) -> None:
        super().__init__("Magefile not found")
        self.directory = directory


class InvalidManifestError(ValueError):
    pass


class MissingManifestEntryError(InvalidManifestError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Entry {name!r} not found in magefile")
        self.name = name


class MissingTargetPathError(InvalidManifestError):
    def __init__(self, name: str) -> None:
        super().__init__(f"target_path not found for {name!r} in magefile")
        self.name = name


@dataclass(frozen=True)
class LinkDescriptor:
    origin_path: Path
    target_path: Path
    is_installed_cmd: str | None = None

    @property
    def name(self) -> str:
        return self.origin_path.name


@dataclass
class Manifest:
    entries: dict[str, Any] = field(default_factory=dict)
    path: Path | None = None

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self):
        return self.entries.keys()

    def get(self, key: str, default: Any = None) -> Any:
        return self.entries.get(key, default)


def _log(message: str) -> None:
    from ..runtime import get_verbose_logging

    if get_verbose_logging():
        print(f"[manifest] {message}", file=sys.stderr, flush=True)


def parse_manifest(source: Union[str, bytes, Path]) -> dict[str, Any]:
    """
    Parse magefile TOML into a key-ordered table.

    ``source`` is a path or the TOML text itself. Keys keep the order in which
    they appear in the file.
    """
    if isinstance(source, Path):
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidManifestError(f"Failed to read magefile {source}: {exc}") from exc
    elif isinstance(source, bytes):
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidManifestError(f"Failed to parse magefile:\n{exc}") from exc
    else:
        text = source

    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidManifestError(f"Failed to parse magefile:\n{exc}") from exc


def load_manifest(path: Union[str, Path]) -> Manifest:
    path = Path(path)
    return Manifest(entries=parse_manifest(path), path=path)


def find_manifest(directory: Union[str, os.PathLike[str]]) -> Manifest:
    """
    Load the first immediate entry of ``directory`` named ``magefile*``.

    Entries are taken in directory-listing order, which is filesystem
    dependent; when several files match, whichever is listed first wins.
    """
    with os.scandir(directory) as it:
        for entry in it:
            if entry.name.startswith(MANIFEST_PREFIX):
                _log(f"found {entry.path}")
                return load_manifest(entry.path)
    raise ManifestNotFoundError(directory)
