import os
from pathlib import Path
from typing import Union

from .types import MANIFEST_PREFIX

MANIFEST_FILENAME = f"{MANIFEST_PREFIX}.toml"

EXAMPLE_MANIFEST = """\
["example.config"]
target_path = "~/.config/example.config"
"""


def write_example_manifest(
    directory: Union[str, os.PathLike[str]], *, overwrite: bool = False
) -> Path:
    """Write an example magefile.toml into ``directory`` and return its path."""
    path = Path(directory) / MANIFEST_FILENAME
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} exists. Use --overwrite to replace it.")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(EXAMPLE_MANIFEST, encoding="utf-8")
    return path
