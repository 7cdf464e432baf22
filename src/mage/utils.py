import os
from pathlib import Path
from typing import Any

from .runtime import get_home_dir

DEFAULT_LOCATION = "~/.mage"
HOME_TOKEN = "~"


def resolve_path(raw: str | os.PathLike[str], home: str | None = None) -> Path:
    """
    Expand a leading ``~`` segment into the home directory.

    Only a whole ``~`` segment is replaced (``~user`` is left alone). Paths
    without it are returned as given, relative or not, and are never
    canonicalized.
    """
    path = Path(raw)
    parts = path.parts
    if not parts or parts[0] != HOME_TOKEN:
        return path
    base = Path(home if home is not None else get_home_dir())
    return base.joinpath(*parts[1:])


def get_config_path(custom_path=None):
    if custom_path:
        return custom_path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if not xdg_config_home:
        xdg_config_home = os.path.join(get_home_dir(), ".config")
    return os.path.join(xdg_config_home, "mage", "config.yaml")


def read_config(custom_path=None) -> dict[str, Any]:
    import yaml

    config_path = get_config_path(custom_path)
    try:
        with open(config_path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid config file {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must be a YAML mapping")
    return data


def default_location(config: dict[str, Any] | None = None) -> Path:
    """Where repository origins are cloned when no directory is given."""
    raw = (config or {}).get("default_location") or DEFAULT_LOCATION
    return resolve_path(str(raw))
