from .clean import unlink_all, unlink_one
from .engine import ensure_parent_dir, is_installed, link_all, link_one
from .report import ERRORS_HEADER, NOT_INSTALLED_HEADER, not_installed, summarize
from .types import (
    LinkResult,
    LinkStatus,
    Outcome,
    PathSetupError,
    RemovalError,
    SymlinkError,
    UnlinkStatus,
)

__all__ = [
    "link_one",
    "link_all",
    "unlink_one",
    "unlink_all",
    "is_installed",
    "ensure_parent_dir",
    "summarize",
    "not_installed",
    "ERRORS_HEADER",
    "NOT_INSTALLED_HEADER",
    "LinkResult",
    "LinkStatus",
    "Outcome",
    "UnlinkStatus",
    "PathSetupError",
    "SymlinkError",
    "RemovalError",
]
