from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from ..manifest.types import LinkDescriptor

T = TypeVar("T")


class PathSetupError(OSError):
    pass


class SymlinkError(OSError):
    def __init__(self, origin, target, reason: object) -> None:
        super().__init__(f"Failed to symlink {origin} -> {target}: {reason}")
        self.origin = origin
        self.target = target


class RemovalError(OSError):
    pass


class LinkStatus(str, Enum):
    ALREADY_LINKED = "already_linked"
    LINKED = "linked"


class UnlinkStatus(str, Enum):
    NOTHING_TO_REMOVE = "nothing_to_remove"
    SKIPPED_NOT_A_SYMLINK = "skipped_not_a_symlink"
    REMOVED = "removed"


@dataclass(frozen=True)
class LinkResult:
    name: str
    status: LinkStatus
    installed: bool = True


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one descriptor: either ``value`` or ``error`` is set."""

    descriptor: LinkDescriptor
    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""
