from __future__ import annotations

import os
import subprocess
import sys
from typing import Callable, Sequence

from ..concurrency import run_indexed_tasks
from ..manifest.types import LinkDescriptor
from ..progress import NullProgress, ProgressBar, ProgressSink
from .types import LinkResult, LinkStatus, Outcome, PathSetupError, SymlinkError

InstalledCheck = Callable[[str], bool]


def _log(message: str) -> None:
    from ..runtime import get_verbose_logging

    if get_verbose_logging():
        print(f"[link] {message}", file=sys.stderr, flush=True)


def is_installed(cmd: str) -> bool:
    """Run ``cmd`` through ``sh -c``; a zero exit status means installed."""
    try:
        result = subprocess.run(["sh", "-c", cmd], capture_output=True)
    except OSError:
        return False
    return result.returncode == 0


def ensure_parent_dir(target: os.PathLike[str]) -> None:
    parent = os.path.dirname(os.fspath(target))
    if not parent or os.path.isdir(parent):
        return
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as exc:
        raise PathSetupError(f"Failed to create {parent}: {exc}") from exc
    _log(f"created {parent}")


def link_one(
    descriptor: LinkDescriptor,
    installed_check: InstalledCheck = is_installed,
    bar: ProgressBar | None = None,
) -> LinkResult:
    """
    Make sure ``target_path`` is a symlink to ``origin_path``.

    Anything already at the target (including a dangling link) counts as
    linked and is left alone, so calling this twice is harmless.
    """
    name = descriptor.name
    target = descriptor.target_path
    if bar is not None:
        bar.set_message(f"Linking {name}")

    if os.path.lexists(target):
        _log(f"{target} exists")
        if bar is not None:
            bar.finish_with_message(f"{name} already linked")
        return LinkResult(name, LinkStatus.ALREADY_LINKED)

    ensure_parent_dir(target)

    try:
        os.symlink(descriptor.origin_path, target)
    except OSError as exc:
        raise SymlinkError(descriptor.origin_path, target, exc) from exc
    _log(f"symlink {descriptor.origin_path} -> {target}")

    installed = True
    if descriptor.is_installed_cmd is not None:
        installed = installed_check(descriptor.is_installed_cmd)

    if bar is not None:
        bar.finish_with_message(f"{name} linked")
    return LinkResult(name, LinkStatus.LINKED, installed)


def link_all(
    descriptors: Sequence[LinkDescriptor],
    *,
    jobs: int | None = None,
    installed_check: InstalledCheck = is_installed,
    progress: ProgressSink | None = None,
) -> list[Outcome[LinkResult]]:
    """Link every descriptor; failures are returned, never raised."""
    from ..runtime import get_jobs

    sink = progress if progress is not None else NullProgress()
    max_workers = jobs if jobs is not None else get_jobs()

    def make_task(descriptor: LinkDescriptor) -> Callable[[], Outcome[LinkResult]]:
        def task() -> Outcome[LinkResult]:
            bar = sink.bar(descriptor.name)
            try:
                result = link_one(descriptor, installed_check, bar)
            except Exception as exc:
                _log(f"{descriptor.name}: {exc}")
                bar.finish_with_message(f"{descriptor.name} failed")
                return Outcome(descriptor, error=exc)
            return Outcome(descriptor, value=result)

        return task

    tasks = [(index, make_task(d)) for index, d in enumerate(descriptors)]
    return [outcome for _, outcome in run_indexed_tasks(tasks, max_workers=max_workers)]
