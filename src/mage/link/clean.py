from __future__ import annotations

import os
import sys
from typing import Callable, Sequence

from ..concurrency import run_indexed_tasks
from ..manifest.types import LinkDescriptor
from ..progress import NullProgress, ProgressBar, ProgressSink
from .types import Outcome, RemovalError, UnlinkStatus


def _log(message: str) -> None:
    from ..runtime import get_verbose_logging

    if get_verbose_logging():
        print(f"[clean] {message}", file=sys.stderr, flush=True)


def unlink_one(descriptor: LinkDescriptor, bar: ProgressBar | None = None) -> UnlinkStatus:
    """
    Remove ``target_path`` only if it is a symlink.

    Real files and directories at the target are left untouched, and the
    link is never followed.
    """
    name = descriptor.name
    target = descriptor.target_path

    if not os.path.lexists(target):
        _log(f"{target} does not exist")
        if bar is not None:
            bar.finish_with_message(f"{name} not linked, skipping")
        return UnlinkStatus.NOTHING_TO_REMOVE

    if not os.path.islink(target):
        _log(f"{target} is not a symlink")
        if bar is not None:
            bar.finish_with_message(f"{target} is not a symlink, skipping")
        return UnlinkStatus.SKIPPED_NOT_A_SYMLINK

    try:
        os.unlink(target)
    except OSError as exc:
        raise RemovalError(f"Failed to remove symlink {target}: {exc}") from exc
    _log(f"removed {target}")
    if bar is not None:
        bar.finish_with_message(f"{name} cleaned")
    return UnlinkStatus.REMOVED


def unlink_all(
    descriptors: Sequence[LinkDescriptor],
    *,
    jobs: int | None = None,
    progress: ProgressSink | None = None,
) -> list[Outcome[UnlinkStatus]]:
    from ..runtime import get_jobs

    sink = progress if progress is not None else NullProgress()
    max_workers = jobs if jobs is not None else get_jobs()

    def make_task(descriptor: LinkDescriptor) -> Callable[[], Outcome[UnlinkStatus]]:
        def task() -> Outcome[UnlinkStatus]:
            bar = sink.bar(descriptor.name)
            try:
                status = unlink_one(descriptor, bar)
            except Exception as exc:
                _log(f"{descriptor.name}: {exc}")
                bar.finish_with_message(f"{descriptor.name} failed")
                return Outcome(descriptor, error=exc)
            return Outcome(descriptor, value=status)

        return task

    tasks = [(index, make_task(d)) for index, d in enumerate(descriptors)]
    return [outcome for _, outcome in run_indexed_tasks(tasks, max_workers=max_workers)]
