from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context
from typing import Any, Callable


def run_indexed_tasks(
    tasks: list[tuple[int, Callable[[], Any]]],
    *,
    max_workers: int,
) -> list[tuple[int, Any]]:
    """
    Run every task to completion and return ``(index, result)`` sorted by index.

    Tasks are expected to capture their own failures; an exception escaping a
    task still propagates, but only after all siblings have finished.
    """
    if not tasks:
        return []
    if max_workers <= 1 or len(tasks) == 1:
        return [(index, task()) for index, task in tasks]

    workers = min(max_workers, len(tasks))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            (index, executor.submit(copy_context().run, task)) for index, task in tasks
        ]
    # leaving the executor block waits for every future
    results = {index: future.result() for index, future in futures}
    return [(index, results[index]) for index in sorted(results)]
