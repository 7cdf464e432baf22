"""Progress display shared by link/clean workers."""

from __future__ import annotations

import threading

import click


class ProgressBar:
    """Per-worker handle; every write goes through the owning sink's lock."""

    def __init__(self, sink: "ProgressSink", name: str) -> None:
        self._sink = sink
        self.name = name
        self.message = ""
        self.finished = False

    def set_message(self, msg: str) -> None:
        self.message = msg
        self._sink._emit(self, msg)

    def finish_with_message(self, msg: str) -> None:
        self.message = msg
        self.finished = True
        self._sink._emit(self, msg)


class ProgressSink:
    def __init__(self, *, err: bool = True, transient: bool = False) -> None:
        self._lock = threading.Lock()
        self._bars: list[ProgressBar] = []
        self._err = err
        self._transient = transient

    def bar(self, name: str) -> ProgressBar:
        handle = ProgressBar(self, name)
        with self._lock:
            self._bars.append(handle)
        return handle

    @property
    def bars(self) -> list[ProgressBar]:
        with self._lock:
            return list(self._bars)

    def _emit(self, bar: ProgressBar, msg: str) -> None:
        # intermediate messages are only shown when not transient
        if self._transient and not bar.finished:
            return
        with self._lock:
            click.echo(msg, err=self._err)


class NullProgress(ProgressSink):
    """Sink that records messages without printing them."""

    def _emit(self, bar: ProgressBar, msg: str) -> None:
        return None
