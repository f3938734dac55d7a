# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Recursive watchdog observer feeding a single serialising worker."""

from __future__ import annotations

import logging
import os
import queue
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Final

from watchdog.events import FileSystemEvent, FileSystemEventHandler, FileSystemMovedEvent
from watchdog.observers import Observer

from .models import EventKind, EventOutcome, HookEvent

OBSERVER_JOIN_TIMEOUT: Final[float] = 3.0
WORKER_JOIN_TIMEOUT: Final[float] = 10.0

LOGGER = logging.getLogger(__name__)

EventSink = Callable[[HookEvent], None]
EventHandler = Callable[[HookEvent], EventOutcome]


def translate_event(event: FileSystemEvent) -> list[HookEvent]:
    """Return the hook events describing a watchdog notification.

    Moves become a deletion of the source followed by a creation of the
    destination. Directory notifications other than modifications become
    folder changes so the affected category can be rescanned.

    Args:
        event: Notification delivered by the watchdog observer.

    Returns:
        list[HookEvent]: Events to enqueue, possibly empty.
    """

    source = Path(os.fsdecode(event.src_path))
    destination = Path(os.fsdecode(event.dest_path)) if isinstance(event, FileSystemMovedEvent) else None
    if event.is_directory:
        if event.event_type == "modified":
            return []
        paths = [source] if destination is None else [source, destination]
        return [HookEvent(EventKind.FOLDER_CHANGED, path) for path in paths]
    if event.event_type == "created":
        return [HookEvent(EventKind.CREATED, source)]
    if event.event_type == "deleted":
        return [HookEvent(EventKind.DELETED, source)]
    if event.event_type == "modified":
        return [HookEvent(EventKind.MODIFIED, source)]
    if destination is not None:
        return [HookEvent(EventKind.DELETED, source), HookEvent(EventKind.CREATED, destination)]
    return []


class _ForwardingHandler(FileSystemEventHandler):
    """Translate watchdog callbacks into :class:`HookEvent` values."""

    def __init__(self, sink: EventSink) -> None:
        """Bind the handler to ``sink``.

        Args:
            sink: Callable receiving each translated event.
        """

        super().__init__()
        self._sink = sink

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Forward every hook event ``event`` translates to, in order."""

        for hook_event in translate_event(event):
            self._sink(hook_event)


class ScriptFolderWatcher:
    """Watch the scripts root recursively and forward changes to ``sink``."""

    def __init__(self, scripts_root: Path, sink: EventSink) -> None:
        """Create a watcher that is not yet running.

        Args:
            scripts_root: Directory to observe recursively.
            sink: Callable receiving translated events on the observer thread.
        """

        self._scripts_root = scripts_root
        self._handler = _ForwardingHandler(sink)
        self._observer: Observer | None = None

    @property
    def running(self) -> bool:
        """Return whether the observer thread is active."""

        return self._observer is not None

    def start(self) -> None:
        """Start the observer thread.

        Raises:
            OSError: If the platform notifier cannot watch the directory.
        """

        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(self._handler, str(self._scripts_root), recursive=True)
        observer.daemon = True
        observer.start()
        self._observer = observer
        LOGGER.debug("file watcher started on %s", self._scripts_root)

    def stop(self) -> None:
        """Stop the observer thread and release its resources."""

        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=OBSERVER_JOIN_TIMEOUT)
        LOGGER.debug("file watcher stopped on %s", self._scripts_root)


class EventWorker:
    """Apply queued events one at a time on a dedicated thread.

    Events submitted after :meth:`stop` and events still queued when it is
    called are dropped without reaching the handler.
    """

    def __init__(self, handler: EventHandler, *, name: str = "hookrelay-events") -> None:
        """Create an idle worker.

        Args:
            handler: Callable applying a single event.
            name: Thread name used for diagnostics.
        """

        self._handler = handler
        self._name = name
        self._queue: queue.Queue[HookEvent | None] = queue.Queue()
        self._stopping = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        """Return whether the worker thread is alive."""

        return self._thread is not None and self._thread.is_alive()

    @property
    def stopping(self) -> bool:
        """Return whether new events are being refused."""

        return self._stopping.is_set()

    def start(self) -> None:
        """Start the worker thread."""

        if self._thread is not None:
            return
        self._stopping.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def submit(self, event: HookEvent) -> None:
        """Queue ``event`` for processing."""

        if self._stopping.is_set():
            LOGGER.debug("dropping %s event for %s: worker stopping", event.kind.value, event.path)
            return
        self._queue.put(event)

    def wait_idle(self) -> None:
        """Block until every queued event has been handled or dropped."""

        self._queue.join()

    def stop(self) -> None:
        """Stop accepting events, drop the backlog and join the thread.

        An event already being handled is allowed to finish.
        """

        self._stopping.set()
        thread, self._thread = self._thread, None
        if thread is None:
            return
        self._queue.put(None)
        thread.join(timeout=WORKER_JOIN_TIMEOUT)
        if thread.is_alive():
            LOGGER.warning("event worker %s did not stop within %.0fs", self._name, WORKER_JOIN_TIMEOUT)

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is None:
                    self._drain()
                    return
                if self._stopping.is_set():
                    LOGGER.debug("dropping queued %s event for %s", event.kind.value, event.path)
                    continue
                self._handler(event)
            finally:
                self._queue.task_done()

    def _drain(self) -> None:
        while True:
            try:
                leftover = self._queue.get_nowait()
            except queue.Empty:
                return
            if leftover is not None:
                LOGGER.debug("dropping queued %s event for %s", leftover.kind.value, leftover.path)
            self._queue.task_done()


__all__ = ["EventWorker", "ScriptFolderWatcher", "translate_event"]
