"""Keep compiled sections in sync with the sections directory.

:class:`SectionWatcher` schedules a recursive ``watchdog`` observer on the
sections directory. The observer thread only translates native events and
puts them on a queue; every build runs on the thread that calls
:meth:`SectionWatcher.run`, one batch at a time. A batch closes once the queue
has been quiet for ``config.debounce`` seconds, so the burst of events from a
single save or folder delete is rebuilt once.

Example
-------
>>> from theme_sections.config import BuildConfig
>>> from theme_sections.watch import SectionWatcher
>>> with SectionWatcher(BuildConfig()) as watcher:  # doctest: +SKIP
...     watcher.run()
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import queue
import threading
import typing as typ
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .builder import BuildReport, SectionBuilder, ensure_directory
from .errors import OutputDirectoryError, SectionError
from .events import EventCoalescer, EventKind

if typ.TYPE_CHECKING:
    from .config import BuildConfig

logger = logging.getLogger(__name__)

QueuedEvent = tuple[EventKind, Path]


def translate_event(event: FileSystemEvent) -> list[QueuedEvent]:
    """Map a watchdog event onto the coalescer's event kinds.

    Directory modifications carry no content and are dropped. A move becomes
    a removal of its source followed by an add of its destination.
    """
    src = Path(str(event.src_path))
    match event.event_type:
        case "created":
            return [(EventKind.ADD_DIR if event.is_directory else EventKind.ADD, src)]
        case "modified":
            return [] if event.is_directory else [(EventKind.CHANGE, src)]
        case "deleted":
            kind = EventKind.UNLINK_DIR if event.is_directory else EventKind.UNLINK
            return [(kind, src)]
        case "moved":
            gone = EventKind.UNLINK_DIR if event.is_directory else EventKind.UNLINK
            return [(gone, src), (EventKind.ADD, Path(str(event.dest_path)))]
        case _:
            return []


class _QueueingHandler(FileSystemEventHandler):
    """Forward translated events onto a queue without doing any work."""

    def __init__(self, events: queue.Queue[QueuedEvent]) -> None:
        super().__init__()
        self.events = events

    def on_any_event(self, event: FileSystemEvent) -> None:
        for item in translate_event(event):
            self.events.put(item)


class SectionWatcher:
    """Watch the sections directory and dispatch coalesced builds."""

    def __init__(
        self,
        config: BuildConfig,
        *,
        builder: SectionBuilder | None = None,
        on_report: cabc.Callable[[BuildReport], None] | None = None,
    ) -> None:
        """Initialize the watcher without starting any threads.

        Parameters
        ----------
        config : BuildConfig
            Layout whose ``sections_dir`` is watched and whose ``debounce``
            closes each batch.
        builder : SectionBuilder, optional
            Builder receiving dispatched batches; defaults to one built from
            ``config``.
        on_report : callable, optional
            Called with the report of every dispatched rebuild and removal.
        """
        self.config = config
        self.sections_root = config.sections_dir.absolute()
        self.builder = builder or SectionBuilder(config)
        self.on_report = on_report
        self.events: queue.Queue[QueuedEvent] = queue.Queue()
        self.coalescer = EventCoalescer(self.sections_root)
        self._observer: typ.Any = None
        self._stopped = threading.Event()

    def __enter__(self) -> SectionWatcher:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Begin observing; only changes made after this call are seen."""
        if self._observer is not None:
            return
        ensure_directory(self.sections_root)
        observer = Observer()
        observer.schedule(
            _QueueingHandler(self.events), str(self.sections_root), recursive=True
        )
        observer.start()
        self._observer = observer
        self._stopped.clear()
        logger.info("Watching %s", self.sections_root)

    def stop(self) -> None:
        """Stop the observer and wake any running loop."""
        self._stopped.set()
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None

    def run(self, poll_interval: float = 0.5) -> None:
        """Process batches until :meth:`stop` is called or interrupted."""
        self.start()
        try:
            while not self._stopped.is_set():
                self.process_pending(timeout=poll_interval)
        except KeyboardInterrupt:
            logger.info("Stopping watcher")
        finally:
            self.stop()

    def process_pending(self, timeout: float | None = None) -> bool:
        """Collect one batch of queued events and dispatch it.

        Waits up to ``timeout`` seconds for a first event, then keeps reading
        until the queue has been quiet for ``config.debounce`` seconds.
        Returns ``True`` when a batch was dispatched.
        """
        try:
            kind, path = self.events.get(timeout=timeout)
        except queue.Empty:
            return False
        self._record(kind, path)
        while True:
            try:
                kind, path = self.events.get(timeout=self.config.debounce)
            except queue.Empty:
                break
            self._record(kind, path)
        return self.dispatch()

    def dispatch(self) -> bool:
        """Flush the coalescer and run the resulting rebuild and removal.

        A failing rebuild or removal is logged and the watcher keeps going; the
        affected sections stay stale until their next event. A missing
        destination directory still propagates.
        """
        batch = self.coalescer.flush()
        if batch.rebuild:
            self._run_guarded(self.builder.incremental_build, batch.rebuild)
        if batch.remove:
            self._run_guarded(self.builder.remove_outputs, batch.remove)
        return bool(batch)

    def _run_guarded(
        self, step: cabc.Callable[[list[Path]], BuildReport], paths: list[Path]
    ) -> None:
        try:
            report = step(paths)
        except OutputDirectoryError:
            raise
        except (SectionError, OSError):
            logger.exception("Failed to process %d changed path(s)", len(paths))
            return
        self._report(report)

    def _record(self, kind: EventKind, path: Path) -> None:
        logger.info("%s %s", kind, path)
        self.coalescer.add_event(kind, path)

    def _report(self, report: BuildReport) -> None:
        if self.on_report is not None:
            self.on_report(report)


__all__ = ["SectionWatcher", "translate_event"]
