"""Coalesce raw filesystem events into rebuild and remove batches.

The coalescer is a plain accumulate/drain structure with no timers: the
watcher decides when a window ends and calls :meth:`EventCoalescer.flush`.
Within a window the latest event kind per path is kept, content changes are
queued for rebuilding, and removed directories are queued for removal.
At flush time each queued path is re-resolved to its section on disk, so a
section that still exists is rebuilt and one that has gone is removed,
regardless of the order the events arrived in.

Example
-------
>>> from pathlib import Path
>>> coalescer = EventCoalescer(Path("src/sections"), exists=lambda path: True)
>>> coalescer.add_event(EventKind.CHANGE, Path("src/sections/hero/style.liquid"))
>>> coalescer.add_event("change", Path("src/sections/hero/template.liquid"))
>>> batch = coalescer.flush()
>>> [path.name for path in batch.rebuild], batch.remove
(['style.liquid', 'template.liquid'], [])
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
from pathlib import Path

from .paths import section_name_under


class EventKind(enum.StrEnum):
    """Filesystem event vocabulary understood by the coalescer."""

    ADD = "add"
    CHANGE = "change"
    UNLINK = "unlink"
    ADD_DIR = "addDir"
    UNLINK_DIR = "unlinkDir"


CHANGE_EVENTS: frozenset[EventKind] = frozenset(
    {EventKind.ADD, EventKind.CHANGE, EventKind.UNLINK}
)
UNLINK_EVENTS: frozenset[EventKind] = frozenset({EventKind.UNLINK_DIR})


@dc.dataclass(frozen=True, slots=True)
class EventBatch:
    """Deduplicated paths drained from one coalescing window."""

    rebuild: list[Path] = dc.field(default_factory=list)
    remove: list[Path] = dc.field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.rebuild or self.remove)


class EventCoalescer:
    """Buffer events for one window and classify them on flush."""

    def __init__(
        self,
        sections_root: Path,
        *,
        exists: cabc.Callable[[Path], bool] = Path.exists,
        change_events: cabc.Iterable[EventKind] = CHANGE_EVENTS,
        unlink_events: cabc.Iterable[EventKind] = UNLINK_EVENTS,
    ) -> None:
        self.sections_root = sections_root
        self._exists = exists
        self._change_events = frozenset(change_events)
        self._unlink_events = frozenset(unlink_events)
        self._kinds: dict[Path, EventKind] = {}
        self._changed: dict[Path, None] = {}
        self._unlinked: dict[Path, None] = {}

    @property
    def pending(self) -> bool:
        """Return ``True`` while any event is buffered.

        Backed by the latest kind per path, which also holds ``addDir`` events
        that are never classified for rebuild or removal.
        """
        return bool(self._kinds)

    def add_event(self, kind: EventKind | str, path: Path) -> None:
        """Record ``kind`` for ``path`` in the current window."""
        event_kind = EventKind(kind)
        self._kinds[path] = event_kind
        if event_kind in self._change_events:
            self._changed[path] = None
        elif event_kind in self._unlink_events:
            self._unlinked[path] = None

    def flush(self) -> EventBatch:
        """Drain the window into rebuild and remove lists.

        Every queued path, whichever set it was queued under, is mapped to
        its section and classified by whether that section exists right now.
        Paths outside section depth are dropped.
        """
        batch = EventBatch()
        for path in (*self._changed, *self._unlinked):
            if path in batch.rebuild or path in batch.remove:
                continue
            section_path = self._section_path(path)
            if section_path is None:
                continue
            if self._exists(section_path):
                batch.rebuild.append(path)
            else:
                batch.remove.append(path)
        self._kinds.clear()
        self._changed.clear()
        self._unlinked.clear()
        return batch

    def _section_path(self, path: Path) -> Path | None:
        name = section_name_under(path, self.sections_root)
        if name is None:
            return None
        return self.sections_root / name


__all__ = [
    "CHANGE_EVENTS",
    "UNLINK_EVENTS",
    "EventBatch",
    "EventCoalescer",
    "EventKind",
]
