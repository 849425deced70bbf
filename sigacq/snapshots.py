"""Snapshots of plotted channel data: taking, loading from CSV and bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Sequence

_log = logging.getLogger(__name__)

TAKE_SNAPSHOT_TEXT = "&Take Snapshot"
LOAD_SNAPSHOTS_TEXT = "&Load Snapshots"
CLEAR_SNAPSHOTS_TEXT = "&Clear Snapshots"


class SnapshotLoadError(ValueError):
    """A snapshot file could not be parsed."""


@dataclass
class Snapshot:
    """A frozen copy of every channel's samples, with the channel names."""

    name: str
    channel_names: list[str]
    data: list[list[float]] = field(default_factory=list)
    saved: bool = False

    @property
    def num_channels(self) -> int:
        return len(self.data)

    @property
    def num_samples(self) -> int:
        return len(self.data[0]) if self.data else 0

    def x_data(self, channel: int) -> range:
        """Sample indices used as the x axis of ``channel``."""
        return range(len(self.data[channel]))


def load_snapshot_csv(path: str | Path) -> Snapshot:
    """Read a CSV file whose first row names the channels and the rest are numbers.

    The snapshot is named after the file's base name and counts as saved.
    Raises :class:`SnapshotLoadError` on an inconsistent or non-numeric row.
    """
    path = Path(path)
    with path.open("r", newline=None) as stream:
        head_line = stream.readline().rstrip("\r\n")
        channel_names = head_line.split(",")
        num_channels = len(channel_names)
        data: list[list[float]] = [[] for _ in channel_names]

        for line_num, raw in enumerate(stream, start=1):
            line = raw.rstrip("\r\n")
            columns = line.split(",")
            if len(columns) != num_channels:
                raise SnapshotLoadError(
                    f"Parsing error at line {line_num}: number of columns is not "
                    f"consistent. Line {line_num}: {line}"
                )
            for ci, (column, channel) in enumerate(zip(columns, data)):
                try:
                    channel.append(float(column))
                except ValueError:
                    raise SnapshotLoadError(
                        f"Parsing error at line {line_num}, column {ci}: "
                        f'can\'t convert "{column}" to double.'
                    ) from None

    base_name = path.name.split(".", 1)[0]
    return Snapshot(base_name, channel_names, data, saved=True)


def _default_name() -> str:
    return datetime.now().strftime("Snapshot [%H:%M:%S]")


class SnapshotManager:
    """Keeps the list of snapshots and the menu that offers them."""

    def __init__(self, name_factory: Callable[[], str] | None = None) -> None:
        self._name_factory = name_factory or _default_name
        self.snapshots: list[Snapshot] = []
        self.menu: list[object] = []
        self._update_menu()

    def _update_menu(self) -> None:
        menu: list[object] = [TAKE_SNAPSHOT_TEXT, LOAD_SNAPSHOTS_TEXT]
        if self.snapshots:
            menu.append(None)
            menu.extend(self.snapshots)
            menu.append(None)
            menu.append(CLEAR_SNAPSHOTS_TEXT)
        self.menu = menu

    def make_snapshot(
        self, channel_names: Sequence[str], data: Sequence[Sequence[float]]
    ) -> Snapshot:
        """Build a snapshot of ``data`` without recording it."""
        return Snapshot(
            self._name_factory(),
            list(channel_names),
            [list(channel) for channel in data],
        )

    def take_snapshot(
        self, channel_names: Sequence[str], data: Sequence[Sequence[float]]
    ) -> Snapshot:
        """Copy the current channel data into a new, recorded snapshot."""
        snapshot = self.make_snapshot(channel_names, data)
        self.add_snapshot(snapshot)
        return snapshot

    def add_snapshot(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)
        self._update_menu()

    def load_files(self, paths: Iterable[str | Path | None]) -> list[Snapshot]:
        """Load each CSV file; files that fail are logged and skipped."""
        loaded: list[Snapshot] = []
        for path in paths:
            if path is None:
                continue
            try:
                snapshot = load_snapshot_csv(path)
            except OSError as exc:
                _log.critical("Couldn't open file: %s", path)
                _log.critical("%s", exc)
                continue
            except SnapshotLoadError as exc:
                _log.critical("%s", exc)
                continue
            self.snapshots.append(snapshot)
            loaded.append(snapshot)
        self._update_menu()
        return loaded

    def delete(self, snapshot: Snapshot) -> None:
        """Remove one snapshot; unknown ones are ignored."""
        if snapshot in self.snapshots:
            self.snapshots.remove(snapshot)
        self._update_menu()

    def clear(self) -> None:
        self.snapshots.clear()
        self._update_menu()

    def is_all_saved(self) -> bool:
        """``True`` if every snapshot has been saved to a file."""
        return all(snapshot.saved for snapshot in self.snapshots)