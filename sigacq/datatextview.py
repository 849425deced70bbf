"""Text view of incoming samples, one line per sample."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, MutableMapping, Sequence

SETTING_GROUP = "Plot"
SETTING_NUM_LINES = "textViewNumLines"
SETTING_DECIMALS = "textViewDecimals"

DEFAULT_NUM_LINES = 1000
DEFAULT_DECIMALS = 4


def format_samples(channels: Sequence[Sequence[float]], decimals: int) -> list[str]:
    """One line per sample; channel values in fixed-point, separated by spaces."""
    return [
        " ".join(f"{value:.{decimals}f}" for value in sample)
        for sample in zip(*channels)
    ]


def _to_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class DataTextView:
    """Keeps the most recent formatted sample lines, up to a line limit."""

    def __init__(
        self, num_lines: int = DEFAULT_NUM_LINES, decimals: int = DEFAULT_DECIMALS
    ) -> None:
        self.enabled = False
        self.decimals = decimals
        self._lines: deque[str] = deque(maxlen=num_lines or None)

    @property
    def num_lines(self) -> int:
        """Maximum number of lines kept; 0 means no limit."""
        return self._lines.maxlen or 0

    @num_lines.setter
    def num_lines(self, value: int) -> None:
        self._lines = deque(self._lines, maxlen=value or None)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def feed(self, channels: Sequence[Sequence[float]]) -> None:
        """Add samples from the stream if the view is enabled."""
        if self.enabled:
            self.add_data(channels)

    def add_data(self, channels: Sequence[Sequence[float]]) -> list[str]:
        """Append the samples as lines; return the lines added."""
        new_lines = format_samples(channels, self.decimals)
        self._lines.extend(new_lines)
        return new_lines

    def clear(self) -> None:
        self._lines.clear()

    def text(self) -> str:
        return "\n".join(self._lines)

    def save_settings(self, settings: MutableMapping[str, Any]) -> None:
        group = settings.setdefault(SETTING_GROUP, {})
        group[SETTING_NUM_LINES] = self.num_lines
        group[SETTING_DECIMALS] = self.decimals

    def load_settings(self, settings: MutableMapping[str, Any]) -> None:
        """Read settings; missing or malformed entries keep the current values."""
        group: MutableMapping[str, Any] = settings.get(SETTING_GROUP, {})
        self.num_lines = _to_int(group.get(SETTING_NUM_LINES, self.num_lines), self.num_lines)
        self.decimals = _to_int(group.get(SETTING_DECIMALS, self.decimals), self.decimals)


def _iter_lines(view: DataTextView) -> Iterable[str]:
    return iter(view.lines)