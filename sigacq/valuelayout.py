"""Placement of sample value labels next to the plot's cursor line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, MutableSequence

VALUE_LABEL_HEIGHT = 12.0


@dataclass
class ChannelValue:
    """A channel's value at the cursor and the vertical position of its label."""

    channel: Any
    value: float
    y: float
    height: float = VALUE_LABEL_HEIGHT

    def top(self) -> float:
        return self.y

    def bottom(self) -> float:
        return self.y + self.height


class _Group:
    """Labels that sit directly below one another and move as one."""

    def __init__(self, item: ChannelValue) -> None:
        self.items: list[ChannelValue] = [item]

    def top(self) -> float:
        return self.items[0].top()

    def bottom(self) -> float:
        return self.items[-1].bottom()

    def overlap(self, other: _Group) -> float:
        a = self.bottom() - other.top()
        b = other.bottom() - self.top()
        if a > 0 and b > 0:
            return min(a, b)
        return 0.0

    def move_by(self, dy: float) -> None:
        for item in self.items:
            item.y += dy

    def join(self, other: _Group) -> None:
        """Merge ``other``, which lies below and overlaps this group."""
        overlap = self.overlap(other)
        # larger groups move less than smaller ones
        ratio = len(self.items) / (len(self.items) + len(other.items))
        self_offset = overlap * (1.0 - ratio)
        final_top = self.top() - self_offset
        if final_top < 0:
            self_offset += final_top
        self.move_by(-self_offset)
        other.move_by(overlap - self_offset)
        self.items.extend(other.items)
        other.items.clear()


def layout_values(
    values: MutableSequence[ChannelValue], label_height: float | None = None
) -> MutableSequence[ChannelValue]:
    """Shift labels vertically so that none overlap and none go above the top.

    When ``label_height`` is given it becomes the height of every label.
    The values are changed in place and the same sequence is returned.
    """
    if label_height is not None:
        for item in values:
            item.height = label_height

    groups = sorted((_Group(item) for item in values), key=lambda g: g.top())

    something_overlaps = True
    while something_overlaps and len(groups) > 1:
        something_overlaps = False
        for a, b in zip(groups, groups[1:]):
            if a.top() < 0:
                a.move_by(-a.top())
            if a.overlap(b):
                something_overlaps = True
                a.join(b)
                groups.remove(b)
                break
    return values


def visible_channels(channels: Iterable[Any]) -> list[Any]:
    """Channels whose ``visible`` flag is set, in their original order."""
    return [channel for channel in channels if channel.visible]


def format_selection_size(width: float, height: float) -> str:
    """Text appended to the tracker showing the size of a zoom selection."""
    return f" [{width:.4g}, {height:.4g}]"