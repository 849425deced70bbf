"""Byte order choice for binary sample streams."""

from __future__ import annotations

from enum import Enum
from typing import Callable


class Endianness(Enum):
    LITTLE = "little"
    BIG = "big"


def endianness_to_setting(endianness: Endianness) -> str:
    """Text stored in the settings for ``endianness``."""
    return endianness.value


def endianness_from_setting(text: str | None) -> Endianness | None:
    """Parse a stored setting; ``None`` if the text names no byte order."""
    try:
        return Endianness(text)
    except ValueError:
        return None


class EndiannessSelector:
    """Holds the selected byte order and notifies listeners when it changes."""

    def __init__(self, endianness: Endianness = Endianness.LITTLE) -> None:
        self._selection = endianness
        self._listeners: list[Callable[[Endianness], None]] = []

    def selection(self) -> Endianness:
        return self._selection

    def select(self, endianness: Endianness) -> None:
        """Change the selection; listeners are told only on a real change."""
        if endianness is self._selection:
            return
        self._selection = endianness
        for listener in self._listeners:
            listener(endianness)

    def connect(self, callback: Callable[[Endianness], None]) -> None:
        self._listeners.append(callback)