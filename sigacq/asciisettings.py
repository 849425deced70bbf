"""Settings of the ASCII (text) reader: channels, delimiter, hex and line filter."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, MutableMapping

MAX_NUM_CHANNELS = 32

SETTING_GROUP = "ASCII"
SETTING_NUM_CHANNELS = "numOfChannels"
SETTING_DELIMITER = "delimiter"
SETTING_CUSTOM_DELIMITER = "customDelimiter"
SETTING_HEX = "hex"
SETTING_FILTER_MODE = "filterMode"
SETTING_FILTER_PREFIX = "filterPrefix"

_CUSTOM_DELIMITER = re.compile(r"[^\d]?")


class FilterMode(Enum):
    DISABLED = "disabled"
    INCLUDE = "include"
    EXCLUDE = "exclude"


class DelimiterChoice(Enum):
    COMMA = ","
    SPACE = " "
    TAB = "\t"
    OTHER = "other"


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


class AsciiReaderSettings:
    """Holds the ASCII reader's options and reports changes through callbacks."""

    def __init__(
        self,
        *,
        max_channels: int = MAX_NUM_CHANNELS,
        on_num_channels: Callable[[int], None] | None = None,
        on_delimiter: Callable[[str], None] | None = None,
        on_hex: Callable[[bool], None] | None = None,
        on_filter: Callable[[FilterMode, str], None] | None = None,
    ) -> None:
        self.max_channels = max_channels
        self._on_num_channels = on_num_channels
        self._on_delimiter = on_delimiter
        self._on_hex = on_hex
        self._on_filter = on_filter
        self.num_channels = 1
        self.delimiter_choice = DelimiterChoice.COMMA
        self.custom_delimiter = ""
        self._hex = False
        self.filter_mode = FilterMode.DISABLED
        self.filter_prefix = ""

    @property
    def is_hex(self) -> bool:
        return self._hex

    @is_hex.setter
    def is_hex(self, value: bool) -> None:
        value = bool(value)
        if value != self._hex:
            self._hex = value
            if self._on_hex is not None:
                self._on_hex(value)

    @property
    def prefix_editable(self) -> bool:
        """The filter prefix is editable only while filtering is enabled."""
        return self.filter_mode is not FilterMode.DISABLED

    def delimiter(self) -> str | None:
        """The delimiter character, or ``None`` when a custom one is chosen but empty."""
        if self.delimiter_choice is DelimiterChoice.OTHER:
            return self.custom_delimiter[:1] or None
        return self.delimiter_choice.value

    def set_delimiter_choice(self, choice: DelimiterChoice) -> None:
        """Select a delimiter; listeners hear of it only if it is valid."""
        choice = DelimiterChoice(choice)
        if choice is self.delimiter_choice:
            return
        self.delimiter_choice = choice
        delimiter = self.delimiter()
        if delimiter is not None and self._on_delimiter is not None:
            self._on_delimiter(delimiter)

    def set_custom_delimiter(self, text: str) -> None:
        """Set the custom delimiter: empty or a single non-digit character."""
        if not _CUSTOM_DELIMITER.fullmatch(text):
            raise ValueError(f"invalid custom delimiter: {text!r}")
        self._store_custom_delimiter(text)

    def _store_custom_delimiter(self, text: str) -> None:
        if text == self.custom_delimiter:
            return
        self.custom_delimiter = text
        if (
            self.delimiter_choice is DelimiterChoice.OTHER
            and text
            and self._on_delimiter is not None
        ):
            self._on_delimiter(text[0])

    def set_num_channels(self, value: int) -> int:
        """Set the channel count (0 means automatic), clamped to the allowed range."""
        value = max(0, min(self.max_channels, int(value)))
        if value != self.num_channels:
            self.num_channels = value
            if self._on_num_channels is not None:
                self._on_num_channels(value)
        return value

    def set_filter(self, mode: FilterMode, prefix: str | None = None) -> None:
        """Change the line filter; ``prefix`` of ``None`` keeps the current prefix."""
        mode = FilterMode(mode)
        if prefix is None:
            prefix = self.filter_prefix
        if mode is self.filter_mode and prefix == self.filter_prefix:
            return
        self.filter_mode = mode
        self.filter_prefix = prefix
        if self._on_filter is not None:
            self._on_filter(mode, prefix)

    def save_settings(self, settings: MutableMapping[str, Any]) -> None:
        group = settings.setdefault(SETTING_GROUP, {})
        group[SETTING_NUM_CHANNELS] = (
            "auto" if self.num_channels == 0 else str(self.num_channels)
        )
        if self.delimiter_choice is DelimiterChoice.OTHER:
            delimiter = "other"
        elif self.delimiter_choice is DelimiterChoice.TAB:
            delimiter = "TAB"
        else:
            delimiter = self.delimiter_choice.value
        group[SETTING_HEX] = self.is_hex
        group[SETTING_DELIMITER] = delimiter
        group[SETTING_CUSTOM_DELIMITER] = self.custom_delimiter
        group[SETTING_FILTER_MODE] = self.filter_mode.value
        group[SETTING_FILTER_PREFIX] = self.filter_prefix

    def load_settings(self, settings: MutableMapping[str, Any]) -> None:
        """Read settings; missing or unknown entries leave the current values."""
        group: MutableMapping[str, Any] = settings.get(SETTING_GROUP, {})

        num = str(group.get(SETTING_NUM_CHANNELS, self.num_channels))
        if num == "auto":
            self.set_num_channels(0)
        else:
            try:
                self.set_num_channels(int(num))
            except ValueError:
                pass

        current = self.delimiter() or ""
        delimiter = str(group.get(SETTING_DELIMITER, current))
        custom = str(group.get(SETTING_CUSTOM_DELIMITER, current))
        if custom:
            self._store_custom_delimiter(custom)
        choice = {
            ",": DelimiterChoice.COMMA,
            " ": DelimiterChoice.SPACE,
            "TAB": DelimiterChoice.TAB,
        }.get(delimiter, DelimiterChoice.OTHER)
        self.set_delimiter_choice(choice)

        self.is_hex = _to_bool(group.get(SETTING_HEX, False))

        mode = self.filter_mode
        try:
            mode = FilterMode(group.get(SETTING_FILTER_MODE, ""))
        except ValueError:
            pass
        prefix = str(group.get(SETTING_FILTER_PREFIX, self.filter_prefix))
        self.set_filter(mode, prefix)