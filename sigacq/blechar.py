"""A Bluetooth LE characteristic entry: access rights, requests and value display."""

from __future__ import annotations

import struct
import uuid
from enum import IntFlag
from typing import Callable, Union

UuidLike = Union[uuid.UUID, int, str]

BLUETOOTH_BASE_UUID = uuid.UUID("00000000-0000-1000-8000-00805f9b34fb")


class CharacteristicProperty(IntFlag):
    UNKNOWN = 0x00
    BROADCASTING = 0x01
    READ = 0x02
    WRITE_NO_RESPONSE = 0x04
    WRITE = 0x08
    NOTIFY = 0x10
    INDICATE = 0x20
    WRITE_SIGNED = 0x40
    EXTENDED_PROPERTY = 0x80


def bluetooth_uuid(value: UuidLike) -> uuid.UUID:
    """Full UUID for a UUID, its text, or a 16/32-bit Bluetooth short form."""
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"short UUID out of range: {value:#x}")
        return uuid.UUID(int=(value << 96) | BLUETOOTH_BASE_UUID.int)
    return uuid.UUID(value)


HEART_RATE_MEASUREMENT_UUID = bluetooth_uuid(0x2A37)
BATTERY_LEVEL_UUID = bluetooth_uuid(0x2A19)
BATTERY_LEVEL_STATUS_UUID = bluetooth_uuid(0x2BED)
BATTERY_VOLTAGE_UUID = bluetooth_uuid(0x2CF1)
BATTERY_CURRENT_UUID = bluetooth_uuid(0x2DF2)

_STATUS_TEXT = {0x4100: "Discharging", 0x2300: "Charging"}


def decode_characteristic_value(char_uuid: UuidLike, value: bytes) -> str:
    """Display text for a characteristic value; unknown ones show as hex."""
    text = "0x" + value.hex()
    uid = bluetooth_uuid(char_uuid)
    try:
        if uid == HEART_RATE_MEASUREMENT_UUID:
            # the rate is taken from the byte after the flags in either format
            return f"Heart rate: {value[1]}"
        if uid == BATTERY_LEVEL_UUID:
            return f"SOC: {value[0]}%"
        if uid == BATTERY_LEVEL_STATUS_UUID:
            (status,) = struct.unpack_from("<H", value)
            return _STATUS_TEXT.get(status, text)
        if uid == BATTERY_VOLTAGE_UUID:
            (millivolts,) = struct.unpack_from("<H", value)
            return f"BV: {millivolts / 1000.0:.6g}V"
        if uid == BATTERY_CURRENT_UUID:
            (milliamps,) = struct.unpack_from("<h", value)
            if milliamps > 100 or milliamps < -100:
                return f"Battery Current: {milliamps / 1000.0:.6g}A"
            return f"BC: {milliamps}mA"
    except (IndexError, struct.error):
        return text
    return text


class BleCharacteristicView:
    """One characteristic of a connected device, as offered to the user."""

    def __init__(
        self,
        service_uuid: UuidLike,
        char_uuid: UuidLike,
        flags: int,
        *,
        on_read: Callable[[uuid.UUID], None] | None = None,
        on_write: Callable[[uuid.UUID, bytes], None] | None = None,
        on_notify: Callable[[bool, uuid.UUID], None] | None = None,
    ) -> None:
        self.service_uuid = bluetooth_uuid(service_uuid)
        self.char_uuid = bluetooth_uuid(char_uuid)
        self.flags = CharacteristicProperty(flags)
        self._on_read = on_read
        self._on_write = on_write
        self._on_notify = on_notify
        self.value_text = ""

    @property
    def service_label(self) -> str:
        return "{" + str(self.service_uuid) + "}"

    @property
    def char_label(self) -> str:
        return "{" + str(self.char_uuid) + "}"

    @property
    def readable(self) -> bool:
        return bool(self.flags & CharacteristicProperty.READ)

    @property
    def writable(self) -> bool:
        return bool(self.flags & CharacteristicProperty.WRITE_NO_RESPONSE)

    @property
    def notifiable(self) -> bool:
        return bool(self.flags & CharacteristicProperty.NOTIFY)

    def read(self) -> uuid.UUID:
        """Request a read of the characteristic."""
        if not self.readable:
            raise PermissionError("characteristic is not readable")
        if self._on_read is not None:
            self._on_read(self.char_uuid)
        return self.char_uuid

    def write(self, text: str) -> bytes:
        """Request a write of ``text`` encoded as UTF-8; returns the bytes sent."""
        if not self.writable:
            raise PermissionError("characteristic is not writable")
        data = text.encode("utf-8")
        if self._on_write is not None:
            self._on_write(self.char_uuid, data)
        return data

    def enable_notification(self, checked: bool) -> None:
        """Request notifications to be switched on or off."""
        if not self.notifiable:
            raise PermissionError("characteristic does not notify")
        if self._on_notify is not None:
            self._on_notify(bool(checked), self.char_uuid)

    def update_value(self, value: bytes) -> str:
        self.value_text = decode_characteristic_value(self.char_uuid, value)
        return self.value_text

    def matches(self, char_uuid: UuidLike) -> bool:
        return bluetooth_uuid(char_uuid) == self.char_uuid