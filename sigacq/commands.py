"""User-defined commands sent to a serial port or a Bluetooth LE characteristic."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from .blechar import CharacteristicProperty, UuidLike, bluetooth_uuid

NIL_UUID = uuid.UUID(int=0)

_ESCAPES = {
    "\\": "\\",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
}


class CommandError(ValueError):
    """A command cannot be sent as it stands."""


def _unescape(text: str) -> str:
    """Replace backslash escapes (\\n, \\r, \\t, \\0, \\\\) by the characters they stand for."""
    out: list[str] = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        nxt = next(chars, None)
        if nxt is None:
            out.append(char)
        elif nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
        else:
            out.append(char + nxt)
    return "".join(out)


def encode_command(text: str, ascii_mode: bool) -> bytes:
    """Bytes to send for a command's text.

    In ASCII mode escapes are resolved and the text is encoded as Latin-1
    (characters outside it become ``?``).  In hex mode spaces are dropped
    and the rest is read as hexadecimal byte pairs.
    """
    if not text:
        raise CommandError("Enter a command to send!")
    if ascii_mode:
        return _unescape(text).encode("latin-1", errors="replace")
    digits = text.replace(" ", "")
    if len(digits) % 2 == 1:
        raise CommandError("HEX command is missing a nibble at the end!")
    try:
        return bytes.fromhex(digits)
    except ValueError as exc:
        raise CommandError(f"Invalid HEX command: {text!r}") from exc


@dataclass(frozen=True)
class Characteristic:
    """A characteristic a command can be written to."""

    service_uuid: uuid.UUID
    char_uuid: uuid.UUID
    flags: CharacteristicProperty

    @property
    def label(self) -> str:
        return "{" + str(self.char_uuid) + "}"


@dataclass
class SerialCommand:
    """A named command for the serial port."""

    name: str = ""
    text: str = ""
    ascii_mode: bool = True

    @property
    def action_text(self) -> str:
        """Text of the menu entry that sends this command."""
        return self.name

    def payload(self) -> bytes:
        """Bytes to write to the port; raises :class:`CommandError` if invalid."""
        return encode_command(self.text, self.ascii_mode)


@dataclass
class BleCommand:
    """A named command written to a chosen Bluetooth LE characteristic."""

    name: str = ""
    text: str = ""
    ascii_mode: bool = True
    characteristics: list[Characteristic] = field(default_factory=list)
    current_index: int = 0

    @property
    def action_text(self) -> str:
        return self.name

    def add_characteristic(
        self, service_uuid: UuidLike, char_uuid: UuidLike, flags: int
    ) -> bool:
        """Offer a characteristic as target; only write-without-response ones are taken."""
        props = CharacteristicProperty(flags)
        if not props & CharacteristicProperty.WRITE_NO_RESPONSE:
            return False
        self.characteristics.append(
            Characteristic(bluetooth_uuid(service_uuid), bluetooth_uuid(char_uuid), props)
        )
        return True

    def select(self, index: int) -> None:
        """Choose the target characteristic by its position."""
        if not 0 <= index < len(self.characteristics):
            raise IndexError(f"no characteristic at index {index}")
        self.current_index = index

    def current_characteristic(self) -> Characteristic | None:
        """The selected target, or ``None`` when nothing is offered."""
        if 0 <= self.current_index < len(self.characteristics):
            return self.characteristics[self.current_index]
        return None

    def device_connected(self, connected: bool) -> None:
        """Forget the offered characteristics once the device disconnects."""
        if not connected:
            self.characteristics.clear()
            self.current_index = 0

    def payload(self) -> tuple[uuid.UUID, bytes]:
        """Target characteristic UUID and bytes to write."""
        data = encode_command(self.text, self.ascii_mode)
        current = self.current_characteristic()
        return (current.char_uuid if current is not None else NIL_UUID), data