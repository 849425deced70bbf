"""Panel holding the user's serial and Bluetooth LE commands."""

from __future__ import annotations

import logging
import uuid
from enum import IntEnum
from typing import Any, Callable, MutableMapping, Union

from .blechar import CharacteristicProperty, UuidLike, bluetooth_uuid
from .commands import (
    NIL_UUID,
    BleCommand,
    Characteristic,
    CommandError,
    SerialCommand,
)

_log = logging.getLogger(__name__)

SETTING_GROUP = "Commands"
SETTING_SERIAL = "commandSerial"
SETTING_BLE = "commandBLE"
SETTING_NAME = "name"
SETTING_TYPE = "type"
SETTING_DATA = "data"
SETTING_SERVICE_UUID = "servcUuid"
SETTING_CHAR_UUID = "charUuid"
SETTING_CHAR_FLAGS = "charFlags"

NEW_COMMAND_TEXT = "&New Command"

AnyCommand = Union[SerialCommand, BleCommand]


class Page(IntEnum):
    """Which set of commands the panel is showing."""

    SERIAL = 0
    BLE = 1


def _parse_uuid(value: Any) -> uuid.UUID:
    try:
        return bluetooth_uuid(value)
    except (TypeError, ValueError, AttributeError):
        return NIL_UUID


def _parse_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _apply_common(command: AnyCommand, entry: MutableMapping[str, Any]) -> None:
    name = str(entry.get(SETTING_NAME, "") or "")
    if name:
        command.name = name
    kind = str(entry.get(SETTING_TYPE, "") or "")
    if kind == "ascii":
        command.ascii_mode = True
    elif kind == "hex":
        command.ascii_mode = False
    command.text = str(entry.get(SETTING_DATA, "") or "")


def _common_entry(command: AnyCommand) -> dict[str, Any]:
    return {
        SETTING_NAME: command.name,
        SETTING_TYPE: "ascii" if command.ascii_mode else "hex",
        SETTING_DATA: command.text,
    }


class CommandPanel:
    """Creates, stores and dispatches serial and Bluetooth LE commands."""

    def __init__(
        self,
        *,
        on_send_serial: Callable[[bytes], None] | None = None,
        on_write_characteristic: Callable[[uuid.UUID, bytes], None] | None = None,
        on_log: Callable[[int, str], None] | None = None,
        on_focus_requested: Callable[[], None] | None = None,
    ) -> None:
        self._on_send_serial = on_send_serial
        self._on_write = on_write_characteristic
        self._on_log = on_log
        self._on_focus = on_focus_requested
        self.serial_commands: list[SerialCommand] = []
        self.ble_commands: list[BleCommand] = []
        self.characteristics: list[Characteristic] = []
        self.page = Page.SERIAL
        self.ble_is_connected = False
        self.serial_is_open = False
        self._serial_counter = 0
        self._ble_counter = 0
        self.menu: list[Any] = []
        self.menu_commands()

    def _emit_log(self, level: int, text: str) -> None:
        if self._on_log is not None:
            self._on_log(level, text)

    @property
    def num_serial_commands(self) -> int:
        return len(self.serial_commands)

    @property
    def num_ble_commands(self) -> int:
        return len(self.ble_commands)

    def new_serial_command(self) -> SerialCommand:
        """Create a serial command with the next default name."""
        self._serial_counter += 1
        command = SerialCommand(name=f"Command {self._serial_counter}")
        self.serial_commands.append(command)
        return command

    def new_ble_command(self) -> BleCommand:
        """Create a Bluetooth LE command with the next default name."""
        self._ble_counter += 1
        command = BleCommand(name=f"Command {self._ble_counter}")
        self.ble_commands.append(command)
        return command

    def add_new_command(self) -> AnyCommand:
        """Create a command on the page being shown.

        A new Bluetooth LE command is offered an empty target first, then
        every writable characteristic known to the panel.
        """
        command: AnyCommand
        if self.page is Page.SERIAL:
            command = self.new_serial_command()
        else:
            command = self.new_ble_command()
            command.add_characteristic(
                NIL_UUID, NIL_UUID, CharacteristicProperty.WRITE_NO_RESPONSE
            )
            for char in self.characteristics:
                command.add_characteristic(char.service_uuid, char.char_uuid, char.flags)
        self.menu_commands()
        return command

    def remove_command(self, command: AnyCommand) -> None:
        """Delete a command from whichever list holds it."""
        if isinstance(command, BleCommand):
            self.ble_commands.remove(command)
            _log.info("BLE command removed")
        else:
            self.serial_commands.remove(command)
            _log.info("Serial command removed")
        self.menu_commands()

    def trigger(self, command: AnyCommand) -> bool:
        """Send a command the way its send button does; returns whether it went out."""
        try:
            if isinstance(command, BleCommand):
                char_uuid, data = command.payload()
            else:
                data = command.payload()
        except CommandError as exc:
            _log.warning("%s", exc)
            self._emit_log(logging.WARNING, str(exc))
            if self._on_focus is not None:
                self._on_focus()
            return False
        if isinstance(command, BleCommand):
            return self.send_ble_command(char_uuid, data)
        if self._on_send_serial is not None:
            self._on_send_serial(data)
        return True

    def send_ble_command(self, char_uuid: UuidLike, command: bytes) -> bool:
        """Write ``command`` to a characteristic if a device is connected."""
        if not self.ble_is_connected:
            _log.info("BLE device not connected")
            self._emit_log(logging.CRITICAL, "BLE device not connected")
            return False
        target = _parse_uuid(char_uuid)
        if target == NIL_UUID:
            _log.info("Invalid Uuid")
            self._emit_log(logging.CRITICAL, "Invalid Uuid")
            return False
        if self._on_write is not None:
            self._on_write(target, bytes(command))
        return True

    def add_characteristic(
        self, service_uuid: UuidLike, char_uuid: UuidLike, flags: int
    ) -> bool:
        """Remember a characteristic for new commands; only writable ones are kept."""
        props = CharacteristicProperty(flags)
        if not props & CharacteristicProperty.WRITE_NO_RESPONSE:
            return False
        self.characteristics.append(
            Characteristic(bluetooth_uuid(service_uuid), bluetooth_uuid(char_uuid), props)
        )
        return True

    def set_current_index(self, index: int) -> None:
        """Show the serial (0) or Bluetooth LE (1) page."""
        self.page = Page(index)

    def ble_connected(self, connected: bool) -> None:
        self.ble_is_connected = connected
        if not connected:
            self.characteristics.clear()

    def serial_port_opened(self, opened: bool) -> None:
        self.serial_is_open = opened

    def menu_commands(self) -> list[AnyCommand]:
        """Rebuild the menu for the page shown; returns its commands in order.

        The menu holds the new-command entry, a separator (``None``) and then
        the commands.
        """
        commands: list[AnyCommand] = list(
            self.serial_commands if self.page is Page.SERIAL else self.ble_commands
        )
        self.menu = [NEW_COMMAND_TEXT, None, *commands]
        return commands

    def save_settings(self, settings: MutableMapping[str, Any]) -> None:
        """Store every command under the commands group of ``settings``."""
        group = settings.setdefault(SETTING_GROUP, {})
        group[SETTING_SERIAL] = [_common_entry(c) for c in self.serial_commands]
        ble_entries = []
        for command in self.ble_commands:
            entry = _common_entry(command)
            current = command.current_characteristic()
            if current is not None:
                entry[SETTING_SERVICE_UUID] = str(current.service_uuid)
                entry[SETTING_CHAR_UUID] = str(current.char_uuid)
                entry[SETTING_CHAR_FLAGS] = int(current.flags)
            else:
                entry[SETTING_SERVICE_UUID] = str(NIL_UUID)
                entry[SETTING_CHAR_UUID] = str(NIL_UUID)
                entry[SETTING_CHAR_FLAGS] = 0
            ble_entries.append(entry)
        group[SETTING_BLE] = ble_entries

    def load_settings(self, settings: MutableMapping[str, Any]) -> None:
        """Replace all commands with the ones stored in ``settings``."""
        self.serial_commands.clear()
        self.ble_commands.clear()
        group: MutableMapping[str, Any] = settings.get(SETTING_GROUP, {})

        for entry in group.get(SETTING_SERIAL, []):
            _apply_common(self.new_serial_command(), entry)

        for entry in group.get(SETTING_BLE, []):
            command = self.new_ble_command()
            _apply_common(command, entry)
            service = _parse_uuid(entry.get(SETTING_SERVICE_UUID, NIL_UUID))
            char = _parse_uuid(entry.get(SETTING_CHAR_UUID, NIL_UUID))
            flags = _parse_int(
                entry.get(SETTING_CHAR_FLAGS, int(CharacteristicProperty.WRITE_NO_RESPONSE)),
                int(CharacteristicProperty.WRITE_NO_RESPONSE),
            )
            command.add_characteristic(service, char, flags & 0xFF)

        self.menu_commands()