"""Serial port connection: open/close, line settings, pins, errors and I/O."""

from __future__ import annotations

import errno
import logging
from enum import Enum, Flag, auto
from typing import Any, Callable

import serial

_log = logging.getLogger(__name__)


class Parity(Enum):
    NONE = serial.PARITY_NONE
    EVEN = serial.PARITY_EVEN
    ODD = serial.PARITY_ODD
    SPACE = serial.PARITY_SPACE
    MARK = serial.PARITY_MARK


class StopBits(Enum):
    ONE = serial.STOPBITS_ONE
    ONE_AND_HALF = serial.STOPBITS_ONE_POINT_FIVE
    TWO = serial.STOPBITS_TWO


class FlowControl(Enum):
    NONE = "none"
    HARDWARE = "hardware"
    SOFTWARE = "software"


class PinSignal(Flag):
    NONE = 0
    DTR = auto()
    RTS = auto()
    CTS = auto()
    DSR = auto()
    RI = auto()
    DCD = auto()


class PortError(Enum):
    NO_ERROR = auto()
    RESOURCE = auto()
    DEVICE_NOT_FOUND = auto()
    PERMISSION = auto()
    OPEN = auto()
    NOT_OPEN = auto()
    PARITY = auto()
    FRAMING = auto()
    BREAK_CONDITION = auto()
    WRITE = auto()
    READ = auto()
    UNSUPPORTED_OPERATION = auto()
    TIMEOUT = auto()
    UNKNOWN = auto()


_PIN_ATTRIBUTES = (
    (PinSignal.DTR, "dtr"),
    (PinSignal.RTS, "rts"),
    (PinSignal.CTS, "cts"),
    (PinSignal.DSR, "dsr"),
    (PinSignal.RI, "ri"),
    (PinSignal.DCD, "cd"),
)

_PORT_ERRORS = (serial.SerialException, OSError, ValueError)


def max_bit_rate(baud_rate: int, data_bits: int, parity: Any, stop_bits: Any) -> int:
    """Maximum payload bit rate for the given line settings (bits per second)."""
    parity_bits = 0 if Parity(parity) is Parity.NONE else 1
    frame_size = 1 + data_bits + parity_bits + StopBits(stop_bits).value
    return int(float(baud_rate) / frame_size)


def _default_factory(port_name: str) -> Any:
    return serial.serial_for_url(port_name, do_not_open=True)


def _classify(exc: BaseException) -> PortError:
    code = getattr(exc, "errno", None)
    if code == errno.ENOENT:
        return PortError.DEVICE_NOT_FOUND
    if code in (errno.EACCES, errno.EPERM):
        return PortError.PERMISSION
    if code == errno.EBUSY:
        return PortError.OPEN
    return PortError.UNKNOWN


class SerialPort:
    """A serial device connection that reports state changes through callbacks."""

    def __init__(
        self,
        port_factory: Callable[[str], Any] | None = None,
        *,
        on_toggled: Callable[[bool], None] | None = None,
        on_log: Callable[[int, str], None] | None = None,
        on_port_list: Callable[[], None] | None = None,
        on_max_bit_rate: Callable[[int], None] | None = None,
        on_data: Callable[[bytes], None] | None = None,
        on_pins: Callable[[PinSignal], None] | None = None,
    ) -> None:
        self._factory = port_factory or _default_factory
        self._on_toggled = on_toggled
        self._on_log = on_log
        self._on_port_list = on_port_list
        self._on_max_bit_rate = on_max_bit_rate
        self._on_data = on_data
        self._on_pins = on_pins
        self._port: Any = None
        self.port_name = ""
        self.error_string = ""
        self.baud_rate = 9600
        self.data_bits = 8
        self.parity = Parity.NONE
        self.stop_bits = StopBits.ONE
        self.flow_control = FlowControl.NONE
        self.pin_update_active = False

    def _emit_log(self, level: int, text: str) -> None:
        if self._on_log is not None:
            self._on_log(level, text)

    def _emit_toggled(self, opened: bool) -> None:
        if self._on_toggled is not None:
            self._on_toggled(opened)

    def is_open(self) -> bool:
        return self._port is not None and bool(self._port.is_open)

    def _close(self) -> None:
        self.pin_update_active = False
        self._port.close()

    def toggle_port(
        self,
        port_name: str,
        baud_rate: int,
        parity: Any,
        data_bits: int,
        stop_bits: Any,
        flow_control: Any,
        dtr: bool,
        rts: bool,
    ) -> None:
        """Close the port if it is open, otherwise open ``port_name`` with these settings."""
        _log.info("Port name: %s", port_name)
        _log.info("Baud rate: %s", baud_rate)
        if self.is_open():
            self._close()
            _log.debug("Closed port: %s", self.port_name)
            self._emit_log(logging.INFO, f"Closed port: {self.port_name}")
            self._emit_toggled(False)
            return

        self.port_name = port_name
        self.baud_rate = int(baud_rate)
        self.parity = Parity(parity)
        self.data_bits = int(data_bits)
        self.stop_bits = StopBits(stop_bits)
        self.flow_control = FlowControl(flow_control)
        try:
            port = self._factory(port_name)
            port.baudrate = self.baud_rate
            port.parity = self.parity.value
            port.bytesize = self.data_bits
            port.stopbits = self.stop_bits.value
            port.rtscts = self.flow_control is FlowControl.HARDWARE
            port.xonxoff = self.flow_control is FlowControl.SOFTWARE
            port.open()
        except _PORT_ERRORS as exc:
            self.error_string = str(exc)
            self.handle_error(_classify(exc))
            return

        self._port = port
        try:
            port.dtr = dtr
            port.rts = rts
        except _PORT_ERRORS as exc:
            _log.warning("Can't set output pins: %s", exc)
        self.pin_signals()
        self.pin_update_active = True
        _log.debug("Opened port: %s", port_name)
        self._emit_toggled(True)
        self._emit_log(logging.INFO, f"Opened port: {port_name}")
        self.max_bit_rate()

    def _apply(self, attribute: str, value: Any, message: str) -> bool:
        if not self.is_open():
            return False
        try:
            setattr(self._port, attribute, value)
        except _PORT_ERRORS:
            _log.critical(message)
            return False
        return True

    def select_baud_rate(self, baud_rate: Any) -> bool:
        """Change the baud rate of the open port; text is accepted too."""
        if not self.is_open():
            return False
        try:
            value = int(str(baud_rate))
        except ValueError:
            _log.critical("Can't set baud rate!")
            return False
        if value <= 0 or not self._apply("baudrate", value, "Can't set baud rate!"):
            if value <= 0:
                _log.critical("Can't set baud rate!")
            return False
        self.baud_rate = value
        return True

    def select_parity(self, parity: Any) -> bool:
        try:
            value = Parity(parity)
        except ValueError:
            _log.critical("Can't set parity option!")
            return False
        if not self._apply("parity", value.value, "Can't set parity option!"):
            return False
        self.parity = value
        return True

    def select_data_bits(self, data_bits: int) -> bool:
        if not self._apply("bytesize", data_bits, "Can't set numer of data bits!"):
            return False
        self.data_bits = data_bits
        return True

    def select_stop_bits(self, stop_bits: Any) -> bool:
        try:
            value = StopBits(stop_bits)
        except ValueError:
            _log.critical("Can't set number of stop bits!")
            return False
        if not self._apply("stopbits", value.value, "Can't set number of stop bits!"):
            return False
        self.stop_bits = value
        return True

    def select_flow_control(self, flow_control: Any) -> bool:
        try:
            value = FlowControl(flow_control)
        except ValueError:
            _log.critical("Can't set flow control option!")
            return False
        message = "Can't set flow control option!"
        if not (
            self._apply("rtscts", value is FlowControl.HARDWARE, message)
            and self._apply("xonxoff", value is FlowControl.SOFTWARE, message)
        ):
            return False
        self.flow_control = value
        return True

    def set_dtr(self, value: bool) -> None:
        if self.is_open():
            self._port.dtr = value

    def set_rts(self, value: bool) -> None:
        if self.is_open():
            self._port.rts = value

    def send_command(self, command: bytes) -> bool:
        """Write ``command`` to the port; returns whether it was sent."""
        if not self.is_open():
            self._emit_log(logging.CRITICAL, "Serial port not opened")
            return False
        try:
            self._port.write(command)
        except _PORT_ERRORS as exc:
            self.error_string = str(exc)
            self._emit_log(logging.CRITICAL, "Send command failed")
            return False
        self._emit_log(logging.INFO, "Command sent")
        return True

    def read_available(self) -> bytes:
        """Read every byte waiting on the port and pass it to the data callback."""
        if not self.is_open():
            return b""
        try:
            data = self._port.read(self._port.in_waiting)
        except _PORT_ERRORS as exc:
            self.error_string = str(exc)
            self.handle_error(PortError.READ)
            return b""
        if self._on_data is not None:
            self._on_data(data)
        return data

    def pin_signals(self) -> PinSignal:
        """Current state of the modem control lines."""
        pins = PinSignal.NONE
        if self.is_open():
            for flag, attribute in _PIN_ATTRIBUTES:
                try:
                    if getattr(self._port, attribute):
                        pins |= flag
                except _PORT_ERRORS:
                    continue
        if self._on_pins is not None:
            self._on_pins(pins)
        return pins

    def max_bit_rate(self) -> int:
        """Maximum bit rate for the current settings; also reported to the callback."""
        rate = max_bit_rate(self.baud_rate, self.data_bits, self.parity, self.stop_bits)
        if self._on_max_bit_rate is not None:
            self._on_max_bit_rate(rate)
        return rate

    def _is_pts_invalid_argument(self) -> bool:
        return "pts/" in self.port_name and "Invalid argument" in self.error_string

    def handle_error(self, error: PortError) -> None:
        """React to a port error: log it, close on device loss, report the state."""
        if error is PortError.RESOURCE:
            _log.warning("Port error: resource unavaliable; most likely device removed.")
            self._emit_log(logging.CRITICAL, "Port error: device removed")
            if self.is_open():
                self._emit_log(
                    logging.WARNING, f"Closing port on resource error: {self.port_name}"
                )
                self._close()
                self._emit_log(logging.INFO, f"Closed port: {self.port_name}")
            if self._on_port_list is not None:
                self._on_port_list()
        elif error is PortError.DEVICE_NOT_FOUND:
            _log.critical("Device doesn't exist: %s", self.port_name)
            self._emit_log(logging.CRITICAL, f"Device doesn't exist: {self.port_name}")
        elif error is PortError.PERMISSION:
            _log.critical(
                "Permission denied. Either you don't have required privileges "
                "or device is already opened by another process."
            )
            self._emit_log(logging.CRITICAL, "Port open permission denied")
        elif error is PortError.OPEN:
            _log.warning("Device is already opened!")
            self._emit_log(logging.CRITICAL, "Port already opened")
        elif error is PortError.NOT_OPEN:
            _log.critical("Device is not open!")
        elif error is PortError.PARITY:
            _log.critical("Parity error detected.")
        elif error is PortError.FRAMING:
            _log.critical("Framing error detected.")
        elif error is PortError.BREAK_CONDITION:
            _log.critical("Break condition is detected.")
        elif error is PortError.WRITE:
            _log.critical("An error occurred while writing data.")
            self._emit_log(logging.CRITICAL, "An error occurred while writing data")
        elif error is PortError.READ:
            _log.critical("An error occurred while reading data.")
            self._emit_log(logging.CRITICAL, "An error occurred while reading data")
        elif error is PortError.UNSUPPORTED_OPERATION:
            if not self._is_pts_invalid_argument():
                _log.critical("Operation is not supported.")
        elif error is PortError.TIMEOUT:
            _log.critical("A timeout error occurred.")
        elif error is PortError.UNKNOWN:
            if not self._is_pts_invalid_argument():
                _log.critical("Unknown error! Error: %s", self.error_string)
                self._emit_log(logging.CRITICAL, f"Unknown error: {self.error_string}")
        self._emit_toggled(self.is_open())