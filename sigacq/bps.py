"""Bits-per-second display of incoming data."""

from __future__ import annotations

BPS_TOOLTIP = "bits per second"
BPS_TOOLTIP_KILO = "kbits per second"
BPS_TOOLTIP_ERR = "Maximum baud rate may be reached!"

_UINT64 = 1 << 64


def auto_scaled_speed(bits_rate: int) -> tuple[str, str]:
    """Return the speed text and its tool tip, scaled to kbps where it applies."""
    if bits_rate > 2:
        return f"{bits_rate // 1024}kbps", BPS_TOOLTIP_KILO
    return f"{bits_rate}bps", BPS_TOOLTIP


class BpsMeter:
    """Turns a running byte count sampled once a second into a speed label."""

    def __init__(self) -> None:
        self.prev_bytes_read = 0
        self.text = "0bps"
        self.tool_tip = BPS_TOOLTIP
        self.running = False

    def tick(self, total_bytes_read: int, max_bps: int, is_serial: bool) -> str:
        """Update from the total bytes read so far; return the new label text.

        On a serial port, reaching ``max_bps`` shows a warning instead.
        """
        bytes_read = (total_bytes_read - self.prev_bytes_read) % _UINT64
        self.prev_bytes_read = total_bytes_read
        bits = bytes_read * 8
        text, tool_tip = auto_scaled_speed(bits)
        if is_serial and bits >= max_bps:
            text = f"!{bits}/{max_bps}bps"
            tool_tip = BPS_TOOLTIP_ERR
        self.text = text
        self.tool_tip = tool_tip
        return text

    def transfer_started(self, started: bool) -> None:
        """Start or stop measuring; stopping resets the label."""
        self.running = started
        if not started:
            self.text = "0bps"
            self.tool_tip = BPS_TOOLTIP