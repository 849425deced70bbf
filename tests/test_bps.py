from sigacq.bps import (
    BPS_TOOLTIP,
    BPS_TOOLTIP_ERR,
    BPS_TOOLTIP_KILO,
    BpsMeter,
    auto_scaled_speed,
)


def test_small_rate_in_bps():
    assert auto_scaled_speed(0) == ("0bps", "bits per second")
    assert auto_scaled_speed(2) == ("2bps", BPS_TOOLTIP)


def test_larger_rate_in_kbps():
    assert auto_scaled_speed(2048) == ("2kbps", "kbits per second")
    text, tip = auto_scaled_speed(100)
    assert text == "0kbps"
    assert tip == BPS_TOOLTIP_KILO


def test_new_meter_shows_zero():
    meter = BpsMeter()
    assert meter.text == "0bps"
    assert meter.tool_tip == BPS_TOOLTIP
    assert meter.running is False


def test_tick_uses_difference_of_totals():
    meter = BpsMeter()
    meter.tick(1024, max_bps=10**9, is_serial=True)
    assert meter.prev_bytes_read == 1024
    text = meter.tick(1024 + 256, max_bps=10**9, is_serial=True)
    assert text == auto_scaled_speed(256 * 8)[0]
    assert meter.text == text


def test_serial_limit_warning():
    meter = BpsMeter()
    text = meter.tick(10, max_bps=50, is_serial=True)
    assert text == "!80/50bps"
    assert meter.tool_tip == BPS_TOOLTIP_ERR


def test_no_warning_when_not_serial():
    meter = BpsMeter()
    text = meter.tick(10, max_bps=50, is_serial=False)
    assert text == auto_scaled_speed(80)[0]
    assert meter.tool_tip == BPS_TOOLTIP_KILO


def test_no_bytes_is_zero_bps():
    meter = BpsMeter()
    meter.tick(500, max_bps=10**6, is_serial=False)
    assert meter.tick(500, max_bps=10**6, is_serial=False) == "0bps"


def test_transfer_stop_resets_label():
    meter = BpsMeter()
    meter.transfer_started(True)
    assert meter.running is True
    meter.tick(10, max_bps=50, is_serial=True)
    meter.transfer_started(False)
    assert meter.running is False
    assert meter.text == "0bps"
    assert meter.tool_tip == BPS_TOOLTIP