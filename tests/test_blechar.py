import struct
import uuid

import pytest

from sigacq.blechar import (
    BATTERY_CURRENT_UUID,
    BATTERY_LEVEL_STATUS_UUID,
    BATTERY_LEVEL_UUID,
    BATTERY_VOLTAGE_UUID,
    HEART_RATE_MEASUREMENT_UUID,
    BleCharacteristicView,
    CharacteristicProperty,
    bluetooth_uuid,
    decode_characteristic_value,
)

CUSTOM = uuid.UUID("12345678-1234-5678-1234-567812345678")


def test_short_uuid_expands_with_base():
    assert bluetooth_uuid(0x2A19) == uuid.UUID("00002a19-0000-1000-8000-00805f9b34fb")


def test_uuid_text_with_braces_round_trip():
    assert bluetooth_uuid("{" + str(CUSTOM) + "}") == CUSTOM


def test_unknown_characteristic_shows_hex():
    assert decode_characteristic_value(CUSTOM, b"\x01\x02\xff") == "0x" + b"\x01\x02\xff".hex()


def test_heart_rate():
    assert decode_characteristic_value(HEART_RATE_MEASUREMENT_UUID, b"\x00\x48") == (
        f"Heart rate: {0x48}"
    )


def test_battery_level():
    assert decode_characteristic_value(BATTERY_LEVEL_UUID, bytes([85])) == "SOC: 85%"


@pytest.mark.parametrize("status, text", [(0x4100, "Discharging"), (0x2300, "Charging")])
def test_battery_status(status, text):
    value = struct.pack("<H", status)
    assert decode_characteristic_value(BATTERY_LEVEL_STATUS_UUID, value) == text


def test_unknown_battery_status_stays_hex():
    value = struct.pack("<H", 0x0012)
    assert decode_characteristic_value(BATTERY_LEVEL_STATUS_UUID, value) == "0x" + value.hex()


def test_battery_voltage():
    assert decode_characteristic_value(BATTERY_VOLTAGE_UUID, struct.pack("<H", 3700)) == "BV: 3.7V"


def test_small_battery_current_in_milliamps():
    assert decode_characteristic_value(BATTERY_CURRENT_UUID, struct.pack("<h", -50)) == "BC: -50mA"


def test_large_battery_current_in_amps():
    value = struct.pack("<h", -500)
    assert decode_characteristic_value(BATTERY_CURRENT_UUID, value) == "Battery Current: -0.5A"


def test_short_value_falls_back_to_hex():
    assert decode_characteristic_value(BATTERY_VOLTAGE_UUID, b"\x01") == "0x01"


def test_write_emits_utf8_bytes():
    calls = []
    view = BleCharacteristicView(
        CUSTOM,
        0x2A19,
        CharacteristicProperty.WRITE_NO_RESPONSE,
        on_write=lambda u, d: calls.append((u, d)),
    )
    assert view.write("héllo") == "héllo".encode("utf-8")
    assert calls == [(BATTERY_LEVEL_UUID, "héllo".encode("utf-8"))]


def test_read_and_notify_need_flags():
    view = BleCharacteristicView(CUSTOM, CUSTOM, CharacteristicProperty.WRITE_NO_RESPONSE)
    with pytest.raises(PermissionError):
        view.read()
    with pytest.raises(PermissionError):
        view.enable_notification(True)


def test_read_and_notify_callbacks():
    reads, notes = [], []
    view = BleCharacteristicView(
        CUSTOM,
        CUSTOM,
        CharacteristicProperty.READ | CharacteristicProperty.NOTIFY,
        on_read=reads.append,
        on_notify=lambda on, u: notes.append((on, u)),
    )
    view.read()
    view.enable_notification(True)
    view.enable_notification(False)
    assert reads == [CUSTOM]
    assert notes == [(True, CUSTOM), (False, CUSTOM)]
    with pytest.raises(PermissionError):
        view.write("x")


def test_update_value_and_matches():
    view = BleCharacteristicView(CUSTOM, 0x2A19, CharacteristicProperty.READ)
    assert view.update_value(bytes([40])) == "SOC: 40%"
    assert view.value_text == "SOC: 40%"
    assert view.matches(0x2A19)
    assert view.matches(str(BATTERY_LEVEL_UUID))
    assert not view.matches(CUSTOM)
    assert view.char_label == "{" + str(BATTERY_LEVEL_UUID) + "}"