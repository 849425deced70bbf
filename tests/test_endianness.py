import pytest

from sigacq.endianness import (
    Endianness,
    EndiannessSelector,
    endianness_from_setting,
    endianness_to_setting,
)


def test_setting_strings():
    assert endianness_to_setting(Endianness.LITTLE) == "little"
    assert endianness_to_setting(Endianness.BIG) == "big"


@pytest.mark.parametrize("value", list(Endianness))
def test_setting_round_trip(value):
    assert endianness_from_setting(endianness_to_setting(value)) is value


@pytest.mark.parametrize("text", ["", "middle", None, "LITTLE"])
def test_unknown_setting_is_none(text):
    assert endianness_from_setting(text) is None


def test_default_selection_is_little():
    assert EndiannessSelector().selection() is Endianness.LITTLE


def test_select_notifies_on_change():
    selector = EndiannessSelector()
    seen = []
    selector.connect(seen.append)
    selector.select(Endianness.BIG)
    assert selector.selection() is Endianness.BIG
    assert seen == [Endianness.BIG]


def test_select_same_value_does_not_notify():
    selector = EndiannessSelector(Endianness.BIG)
    seen = []
    selector.connect(seen.append)
    selector.select(Endianness.BIG)
    assert seen == []
    selector.select(Endianness.LITTLE)
    assert seen == [Endianness.LITTLE]