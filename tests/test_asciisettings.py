import pytest

from sigacq.asciisettings import (
    MAX_NUM_CHANNELS,
    SETTING_CUSTOM_DELIMITER,
    SETTING_DELIMITER,
    SETTING_FILTER_MODE,
    SETTING_GROUP,
    SETTING_NUM_CHANNELS,
    AsciiReaderSettings,
    DelimiterChoice,
    FilterMode,
)


def test_builtin_delimiters():
    s = AsciiReaderSettings()
    assert s.delimiter() == ","
    s.set_delimiter_choice(DelimiterChoice.SPACE)
    assert s.delimiter() == " "
    s.set_delimiter_choice(DelimiterChoice.TAB)
    assert s.delimiter() == "\t"


def test_other_delimiter_empty_is_none_and_not_signalled():
    seen = []
    s = AsciiReaderSettings(on_delimiter=seen.append)
    s.set_delimiter_choice(DelimiterChoice.OTHER)
    assert s.delimiter() is None
    assert seen == []
    s.set_custom_delimiter(";")
    assert s.delimiter() == ";"
    assert seen == [";"]


def test_custom_delimiter_rejects_digits_and_long_text():
    s = AsciiReaderSettings()
    with pytest.raises(ValueError):
        s.set_custom_delimiter("5")
    with pytest.raises(ValueError):
        s.set_custom_delimiter(";;")


def test_num_channels_clamped():
    s = AsciiReaderSettings()
    assert s.set_num_channels(1000) == MAX_NUM_CHANNELS
    assert s.set_num_channels(-3) == 0


def test_save_auto_tab_and_other():
    s = AsciiReaderSettings()
    s.set_num_channels(0)
    s.set_delimiter_choice(DelimiterChoice.TAB)
    settings = {}
    s.save_settings(settings)
    assert settings[SETTING_GROUP][SETTING_NUM_CHANNELS] == "auto"
    assert settings[SETTING_GROUP][SETTING_DELIMITER] == "TAB"
    s.set_delimiter_choice(DelimiterChoice.OTHER)
    s.save_settings(settings)
    assert settings[SETTING_GROUP][SETTING_DELIMITER] == "other"


def test_round_trip():
    s = AsciiReaderSettings()
    s.set_num_channels(3)
    s.set_custom_delimiter("|")
    s.set_delimiter_choice(DelimiterChoice.OTHER)
    s.is_hex = True
    s.set_filter(FilterMode.INCLUDE, "$")
    settings = {}
    s.save_settings(settings)
    assert settings[SETTING_GROUP][SETTING_FILTER_MODE] == "include"

    t = AsciiReaderSettings()
    t.load_settings(settings)
    assert t.num_channels == 3
    assert t.delimiter() == "|"
    assert t.is_hex is True
    assert t.filter_mode is FilterMode.INCLUDE
    assert t.filter_prefix == "$"


def test_load_unknown_values_keep_current():
    s = AsciiReaderSettings()
    s.set_num_channels(4)
    s.set_filter(FilterMode.EXCLUDE, "#")
    s.load_settings(
        {SETTING_GROUP: {SETTING_NUM_CHANNELS: "many", SETTING_FILTER_MODE: "weird"}}
    )
    assert s.num_channels == 4
    assert s.filter_mode is FilterMode.EXCLUDE
    assert s.filter_prefix == "#"
    assert s.delimiter() == ","


def test_load_without_custom_uses_current_delimiter():
    s = AsciiReaderSettings()
    s.load_settings({SETTING_GROUP: {SETTING_DELIMITER: " "}})
    assert s.delimiter_choice is DelimiterChoice.SPACE
    assert s.custom_delimiter == ","


def test_load_string_hex_flag():
    s = AsciiReaderSettings()
    s.load_settings({SETTING_GROUP: {"hex": "true", SETTING_CUSTOM_DELIMITER: ""}})
    assert s.is_hex is True


def test_filter_callback_and_prefix_editable():
    seen = []
    s = AsciiReaderSettings(on_filter=lambda m, p: seen.append((m, p)))
    assert s.prefix_editable is False
    s.set_filter(FilterMode.EXCLUDE, "x")
    assert seen == [(FilterMode.EXCLUDE, "x")]
    assert s.prefix_editable is True
    s.set_filter(FilterMode.EXCLUDE)
    assert len(seen) == 1