"""Building blocks for acquiring, decoding and displaying device signals."""

__version__ = "1.0.1"

__all__ = [
    "asciisettings",
    "blechar",
    "bps",
    "commandpanel",
    "commands",
    "datatextview",
    "endianness",
    "serialport",
    "snapshots",
    "spinner",
    "tooltip",
    "valuelayout",
]