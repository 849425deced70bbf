# sigacq

Building blocks for a signal acquisition and plotting tool: talking to a
serial port, decoding Bluetooth Low Energy characteristic values, encoding
user commands, keeping plot snapshots and laying out value labels.

Each module holds the state and rules behind one part of a user interface,
so a front end of your choice can drive it. Changes are reported through
plain callbacks, and settings are saved to and loaded from ordinary
mappings (a dictionary of groups, each group a dictionary).

## Installation

```
pip install sigacq
```

The `test` extra installs pytest for the test suite in `tests/`.

## Modules

| Module | What it does |
| --- | --- |
| `sigacq.serialport` | `SerialPort` opens and closes a port (`toggle_port`), changes its settings (`select_baud_rate`, `select_parity`, `select_data_bits`, `select_stop_bits`, `select_flow_control`), sets DTR/RTS, sends commands, reads waiting data and reports the pin states; `handle_error` reacts to a `PortError`; `max_bit_rate` gives the useful bit rate for a frame layout. The `Parity`, `StopBits`, `FlowControl` and `PinSignal` enums describe the line. |
| `sigacq.blechar` | `decode_characteristic_value` turns raw characteristic bytes into text (heart rate, battery level, battery status, voltage and current; anything else as hex); `BleCharacteristicView` holds one characteristic and its `CharacteristicProperty` flags and refuses reads, writes or notifications the flags do not allow; `bluetooth_uuid` expands 16/32-bit short UUIDs. |
| `sigacq.commands` | `encode_command` turns ASCII text (with `\n`, `\r`, `\t`, `\0`, `\\` escapes) or hex text into bytes; `SerialCommand` and `BleCommand` are named commands; `CommandError` reports an empty command or bad hex. |
| `sigacq.commandpanel` | `CommandPanel` keeps the lists of serial and BLE commands, sends them through callbacks and saves them to and loads them from a settings mapping. |
| `sigacq.snapshots` | `SnapshotManager` keeps snapshots of channel data; `load_snapshot_csv` reads a `Snapshot` from a CSV file and raises `SnapshotLoadError` on bad input. |
| `sigacq.asciisettings` | `AsciiReaderSettings` with `FilterMode` and `DelimiterChoice` keeps the ASCII reader's options and their saved form. |
| `sigacq.datatextview` | `DataTextView` keeps incoming samples as lines of text up to a line limit; `format_samples` formats them. |
| `sigacq.valuelayout` | `layout_values` spreads overlapping `ChannelValue` labels apart; `visible_channels` filters channels; `format_selection_size` formats a zoom selection. |
| `sigacq.bps` | `BpsMeter` turns byte counts into a bits-per-second label and warns when a serial port's limit is reached; `auto_scaled_speed` formats a rate. |
| `sigacq.spinner` | `WaitingSpinner` models a busy indicator: line count, size, timer interval and the fade of each line. |
| `sigacq.endianness` | `Endianness`, `EndiannessSelector` and their saved-settings names. |
| `sigacq.tooltip` | `format_tool_tip` appends a keyboard shortcut to a tool tip. |

## Examples

Encoding a command:

```python
from sigacq.commands import encode_command

encode_command("hello\\n", ascii_mode=True)   # b"hello\n"
encode_command("01 ff 7a", ascii_mode=False)  # b"\x01\xffz"
```

Loading a snapshot saved as CSV (first row holds the channel names):

```python
from sigacq.snapshots import SnapshotManager, load_snapshot_csv

snapshot = load_snapshot_csv("run1.csv")
print(snapshot.name, snapshot.channel_names)

manager = SnapshotManager()
manager.add_snapshot(snapshot)
print(manager.is_all_saved())  # True: loaded snapshots count as saved
```

Working out the useful bit rate of a serial link:

```python
from sigacq.serialport import Parity, StopBits, max_bit_rate

max_bit_rate(115200, 8, Parity.NONE, StopBits.ONE)  # 11520
```

## What it does not do

- There is no graphical interface and no plotting: the modules compute
  what a window would show (labels, menus, spinner fades, label positions)
  but draw nothing.
- There is no Bluetooth transport. Device discovery, connecting and the
  actual reads, writes and notifications are left to the caller; the
  package only decodes values and decides what to request.
- There are no stream readers that turn incoming bytes into samples;
  `sigacq.asciisettings` and `sigacq.endianness` only hold the options such
  readers would use.
- There is no command-line program.