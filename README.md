# sdump

Three small command-line tools for moving raw bytes over a serial port:

- `sdump` sends the contents of a file out of the serial port, one byte at a time, and prints `Done!` when the file has been sent.
- `sload` reads bytes arriving on the serial port and writes them to a file until you press Ctrl+C.
- `stest` checks that every byte value from 0 to 255 sent out of the port comes back unchanged.

Each tool prints its port settings when it starts and shows a small spinner while it works. Ctrl+C stops the work cleanly and the tool prints `Stopped.`.

Serial access goes through pyserial.

## Installation

```
pip install .
```

## Configuration

The tools read their port settings from a file named `SDUMP.INI`. By default it is looked up in the same directory as the program being run; `--config PATH` names another file. If the file does not exist, the tool prints `ERROR: SDUMP.INI does not exist. Exiting.` and exits with status 1.

The file holds `key = value` lines. Spaces and tabs around keys and values are ignored. Blank lines, lines starting with `;` or `#`, and section headers in `[brackets]` are skipped; any other line without `=` produces a warning. At most eight settings are kept, keys and values are cut to nine characters, and reading stops at a line longer than 254 characters. If a key appears twice, the first value wins.

```
[serial]
port      = COM1
baud_rate = 9600
parity    = none
byte_size = 8
stop_bits = 1
```

| Key         | Allowed values                          |
|-------------|-----------------------------------------|
| `port`      | `COM1`, `COM2`, `COM3`, `COM4`          |
| `baud_rate` | a whole number from 1 to 115200         |
| `parity`    | `none`, `even`, `odd`                   |
| `byte_size` | `5`, `6`, `7`, `8`                      |
| `stop_bits` | `1`, `2`                                |

Numbers are read digit by digit and any character that is not a digit counts as zero. The baud rate is turned into a clock divisor of 115200, so the rate actually used is `115200 // (115200 // baud_rate)`; this is the rate printed at start-up. A missing or invalid setting makes the tool print a message such as `INVALID PARITY: mark` followed by `Exiting.`, and exit with status 1.

## Usage

Send a file:

```
sdump data.bin
```

Capture incoming data into a file, stopping with Ctrl+C:

```
sload capture.bin
```

Run the loopback self-test:

```
stest
```

Run without a file name, `sdump` and `sload` print a usage line and exit with status 0. `sdump` exits with status 1 if the file does not exist.

All three commands accept:

- `--config PATH`: the settings file to read instead of `SDUMP.INI` next to the program.
- `--device NAME`: the pyserial port name or URL to open instead of the configured `port` value, for example `/dev/ttyS0` or `loop://`.

The configured `port` value (`COM1` to `COM4`) is what is opened when `--device` is not given. Its classic I/O base address is shown with the settings for reference only.

`stest` prints `Passed!` once all 256 byte values have come back, and `Failed!` at the first byte that comes back different.

The commands can also be started as `python -m sdump.dump`, `python -m sdump.load` and `python -m sdump.loopback`.

## Library use

- `sdump.settings`: `Settings` (with `add`, `get`, `in`, `len` and iteration over pairs), `parse_settings(lines)`, `load_settings(filename)` and `ini_path_for(program_path)` read the format described above.
- `sdump.serialport`: `config_from_settings(settings)` returns a `PortConfig` (port, base address, divisor, parity, byte size, stop bits, and the derived `baud_rate`) or raises `ConfigError`. `SerialPort(config, device=None)` is opened with `open(loopback=False)` or used as a context manager, and offers `send_byte(byte)`, `recv_byte()` (returns `None` when no byte is waiting) and `verify_loopback_byte(byte)`. `line_control_value(config)` and `modem_control_value(loopback)` give the 16550 UART Line Control and Modem Control register values for a configuration.
- `sdump.util`: `u_atoi(string)` and `ul_pow(base, power)`.
- `sdump.dump.send_file(port, stream, should_stop)`, `sdump.load.receive_to_file(port, stream, should_stop)` and `sdump.loopback.run_loopback_test(port, should_stop)` run the transfer loops on an open port. The first two return the number of bytes moved; the last returns `True`, `False`, or `None` if stopped.

## What it does not do

- It does not program UART registers itself. Ports are driven through pyserial, and `line_control_value` and `modem_control_value` only compute register values.
- `stest` does not switch the UART into internal loopback. In loopback mode it only drops DTR, so the test needs a loopback plug on the port or a pyserial URL such as `--device loop://`. If a sent byte never comes back, the test waits for it until interrupted.
- There is no flow control, framing, checksum or retry. Bytes are sent and saved exactly as they are.