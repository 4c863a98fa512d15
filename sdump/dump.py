"""Send a file, byte by byte, over the serial port."""

from __future__ import annotations

import argparse
import os
import signal
import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import BinaryIO, TextIO

import serial

from sdump.serialport import ConfigError, PortConfig, SerialPort, config_from_settings
from sdump.settings import ini_path_for, load_settings

_SPINNER = "|/-\\"


class _Spinner:
    """The rotating progress mark shown while bytes move."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._count = 0
        self._out = out

    def _write(self, text: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        out.write(text)
        out.flush()

    def begin(self) -> str:
        """Return to the line start, show the current mark and step on."""
        mark = _SPINNER[self._count % 4]
        self._write("\r" + mark)
        self._count += 1
        return mark

    def advance(self) -> str:
        """Show the next mark after a byte has moved and return it."""
        mark = _SPINNER[self._count % 4]
        self._write(mark)
        return mark


@contextmanager
def _interrupt_flag() -> Iterator[Callable[[], bool]]:
    """Turn Ctrl+C into a flag that can be polled instead of an exception."""
    stop_event = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: stop_event.set())
    try:
        yield stop_event.is_set
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)


def _build_parser(
    prog: str, description: str, file_help: str | None = None
) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    if file_help is not None:
        parser.add_argument("file", nargs="?", default="", help=file_help)
    parser.add_argument(
        "--config", help="settings file (default: SDUMP.INI next to the program)"
    )
    parser.add_argument(
        "--device", help="pyserial port name or URL to use instead of the configured port"
    )
    return parser


def _settings_path(args: argparse.Namespace) -> str:
    return args.config or ini_path_for(sys.argv[0])


def _report_config(config: PortConfig) -> None:
    print("Serial Port Settings")
    print(f"Port:       {config.port} at 0x{config.base_address:x}")
    print(f"Baud Rate:  {config.baud_rate}")
    print(f"Parity:     {config.parity.value}")
    print(f"Byte Size:  {config.byte_size}")
    print(f"Stop Bits:  {config.stop_bits}")


def _start_port(ini_path: str, device: str | None, loopback: bool = False) -> SerialPort | None:
    """Load the settings and open the port, reporting any failure."""
    try:
        settings = load_settings(ini_path)
    except OSError:
        print(f"Error: Cannot open INI file: {ini_path}", file=sys.stderr)
        return None
    try:
        config = config_from_settings(settings)
    except ConfigError as exc:
        print(f"{exc}\nExiting.")
        return None
    _report_config(config)
    port = SerialPort(config, device)
    try:
        port.open(loopback)
    except (serial.SerialException, OSError, ValueError):
        print("Serial port initialization failed! Exiting.")
        return None
    print("Serial port initialized. Ready.")
    return port


def send_file(port: SerialPort, stream: BinaryIO, should_stop: Callable[[], bool]) -> int:
    """Send ``stream`` one byte at a time until it ends or ``should_stop()``.

    Returns the number of bytes sent.
    """
    spinner = _Spinner()
    sent = 0
    while not should_stop():
        chunk = stream.read(1)
        if not chunk:
            break
        spinner.begin()
        if port.send_byte(chunk[0]):
            spinner.advance()
        sent += 1
    return sent


def main(argv: list[str] | None = None) -> int:
    """Send the named file over the configured serial port."""
    parser = _build_parser("sdump", "Send a file over the serial port.", "file to send")
    args = parser.parse_args(argv)

    ini_path = _settings_path(args)
    if not os.path.exists(ini_path):
        print("ERROR: SDUMP.INI does not exist. Exiting.")
        return 1
    if not args.file:
        print("USAGE: sdump <filename to send>")
        return 0
    if not os.path.exists(args.file):
        print(f"ERROR: The file {args.file} does not exist. Exiting.")
        return 1

    port = _start_port(ini_path, args.device)
    if port is None:
        return 1
    with port:
        try:
            stream = open(args.file, "rb")
        except OSError:
            print(f"Failed to open file '{args.file}'.")
            return 1
        with stream:
            print("\nSending file over serial port. Press Ctrl+C to cancel...")
            with _interrupt_flag() as stopped:
                send_file(port, stream, stopped)
                interrupted = stopped()
        print("\rStopped." if interrupted else "\rDone!", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())