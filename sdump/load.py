"""Save bytes arriving on the serial port to a file."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from typing import BinaryIO

from sdump.dump import (
    _Spinner,
    _build_parser,
    _interrupt_flag,
    _settings_path,
    _start_port,
)
from sdump.serialport import SerialPort


def receive_to_file(
    port: SerialPort, stream: BinaryIO, should_stop: Callable[[], bool]
) -> int:
    """Write every received byte to ``stream`` until ``should_stop()``.

    Returns the number of bytes written.
    """
    spinner = _Spinner()
    received = 0
    while not should_stop():
        spinner.begin()
        byte = port.recv_byte()
        if byte is not None:
            stream.write(bytes((byte,)))
            spinner.advance()
            received += 1
    return received


def main(argv: list[str] | None = None) -> int:
    """Record serial port input into the named file until interrupted."""
    parser = _build_parser(
        "sload", "Save data from the serial port to a file.", "file to write"
    )
    args = parser.parse_args(argv)

    ini_path = _settings_path(args)
    if not os.path.exists(ini_path):
        print("ERROR: SDUMP.INI does not exist. Exiting.")
        return 1
    if not args.file:
        print("USAGE: sload <filename to write>")
        return 0

    port = _start_port(ini_path, args.device)
    if port is None:
        return 1
    with port:
        try:
            stream = open(args.file, "wb")
        except OSError:
            print(f"Failed to open file '{args.file}'.")
            return 1
        with stream:
            print("\nSaving data from serial port to file. Press Ctrl+C to stop...")
            with _interrupt_flag() as stopped:
                receive_to_file(port, stream, stopped)
        print("\rStopped.", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())