"""Check a serial port by echoing every byte value through loopback."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

from sdump.dump import (
    _Spinner,
    _build_parser,
    _interrupt_flag,
    _settings_path,
    _start_port,
)
from sdump.serialport import SerialPort


def run_loopback_test(port: SerialPort, should_stop: Callable[[], bool]) -> bool | None:
    """Send each byte value 0..255 and check it comes back.

    Returns ``True`` if all values came back, ``False`` at the first
    mismatch, and ``None`` if ``should_stop()`` ended the test early.
    """
    spinner = _Spinner()
    for byte in range(256):
        if should_stop():
            return None
        spinner.begin()
        if not port.verify_loopback_byte(byte):
            return False
        spinner.advance()
    return True


def main(argv: list[str] | None = None) -> int:
    """Open the configured port in loopback mode and test it."""
    parser = _build_parser("stest", "Test the serial port in loopback mode.")
    args = parser.parse_args(argv)

    ini_path = _settings_path(args)
    if not os.path.exists(ini_path):
        print("ERROR: SDUMP.INI does not exist. Exiting.")
        return 1

    port = _start_port(ini_path, args.device, loopback=True)
    if port is None:
        return 1
    with port:
        print("\nTesting loopback. Press Ctrl+C to stop...")
        with _interrupt_flag() as stopped:
            result = run_loopback_test(port, stopped)
        if result is None:
            print("\rStopped.", flush=True)
        elif result:
            print("\rPassed!", flush=True)
        else:
            print("\rFailed!", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())