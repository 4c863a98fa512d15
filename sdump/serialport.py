"""Serial port configuration and byte-level transfer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

import serial

from sdump.settings import Settings
from sdump.util import u_atoi

UART_CLOCK_FREQ = 115200

PORT_BASE_ADDRESSES = {
    "COM1": 0x3F8,
    "COM2": 0x2F8,
    "COM3": 0x3E8,
    "COM4": 0x2E8,
}

# Line Control Register
LCR_CLEAR = 0x00
LCR_WL_5 = 0x00
LCR_WL_6 = 0x01
LCR_WL_7 = 0x02
LCR_WL_8 = 0x03
LCR_STOPB_1 = 0x00
LCR_STOPB_2 = 0x04
LCR_PR_D = 0x00
LCR_PR_E = 0x08
LCR_PRSEL_O = 0x00
LCR_PRSEL_E = 0x10
LCR_DLAB_D = 0x00
LCR_DLAB_E = 0x80

# Modem Control Register
MCR_CLEAR = 0x00
MCR_DTR = 0x01
MCR_RTS = 0x02
MCR_OUT1 = 0x04
MCR_OUT2 = 0x08
MCR_LOOPBACK = 0x10

_WORD_LENGTH_BITS = {5: LCR_WL_5, 6: LCR_WL_6, 7: LCR_WL_7, 8: LCR_WL_8}


class Parity(enum.Enum):
    NONE = "none"
    ODD = "odd"
    EVEN = "even"


_PYSERIAL_PARITY = {
    Parity.NONE: serial.PARITY_NONE,
    Parity.ODD: serial.PARITY_ODD,
    Parity.EVEN: serial.PARITY_EVEN,
}


class ConfigError(ValueError):
    """Raised when the settings do not describe a usable port."""


@dataclass(frozen=True)
class PortConfig:
    port: str
    base_address: int
    divisor: int
    parity: Parity
    byte_size: int
    stop_bits: int

    @property
    def baud_rate(self) -> int:
        """The rate actually produced by the clock divisor."""
        return UART_CLOCK_FREQ // self.divisor


def _required(settings: Settings, key: str) -> str:
    value = settings.get(key)
    if value is None:
        raise ConfigError(f"MISSING SETTING: {key}")
    return value


def config_from_settings(settings: Settings) -> PortConfig:
    """Validate the settings and turn them into a port configuration."""
    port = _required(settings, "port")
    if port not in PORT_BASE_ADDRESSES:
        raise ConfigError(f"INVALID PORT: {port}")

    baud_rate = u_atoi(_required(settings, "baud_rate"))
    if baud_rate == 0:
        raise ConfigError(f"INVALID BAUD RATE: {baud_rate}")
    divisor = UART_CLOCK_FREQ // baud_rate
    if divisor == 0:
        raise ConfigError(f"INVALID BAUD RATE: {baud_rate}")

    parity_name = _required(settings, "parity")
    try:
        parity = Parity(parity_name)
    except ValueError:
        raise ConfigError(f"INVALID PARITY: {parity_name}") from None

    byte_size = u_atoi(_required(settings, "byte_size"))
    if byte_size not in _WORD_LENGTH_BITS:
        raise ConfigError(f"INVALID BYTE SIZE: {byte_size}")

    stop_bits = u_atoi(_required(settings, "stop_bits"))
    if stop_bits not in (1, 2):
        raise ConfigError(f"INVALID STOP BITS: {stop_bits}")

    return PortConfig(
        port=port,
        base_address=PORT_BASE_ADDRESSES[port],
        divisor=divisor,
        parity=parity,
        byte_size=byte_size,
        stop_bits=stop_bits,
    )


def line_control_value(config: PortConfig) -> int:
    """Line Control Register bits for word length, parity and stop bits."""
    value = _WORD_LENGTH_BITS[config.byte_size]
    if config.parity is Parity.EVEN:
        value |= LCR_PR_E | LCR_PRSEL_E
    elif config.parity is Parity.ODD:
        value |= LCR_PR_E | LCR_PRSEL_O
    if config.stop_bits == 2:
        value |= LCR_STOPB_2
    return value


def modem_control_value(loopback: bool = False) -> int:
    """Modem Control Register bits for normal or loopback operation."""
    if loopback:
        return MCR_LOOPBACK | MCR_RTS | MCR_OUT1 | MCR_OUT2
    return MCR_DTR | MCR_RTS | MCR_OUT1 | MCR_OUT2


class SerialPort:
    """A configured serial connection that moves single bytes.

    ``device`` is a port name or URL understood by pyserial, or an unopened
    pyserial object; by default the configured port name is used.
    """

    def __init__(self, config: PortConfig, device: Any = None) -> None:
        self.config = config
        self._device = config.port if device is None else device
        self._connection: Any = None

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self, loopback: bool = False) -> SerialPort:
        """Configure and open the port, clearing both buffers."""
        if isinstance(self._device, str):
            connection = serial.serial_for_url(self._device, do_not_open=True)
        else:
            connection = self._device
        connection.baudrate = self.config.baud_rate
        connection.bytesize = self.config.byte_size
        connection.parity = _PYSERIAL_PARITY[self.config.parity]
        connection.stopbits = self.config.stop_bits
        connection.timeout = 0
        modem = modem_control_value(loopback)
        connection.dtr = bool(modem & MCR_DTR)
        connection.rts = bool(modem & MCR_RTS)
        if not connection.is_open:
            connection.open()
        connection.reset_input_buffer()
        connection.reset_output_buffer()
        self._connection = connection
        return self

    def close(self) -> None:
        """Release the port. Closing twice is harmless."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> SerialPort:
        if not self.is_open:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_open(self) -> Any:
        if self._connection is None:
            raise serial.SerialException("port is not open")
        return self._connection

    def send_byte(self, byte: int) -> bool:
        """Transmit one byte, waiting until it has been written."""
        data = bytes((byte,))
        self._require_open().write(data)
        return True

    def recv_byte(self) -> int | None:
        """Return one received byte, or ``None`` if none is waiting."""
        data = self._require_open().read(1)
        return data[0] if data else None

    def verify_loopback_byte(self, byte: int) -> bool:
        """Send a byte and check that the same byte comes back."""
        self.send_byte(byte)
        received = None
        while received is None:
            received = self.recv_byte()
        return received == byte