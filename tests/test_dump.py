import io

import pytest

from sdump.dump import main, send_file
from sdump.serialport import SerialPort, config_from_settings
from sdump.settings import Settings

INI_TEXT = (
    "[serial]\n"
    "port = COM1\n"
    "baud_rate = 9600\n"
    "parity = none\n"
    "byte_size = 8\n"
    "stop_bits = 1\n"
)


def _config():
    return config_from_settings(
        Settings(
            [
                ("port", "COM1"),
                ("baud_rate", "9600"),
                ("parity", "none"),
                ("byte_size", "8"),
                ("stop_bits", "1"),
            ]
        )
    )


@pytest.fixture
def loop_port():
    port = SerialPort(_config(), "loop://").open()
    yield port
    port.close()


def _drain(port):
    received = []
    while (byte := port.recv_byte()) is not None:
        received.append(byte)
    return bytes(received)


@pytest.fixture
def ini_file(tmp_path):
    path = tmp_path / "SDUMP.INI"
    path.write_text(INI_TEXT)
    return path


def test_send_file_sends_every_byte(loop_port):
    data = bytes(range(40))
    sent = send_file(loop_port, io.BytesIO(data), lambda: False)
    assert sent == len(data)
    assert _drain(loop_port) == data


def test_send_file_empty_stream(loop_port):
    assert send_file(loop_port, io.BytesIO(b""), lambda: False) == 0
    assert _drain(loop_port) == b""


def test_send_file_stops_when_asked(loop_port):
    calls = []

    def should_stop():
        calls.append(None)
        return len(calls) > 3

    sent = send_file(loop_port, io.BytesIO(b"abcdefgh"), should_stop)
    assert sent == 3
    assert _drain(loop_port) == b"abc"


def test_send_file_stopped_immediately_sends_nothing(loop_port):
    assert send_file(loop_port, io.BytesIO(b"xyz"), lambda: True) == 0
    assert _drain(loop_port) == b""


def test_send_file_draws_one_spinner_step_per_byte(loop_port, capsys):
    send_file(loop_port, io.BytesIO(b"hello"), lambda: False)
    out = capsys.readouterr().out
    assert out.count("\r") == 5


def test_main_missing_ini(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "missing.ini"), "whatever.bin"])
    assert code == 1
    assert "SDUMP.INI does not exist" in capsys.readouterr().out


def test_main_without_file_prints_usage(ini_file, capsys):
    code = main(["--config", str(ini_file)])
    assert code == 0
    assert "USAGE" in capsys.readouterr().out


def test_main_missing_data_file(ini_file, tmp_path, capsys):
    missing = tmp_path / "absent.bin"
    code = main(["--config", str(ini_file), str(missing)])
    assert code == 1
    assert f"The file {missing} does not exist" in capsys.readouterr().out


def test_main_invalid_port(tmp_path, capsys):
    ini = tmp_path / "SDUMP.INI"
    ini.write_text(INI_TEXT.replace("COM1", "COM9"))
    data = tmp_path / "data.bin"
    data.write_bytes(b"1")
    code = main(["--config", str(ini), str(data)])
    assert code == 1
    assert "INVALID PORT: COM9" in capsys.readouterr().out


def test_main_device_that_cannot_open(ini_file, tmp_path, capsys):
    data = tmp_path / "data.bin"
    data.write_bytes(b"1")
    device = str(tmp_path / "no-such-tty")
    code = main(["--config", str(ini_file), "--device", device, str(data)])
    assert code == 1
    assert "initialization failed" in capsys.readouterr().out


def test_main_sends_file(ini_file, tmp_path, capsys):
    data = tmp_path / "data.bin"
    data.write_bytes(bytes(range(100)))
    code = main(["--config", str(ini_file), "--device", "loop://", str(data)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Port:       COM1 at 0x3f8" in out
    assert "Serial port initialized. Ready." in out
    assert out.rstrip().endswith("Done!")