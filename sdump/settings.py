"""Reading the ``key = value`` settings file shared by the tools."""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Iterator
from os import PathLike

MAX_LINE_LENGTH = 255
MAX_PARAMETERS = 8
MAX_KEY_LENGTH = 10
MAX_VALUE_LENGTH = 10
INI_FILENAME = "SDUMP.INI"

_BLANKS = " \t"
_SKIP_PREFIXES = (";", "#", "[")


class Settings:
    """A small, ordered, size-limited collection of settings."""

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: list[tuple[str, str]] = []
        for key, value in pairs:
            self.add(key, value)

    def add(self, key: str, value: str) -> bool:
        """Store a pair, truncating long keys and values.

        Returns ``False`` (with a warning) when the collection is full.
        """
        if len(self._pairs) >= MAX_PARAMETERS:
            warnings.warn(
                f"Too many parameters in INI file. Maximum is {MAX_PARAMETERS}.",
                stacklevel=2,
            )
            return False
        self._pairs.append((key[: MAX_KEY_LENGTH - 1], value[: MAX_VALUE_LENGTH - 1]))
        return True

    def get(self, key: str) -> str | None:
        """Return the first value stored under ``key``, or ``None``."""
        return next((value for name, value in self._pairs if name == key), None)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __repr__(self) -> str:
        return f"Settings({self._pairs!r})"


def parse_settings(lines: Iterable[str]) -> Settings:
    """Build settings from the lines of an INI-style file.

    Blank lines, comments (``;`` or ``#``) and section headers are skipped.
    Lines without ``=`` are reported with a warning. Reading stops at a line
    too long to fit the line buffer.
    """
    settings = Settings()
    for raw in lines:
        line = raw.rstrip("\r\n")
        if len(line) > MAX_LINE_LENGTH - 1:
            break
        line = line.strip(_BLANKS)
        if not line or line.startswith(_SKIP_PREFIXES):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            warnings.warn(f"Invalid line in INI file: {line}", stacklevel=2)
            continue
        settings.add(key.strip(_BLANKS), value.strip(_BLANKS))
    return settings


def load_settings(filename: str | PathLike[str]) -> Settings:
    """Read settings from a file; raises ``OSError`` if it cannot be opened."""
    with open(filename, encoding="latin-1") as handle:
        return parse_settings(handle)


def ini_path_for(program_path: str) -> str:
    """Return the path of the settings file next to the given program."""
    cut = max(program_path.rfind("\\"), program_path.rfind("/"))
    return program_path[: cut + 1] + INI_FILENAME