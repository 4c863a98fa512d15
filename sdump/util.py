"""Small numeric helpers used when reading configuration values."""

_DIGITS = "0123456789"


def ul_pow(base: int, power: int) -> int:
    """Return ``base`` raised to the non-negative integer ``power``."""
    if power < 0:
        raise ValueError("power must be non-negative")
    return base**power


def u_atoi(string: str) -> int:
    """Convert a decimal string to an unsigned integer.

    Every character keeps its place value. Characters that are not ASCII
    digits count as zero, so ``"1a2"`` reads as ``102``. Signs are ignored.
    An empty string gives ``0``.
    """
    return sum(
        _DIGITS.index(char) * ul_pow(10, position)
        for position, char in enumerate(reversed(string))
        if char in _DIGITS
    )