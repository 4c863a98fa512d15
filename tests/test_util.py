import pytest

from sdump.util import u_atoi, ul_pow


@pytest.mark.parametrize("text", ["0", "1", "9600", "115200", "4294967295"])
def test_u_atoi_reads_plain_numbers(text):
    assert u_atoi(text) == int(text)


def test_u_atoi_empty_string_is_zero():
    assert u_atoi("") == 0


def test_u_atoi_non_digits_hold_their_place():
    assert u_atoi("1a2") == 102


def test_u_atoi_ignores_sign():
    assert u_atoi("-5") == 5


def test_u_atoi_only_letters_is_zero():
    assert u_atoi("abc") == 0


def test_u_atoi_leading_zeros():
    assert u_atoi("0009600") == u_atoi("9600")


def test_ul_pow_zero_power_is_one():
    assert ul_pow(10, 0) == 1
    assert ul_pow(7, 0) == 1


def test_ul_pow_first_power_is_base():
    assert ul_pow(10, 1) == 10


@pytest.mark.parametrize("base,power", [(10, 3), (2, 16), (3, 5)])
def test_ul_pow_matches_builtin_pow(base, power):
    assert ul_pow(base, power) == pow(base, power)


def test_ul_pow_rejects_negative_power():
    with pytest.raises(ValueError):
        ul_pow(10, -1)