import pytest

from contract_asserts import EMPTY_BYTES, ZERO_BYTES32, strip_byte_prefix


@pytest.mark.parametrize(
    "value,expected",
    [("0xabc", "abc"), ("abc", "abc"), (EMPTY_BYTES, ""), ("0X12", "0X12"), ("", "")],
)
def test_strip_byte_prefix(value, expected):
    assert strip_byte_prefix(value) == expected


def test_zero_bytes32():
    assert len(ZERO_BYTES32) == 66
    assert ZERO_BYTES32.startswith("0x")
    assert set(strip_byte_prefix(ZERO_BYTES32)) == {"0"}


def test_empty_bytes():
    assert EMPTY_BYTES == "0x"
