BYTE_PREFIX = "0x"
EMPTY_BYTES = BYTE_PREFIX
ZERO_BYTES32 = BYTE_PREFIX + "0" * 64


def strip_byte_prefix(value: str) -> str:
    """
    Remove the leading ``0x`` from a hex string, if it has one.
    """
    return value[len(BYTE_PREFIX) :] if value.startswith(BYTE_PREFIX) else value
