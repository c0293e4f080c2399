from contract_asserts.asserts import (
    ThrowsResult,
    assert_invalid_opcode,
    assert_jump,
    assert_out_of_gas,
    assert_revert,
    assert_throws,
)
from contract_asserts.bytes import EMPTY_BYTES, ZERO_BYTES32, strip_byte_prefix
from contract_asserts.config import AssertsConfig, load_config
from contract_asserts.environment import EnvironmentKind, detect_environment, is_geth
from contract_asserts.exceptions import ThrowsAssertionError

__all__ = [
    "assert_invalid_opcode",
    "assert_jump",
    "assert_out_of_gas",
    "assert_revert",
    "assert_throws",
    "AssertsConfig",
    "detect_environment",
    "EMPTY_BYTES",
    "EnvironmentKind",
    "is_geth",
    "load_config",
    "strip_byte_prefix",
    "ThrowsAssertionError",
    "ThrowsResult",
    "ZERO_BYTES32",
]
