from typing import Any, Optional, Union

from eth_abi import decode
from eth_abi.exceptions import DecodingError as EthAbiDecodingError
from eth_utils import is_hex
from hexbytes import HexBytes
from web3.exceptions import ContractLogicError

from contract_asserts.exceptions import DecodingError
from contract_asserts.logging import logger
from contract_asserts.utils import maybe_await

ERROR_SELECTOR = HexBytes("0x08c379a0")  # Error(string)
PANIC_SELECTOR = HexBytes("0x4e487b71")  # Panic(uint256)
_REPLAY_FIELDS = {"from": "from", "to": "to", "input": "data", "value": "value", "gas": "gas"}


def decode_revert_data(data: Optional[Union[str, bytes]]) -> str:
    """
    Decode the return data of a reverted call into its reason.

    Args:
        data (Optional[Union[str, bytes]]): Raw return data, hex or bytes.

    Raises:
        :class:`~contract_asserts.exceptions.DecodingError`: When the data
          has a known selector but its payload is malformed or not UTF-8.

    Returns:
        str: The ``Error(string)`` message, ``Panic(0x..)`` for panics and an
        empty string for anything else.
    """

    if not data:
        return ""

    # NOTE: Some providers put plain text, not return data, in the error data.
    if isinstance(data, str) and not is_hex(data):
        return ""

    data = HexBytes(data)
    selector, payload = data[:4], data[4:]
    try:
        if selector == ERROR_SELECTOR:
            return decode(["string"], payload)[0]

        elif selector == PANIC_SELECTOR:
            code = decode(["uint256"], payload)[0]
            return f"Panic({hex(code)})"

    except (EthAbiDecodingError, UnicodeDecodeError) as err:
        raise DecodingError(data.hex()) from err

    return ""


async def decode_error_reason_from_tx(txn: Any, context: Any) -> str:
    """
    Replay a failed transaction as a call at its block to recover the
    revert reason Geth leaves out of receipts.

    Args:
        txn: The transaction hash.
        context: A ``Web3`` or ``AsyncWeb3`` instance.

    Returns:
        str: The decoded reason (empty when none was given).
    """

    eth = context.eth
    txn_data = await maybe_await(eth.get_transaction(txn))
    call = {
        key: txn_data[field]
        for field, key in _REPLAY_FIELDS.items()
        if field in txn_data and txn_data[field] is not None
    }

    try:
        output = await maybe_await(eth.call(call, txn_data["blockNumber"]))
    except ContractLogicError as err:
        # NOTE: Some web3 versions set ``data`` to a dict of RPC error details.
        output = err.data if isinstance(err.data, (str, bytes)) else None

    reason = decode_revert_data(output)
    logger.debug(f"Decoded revert reason '{reason}' from transaction {txn}.")
    return reason
