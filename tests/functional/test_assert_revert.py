import re

import pytest
from pydantic import ValidationError

from contract_asserts import EnvironmentKind, ThrowsAssertionError, assert_revert

TXN_HASH = "0x053cba5c12172654d894f66d5670bab6215517a94189a9ffc09bc40a589ec04d"
TRUFFLE_REVERT_MESSAGE = (
    "Returned error: VM Exception while processing transaction: "
    "revert 'Foo' -- Reason given: Foo."
)


class TestAssertRevert:
    @pytest.mark.asyncio
    async def test_derives_reason_from_message(self, raiser, make_failure, generic_config):
        result = await assert_revert(
            raiser(make_failure(TRUFFLE_REVERT_MESSAGE)), "Foo", config=generic_config
        )
        assert result.reason == "Foo"
        assert result.raw_message == TRUFFLE_REVERT_MESSAGE

    @pytest.mark.asyncio
    async def test_reason_mismatch(self, raiser, make_failure, generic_config):
        expected = 'Expected revert reason "Bar" but failed with "Foo" instead.'
        with pytest.raises(ThrowsAssertionError, match=re.escape(expected)) as err:
            await assert_revert(
                raiser(make_failure(TRUFFLE_REVERT_MESSAGE)), "Bar", config=generic_config
            )

        assert err.value.expected == "Bar"
        assert err.value.actual == "Foo"

    @pytest.mark.asyncio
    async def test_without_reason_accepts_any_revert(self, raiser, make_failure, generic_config):
        result = await assert_revert(
            raiser(make_failure(TRUFFLE_REVERT_MESSAGE)), config=generic_config
        )
        assert result.reason == ""

    @pytest.mark.asyncio
    async def test_without_reason_rejects_non_revert(self, raiser, make_failure, generic_config):
        operation = raiser(make_failure("VM Exception while processing transaction: out of gas"))
        with pytest.raises(ThrowsAssertionError, match='Expected error code "revert"'):
            await assert_revert(operation, config=generic_config)

    @pytest.mark.asyncio
    async def test_strips_annotation_from_given_reason(self, raiser, make_failure, generic_config):
        error = make_failure(
            "VM Exception while processing transaction: revert Foo",
            reason="Foo -- Reason given: Foo.",
        )
        result = await assert_revert(raiser(error), "Foo", config=generic_config)
        assert result.reason == "Foo"

    @pytest.mark.asyncio
    async def test_hardhat_reason_string(self, raiser, make_failure, generic_config):
        error = make_failure(
            "VM Exception while processing transaction: reverted with reason string 'Foo'"
        )
        result = await assert_revert(raiser(error), "Foo", config=generic_config)
        assert result.reason == "Foo"

    @pytest.mark.asyncio
    async def test_no_reason_available(self, raiser, make_failure, generic_config):
        operation = raiser(make_failure("execution reverted"))
        expected = 'Expected revert reason "Foo" but failed with "no reason" instead.'
        with pytest.raises(ThrowsAssertionError, match=re.escape(expected)):
            await assert_revert(operation, "Foo", config=generic_config)

    @pytest.mark.asyncio
    async def test_not_thrown(self, succeeding_operation, generic_config):
        expected = 'Expected "revert" (with reason: "Foo") but it did not fail.'
        with pytest.raises(ThrowsAssertionError, match=re.escape(expected)):
            await assert_revert(succeeding_operation, "Foo", config=generic_config)

    @pytest.mark.asyncio
    async def test_geth_decoded_reason(self, raiser, make_failure, geth_config, mock_decoder):
        error = make_failure(receipt={"status": "0x0"}, tx=TXN_HASH)
        result = await assert_revert(
            raiser(error), "Foo", config=geth_config, decode_reason=mock_decoder
        )
        assert result.reason == "Foo"
        assert result.environment == EnvironmentKind.GETH

    @pytest.mark.asyncio
    async def test_geth_decoded_reason_mismatch(
        self, raiser, make_failure, geth_config, mock_decoder
    ):
        error = make_failure(receipt={"status": "0x0"}, tx=TXN_HASH)
        with pytest.raises(ThrowsAssertionError, match='but failed with "Foo"'):
            await assert_revert(
                raiser(error), "Bar", config=geth_config, decode_reason=mock_decoder
            )

    @pytest.mark.asyncio
    async def test_result_is_new_object(self, raiser, make_failure, generic_config):
        error = make_failure(TRUFFLE_REVERT_MESSAGE)
        result = await assert_revert(raiser(error), "Foo", config=generic_config)
        assert result.error is error
        assert error.reason is None
        with pytest.raises(ValidationError):
            result.reason = "Bar"
