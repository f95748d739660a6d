"""
Tests for the data models.
"""
import pytest

from txdispatch_sdk.exceptions import InvalidRequestError
from txdispatch_sdk.models import DispatchMode, SignedTransaction, TransactionIntent, canonical_fields, field_name

from tests.test_helpers import TEST_TO


def test_intent_accepts_camel_case_and_snake_case():
    camel = TransactionIntent.coerce({"to": TEST_TO, "maxFeePerGas": 10, "gasPrice": None})
    snake = TransactionIntent.coerce({"to": TEST_TO, "max_fee_per_gas": 10})

    assert camel.max_fee_per_gas == 10
    assert snake.max_fee_per_gas == 10
    assert camel.explicit_fields() == snake.explicit_fields() == {"to": TEST_TO, "max_fee_per_gas": 10}


def test_intent_from_alias():
    intent = TransactionIntent.coerce({"from": TEST_TO, "to": TEST_TO})

    assert intent.from_address == TEST_TO
    # The sender is the resolved account, never a plain field
    assert "from_address" not in intent.explicit_fields()


def test_intent_extensions():
    intent = TransactionIntent.coerce({"to": TEST_TO, "feeCurrency": "0xcusd", "gatewayFee": None})

    assert intent.extensions == {"feeCurrency": "0xcusd"}
    assert intent.explicit_fields() == {"to": TEST_TO, "feeCurrency": "0xcusd"}


def test_extensions_exclude_standard_fields_under_either_spelling():
    intent = TransactionIntent.model_validate({"to": TEST_TO, "gasPrice": 7, "gas_price": 1, "feeCurrency": "0xcusd"})

    assert intent.extensions == {"feeCurrency": "0xcusd"}


def test_field_name_maps_aliases():
    assert field_name("gasPrice") == "gas_price"
    assert field_name("from") == "from_address"
    assert field_name("gas_price") == "gas_price"
    assert field_name("feeCurrency") == "feeCurrency"


def test_coerce_accepts_both_spellings_when_they_agree():
    intent = TransactionIntent.coerce({"to": TEST_TO, "gasPrice": 7, "gas_price": 7, "maxFeePerGas": None})

    assert intent.gas_price == 7
    assert intent.extensions == {}


def test_coerce_rejects_conflicting_spellings():
    with pytest.raises(InvalidRequestError, match="given twice") as exc_info:
        TransactionIntent.coerce({"to": TEST_TO, "gas_price": 1, "gasPrice": 7})

    assert exc_info.value.field == "gas_price"


def test_canonical_fields_renames_aliases():
    assert canonical_fields({"gasPrice": 7, "to": TEST_TO, "feeCurrency": "0xcusd"}) == {
        "gas_price": 7,
        "to": TEST_TO,
        "feeCurrency": "0xcusd",
    }


def test_intent_is_immutable():
    intent = TransactionIntent(to=TEST_TO, value=1)

    with pytest.raises(Exception):
        intent.value = 2


def test_coerce_none_gives_empty_intent():
    assert TransactionIntent.coerce(None).explicit_fields() == {}


def test_coerce_passes_instances_through():
    intent = TransactionIntent(to=TEST_TO)
    assert TransactionIntent.coerce(intent) is intent


def test_coerce_rejects_non_mapping():
    with pytest.raises(InvalidRequestError, match="must be a mapping"):
        TransactionIntent.coerce(["to", TEST_TO])


def test_coerce_rejects_malformed_fields():
    with pytest.raises(InvalidRequestError, match="Malformed transaction intent"):
        TransactionIntent.coerce({"to": TEST_TO, "value": "lots"})


def test_dispatch_mode_rpc_method():
    assert DispatchMode.SIGN_ONLY.rpc_method == "eth_signTransaction"
    assert DispatchMode.SIGN_AND_SUBMIT.rpc_method == "eth_sendTransaction"
    assert DispatchMode("sign") is DispatchMode.SIGN_ONLY


def test_signed_transaction_raw_bytes():
    signed = SignedTransaction(raw_transaction="0x02f8", chain_id=1)
    assert signed.raw_bytes == b"\x02\xf8"
