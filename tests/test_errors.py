import pytest

from cworch import errors
from cworch.errors import (
    Bech32DecodeExpandedError,
    CannotConnectGrpcError,
    ConversionLengthError,
    DaemonError,
    GenericError,
    GrpcListIsEmptyError,
    IbcError,
    OpenFileError,
    TxFailedError,
    TxNotFoundError,
    ibc_err,
)


def test_cannot_connect_message():
    assert str(CannotConnectGrpcError()) == "Can not connect to any grpc endpoint that was provided."


def test_grpc_list_empty_message():
    assert str(GrpcListIsEmptyError()) == "The list of grpc endpoints is empty"


def test_generic_error_message():
    err = GenericError("boom")
    assert str(err) == "Generic Error boom"
    assert err.description == "boom"


def test_bech32_expanded_message():
    err = Bech32DecodeExpandedError("cosmos", 45, "terra", 44)
    assert str(err) == "Bech32 Decode Error: Key Failed prefix cosmos or length 45 Wanted:terra/44"
    assert (err.prefix, err.length, err.wanted_prefix, err.wanted_length) == ("cosmos", 45, "terra", 44)


def test_tx_failed_fields_and_message():
    err = TxFailedError(code=5, reason="out of gas")
    assert err.code == 5
    assert "out of gas" in str(err)
    assert str(err).endswith("with code 5")


def test_tx_not_found_message_contains_values():
    err = TxNotFoundError("ABCD", 50)
    assert "ABCD" in str(err)
    assert "50 attempts" in str(err)


def test_conversion_length_keeps_length():
    err = ConversionLengthError(12)
    assert err.length == 12
    assert str(err).endswith("12")


def test_open_file_message():
    err = OpenFileError("state.json", "missing")
    assert "state.json" in str(err)
    assert "(missing)" in str(err)


def test_ibc_err_builds_ibc_error():
    err = ibc_err(42)
    assert isinstance(err, IbcError) and err.detail == "42"
    assert str(err) == "ibc error: 42"


def test_no_gas_opts_is_a_daemon_error_with_message():
    err = errors.NoGasOptsError()
    assert isinstance(err, DaemonError)
    assert str(err) == "Can't call Transactions without some gas rules"


@pytest.mark.parametrize(
    "cls",
    [
        errors.Bech32DecodeError,
        errors.MnemonicWrongLengthError,
        errors.MnemonicPhrasingError,
        errors.MissingPhraseError,
        errors.ImplementationError,
        errors.SharedDaemonStateError,
        errors.ConversionSecp256k1Error,
        errors.ConversionEd25519Error,
        errors.UnknownApiError,
        errors.NotImplementedActionError,
        errors.MissingWasmPathError,
        errors.QuerierNeedRuntimeError,
    ],
)
def test_fixed_messages_match_class_default(cls):
    err = cls()
    assert str(err) == cls.message
    assert issubclass(cls, DaemonError)