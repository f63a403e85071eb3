"""Errors raised while talking to a chain through a daemon."""

from __future__ import annotations

from typing import Any

__all__ = [
    "DaemonError",
    "GenericError",
    "Bech32DecodeError",
    "Bech32DecodeExpandedError",
    "MnemonicWrongLengthError",
    "MnemonicPhrasingError",
    "MissingPhraseError",
    "ImplementationError",
    "ConversionError",
    "SharedDaemonStateError",
    "ConversionSecp256k1Error",
    "ConversionEd25519Error",
    "ConversionLengthError",
    "ConversionLengthEd25519HexError",
    "ConversionPrefixEd25519Error",
    "NoGasOptsError",
    "CoinParseError",
    "TxResultError",
    "GasPriceError",
    "TendermintValidatorSetError",
    "TxNotFoundError",
    "UnknownApiError",
    "NotImplementedActionError",
    "NewChainError",
    "NewNetworkError",
    "CannotConnectGrpcError",
    "TxFailedError",
    "GrpcListIsEmptyError",
    "MissingWasmPathError",
    "BuilderMissingError",
    "IbcError",
    "InsufficientFeeError",
    "NotEnoughBalanceError",
    "StateReadOnlyError",
    "QuerierNeedRuntimeError",
    "OpenFileError",
    "StateAlreadyLockedError",
    "ibc_err",
]


class DaemonError(Exception):
    """Base class of every daemon error."""

    message = "daemon error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.message if message is None else message)

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else self.message


class GenericError(DaemonError):
    """A free-form error carrying only a description."""

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"Generic Error {description}")


class Bech32DecodeError(DaemonError):
    message = "Bech32 Decode Error"


class Bech32DecodeExpandedError(DaemonError):
    """A bech32 string had the wrong prefix or length."""

    def __init__(self, prefix: str, length: int, wanted_prefix: str, wanted_length: int) -> None:
        self.prefix = prefix
        self.length = length
        self.wanted_prefix = wanted_prefix
        self.wanted_length = wanted_length
        super().__init__(
            f"Bech32 Decode Error: Key Failed prefix {prefix} or length {length} "
            f"Wanted:{wanted_prefix}/{wanted_length}"
        )


class MnemonicWrongLengthError(DaemonError):
    message = "Mnemonic - Wrong length, it should be 24 words"


class MnemonicPhrasingError(DaemonError):
    message = "Mnemonic - Bad Phrase"


class MissingPhraseError(DaemonError):
    message = "Mnemonic - Missing Phrase"


class ImplementationError(DaemonError):
    message = "Bad Implementation. Missing Component"


class ConversionError(DaemonError):
    """A key string could not be decoded into a public key."""

    def __init__(self, key: str, source: Any) -> None:
        self.key = key
        self.source = source
        super().__init__(f"Unable to convert into public key `{key}`: {source}")


class SharedDaemonStateError(DaemonError):
    message = "Can not augment daemon deployment after usage in more than one contract."


class ConversionSecp256k1Error(DaemonError):
    message = "83 length-missing SECP256K1 prefix"


class ConversionEd25519Error(DaemonError):
    message = "82 length-missing ED25519 prefix"


class ConversionLengthError(DaemonError):
    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Expected Key length of 82 or 83 length was {length}")


class ConversionLengthEd25519HexError(DaemonError):
    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Expected Key length of 40 length was {length}")


class ConversionPrefixEd25519Error(DaemonError):
    def __init__(self, length: int, hex_key: str) -> None:
        self.length = length
        self.hex_key = hex_key
        super().__init__(
            "Expected ED25519 key of length 32 with a BECH32 ED25519 prefix of 5 chars"
            f" - Len {length} - Hex {hex_key}"
        )


class NoGasOptsError(DaemonError):
    message = "Can't call Transactions without some gas rules"


class CoinParseError(DaemonError):
    def __init__(self, parse: str) -> None:
        self.parse = parse
        super().__init__(f"Can't parse `{parse}` into a coin")


class TxResultError(DaemonError):
    def __init__(self, code: int, codespace: str, log: str) -> None:
        self.code = code
        self.codespace = codespace
        self.log = log
        super().__init__(f"TX submit returned `{code}` - {codespace} '{log}'")


class GasPriceError(DaemonError):
    def __init__(self, denom: str) -> None:
        self.denom = denom
        super().__init__(f"No price found for Gas using denom {denom}")


class TendermintValidatorSetError(DaemonError):
    def __init__(self, expected_height: int, found_height: int) -> None:
        self.expected_height = expected_height
        self.found_height = found_height
        super().__init__(
            "Attempting to fetch validator set in parts, and failed Height mismatch "
            f"{expected_height} {found_height}"
        )


class TxNotFoundError(DaemonError):
    def __init__(self, tx_hash: str, attempts: int) -> None:
        self.tx_hash = tx_hash
        self.attempts = attempts
        super().__init__(f"Transaction {tx_hash} not found after {attempts} attempts")


class UnknownApiError(DaemonError):
    message = "unknown API error"


class NotImplementedActionError(DaemonError):
    message = "calling contract with unimplemented action"


class NewChainError(DaemonError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"new chain detected, fill out the scaffold at {path}")


class NewNetworkError(DaemonError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"new network detected, fill out the scaffold at {path}")


class CannotConnectGrpcError(DaemonError):
    message = "Can not connect to any grpc endpoint that was provided."


class TxFailedError(DaemonError):
    def __init__(self, code: int, reason: str) -> None:
        self.code = code
        self.reason = reason
        super().__init__(f"tx failed: {reason} with code {code}")


class GrpcListIsEmptyError(DaemonError):
    message = "The list of grpc endpoints is empty"


class MissingWasmPathError(DaemonError):
    message = "no wasm path provided for contract."


class BuilderMissingError(DaemonError):
    def __init__(self, missing: str) -> None:
        self.missing = missing
        super().__init__(f"daemon builder missing {missing}")


class IbcError(DaemonError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"ibc error: {detail}")


class InsufficientFeeError(DaemonError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"insufficient fee, check gas price: {detail}")


class NotEnoughBalanceError(DaemonError):
    def __init__(self, expected: Any, current: Any) -> None:
        self.expected = expected
        self.current = current
        super().__init__(f"Not enough balance, expected {expected}, found {current}")


class StateReadOnlyError(DaemonError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Can't set the daemon state, it's read-only {detail}")


class QuerierNeedRuntimeError(DaemonError):
    message = (
        "You need to pass a runtime to the querier object to do synchronous queries. "
        "Use daemon.querier instead"
    )


class OpenFileError(DaemonError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error opening file {path},err: ({reason})")


class StateAlreadyLockedError(DaemonError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"State file {path} already locked, use another state file, clone daemon "
            "which holds the lock, or use `state` method of Builder"
        )


def ibc_err(msg: Any) -> IbcError:
    """Build an :class:`IbcError` from anything printable."""
    return IbcError(str(msg))