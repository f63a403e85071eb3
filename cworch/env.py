"""Environment variables read by the daemon, with their defaults and parsing."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path

from .errors import GenericError

__all__ = [
    "EnvParseError",
    "MIN_BLOCK_SPEED_ENV_NAME",
    "BLOCK_TIME_MIN_ENV_NAME",
    "BLOCK_TIME_MAX_ENV_NAME",
    "STATE_FILE_ENV_NAME",
    "GAS_BUFFER_ENV_NAME",
    "MIN_GAS_ENV_NAME",
    "MAX_TX_QUERIES_RETRY_ENV_NAME",
    "WALLET_BALANCE_ASSERTION_ENV_NAME",
    "LOGS_ACTIVATION_MESSAGE_ENV_NAME",
    "MAIN_MNEMONIC_ENV_NAME",
    "TEST_MNEMONIC_ENV_NAME",
    "LOCAL_MNEMONIC_ENV_NAME",
    "state_file",
    "gas_buffer",
    "min_gas",
    "max_tx_query_retries",
    "min_block_time",
    "max_block_time",
    "wallet_balance_assertion",
    "logs_message",
    "main_mnemonic",
    "test_mnemonic",
    "local_mnemonic",
    "default_state_folder",
    "parse_block_time_duration",
]

DEFAULT_TX_QUERY_RETRIES = 50
DEFAULT_MIN_GAS = 150_000

# Deprecated: use BLOCK_TIME_MIN_ENV_NAME.
MIN_BLOCK_SPEED_ENV_NAME = "CW_ORCH_MIN_BLOCK_SPEED"

BLOCK_TIME_MIN_ENV_NAME = "CW_ORCH_MIN_BLOCK_TIME"
BLOCK_TIME_MAX_ENV_NAME = "CW_ORCH_MAX_BLOCK_TIME"
STATE_FILE_ENV_NAME = "STATE_FILE"
GAS_BUFFER_ENV_NAME = "CW_ORCH_GAS_BUFFER"
MIN_GAS_ENV_NAME = "CW_ORCH_MIN_GAS"
MAX_TX_QUERIES_RETRY_ENV_NAME = "CW_ORCH_MAX_TX_QUERY_RETRIES"
WALLET_BALANCE_ASSERTION_ENV_NAME = "CW_ORCH_WALLET_BALANCE_ASSERTION"
LOGS_ACTIVATION_MESSAGE_ENV_NAME = "CW_ORCH_LOGS_ACTIVATION_MESSAGE"

MAIN_MNEMONIC_ENV_NAME = "MAIN_MNEMONIC"
TEST_MNEMONIC_ENV_NAME = "TEST_MNEMONIC"
LOCAL_MNEMONIC_ENV_NAME = "LOCAL_MNEMONIC"

_U64_MAX = 2**64 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_ASCII_DIGITS = frozenset("0123456789")


class EnvParseError(ValueError):
    """An environment variable holds a value that cannot be parsed."""


def _parse_unsigned(value: str) -> int:
    if not _UNSIGNED.fullmatch(value):
        raise ValueError(f"invalid digit found in string: {value!r}")
    number = int(value)
    if number > _U64_MAX:
        raise ValueError("number too large to fit in target type")
    return number


def _parse_float(value: str) -> float:
    if not _FLOAT.fullmatch(value):
        raise ValueError(f"invalid float literal: {value!r}")
    return float(value)


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError("provided string was not `true` or `false`")


def _parse_with_log(value: str, env_var_name: str, parser):
    try:
        return parser(value)
    except ValueError as exc:
        raise EnvParseError(
            f"Couldn't parse content of env var {env_var_name}, error : {exc}"
        ) from exc


def state_file() -> Path:
    """Path of the state file; relative paths are resolved against the state folder later."""
    return Path(os.environ.get(STATE_FILE_ENV_NAME, "state.json"))


def gas_buffer() -> float | None:
    """Gas buffer applied after simulation, or None when unset."""
    value = os.environ.get(GAS_BUFFER_ENV_NAME)
    if value is None:
        return None
    return _parse_with_log(value, GAS_BUFFER_ENV_NAME, _parse_float)


def min_gas() -> int:
    """Minimum gas amount for a transaction; defaults to 150 000."""
    value = os.environ.get(MIN_GAS_ENV_NAME)
    if value is None:
        return DEFAULT_MIN_GAS
    return _parse_with_log(value, MIN_GAS_ENV_NAME, _parse_unsigned)


def max_tx_query_retries() -> int:
    """Number of tx queries before giving up; defaults to 50."""
    value = os.environ.get(MAX_TX_QUERIES_RETRY_ENV_NAME)
    if value is None:
        return DEFAULT_TX_QUERY_RETRIES
    return _parse_with_log(value, MAX_TX_QUERIES_RETRY_ENV_NAME, _parse_unsigned)


def min_block_time() -> timedelta:
    """Minimum block time; defaults to one second."""
    value = os.environ.get(BLOCK_TIME_MIN_ENV_NAME)
    if value is None:
        value = os.environ.get(MIN_BLOCK_SPEED_ENV_NAME)
    if value is None:
        return timedelta(seconds=1)
    return parse_block_time_duration(value)


def max_block_time() -> timedelta | None:
    """Maximum block time, or None when unset."""
    value = os.environ.get(BLOCK_TIME_MAX_ENV_NAME)
    if value is None:
        return None
    return parse_block_time_duration(value)


def wallet_balance_assertion() -> bool:
    """Whether the sender balance is checked before broadcasting; defaults to True."""
    value = os.environ.get(WALLET_BALANCE_ASSERTION_ENV_NAME)
    if value is None:
        return True
    return _parse_with_log(value, WALLET_BALANCE_ASSERTION_ENV_NAME, _parse_bool)


def logs_message() -> bool:
    """Whether the "enable logs" hint is printed; defaults to True."""
    value = os.environ.get(LOGS_ACTIVATION_MESSAGE_ENV_NAME)
    if value is None:
        return True
    return _parse_with_log(value, LOGS_ACTIVATION_MESSAGE_ENV_NAME, _parse_bool)


def main_mnemonic() -> str | None:
    """Mnemonic used on mainnets."""
    return os.environ.get(MAIN_MNEMONIC_ENV_NAME)


def test_mnemonic() -> str | None:
    """Mnemonic used on testnets."""
    return os.environ.get(TEST_MNEMONIC_ENV_NAME)


def local_mnemonic() -> str | None:
    """Mnemonic used on local networks."""
    return os.environ.get(LOCAL_MNEMONIC_ENV_NAME)


def default_state_folder() -> Path:
    """The folder holding state files, ``~/.cw-orchestrator``."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise GenericError(
            "Your machine doesn't have a home folder. You can't use relative path for the "
            "state file such as 'state.json'. Please use an absolute path "
            "('/home/root/state.json') or a dot-prefixed-relative path ('./state.json') "
            f"in the {STATE_FILE_ENV_NAME} env variable."
        ) from exc
    return home / ".cw-orchestrator"


def parse_block_time_duration(raw_duration: str) -> timedelta:
    """Parse ``{integer}{s|ms}`` into a duration; no unit means seconds."""
    split_at = next(
        (index for index, char in enumerate(raw_duration) if char not in _ASCII_DIGITS),
        None,
    )
    if split_at is None:
        digits, unit = raw_duration, "s"
    else:
        digits, unit = raw_duration[:split_at], raw_duration[split_at:].strip()

    try:
        amount = _parse_unsigned(digits) if digits else None
    except ValueError as exc:
        raise EnvParseError(f"Couldn't parse content of block time, error: {exc}") from exc
    if amount is None:
        raise EnvParseError(
            "Couldn't parse content of block time, error: cannot parse integer from empty string"
        )

    try:
        if unit == "s":
            return timedelta(seconds=amount)
        if unit == "ms":
            return timedelta(milliseconds=amount)
    except OverflowError as exc:
        raise EnvParseError(f"Couldn't parse content of block time, error: {exc}") from exc
    raise EnvParseError(
        "Couldn't parse content of block time, error: unexpected token after digits"
    )