"""A mock contract exercising every kind of message, used to test contract interfaces.

Two variants share the execute and migrate entry points: the default one, whose
generic message field is a string, and a ``u64`` one with its own instantiate
and query behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .cosmwasm import (
    Item,
    Map,
    MessageInfo,
    Response,
    Storage,
    StdError,
    set_contract_version,
    to_json_binary,
)

__all__ = [
    "MOCK_CONTRACT_NAME",
    "MOCK_CONTRACT_VERSION",
    "TEST_MAP_KEY",
    "TestItem",
    "TEST_ITEM",
    "TEST_MAP",
    "InstantiateMsg",
    "FirstMessage",
    "SecondMessage",
    "ThirdMessage",
    "FourthMessage",
    "FifthMessage",
    "SixthMessage",
    "SeventhMessage",
    "FirstQuery",
    "SecondQuery",
    "ThirdQuery",
    "FourthQuery",
    "ThirdReturn",
    "MigrateMsg",
    "instantiate",
    "execute",
    "query",
    "migrate",
    "instantiate_u64",
    "query_u64",
]

MOCK_CONTRACT_NAME = "mock-contract"
MOCK_CONTRACT_VERSION = "0"
TEST_MAP_KEY = "MAP_TEST_KEY"


@dataclass(frozen=True)
class TestItem:
    """A value stored at instantiation so that raw queries can be checked."""

    __test__ = False  # not a pytest test class

    first_item: int
    second_item: str


TEST_ITEM: Item[TestItem] = Item("test-item", TestItem)
TEST_MAP: Map[TestItem] = Map("test-map", TestItem)


@dataclass(frozen=True)
class InstantiateMsg:
    """Instantiation takes no parameters."""


@dataclass(frozen=True)
class FirstMessage:
    """Always succeeds."""


@dataclass(frozen=True)
class SecondMessage:
    """Always fails."""

    t: Any


@dataclass(frozen=True)
class ThirdMessage:
    """Always succeeds."""

    t: Any


@dataclass(frozen=True)
class FourthMessage:
    """Always succeeds."""


@dataclass(frozen=True)
class FifthMessage:
    """Succeeds only when funds are sent."""


@dataclass(frozen=True)
class SixthMessage:
    """Always succeeds."""

    value: int
    text: str


@dataclass(frozen=True)
class SeventhMessage:
    """Checks the sent funds against the message."""

    amount: int
    denom: str


ExecuteMsg = Union[
    FirstMessage,
    SecondMessage,
    ThirdMessage,
    FourthMessage,
    FifthMessage,
    SixthMessage,
    SeventhMessage,
]


@dataclass(frozen=True)
class FirstQuery:
    """Answers with a fixed string."""


@dataclass(frozen=True)
class SecondQuery:
    """Always fails."""

    t: Any


@dataclass(frozen=True)
class ThirdQuery:
    """Answers with a :class:`ThirdReturn`."""

    t: Any


@dataclass(frozen=True)
class FourthQuery:
    """Answers with a number (or a string in the ``u64`` variant)."""

    value: int
    text: str


QueryMsg = Union[FirstQuery, SecondQuery, ThirdQuery, FourthQuery]


@dataclass(frozen=True)
class ThirdReturn:
    """Response to :class:`ThirdQuery`."""

    t: Any


@dataclass(frozen=True)
class MigrateMsg:
    """Migration succeeds only when ``t`` is ``"success"``."""

    t: str


def instantiate(storage: Storage, info: MessageInfo, msg: InstantiateMsg) -> Response:
    """Record the contract version and store the test item and map entry."""
    set_contract_version(storage, MOCK_CONTRACT_NAME, MOCK_CONTRACT_VERSION)
    TEST_ITEM.save(storage, TestItem(first_item=1, second_item="test-item"))
    TEST_MAP.save(storage, TEST_MAP_KEY, TestItem(first_item=2, second_item="test-map"))
    return Response().add_attribute("action", "instantiate")


def instantiate_u64(storage: Storage, info: MessageInfo, msg: InstantiateMsg) -> Response:
    """Instantiate the ``u64`` variant, which stores nothing."""
    return Response().add_attribute("action", "instantiate")


def execute(storage: Storage, info: MessageInfo, msg: ExecuteMsg) -> Response:
    """Dispatch an execute message; shared by both variants."""
    match msg:
        case FirstMessage():
            return Response().add_attribute("action", "first message passed")
        case SecondMessage():
            raise StdError.generic_err("Second Message Failed")
        case ThirdMessage():
            return Response().add_attribute("action", "third message passed")
        case FourthMessage():
            return Response().add_attribute("action", "fourth message passed")
        case FifthMessage():
            if not info.funds:
                raise StdError.generic_err("Coins missing")
            return Response().add_attribute("action", "fourth message passed")
        case SixthMessage():
            return Response().add_attribute("action", "sixth message passed")
        case SeventhMessage(amount=amount, denom=denom):
            if not info.funds:
                raise StdError.generic_err("no funds sent with the message")
            sent = info.funds[0]
            if sent.amount != amount and sent.denom != denom:
                raise StdError.generic_err("Coins don't match message")
            return Response().add_attribute("action", "fourth message passed")
    raise StdError.parse_err("ExecuteMsg", f"unknown message {msg!r}")


def query(storage: Storage, msg: QueryMsg) -> bytes:
    """Answer a query with JSON bytes."""
    match msg:
        case FirstQuery():
            return to_json_binary("first query passed")
        case SecondQuery():
            raise StdError.generic_err("Query not available")
        case ThirdQuery():
            return to_json_binary(ThirdReturn(t="third query passed"))
        case FourthQuery():
            return to_json_binary(4)
    raise StdError.parse_err("QueryMsg", f"unknown query {msg!r}")


def query_u64(storage: Storage, msg: QueryMsg) -> bytes:
    """Answer a query of the ``u64`` variant with JSON bytes."""
    match msg:
        case FirstQuery():
            return to_json_binary("first query passed")
        case SecondQuery():
            raise StdError.generic_err("Query not available")
        case ThirdQuery():
            return to_json_binary(ThirdReturn(t=0))
        case FourthQuery():
            return to_json_binary("fourth query passed")
    raise StdError.parse_err("QueryMsg", f"unknown query {msg!r}")


def migrate(storage: Storage, msg: MigrateMsg) -> Response:
    """Succeed only for ``t == "success"``; shared by both variants."""
    if msg.t == "success":
        return Response()
    raise StdError.generic_err("migrate endpoint reached but no test implementation")