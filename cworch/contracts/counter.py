"""A counter contract: anyone may increment it, only its owner may reset it."""

from __future__ import annotations

from dataclasses import dataclass

from .cosmwasm import (
    Item,
    MessageInfo,
    Response,
    Storage,
    StdError,
    set_contract_version,
    to_json_binary,
)

__all__ = [
    "CONTRACT_NAME",
    "CONTRACT_VERSION",
    "CONTRACT_ID",
    "ContractError",
    "Unauthorized",
    "CustomError",
    "State",
    "STATE",
    "InstantiateMsg",
    "Increment",
    "Reset",
    "GetCount",
    "GetCountResponse",
    "MigrateMsg",
    "instantiate",
    "execute",
    "query",
    "migrate",
    "increment",
    "reset",
    "count",
]

CONTRACT_NAME = "crates.io:counter"
CONTRACT_VERSION = "0.1.0"
CONTRACT_ID = "counter_contract"


class ContractError(Exception):
    """Base class of errors raised by the counter contract."""


class Unauthorized(ContractError):
    """The sender may not perform this action."""

    def __init__(self) -> None:
        super().__init__("Unauthorized")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Unauthorized)

    def __hash__(self) -> int:
        return hash(Unauthorized)


class CustomError(ContractError):
    """A custom error carrying a value."""

    def __init__(self, val: str) -> None:
        self.val = val
        super().__init__(f'Custom Error val: "{val}"')

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CustomError) and other.val == self.val

    def __hash__(self) -> int:
        return hash((CustomError, self.val))


@dataclass
class State:
    """Stored state: the count and the address allowed to reset it."""

    count: int
    owner: str


STATE: Item[State] = Item("state", State)


@dataclass(frozen=True)
class InstantiateMsg:
    """Initial count."""

    count: int


@dataclass(frozen=True)
class Increment:
    """Increment the count by one."""


@dataclass(frozen=True)
class Reset:
    """Set the count to a new value."""

    count: int


@dataclass(frozen=True)
class GetCount:
    """Ask for the current count."""


@dataclass(frozen=True)
class GetCountResponse:
    """The current count."""

    count: int


@dataclass(frozen=True)
class MigrateMsg:
    """Migration message."""

    t: str


def instantiate(storage: Storage, info: MessageInfo, msg: InstantiateMsg) -> Response:
    """Store the initial count with the sender as owner."""
    set_contract_version(storage, CONTRACT_NAME, CONTRACT_VERSION)
    STATE.save(storage, State(count=msg.count, owner=info.sender))
    return (
        Response()
        .add_attribute("method", "instantiate")
        .add_attribute("owner", info.sender)
        .add_attribute("count", str(msg.count))
    )


def execute(storage: Storage, info: MessageInfo, msg: Increment | Reset) -> Response:
    """Dispatch an execute message."""
    match msg:
        case Increment():
            return increment(storage)
        case Reset(count=new_count):
            return reset(storage, info, new_count)
    raise StdError.parse_err("ExecuteMsg", f"unknown message {msg!r}")


def query(storage: Storage, msg: GetCount) -> bytes:
    """Answer a query with JSON bytes."""
    match msg:
        case GetCount():
            return to_json_binary(count(storage))
    raise StdError.parse_err("QueryMsg", f"unknown query {msg!r}")


def migrate(storage: Storage, msg: MigrateMsg) -> Response:
    """Migration does nothing but report itself."""
    return Response().add_attribute("action", "migrate")


def increment(storage: Storage) -> Response:
    """Add one to the count."""

    def bump(state: State) -> State:
        state.count += 1
        return state

    STATE.update(storage, bump)
    return Response().add_attribute("action", "increment")


def reset(storage: Storage, info: MessageInfo, count: int) -> Response:
    """Set the count; only the owner may do this."""

    def set_count(state: State) -> State:
        if info.sender != state.owner:
            raise Unauthorized()
        state.count = count
        return state

    STATE.update(storage, set_count)
    return Response().add_attribute("action", "reset")


def count(storage: Storage) -> GetCountResponse:
    """The current count."""
    return GetCountResponse(count=STATE.load(storage).count)