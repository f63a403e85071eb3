"""A small in-process contract runtime: coins, responses, JSON binaries and typed storage."""

from __future__ import annotations

import base64
import dataclasses
import json
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

__all__ = [
    "Storage",
    "Coin",
    "MessageInfo",
    "Response",
    "StdError",
    "ContractVersion",
    "Item",
    "Map",
    "coins",
    "to_json_binary",
    "from_json",
    "set_contract_version",
    "get_contract_version",
]

Storage = MutableMapping[bytes, bytes]
T = TypeVar("T")

CONTRACT_INFO_KEY = "contract_info"


class StdError(Exception):
    """An error raised by the contract runtime."""

    @classmethod
    def generic_err(cls, msg: str) -> StdError:
        return cls(f"Generic error: {msg}")

    @classmethod
    def not_found(cls, kind: str) -> StdError:
        return cls(f"{kind} not found")

    @classmethod
    def parse_err(cls, target: str, msg: str) -> StdError:
        return cls(f"Error parsing into type {target}: {msg}")


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination."""

    amount: int
    denom: str

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class MessageInfo:
    """Who sent a message and which funds came with it."""

    sender: str
    funds: list[Coin] = field(default_factory=list)


@dataclass
class Response:
    """The result of a contract entry point."""

    messages: list[Any] = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)
    data: bytes | None = None

    def add_attribute(self, key: str, value: Any) -> Response:
        """Append an attribute and return this response for chaining."""
        self.attributes.append((key, str(value)))
        return self


@dataclass(frozen=True)
class ContractVersion:
    """Name and version a contract records about itself."""

    contract: str
    version: str


def coins(amount: int, denom: str) -> list[Coin]:
    """A one-element coin list."""
    return [Coin(amount, denom)]


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json_binary(value: Any) -> bytes:
    """Serialise a value to compact JSON bytes."""
    try:
        return json.dumps(value, default=_json_default, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise StdError(f"Error serializing type {type(value).__name__}: {exc}") from exc


def from_json(data: bytes | str) -> Any:
    """Parse JSON bytes into plain Python values."""
    try:
        return json.loads(data)
    except (TypeError, ValueError) as exc:
        raise StdError.parse_err("json value", str(exc)) from exc


def _decode(raw: bytes, value_type: Callable[..., Any] | None) -> Any:
    data = from_json(raw)
    if value_type is None:
        return data
    type_name = getattr(value_type, "__name__", "value")
    try:
        if isinstance(value_type, type) and dataclasses.is_dataclass(value_type):
            return value_type(**data)
        return value_type(data)
    except (TypeError, ValueError) as exc:
        raise StdError.parse_err(type_name, str(exc)) from exc


def _type_name(value_type: Callable[..., Any] | None) -> str:
    return getattr(value_type, "__name__", "value") if value_type is not None else "value"


class Item(Generic[T]):
    """A single value stored under a fixed key."""

    def __init__(self, namespace: str, value_type: Callable[..., T] | None = None) -> None:
        self.namespace = namespace
        self.value_type = value_type
        self.key = namespace.encode("utf-8")

    def save(self, storage: Storage, value: T) -> None:
        storage[self.key] = to_json_binary(value)

    def may_load(self, storage: Storage) -> T | None:
        raw = storage.get(self.key)
        return None if raw is None else _decode(raw, self.value_type)

    def load(self, storage: Storage) -> T:
        value = self.may_load(storage)
        if value is None:
            raise StdError.not_found(_type_name(self.value_type))
        return value

    def update(self, storage: Storage, action: Callable[[T], T]) -> T:
        """Load, transform and save the value; errors from ``action`` leave storage untouched."""
        updated = action(self.load(storage))
        self.save(storage, updated)
        return updated

    def __repr__(self) -> str:
        return f"Item({self.namespace!r})"


class Map(Generic[T]):
    """Values stored under a namespace, one per string key."""

    def __init__(self, namespace: str, value_type: Callable[..., T] | None = None) -> None:
        self.namespace = namespace
        self.value_type = value_type
        encoded = namespace.encode("utf-8")
        self._prefix = len(encoded).to_bytes(2, "big") + encoded

    def storage_key(self, key: str | bytes) -> bytes:
        """The raw storage key holding the value for ``key``."""
        suffix = key if isinstance(key, bytes) else key.encode("utf-8")
        return self._prefix + suffix

    def save(self, storage: Storage, key: str | bytes, value: T) -> None:
        storage[self.storage_key(key)] = to_json_binary(value)

    def may_load(self, storage: Storage, key: str | bytes) -> T | None:
        raw = storage.get(self.storage_key(key))
        return None if raw is None else _decode(raw, self.value_type)

    def load(self, storage: Storage, key: str | bytes) -> T:
        value = self.may_load(storage, key)
        if value is None:
            raise StdError.not_found(_type_name(self.value_type))
        return value

    def __repr__(self) -> str:
        return f"Map({self.namespace!r})"


_CONTRACT_INFO: Item[ContractVersion] = Item(CONTRACT_INFO_KEY, ContractVersion)


def set_contract_version(storage: Storage, contract: str, version: str) -> None:
    """Record the contract name and version in storage."""
    _CONTRACT_INFO.save(storage, ContractVersion(contract=contract, version=version))


def get_contract_version(storage: Storage) -> ContractVersion:
    """Read back the recorded contract name and version."""
    return _CONTRACT_INFO.load(storage)