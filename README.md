# cworch

Helpers for working with Cosmos SDK chains and CosmWasm contracts from Python:
bech32 addresses derived from public keys, secp256k1 signature checks, a
locked JSON deployment-state file, typed environment settings, and a small
in-memory contract runtime with two example contracts.

## Install

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `cworch.errors`

`DaemonError` is the base of a family of exceptions, one subclass per kind of
failure, for example `Bech32DecodeError`, `ConversionLengthError`,
`CannotConnectGrpcError`, `TxNotFoundError`, `NotEnoughBalanceError`,
`OpenFileError` and `StateAlreadyLockedError`. Each carries its details as
attributes and a fixed message format as its text. `ibc_err(msg)` builds an
`IbcError` from anything printable.

### `cworch.env`

Readers for the environment variables the tooling uses, each returning a
typed value or its default:

| Function | Variable | Default |
| --- | --- | --- |
| `state_file()` | `STATE_FILE` | `Path("state.json")` |
| `gas_buffer()` | `CW_ORCH_GAS_BUFFER` | `None` |
| `min_gas()` | `CW_ORCH_MIN_GAS` | `150000` |
| `max_tx_query_retries()` | `CW_ORCH_MAX_TX_QUERY_RETRIES` | `50` |
| `min_block_time()` | `CW_ORCH_MIN_BLOCK_TIME`, then `CW_ORCH_MIN_BLOCK_SPEED` | one second |
| `max_block_time()` | `CW_ORCH_MAX_BLOCK_TIME` | `None` |
| `wallet_balance_assertion()` | `CW_ORCH_WALLET_BALANCE_ASSERTION` | `True` |
| `logs_message()` | `CW_ORCH_LOGS_ACTIVATION_MESSAGE` | `True` |
| `main_mnemonic()`, `test_mnemonic()`, `local_mnemonic()` | `MAIN_MNEMONIC`, `TEST_MNEMONIC`, `LOCAL_MNEMONIC` | `None` |

A value that cannot be parsed raises `EnvParseError`. Booleans must be exactly
`true` or `false`.

`parse_block_time_duration()` turns `"123s"`, `"321ms"`, `"42"` (seconds) or
`"54321 ms "` into a `datetime.timedelta`. An empty string, an unknown unit
such as `"45d"`, or a leading unit such as `"s54"` raises `EnvParseError`.

`default_state_folder()` returns `~/.cw-orchestrator`.

### `cworch.json_lock`

`JsonLockedState(path)` opens or creates a JSON state file and holds an
exclusive, non-blocking lock on it. A second lock on the same file raises
`StateAlreadyLockedError`. The file is read through `patch_state_if_old()`.
The state is written back by `close()` or at the end of a `with` block.
Methods:

- `prepare(chain_id, deploy_id)` adds `{deploy_id: {}, "code_ids": {}}` for a
  chain that has no entry yet.
- `get(chain_id)` returns the live entry of a chain, to change in place.
- `state()` returns a deep copy of the whole state.
- `force_write()` writes the state at once.
- `path()` returns the path as given.

`read(filename)` loads a JSON file without locking it. An unreadable file
raises `OpenFileError`. `patch_state_if_old(state)` flattens the older
`{chain_name: {chain_id: ...}}` layout into `{chain_id: ...}` and leaves the
current layout unchanged.

```python
from cworch.json_lock import JsonLockedState

with JsonLockedState("state.json") as state:
    state.prepare("juno-1", "default")
    state.get("juno-1")["default"]["counter"] = "juno1..."
```

### `cworch.keys.bech32`

`bech32_encode(hrp, data)` and `bech32_decode(bech)` convert between bytes and
bech32 strings. Invalid input raises `Bech32Error`.

### `cworch.keys.public`

`PublicKey` holds an optional amino-prefixed public key and an optional raw
address. It can be built with:

- `from_public_key` from a compressed secp256k1 key;
- `from_account` from an account address with a given prefix;
- `from_tendermint_key` from a `terravalconspub` key, secp256k1 or ed25519;
- `from_tendermint_address` from a 40-character hex address;
- `from_operator_address` from a `terravaloper` address;
- `from_raw_address` from hex.

It derives `account`, `operator_address`, `tendermint`,
`application_public_key`, `operator_address_public_key` and
`tendermint_pubkey` for a prefix.

```python
from cworch.keys.public import PublicKey

key = PublicKey.from_public_key(bytes.fromhex(
    "02cf7ed0b5832538cd89b55084ce93399b186e381684b31388763801439cbdd20a"
))
print(key.account("terra"))           # terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm
print(key.operator_address("terra"))  # terravaloper1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztraasg
```

### `cworch.keys.signature`

`verify(pub_key, signature, blob)` checks a base64 64-byte compact secp256k1
signature over the SHA-256 of `blob`, using a base64-encoded public key. It
returns `None` when the signature holds. Otherwise it raises `SignatureError`,
including for signatures with a non-normalised (high) `s`.

### `cworch.contracts`

`cworch.contracts.cosmwasm` is a small in-memory runtime. Storage is any
mutable mapping of bytes to bytes, such as a plain `dict`. It provides:

- `Coin`, `coins()`, `MessageInfo`, `Response` with `add_attribute()`,
  `StdError` and `ContractVersion`;
- `Item` and `Map` for typed JSON values in storage;
- `to_json_binary()` and `from_json()`;
- `set_contract_version()` and `get_contract_version()`.

Two example contracts run on it:

- `cworch.contracts.counter`: `instantiate`, `execute` (`Increment`,
  `Reset`), `query` (`GetCount`) and `migrate`. Only the owner may reset the
  count; anyone else gets `Unauthorized`.
- `cworch.contracts.mock_contract`: message types `FirstMessage` to
  `SeventhMessage` and `FirstQuery` to `FourthQuery`, with `instantiate`,
  `execute`, `query` and `migrate`. `instantiate_u64` and `query_u64` give a
  variant whose instantiation stores nothing and whose queries answer
  differently.

```python
from cworch.contracts.cosmwasm import MessageInfo
from cworch.contracts import counter

storage = {}
counter.instantiate(storage, MessageInfo(sender="creator"), counter.InstantiateMsg(count=17))
counter.execute(storage, MessageInfo(sender="anyone"), counter.Increment())
print(counter.count(storage).count)  # 18
```

## What it does not do

The package does not talk to a chain. It opens no gRPC connections and does
not build, sign, simulate or broadcast transactions. It does not derive
wallets from mnemonics: the mnemonic readers in `cworch.env` only return the
variables' values. Many of the error classes in `cworch.errors` describe
failures of such network work, and nothing in the package raises them. The
contracts run only in memory against the runtime above, not as compiled
contracts on a node.