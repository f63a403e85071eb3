"""Public keys and the bech32 addresses derived from them."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from Crypto.Hash import RIPEMD160
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..errors import (
    Bech32DecodeError,
    Bech32DecodeExpandedError,
    ConversionEd25519Error,
    ConversionError,
    ConversionLengthEd25519HexError,
    ConversionLengthError,
    ConversionPrefixEd25519Error,
    ConversionSecp256k1Error,
    DaemonError,
    ImplementationError,
)
from .bech32 import Bech32Error, bech32_decode, bech32_encode

__all__ = ["PublicKey"]

_log = logging.getLogger(__name__)

BECH32_PUBKEY_DATA_PREFIX_SECP256K1 = bytes([0xEB, 0x5A, 0xE9, 0x87, 0x21])
BECH32_PUBKEY_DATA_PREFIX_ED25519 = bytes([0x16, 0x24, 0xDE, 0x64, 0x20])

_TENDERMINT_PUBKEY_PREFIX = "terravalconspub"
_OPERATOR_PREFIX = "terravaloper"


def _hex_decode(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise DaemonError(f"invalid hex string {text!r}: {exc}") from exc


def _check_prefix_and_length(prefix: str, data: str, length: int) -> bytes:
    try:
        hrp, decoded = bech32_decode(data)
    except Bech32Error as exc:
        raise ConversionError(data, exc) from exc
    if hrp == prefix and len(data) == length:
        return decoded
    raise Bech32DecodeExpandedError(hrp, len(data), prefix, length)


def _key_to_addr(data: bytes, prefix: str) -> str:
    try:
        return bech32_encode(prefix, data)
    except Bech32Error as exc:
        raise Bech32DecodeError() from exc


@dataclass
class PublicKey:
    """A public key and/or raw address from which bech32 addresses are derived."""

    raw_pub_key: bytes | None = None
    raw_address: bytes | None = None

    @classmethod
    def from_public_key(cls, bpub: bytes) -> PublicKey:
        """Build from a compressed secp256k1 public key."""
        bpub = bytes(bpub)
        return cls(
            raw_pub_key=cls.pubkey_from_public_key(bpub),
            raw_address=cls.address_from_public_key(bpub),
        )

    @classmethod
    def from_account(cls, acc_address: str, prefix: str) -> PublicKey:
        """Build from an account address with the given prefix."""
        raw = _check_prefix_and_length(prefix, acc_address, 44)
        return cls(raw_pub_key=None, raw_address=raw)

    @classmethod
    def from_tendermint_key(cls, tendermint_public_key: str) -> PublicKey:
        """Build from a ``terravalconspub`` key of 83 (secp256k1) or 82 (ed25519) characters."""
        length = len(tendermint_public_key)
        if length == 83:
            raw = _check_prefix_and_length(_TENDERMINT_PUBKEY_PREFIX, tendermint_public_key, length)
            _log.debug("%s", raw.hex())
            if not raw.startswith(BECH32_PUBKEY_DATA_PREFIX_SECP256K1):
                raise ConversionSecp256k1Error()
            public_key = cls.public_key_from_pubkey(raw)
            return cls(raw_pub_key=raw, raw_address=cls.address_from_public_key(public_key))
        if length == 82:
            raw = _check_prefix_and_length(_TENDERMINT_PUBKEY_PREFIX, tendermint_public_key, length)
            _log.error("ED25519 public keys are not fully supported")
            if not raw.startswith(BECH32_PUBKEY_DATA_PREFIX_ED25519):
                raise ConversionEd25519Error()
            return cls(raw_pub_key=raw, raw_address=cls.address_from_public_ed25519_key(raw))
        raise ConversionLengthError(length)

    @classmethod
    def from_tendermint_address(cls, tendermint_hex_address: str) -> PublicKey:
        """Build from a 40-character hex tendermint address."""
        length = len(tendermint_hex_address)
        if length != 40:
            raise ConversionLengthEd25519HexError(length)
        return cls(raw_pub_key=None, raw_address=_hex_decode(tendermint_hex_address))

    @classmethod
    def from_operator_address(cls, valoper_address: str) -> PublicKey:
        """Build from a validator operator address."""
        raw = _check_prefix_and_length(_OPERATOR_PREFIX, valoper_address, 51)
        return cls(raw_pub_key=None, raw_address=raw)

    @classmethod
    def from_raw_address(cls, raw_address: str) -> PublicKey:
        """Build from a hex-encoded raw address."""
        return cls(raw_pub_key=None, raw_address=_hex_decode(raw_address))

    @staticmethod
    def pubkey_from_public_key(public_key: bytes) -> bytes:
        """Prefix a compressed secp256k1 key with its amino prefix."""
        return BECH32_PUBKEY_DATA_PREFIX_SECP256K1 + bytes(public_key)

    @staticmethod
    def pubkey_from_ed25519_public_key(public_key: bytes) -> bytes:
        """Prefix an ed25519 key with its amino prefix."""
        return BECH32_PUBKEY_DATA_PREFIX_ED25519 + bytes(public_key)

    @staticmethod
    def public_key_from_pubkey(pub_key: bytes) -> bytes:
        """Strip the amino prefix from a prefixed key."""
        pub_key = bytes(pub_key)
        if pub_key.startswith(BECH32_PUBKEY_DATA_PREFIX_SECP256K1):
            return pub_key[len(BECH32_PUBKEY_DATA_PREFIX_SECP256K1) :]
        if pub_key.startswith(BECH32_PUBKEY_DATA_PREFIX_ED25519):
            rest = pub_key[len(BECH32_PUBKEY_DATA_PREFIX_ED25519) :]
            if len(rest) != 32:
                raise ConversionPrefixEd25519Error(len(pub_key), pub_key.hex())
            try:
                key = Ed25519PublicKey.from_public_bytes(rest)
            except ValueError as exc:
                raise DaemonError(f"invalid ed25519 public key: {exc}") from exc
            return key.public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        _log.error("pub key does not start with BECH32 PREFIX")
        raise Bech32DecodeError()

    @staticmethod
    def address_from_public_key(public_key: bytes) -> bytes:
        """RIPEMD-160 of SHA-256 of a compressed public key."""
        sha = hashlib.sha256(bytes(public_key)).digest()
        return RIPEMD160.new(sha).digest()[:20]

    @staticmethod
    def address_from_public_ed25519_key(public_key: bytes) -> bytes:
        """First 20 bytes of SHA-256 of a prefixed ed25519 key, without its prefix."""
        public_key = bytes(public_key)
        if len(public_key) != 32 + 5:
            raise ConversionPrefixEd25519Error(len(public_key), public_key.hex())
        _log.debug("address_from_public_ed25519_key public key - %s", public_key.hex())
        address = hashlib.sha256(public_key[5:]).digest()[:20]
        _log.debug("address_from_public_ed25519_key sha result - %s", address.hex())
        return address

    def _encode_address(self, prefix: str) -> str:
        if self.raw_address is None:
            raise ImplementationError()
        return _key_to_addr(self.raw_address, prefix)

    def _encode_pub_key(self, prefix: str) -> str:
        if self.raw_pub_key is None:
            raise ImplementationError()
        return _key_to_addr(self.raw_pub_key, prefix)

    def account(self, prefix: str) -> str:
        """The account address."""
        return self._encode_address(prefix)

    def operator_address(self, prefix: str) -> str:
        """The validator operator address."""
        return self._encode_address(f"{prefix}valoper")

    def application_public_key(self, prefix: str) -> str:
        """The application public key, e.g. ``terrapub...``."""
        return self._encode_pub_key(f"{prefix}pub")

    def operator_address_public_key(self, prefix: str) -> str:
        """The validator operator public key."""
        return self._encode_pub_key(f"{prefix}valoperpub")

    def tendermint(self, prefix: str) -> str:
        """The consensus address used to sign blocks."""
        return self.account(f"{prefix}valcons")

    def tendermint_pubkey(self, prefix: str) -> str:
        """The consensus public key used to sign blocks."""
        return self._encode_pub_key(f"{prefix}valconspub")