"""Bech32 encoding and decoding of byte strings."""

from __future__ import annotations

__all__ = ["Bech32Error", "bech32_encode", "bech32_decode"]

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_CHARSET_REV = {char: value for value, char in enumerate(_CHARSET)}
_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_CHECKSUM_LENGTH = 6
_MAX_HRP_LENGTH = 83
_MAX_CODE_LENGTH = 1023


class Bech32Error(ValueError):
    """A string or human-readable part is not valid bech32."""


def _polymod(values: list[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = (checksum & 0x1FFFFFF) << 5 ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(char) >> 5 for char in hrp] + [0] + [ord(char) & 31 for char in hrp]


def _checksum(hrp: str, data: list[int]) -> list[int]:
    polymod = _polymod(_hrp_expand(hrp) + data + [0] * _CHECKSUM_LENGTH) ^ 1
    return [(polymod >> 5 * (5 - index)) & 31 for index in range(_CHECKSUM_LENGTH)]


def _check_hrp(hrp: str) -> str:
    if not hrp:
        raise Bech32Error("human-readable part is empty")
    if len(hrp) > _MAX_HRP_LENGTH:
        raise Bech32Error(f"human-readable part is longer than {_MAX_HRP_LENGTH} characters")
    if any(not 33 <= ord(char) <= 126 for char in hrp):
        raise Bech32Error("human-readable part holds an invalid character")
    if hrp.lower() != hrp and hrp.upper() != hrp:
        raise Bech32Error("human-readable part has mixed case")
    return hrp.lower()


def _to_five_bits(data: bytes) -> list[int]:
    accumulator = 0
    bits = 0
    words: list[int] = []
    for byte in data:
        accumulator = (accumulator << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            words.append((accumulator >> bits) & 31)
    if bits:
        words.append((accumulator << (5 - bits)) & 31)
    return words


def _to_bytes(words: list[int]) -> bytes:
    accumulator = 0
    bits = 0
    out = bytearray()
    for word in words:
        accumulator = (accumulator << 5) | word
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((accumulator >> bits) & 0xFF)
    # Leftover padding bits are dropped.
    return bytes(out)


def bech32_encode(hrp: str, data: bytes) -> str:
    """Encode bytes under a human-readable prefix as a lower-case bech32 string."""
    hrp = _check_hrp(hrp)
    words = _to_five_bits(bytes(data))
    if len(words) + _CHECKSUM_LENGTH > _MAX_CODE_LENGTH:
        raise Bech32Error("encoded data is too long")
    combined = words + _checksum(hrp, words)
    return hrp + "1" + "".join(_CHARSET[word] for word in combined)


def bech32_decode(bech: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its lower-case prefix and its bytes."""
    if any(not 33 <= ord(char) <= 126 for char in bech):
        raise Bech32Error("string holds an invalid character")
    if bech.lower() != bech and bech.upper() != bech:
        raise Bech32Error("string has mixed case")
    bech = bech.lower()
    separator = bech.rfind("1")
    if separator == -1:
        raise Bech32Error("missing separator '1'")
    hrp = _check_hrp(bech[:separator])
    data_part = bech[separator + 1 :]
    if len(data_part) < _CHECKSUM_LENGTH:
        raise Bech32Error("data part is too short to hold a checksum")
    if len(data_part) > _MAX_CODE_LENGTH:
        raise Bech32Error("data part is too long")
    try:
        words = [_CHARSET_REV[char] for char in data_part]
    except KeyError as exc:
        raise Bech32Error(f"invalid data character {exc.args[0]!r}") from None
    if _polymod(_hrp_expand(hrp) + words) != 1:
        raise Bech32Error("invalid checksum")
    return hrp, _to_bytes(words[:-_CHECKSUM_LENGTH])