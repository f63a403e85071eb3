"""Verification of secp256k1 signatures over a SHA-256 digest."""

from __future__ import annotations

import base64
import binascii
import hashlib

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, encode_dss_signature

from ..errors import DaemonError

__all__ = ["SignatureError", "verify"]

_CURVE_ORDER = int("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16)
_HALF_ORDER = _CURVE_ORDER // 2


class SignatureError(DaemonError):
    """A signature, public key or encoding failed verification."""


def _b64decode(text: str, what: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SignatureError(f"invalid base64 {what}: {exc}") from exc


def verify(pub_key: str, signature: str, blob: str) -> None:
    """Check a base64 compact signature of ``blob`` by a base64 secp256k1 key.

    Raises :class:`SignatureError` when the signature does not hold.
    """
    public = _b64decode(pub_key, "public key")
    sig = _b64decode(signature, "signature")

    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public)
    except ValueError as exc:
        raise SignatureError(f"malformed public key: {exc}") from exc

    if len(sig) != 64:
        raise SignatureError("malformed signature: expected 64 bytes")
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:], "big")
    if not (0 < r < _CURVE_ORDER and 0 < s < _CURVE_ORDER):
        raise SignatureError("malformed signature: component out of range")
    if s > _HALF_ORDER:
        raise SignatureError("signature failed verification: non-normalized s")

    digest = hashlib.sha256(blob.encode("utf-8")).digest()
    try:
        key.verify(encode_dss_signature(r, s), digest, ec.ECDSA(Prehashed(hashes.SHA256())))
    except InvalidSignature as exc:
        raise SignatureError("signature failed verification") from exc