import base64

import pytest

from cworch.errors import DaemonError
from cworch.keys.signature import SignatureError, verify

MESSAGE = (
    '{"account_number":"45","chain_id":"columbus-3-testnet","fee":{"amount":[{"amount":"698",'
    '"denom":"uluna"}],"gas":"46467"},"memo":"","msgs":[{"type":"bank/MsgSend","value":'
    '{"amount":[{"amount":"100000000","denom":"uluna"}],"from_address":'
    '"terra1n3g37dsdlv7ryqftlkef8mhgqj4ny7p8v78lg7","to_address":'
    '"terra1wg2mlrxdmnnkkykgqg4znky86nyrtc45q336yv"}}],"sequence":"0"}'
)
SIGNATURE = (
    "FJKAXRxNB5ruqukhVqZf3S/muZEUmZD10fVmWycdVIxVWiCXXFsUy2VY2jINEOUGNwfrqEZsT2dUfAvWj8obLg=="
)
PUB_KEY = "AiMzHaA2bvnDXfHzkjMM+vkSE/p0ymBtAFKUnUtQAeXe"
ORDER = int("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16)


def test_verify():
    assert verify(PUB_KEY, SIGNATURE, MESSAGE) is None


def test_tampered_message_fails():
    with pytest.raises(SignatureError):
        verify(PUB_KEY, SIGNATURE, MESSAGE.replace('"45"', '"46"'))


def test_bad_base64_signature_fails():
    with pytest.raises(SignatureError):
        verify(PUB_KEY, "not base64!!", MESSAGE)


def test_bad_public_key_fails():
    bogus = base64.b64encode(b"\x02" + bytes(10)).decode()
    with pytest.raises(SignatureError):
        verify(bogus, SIGNATURE, MESSAGE)


def test_wrong_signature_length_fails():
    short = base64.b64encode(base64.b64decode(SIGNATURE)[:63]).decode()
    with pytest.raises(SignatureError):
        verify(PUB_KEY, short, MESSAGE)


def test_high_s_signature_rejected():
    raw = base64.b64decode(SIGNATURE)
    s = int.from_bytes(raw[32:], "big")
    flipped = raw[:32] + (ORDER - s).to_bytes(32, "big")
    with pytest.raises(SignatureError):
        verify(PUB_KEY, base64.b64encode(flipped).decode(), MESSAGE)


def test_signature_error_is_daemon_error():
    with pytest.raises(DaemonError):
        verify(PUB_KEY, SIGNATURE, MESSAGE + " ")