import pytest

from cworch.keys.bech32 import Bech32Error, bech32_decode, bech32_encode

ACCOUNT = "terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm"
RAW = bytes.fromhex("94c4c52a9777e3c3628e5cfe819f6e26a7f5bd82")


def test_decode_known_account():
    assert bech32_decode(ACCOUNT) == ("terra", RAW)


def test_encode_known_account():
    assert bech32_encode("terra", RAW) == ACCOUNT


def test_encode_known_operator_address():
    assert (
        bech32_encode("terravaloper", RAW)
        == "terravaloper1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztraasg"
    )


@pytest.mark.parametrize(
    "hrp,data",
    [
        ("a", b""),
        ("cosmos", bytes(range(33))),
        ("terravalconspub", b"\xff" * 38),
        ("x", b"\x00"),
    ],
)
def test_round_trip(hrp, data):
    assert bech32_decode(bech32_encode(hrp, data)) == (hrp, data)


def test_uppercase_string_decodes():
    assert bech32_decode(ACCOUNT.upper()) == ("terra", RAW)


def test_uppercase_hrp_encodes_lowercase():
    assert bech32_encode("TERRA", RAW) == ACCOUNT


def test_mixed_case_rejected():
    with pytest.raises(Bech32Error):
        bech32_decode("Terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm")


def test_bad_checksum_rejected():
    with pytest.raises(Bech32Error):
        bech32_decode(ACCOUNT[:-1] + "q")


def test_missing_separator_rejected():
    with pytest.raises(Bech32Error):
        bech32_decode("terrajnzv225hwl")


def test_invalid_data_character_rejected():
    with pytest.raises(Bech32Error):
        bech32_decode("terra1bnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm")


def test_short_data_part_rejected():
    with pytest.raises(Bech32Error):
        bech32_decode("terra1qqqq")


def test_empty_hrp_rejected():
    with pytest.raises(Bech32Error):
        bech32_encode("", RAW)


def test_mixed_case_hrp_rejected():
    with pytest.raises(Bech32Error):
        bech32_encode("TeRra", RAW)


def test_encoded_is_lowercase_and_has_checksum_length():
    encoded = bech32_encode("cosmos", bytes(20))
    assert encoded == encoded.lower()
    assert len(encoded) == len("cosmos") + 1 + 32 + 6