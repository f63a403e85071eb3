"""Bech32 encoding, public key address derivation and secp256k1 signature verification."""