"""Cosmos key and address helpers, locked JSON state files, environment settings and in-memory CosmWasm contracts."""

__version__ = "0.1.0"