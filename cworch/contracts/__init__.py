"""In-memory CosmWasm runtime with counter and mock example contracts."""