"""CLI layer for farmledger."""
