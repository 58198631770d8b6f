"""Herb traceability ledger: geo-fenced herb submissions and supply-chain records."""

__version__ = "0.1.0"
