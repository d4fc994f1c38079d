"""Test doubles for the ledger and the vault contract."""
