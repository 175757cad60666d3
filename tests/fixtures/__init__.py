"""Test fixtures for the Merkle validation library."""
