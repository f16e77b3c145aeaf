"""Credential lifecycle core: password hashing, change tracking and reset tokens."""
