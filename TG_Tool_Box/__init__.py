"""Shared helpers: deterministic seed environment and address hashing."""

__all__ = [
    "Hash",
    "SeedEnvironment",
]
