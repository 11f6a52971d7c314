"""Key, address and VSS certificate primitives used by genesis generation."""

__all__ = [
    "address",
    "keys",
    "vss",
]
