"""Application layer for genesis generation (config/logging/cli)."""

__all__ = [
    "config",
    "logger",
    "cli",
]
