"""Constants and other literals."""


KB: int = 1024
"""One kilo byte (in bytes)."""

MB: int = 1024 * KB
"""One mega byte (in bytes)."""

HEX_PREFIX: str = '0x'
"""Prefix for display / lookup form of indices."""

INDEX_BYTES: int = 2
"""Object index width in bytes."""

SUBINDEX_BYTES: int = 1
"""Sub-index width in bytes."""
