# src/core/fingerprint.py - v1
"""Content fingerprint for artifact change detection.

Not cryptographic: a djb2-style rolling hash is enough to notice that an
artifact's content changed between two recordings.
"""

from __future__ import annotations

_SEED = 5381
_MULTIPLIER = 33
_MASK = 0xFFFF_FFFF_FFFF_FFFF


def content_hash(content: str) -> str:
    """Hash text content (UTF-8 bytes) into a lowercase hex string."""
    value = _SEED
    for byte in content.encode("utf-8"):
        value = (value * _MULTIPLIER + byte) & _MASK
    return f"{value:x}"
