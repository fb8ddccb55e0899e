"""
Utility helpers.

Re-exports:
- bytes: hex helpers
- hash: Keccak-256 convenience wrappers
"""

from .bytes import ensure_bytes, from_hex, strip_0x, to_hex
from .hash import keccak256, keccak256_hex

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "strip_0x",
    "ensure_bytes",
    # hash
    "keccak256",
    "keccak256_hex",
]
