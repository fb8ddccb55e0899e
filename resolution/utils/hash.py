from __future__ import annotations

from Crypto.Hash import keccak as _keccak

from .bytes import BytesLike, ensure_bytes, to_hex


# --- Keccak-256 (Ethereum-style) ----------------------------------------------
# CPython's hashlib only exposes NIST SHA3, whose padding differs from the
# original Keccak submission used on-chain. pycryptodome ships the latter.


def keccak256(data: BytesLike | str) -> bytes:
    """Return Keccak-256 digest of *data* (str is hashed as UTF-8)."""
    h = _keccak.new(digest_bits=256)
    h.update(ensure_bytes(data))
    return h.digest()


def keccak256_hex(data: BytesLike | str, *, prefix: bool = True) -> str:
    """Return hex string of Keccak-256 digest (0x-prefixed by default)."""
    return to_hex(keccak256(data), prefix=prefix)


__all__ = ["keccak256", "keccak256_hex"]
