"""
Recursive domain hashing shared by the Ethereum-style naming services.

    namehash("")            = 0x00…00 (32 zero bytes)
    namehash(label.parent)  = keccak256(namehash(parent) || keccak256(label))

`childhash` exposes a single step of that fold so callers can derive or verify
subtrees without re-hashing a whole domain:

    >>> childhash(namehash("world.crypto"), "hello") == namehash("hello.world.crypto")
    True

Labels are hashed verbatim (no normalization): hyphens, digits and case are
part of the bytes fed to Keccak-256.
"""

from __future__ import annotations

from .utils.bytes import from_hex, strip_0x, to_hex
from .utils.hash import keccak256

NodeHash = str

ZERO_HASH: NodeHash = "0" * 64


def labelhash(label: str, *, prefix: bool = False) -> str:
    """Keccak-256 of a single UTF-8 label."""
    return to_hex(keccak256(label), prefix=prefix)


def childhash(parent: NodeHash, label: str, *, prefix: bool = True) -> NodeHash:
    """
    Hash `label` under the node `parent`.

    `parent` may carry a 0x prefix or not. `prefix` decides the shape of the
    returned hex; namehash folds with prefix=False and prefixes once.
    """
    parent_bytes = from_hex(strip_0x(parent).rjust(64, "0"))
    node = keccak256(parent_bytes + keccak256(label))
    return to_hex(node, prefix=prefix)


def namehash(domain: str, *, prefix: bool = True) -> NodeHash:
    node = ZERO_HASH
    if domain:
        for label in reversed(domain.split(".")):
            node = childhash(node, label, prefix=False)
    return "0x" + node if prefix else node


__all__ = ["NodeHash", "ZERO_HASH", "labelhash", "childhash", "namehash"]
