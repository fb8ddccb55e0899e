"""
Capability set every naming-service backend implements.

Backends do not share a base class; they implement this protocol
independently and compose `resolution.protocol` for the registry/resolver
lookup.
"""

from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable

from ..namehash import NodeHash

# Fixed record keys.
IPFS_HASH_KEY = "ipfs.html.value"
EMAIL_KEY = "whois.email.value"
HTTP_URL_KEY = "ipfs.redirect_domain.value"


def currency_key(ticker: str) -> str:
    return f"crypto.{ticker.upper()}.address"


def has_suffix(domain: str, suffix: str) -> bool:
    """`domain` is `suffix` itself or ends in `.suffix` after at least one non-empty label."""
    if domain == suffix:
        return True
    tail = "." + suffix
    if not domain.endswith(tail):
        return False
    return any(domain[: -len(tail)].split("."))


@runtime_checkable
class NamingService(Protocol):
    name: str
    suffixes: Tuple[str, ...]

    def is_supported_domain(self, domain: str) -> bool: ...

    def namehash(self, domain: str) -> NodeHash: ...

    def childhash(self, parent: NodeHash, label: str, *, prefix: bool = True) -> NodeHash: ...

    async def resolver(self, domain: str) -> str: ...

    async def owner(self, domain: str) -> Optional[str]: ...

    async def record(self, domain: str, key: str) -> str: ...

    async def address(self, domain: str, currency_ticker: str) -> str: ...

    async def ipfs_hash(self, domain: str) -> str: ...

    async def email(self, domain: str) -> str: ...

    async def http_url(self, domain: str) -> str: ...

    async def resolve(self, domain: str) -> dict: ...


__all__ = [
    "NamingService",
    "IPFS_HASH_KEY",
    "EMAIL_KEY",
    "HTTP_URL_KEY",
    "currency_key",
    "has_suffix",
]
