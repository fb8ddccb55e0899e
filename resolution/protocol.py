"""
Registry -> resolver lookup shared by the naming services.

Step 1 (resolver discovery) asks the registry for the node's resolver. A
missing resolver is ambiguous, so only then is the owner fetched:

    resolver present                 -> resolver address
    resolver absent, owner absent    -> UnregisteredDomain
    resolver absent, owner present   -> UnspecifiedResolver

Step 2 (record fetch) reads one key from the discovered resolver; an empty or
null value is RecordNotFound. Values are returned untouched.

The helpers are plain coroutines over `ContractCaller`s so each service
composes them with its own method names instead of inheriting them.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .contracts.client import ContractCaller
from .errors import ResolutionError, ResolutionErrorCode, ignore_resolution_error
from .logging import get_logger
from .namehash import NodeHash
from .utils.bytes import strip_0x

log = get_logger(__name__)

NULL_ADDRESSES = frozenset({"0x" + "0" * 40, "0x" + "0" * 64})


def is_null_address(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        v = value.strip().lower()
        return not strip_0x(v) or v in NULL_ADDRESSES
    return False


async def _registry_read(registry: ContractCaller, method: str, node: NodeHash) -> Optional[str]:
    # An empty eth_call result means the registry has nothing for this node.
    value = await ignore_resolution_error(
        ResolutionErrorCode.RecordNotFound,
        registry.fetch_method(method, [node]),
    )
    return None if is_null_address(value) else value


async def find_resolver(
    registry: ContractCaller,
    node: NodeHash,
    *,
    domain: str,
    resolver_method: str,
    owner_method: str,
) -> str:
    """Step 1: resolver address for `node`, or the disambiguated failure."""
    resolver = await _registry_read(registry, resolver_method, node)
    log.debug("resolver_lookup", domain=domain, resolver=resolver)
    if resolver is not None:
        return resolver

    owner = await _registry_read(registry, owner_method, node)
    if owner is None:
        raise ResolutionError(ResolutionErrorCode.UnregisteredDomain, domain=domain)
    raise ResolutionError(ResolutionErrorCode.UnspecifiedResolver, domain=domain)


async def fetch_record(
    resolver: ContractCaller,
    method: str,
    params: Sequence[Any],
    *,
    domain: str,
    key: str,
) -> str:
    """Step 2: read `key` through `method(*params)` on the resolver."""
    try:
        value = await resolver.fetch_method(method, params)
    except ResolutionError as e:
        if e.code is not ResolutionErrorCode.RecordNotFound:
            raise
        raise ResolutionError(ResolutionErrorCode.RecordNotFound, record_name=key, domain=domain) from e
    if not value or is_null_address(value):
        raise ResolutionError(ResolutionErrorCode.RecordNotFound, record_name=key, domain=domain)
    log.debug("record_fetched", domain=domain, key=key)
    return value


__all__ = ["NULL_ADDRESSES", "is_null_address", "find_resolver", "fetch_record"]
