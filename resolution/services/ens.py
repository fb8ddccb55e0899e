"""
ENS (Ethereum Name Service) backend.

Same hashing and registry/resolver protocol as CNS, different contract
surface: the registry exposes `resolver(node)` / `owner(node)` with a bytes32
node, and resolvers store the ETH address under `addr(node)` and every other
record under `text(node, key)`.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..config import NamingServiceSource, ResolutionSettings, SourceLike, get_settings, normalize_source, registry_for
from ..contracts.abi import ENS_REGISTRY_ABI, ENS_RESOLVER_ABI
from ..contracts.client import ContractCaller, ContractFactory, rpc_contract_factory
from ..errors import ResolutionError, ResolutionErrorCode
from ..namehash import NodeHash, childhash, namehash
from ..protocol import fetch_record, find_resolver, is_null_address
from ..rpc.http import JsonRpcClient
from .base import EMAIL_KEY, HTTP_URL_KEY, IPFS_HASH_KEY, currency_key, has_suffix

ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

# The only currency an ENS resolver keeps in the `addr` slot.
ETH_ADDRESS_KEY = currency_key("ETH")


class Ens:
    """Naming service for `.eth` (and a few other ENS-managed) domains."""

    name = "ENS"
    suffixes: Tuple[str, ...] = ("eth", "luxe", "xyz", "kred", "reverse")
    registry_map: Dict[str, str] = {
        "mainnet": ENS_REGISTRY,
        "ropsten": ENS_REGISTRY,
        "rinkeby": ENS_REGISTRY,
        "goerli": ENS_REGISTRY,
    }

    def __init__(
        self,
        source: SourceLike = True,
        *,
        settings: Optional[ResolutionSettings] = None,
        contract_factory: Optional[ContractFactory] = None,
    ) -> None:
        settings = settings or get_settings()
        self.source: NamingServiceSource = normalize_source(source, service=self.name, settings=settings)
        self.network = self.source.network
        self.url = self.source.url
        self.registry_address = registry_for(self.source, self.registry_map, service=self.name)

        self._rpc: Optional[JsonRpcClient] = None
        if contract_factory is None:
            self._rpc = JsonRpcClient(self.url, timeout=settings.request_timeout)
            contract_factory = rpc_contract_factory(self._rpc, service=self.name)
        self._build_contract = contract_factory
        self._registry: ContractCaller = contract_factory(ENS_REGISTRY_ABI, self.registry_address)

    async def close(self) -> None:
        if self._rpc is not None:
            await self._rpc.close()

    def is_supported_domain(self, domain: str) -> bool:
        return any(has_suffix(domain, s) for s in self.suffixes)

    def namehash(self, domain: str) -> NodeHash:
        if not self.is_supported_domain(domain):
            raise ResolutionError(ResolutionErrorCode.UnsupportedDomain, domain=domain)
        return namehash(domain)

    def childhash(self, parent: NodeHash, label: str, *, prefix: bool = True) -> NodeHash:
        return childhash(parent, label, prefix=prefix)

    async def _resolver_for(self, domain: str, node: NodeHash) -> str:
        return await find_resolver(
            self._registry,
            node,
            domain=domain,
            resolver_method="resolver",
            owner_method="owner",
        )

    async def resolver(self, domain: str) -> str:
        return await self._resolver_for(domain, self.namehash(domain))

    async def owner(self, domain: str) -> Optional[str]:
        owner = await self._registry.fetch_method("owner", [self.namehash(domain)])
        return None if is_null_address(owner) else owner

    async def record(self, domain: str, key: str) -> str:
        node = self.namehash(domain)
        resolver = self._build_contract(ENS_RESOLVER_ABI, await self._resolver_for(domain, node))
        if key == ETH_ADDRESS_KEY:
            return await fetch_record(resolver, "addr", [node], domain=domain, key=key)
        return await fetch_record(resolver, "text", [node, key], domain=domain, key=key)

    async def address(self, domain: str, currency_ticker: str) -> str:
        self.namehash(domain)
        if not currency_ticker or currency_key(currency_ticker) != ETH_ADDRESS_KEY:
            raise ResolutionError(
                ResolutionErrorCode.UnspecifiedCurrency, domain=domain, currency_ticker=currency_ticker
            )
        try:
            return await self.record(domain, ETH_ADDRESS_KEY)
        except ResolutionError as e:
            if e.code is not ResolutionErrorCode.RecordNotFound:
                raise
            raise ResolutionError(
                ResolutionErrorCode.UnspecifiedCurrency, domain=domain, currency_ticker=currency_ticker
            ) from e

    async def ipfs_hash(self, domain: str) -> str:
        return await self.record(domain, IPFS_HASH_KEY)

    async def email(self, domain: str) -> str:
        return await self.record(domain, EMAIL_KEY)

    async def http_url(self, domain: str) -> str:
        return await self.record(domain, HTTP_URL_KEY)

    async def resolve(self, domain: str) -> dict:
        raise ResolutionError(ResolutionErrorCode.MethodNotSupported, domain=domain, method="resolve")


__all__ = ["Ens", "ENS_REGISTRY"]
