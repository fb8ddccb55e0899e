"""
CNS (Crypto Name Service) backend for `.crypto` domains.

Registry: `resolverOf(tokenId)` / `ownerOf(tokenId)`; resolver: `get(key, tokenId)`,
where tokenId is the namehash read as uint256.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..config import NamingServiceSource, ResolutionSettings, SourceLike, get_settings, normalize_source, registry_for
from ..contracts.abi import CNS_REGISTRY_ABI, CNS_RESOLVER_ABI
from ..contracts.client import ContractCaller, ContractFactory, rpc_contract_factory
from ..errors import ResolutionError, ResolutionErrorCode
from ..namehash import NodeHash, childhash, namehash
from ..protocol import fetch_record, find_resolver, is_null_address
from ..rpc.http import JsonRpcClient
from .base import EMAIL_KEY, HTTP_URL_KEY, IPFS_HASH_KEY, currency_key, has_suffix


class Cns:
    """
    Naming service for `.crypto` domains.

    Parameters
    ----------
    source : True for defaults, a url string, or a mapping/NamingServiceSource
        with url / network / registry.
    settings : ResolutionSettings used for defaults; the cached env settings
        when omitted.
    contract_factory : builds ContractCallers; defaults to eth_call over
        JsonRpcClient(source.url).

    Raises ConfigurationError when the network or url cannot be determined or
    no registry is known for the network.
    """

    name = "CNS"
    suffixes: Tuple[str, ...] = ("crypto",)
    registry_map: Dict[str, str] = {
        "mainnet": "0xD1E5b0FF1287aA9f9A268759062E4Ab08b9Dacbe",
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
        self._registry: ContractCaller = contract_factory(CNS_REGISTRY_ABI, self.registry_address)

    async def close(self) -> None:
        if self._rpc is not None:
            await self._rpc.close()

    # ------------------------------------------------------------------ hashing

    def is_supported_domain(self, domain: str) -> bool:
        return has_suffix(domain, "crypto")

    def namehash(self, domain: str) -> NodeHash:
        if not self.is_supported_domain(domain):
            raise ResolutionError(ResolutionErrorCode.UnsupportedDomain, domain=domain)
        return namehash(domain)

    def childhash(self, parent: NodeHash, label: str, *, prefix: bool = True) -> NodeHash:
        return childhash(parent, label, prefix=prefix)

    # ------------------------------------------------------------------ registry

    async def _resolver_for(self, domain: str, node: NodeHash) -> str:
        return await find_resolver(
            self._registry,
            node,
            domain=domain,
            resolver_method="resolverOf",
            owner_method="ownerOf",
        )

    async def resolver(self, domain: str) -> str:
        return await self._resolver_for(domain, self.namehash(domain))

    async def owner(self, domain: str) -> Optional[str]:
        owner = await self._registry.fetch_method("ownerOf", [self.namehash(domain)])
        return None if is_null_address(owner) else owner

    # ------------------------------------------------------------------ records

    async def record(self, domain: str, key: str) -> str:
        node = self.namehash(domain)
        resolver = self._build_contract(CNS_RESOLVER_ABI, await self._resolver_for(domain, node))
        return await fetch_record(resolver, "get", [key, node], domain=domain, key=key)

    async def address(self, domain: str, currency_ticker: str) -> str:
        self.namehash(domain)
        if not currency_ticker:
            raise ResolutionError(
                ResolutionErrorCode.UnspecifiedCurrency, domain=domain, currency_ticker=currency_ticker
            )
        try:
            return await self.record(domain, currency_key(currency_ticker))
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


__all__ = ["Cns"]
