"""
High-level entry point: one object that resolves any supported domain.

    from resolution import Resolution

    async with Resolution(cns={"url": "https://mainnet.infura.io/v3/<key>"}) as r:
        btc = await r.address("brad.crypto", "BTC")
        ipfs = await r.ipfs_hash("brad.crypto")

Every call is routed by suffix to a configured naming service and then
delegated unchanged; no caching happens here.
"""

from __future__ import annotations

from typing import Optional, Union

from .config import ResolutionSettings, SourceLike, get_settings
from .contracts.client import ContractFactory, rpc_contract_factory
from .errors import ResolutionError, ResolutionErrorCode
from .namehash import NodeHash
from .router import NamingServiceRouter
from .rpc.http import JsonRpcClient
from .services.base import NamingService
from .services.cns import Cns
from .services.ens import Ens

ServiceOption = Union[SourceLike, NamingService]

# Failures that mean "this domain has no such address", as opposed to a broken
# setup or an unreachable node.
_ABSENT_CODES = frozenset(
    {
        ResolutionErrorCode.UnregisteredDomain,
        ResolutionErrorCode.UnspecifiedResolver,
        ResolutionErrorCode.RecordNotFound,
        ResolutionErrorCode.UnspecifiedCurrency,
    }
)


class Resolution:
    """
    Parameters
    ----------
    cns, ens : True for defaults, False to disable, a source (url string /
        mapping / NamingServiceSource) or an already built service.
    settings : ResolutionSettings for defaults and timeouts.
    rpc : JsonRpcClient shared by every service; closed together with the
        Resolution. Each service opens its own client when omitted.
    contract_factory : shared ContractCaller factory, mostly for tests; takes
        precedence over `rpc`.
    """

    def __init__(
        self,
        *,
        cns: ServiceOption = True,
        ens: ServiceOption = True,
        settings: Optional[ResolutionSettings] = None,
        rpc: Optional[JsonRpcClient] = None,
        contract_factory: Optional[ContractFactory] = None,
    ) -> None:
        settings = settings or get_settings()
        self.rpc = rpc
        self.cns: Optional[NamingService] = self._build(Cns, cns, settings, rpc, contract_factory)
        self.ens: Optional[NamingService] = self._build(Ens, ens, settings, rpc, contract_factory)
        self.router = NamingServiceRouter(s for s in (self.cns, self.ens) if s is not None)

    @staticmethod
    def _build(backend, option, settings, rpc, contract_factory) -> Optional[NamingService]:  # noqa: ANN001
        if option is False:
            return None
        if isinstance(option, NamingService):
            return option
        if contract_factory is None and rpc is not None:
            contract_factory = rpc_contract_factory(rpc, service=backend.name)
        return backend(option, settings=settings, contract_factory=contract_factory)

    # ------------------------------------------------------------------ lifecycle

    async def close(self) -> None:
        for service in self.router.services:
            close = getattr(service, "close", None)
            if close is not None:
                await close()
        if self.rpc is not None:
            await self.rpc.close()

    async def __aenter__(self) -> "Resolution":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()

    # ------------------------------------------------------------------ routing

    def is_supported_domain(self, domain: str) -> bool:
        return any(s.is_supported_domain(domain) for s in self.router.services)

    def service_name(self, domain: str) -> str:
        return self.router.route(domain).name

    def namehash(self, domain: str) -> NodeHash:
        return self.router.route(domain).namehash(domain)

    def childhash(self, parent: NodeHash, label: str, service_name: str, *, prefix: bool = True) -> NodeHash:
        for service in self.router.services:
            if service.name == service_name:
                return service.childhash(parent, label, prefix=prefix)
        raise ResolutionError(
            ResolutionErrorCode.MethodNotSupported,
            method="childhash",
            cause_detail=f"no naming service named {service_name!r}",
        )

    # ------------------------------------------------------------------ lookups

    async def address(self, domain: str, currency_ticker: str) -> str:
        return await self.router.route(domain).address(domain, currency_ticker)

    async def address_or_none(self, domain: str, currency_ticker: str) -> Optional[str]:
        """Like `address`, but an absent address yields None instead of raising."""
        try:
            return await self.address(domain, currency_ticker)
        except ResolutionError as e:
            if e.code not in _ABSENT_CODES:
                raise
            return None

    async def record(self, domain: str, key: str) -> str:
        return await self.router.route(domain).record(domain, key)

    async def resolver(self, domain: str) -> str:
        return await self.router.route(domain).resolver(domain)

    async def owner(self, domain: str) -> Optional[str]:
        return await self.router.route(domain).owner(domain)

    async def ipfs_hash(self, domain: str) -> str:
        return await self.router.route(domain).ipfs_hash(domain)

    async def email(self, domain: str) -> str:
        return await self.router.route(domain).email(domain)

    async def http_url(self, domain: str) -> str:
        return await self.router.route(domain).http_url(domain)

    async def resolve(self, domain: str) -> dict:
        return await self.router.route(domain).resolve(domain)


__all__ = ["Resolution"]
