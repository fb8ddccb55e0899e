from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

import pytest

from resolution.config import ResolutionSettings
from resolution.errors import ResolutionError, ResolutionErrorCode
from resolution.services.cns import Cns
from resolution.services.ens import Ens

CNS_REGISTRY = "0xD1E5b0FF1287aA9f9A268759062E4Ab08b9Dacbe"
ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
RESOLVER = "0xBD5F5ec7ed5f19b53726344540296C02584A5237"
OWNER = "0x8aaD44321A86b170879d7A244c1e8d360c99DdA8"
NULL_ADDRESS = "0x0000000000000000000000000000000000000000"


class FakeContract:
    """
    In-memory ContractCaller.

    `responses` maps a method name to a value, an exception, or a callable
    taking the call params. A missing or None answer behaves like an empty
    eth_call result (RecordNotFound), which is what RpcContract raises.
    """

    def __init__(self, address: str, responses: Dict[str, Any] | None = None) -> None:
        self.address = address
        self.responses: Dict[str, Any] = dict(responses or {})
        self.calls: List[Tuple[str, list]] = []

    async def fetch_method(self, method: str, params) -> Any:
        self.calls.append((method, list(params)))
        value = self.responses.get(method)
        if callable(value):
            value = value(*params)
        if isinstance(value, BaseException):
            raise value
        if value is None:
            raise ResolutionError(ResolutionErrorCode.RecordNotFound, method=method)
        return value


class FakeChain:
    """Contract factory handing out one FakeContract per address."""

    def __init__(self) -> None:
        self.contracts: Dict[str, FakeContract] = {}

    def contract(self, address: str, **responses: Any) -> FakeContract:
        c = self.contracts.setdefault(address, FakeContract(address))
        c.responses.update(responses)
        return c

    def factory(self, abi, address: str) -> FakeContract:  # noqa: ANN001
        return self.contracts.setdefault(address, FakeContract(address))

    @property
    def calls(self) -> List[Tuple[str, str, list]]:
        return [(addr, m, p) for addr, c in self.contracts.items() for m, p in c.calls]


def records(values: Dict[str, str]) -> Callable[..., Any]:
    """CNS `get(key, tokenId)` answering from a key -> value dict."""
    return lambda key, node: values.get(key)


@pytest.fixture
def settings() -> ResolutionSettings:
    return ResolutionSettings(_env_file=None, eth_url="https://mainnet.infura.io", network="mainnet")


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def cns(chain: FakeChain, settings: ResolutionSettings) -> Cns:
    return Cns(settings=settings, contract_factory=chain.factory)


@pytest.fixture
def ens(chain: FakeChain, settings: ResolutionSettings) -> Ens:
    return Ens(settings=settings, contract_factory=chain.factory)
