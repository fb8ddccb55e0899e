"""
resolution.contracts.client
===========================

The contract-call boundary used by every naming service.

A naming service never talks to a node directly: it asks a *contract factory*
for a `ContractCaller` bound to (abi, address) and calls `fetch_method`. The
default factory returns `RpcContract`, which encodes calldata with the ABI,
performs an `eth_call` through a shared `JsonRpcClient` and decodes the result.

Tests (and alternative transports) provide their own factory:

    class FakeContract:
        async def fetch_method(self, method, params):
            return "0xb66DcE2DA6afAAa98F2013446dBCB0f4B0ab2842"

    Cns(contract_factory=lambda abi, address: FakeContract())

Failure mapping performed here
------------------------------
- empty return data ("0x") or an execution revert -> ResolutionError(RecordNotFound)
- any other transport / JSON-RPC failure          -> ResolutionError(NamingServiceDown)
- return data the ABI cannot decode               -> ResolutionError(NamingServiceDown)
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from eth_abi.exceptions import DecodingError

from ..errors import ResolutionError, ResolutionErrorCode, RpcError
from ..logging import get_logger
from ..rpc.http import JsonRpcClient
from ..utils.bytes import strip_0x
from .abi import Abi

log = get_logger(__name__)


@runtime_checkable
class ContractCaller(Protocol):
    async def fetch_method(self, method: str, params: Sequence[Any]) -> Any: ...


ContractFactory = Callable[[Abi, str], ContractCaller]


class RpcContract:
    """
    ABI-driven read-only client bound to a deployed contract address.

    Parameters
    ----------
    rpc : JsonRpcClient shared by every contract of a naming service.
    address : 0x-hex contract address.
    abi : mapping of function name -> ContractFunction.
    service : naming service name, reported in NamingServiceDown errors.
    """

    def __init__(self, rpc: JsonRpcClient, address: str, abi: Abi, *, service: str) -> None:
        self._rpc = rpc
        self._address = address
        self._abi = abi
        self._service = service

    @property
    def address(self) -> str:
        return self._address

    async def fetch_method(self, method: str, params: Sequence[Any]) -> Any:
        try:
            fn = self._abi[method]
        except KeyError:
            raise ResolutionError(ResolutionErrorCode.MethodNotSupported, method=method) from None

        calldata = fn.encode_call(list(params))
        try:
            raw = await self._rpc.eth_call(self._address, calldata)
        except RpcError as e:
            if e.is_revert:
                raise ResolutionError(ResolutionErrorCode.RecordNotFound, method=method) from e
            raise ResolutionError(
                ResolutionErrorCode.NamingServiceDown, method=self._service, cause_detail=e.message
            ) from e

        if not strip_0x(raw):
            raise ResolutionError(ResolutionErrorCode.RecordNotFound, method=method)
        try:
            value = fn.decode_return(raw)
        except (DecodingError, ValueError) as e:
            raise ResolutionError(
                ResolutionErrorCode.NamingServiceDown, method=self._service, cause_detail=f"undecodable {method} result"
            ) from e
        log.debug("contract_call", contract=self._address, method=method)
        return value


def rpc_contract_factory(rpc: JsonRpcClient, *, service: str) -> ContractFactory:
    """Factory producing RpcContract instances that share `rpc`."""

    def _build(abi: Abi, address: str) -> ContractCaller:
        return RpcContract(rpc, address, abi, service=service)

    return _build


__all__ = ["ContractCaller", "ContractFactory", "RpcContract", "rpc_contract_factory"]
