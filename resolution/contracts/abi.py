"""
Minimal ABI surface of the registry and resolver contracts.

Only the read-only functions the naming services call are described here.
Calldata is encoded with eth-abi; node hashes arrive as 0x-hex strings and are
coerced to the on-chain argument type (uint256 token id for CNS, bytes32 node
for ENS).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple

from eth_abi import decode, encode

from ..utils.bytes import from_hex, strip_0x, to_hex
from ..utils.hash import keccak256


def _coerce(typ: str, value: Any) -> Any:
    if isinstance(value, str) and typ.startswith("uint"):
        return int(strip_0x(value) or "0", 16) if value.startswith(("0x", "0X")) else int(value)
    if isinstance(value, str) and typ == "bytes32":
        return from_hex(strip_0x(value).rjust(64, "0"))
    return value


@dataclass(frozen=True)
class ContractFunction:
    name: str
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return keccak256(self.signature)[:4]

    def encode_call(self, args: Sequence[Any]) -> str:
        if len(args) != len(self.inputs):
            raise ValueError(f"{self.signature} expects {len(self.inputs)} args, got {len(args)}")
        values = [_coerce(t, v) for t, v in zip(self.inputs, args)]
        return to_hex(self.selector + encode(list(self.inputs), values))

    def decode_return(self, data: str) -> Any:
        out = decode(list(self.outputs), from_hex(data))
        return out[0] if len(out) == 1 else out


Abi = Mapping[str, ContractFunction]


def _abi(*fns: ContractFunction) -> Dict[str, ContractFunction]:
    return {fn.name: fn for fn in fns}


CNS_REGISTRY_ABI: Abi = _abi(
    ContractFunction("resolverOf", ("uint256",), ("address",)),
    ContractFunction("ownerOf", ("uint256",), ("address",)),
)

CNS_RESOLVER_ABI: Abi = _abi(
    ContractFunction("get", ("string", "uint256"), ("string",)),
)

ENS_REGISTRY_ABI: Abi = _abi(
    ContractFunction("resolver", ("bytes32",), ("address",)),
    ContractFunction("owner", ("bytes32",), ("address",)),
)

ENS_RESOLVER_ABI: Abi = _abi(
    ContractFunction("addr", ("bytes32",), ("address",)),
    ContractFunction("text", ("bytes32", "string"), ("string",)),
)


__all__ = [
    "Abi",
    "ContractFunction",
    "CNS_REGISTRY_ABI",
    "CNS_RESOLVER_ABI",
    "ENS_REGISTRY_ABI",
    "ENS_RESOLVER_ABI",
]
