"""Registry / resolver ABIs and the contract-call boundary."""

from .abi import (
    CNS_REGISTRY_ABI,
    CNS_RESOLVER_ABI,
    ENS_REGISTRY_ABI,
    ENS_RESOLVER_ABI,
    Abi,
    ContractFunction,
)
from .client import ContractCaller, ContractFactory, RpcContract, rpc_contract_factory

__all__ = [
    "Abi",
    "ContractFunction",
    "CNS_REGISTRY_ABI",
    "CNS_RESOLVER_ABI",
    "ENS_REGISTRY_ABI",
    "ENS_RESOLVER_ABI",
    "ContractCaller",
    "ContractFactory",
    "RpcContract",
    "rpc_contract_factory",
]
