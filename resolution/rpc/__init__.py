"""
resolution.rpc
--------------

JSON-RPC transport used by the contract adapters.

    from resolution.rpc import JsonRpcClient
    rpc = JsonRpcClient(url="https://mainnet.infura.io")
"""

from .http import JsonRpcClient

__all__ = ["JsonRpcClient"]
