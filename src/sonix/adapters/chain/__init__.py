from sonix.adapters.chain.calldata import encode_approve, MAX_UINT256
from sonix.adapters.chain.chain_client import ChainClient

__all__ = ["ChainClient", "encode_approve", "MAX_UINT256"]
