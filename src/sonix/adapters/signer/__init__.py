from sonix.adapters.signer.eth_signer import EthSigner

__all__ = ["EthSigner"]
