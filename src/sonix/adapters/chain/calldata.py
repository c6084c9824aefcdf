"""Codificação de calldata de contratos."""

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address, to_hex

MAX_UINT256 = 2 ** 256 - 1


def encode_approve(spender: str, amount: int = MAX_UINT256) -> str:
    """Calldata de `approve(address,uint256)`."""
    selector = function_signature_to_4byte_selector("approve(address,uint256)")
    args = encode(["address", "uint256"], [to_checksum_address(spender), amount])
    return to_hex(selector + args)
