"""
Assinador baseado em eth-account.

Deriva a carteira a partir de chave privada ou mnemônico e produz
assinaturas EIP-191 e EIP-712.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import ValidationError, to_hex

from sonix.core.domain.account import SecretKind, Wallet, detect_secret_kind
from sonix.core.exceptions import InvalidCredentialException, SessionStageException
from sonix.core.interfaces import Signer

Account.enable_unaudited_hdwallet_features()


class EthSigner(Signer):
    """Implementação de Signer para carteiras EVM."""

    def __init__(self):
        self._account = None
        self._kind: Optional[SecretKind] = None

    def derive_wallet(self, secret: str) -> Wallet:
        kind = detect_secret_kind(secret)
        clean = secret.strip()

        try:
            if kind is SecretKind.PRIVATE_KEY:
                key = clean if clean.lower().startswith("0x") else f"0x{clean}"
                self._account = Account.from_key(key)
            elif kind is SecretKind.MNEMONIC:
                self._account = Account.from_mnemonic(" ".join(clean.lower().split()))
            else:
                raise InvalidCredentialException("Invalid account Secret Phrase or Private Key")
        except InvalidCredentialException:
            raise
        except (ValueError, TypeError, ValidationError) as e:
            # Mnemônico com checksum inválido ou chave fora da curva
            raise InvalidCredentialException(
                "Invalid account Secret Phrase or Private Key", details={"tipo": kind.value}, cause=e
            ) from e

        self._kind = kind
        return Wallet(address=self._account.address, tipo=kind)

    def _require_account(self):
        if self._account is None:
            raise SessionStageException("Carteira ainda não derivada")
        return self._account

    @property
    def address(self) -> str:
        return self._require_account().address

    def sign_message(self, text: str) -> str:
        signed = self._require_account().sign_message(encode_defunct(text=text))
        return to_hex(signed.signature)

    def sign_typed_data(self, domain: Mapping[str, Any], types: Mapping[str, Any],
                        message: Mapping[str, Any]) -> str:
        # O domínio é derivado de `domain`; a entrada EIP712Domain é descartada
        message_types = {k: v for k, v in types.items() if k != "EIP712Domain"}
        signed = self._require_account().sign_typed_data(
            domain_data=dict(domain),
            message_types=message_types,
            message_data=dict(message),
        )
        return to_hex(signed.signature)
