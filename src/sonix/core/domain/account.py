"""
Entidades relacionadas a contas.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sonix.config.constants import MNEMONIC_WORD_COUNTS

_HEX_KEY = re.compile(r"^[0-9a-fA-F]{64}$")
_WORD = re.compile(r"^[a-z]+$")


class SecretKind(str, Enum):
    """Formato do segredo da conta."""

    PRIVATE_KEY = "private_key"
    MNEMONIC = "mnemonic"
    INVALID = "invalid"


def detect_secret_kind(secret: str) -> SecretKind:
    """Identifica se o segredo é uma chave privada (hex) ou uma frase mnemônica."""
    clean = (secret or "").strip()
    if clean.lower().startswith("0x"):
        clean = clean[2:]

    if _HEX_KEY.match(clean):
        return SecretKind.PRIVATE_KEY

    words = clean.split()
    if len(words) in MNEMONIC_WORD_COUNTS and all(_WORD.match(w.lower()) for w in words):
        return SecretKind.MNEMONIC

    return SecretKind.INVALID


def mask_secret(secret: str) -> str:
    """Versão segura do segredo para logs."""
    clean = (secret or "").strip()
    if " " in clean:
        return f"{clean.split()[0]} ... ({len(clean.split())} palavras)"
    if len(clean) <= 10:
        return "***"
    return f"{clean[:6]}...{clean[-4:]}"


@dataclass(frozen=True)
class Conta:
    """Representa uma conta configurada (Imutável)."""

    segredo: str
    indice: int = 1
    smart_address: Optional[str] = None
    proxy: Optional[str] = None

    def __post_init__(self):
        # Hack para permitir atribuição em frozen dataclass
        object.__setattr__(self, "segredo", self.segredo.strip())
        if self.smart_address is not None and not self.smart_address.strip():
            object.__setattr__(self, "smart_address", None)
        if self.proxy is not None and not self.proxy.strip():
            object.__setattr__(self, "proxy", None)

    @property
    def tipo(self) -> SecretKind:
        return detect_secret_kind(self.segredo)

    @property
    def is_valid(self) -> bool:
        return self.tipo is not SecretKind.INVALID

    @property
    def rotulo(self) -> str:
        """Identificador curto usado nos logs."""
        return f"#{self.indice} {mask_secret(self.segredo)}"

    def __repr__(self) -> str:
        return f"Conta(indice={self.indice}, segredo={mask_secret(self.segredo)!r}, smart_address={self.smart_address!r})"


@dataclass(frozen=True)
class Wallet:
    """Carteira derivada do segredo da conta."""

    address: str
    tipo: SecretKind
