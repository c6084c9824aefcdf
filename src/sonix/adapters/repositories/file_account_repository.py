"""
Implementação de repositório de contas em arquivo.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from sonix.config.models import AccountsConfig
from sonix.core.domain.account import Conta
from sonix.core.exceptions import InvalidConfigException
from sonix.core.interfaces import AccountRepository
from sonix.infrastructure.logging import get_logger


def read_lines(path: Path) -> List[str]:
    """Linhas não vazias do arquivo, ignorando comentários (#)."""
    if not path.exists():
        return []
    lines = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


class FileAccountRepository(AccountRepository):
    """
    Repositório que monta as contas a partir de arquivos de texto
    (uma entrada por linha) e/ou listas inline da configuração.

    A i-ésima chave recebe o i-ésimo smart address e o i-ésimo proxy.
    """

    def __init__(self, config: AccountsConfig, base_dir: Optional[Path | str] = None, logger=None):
        self.config = config
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()
        self.logger = logger or get_logger()

    def _resolve(self, name: str) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.base_dir / path

    def _source(self, inline: List[str], filename: str) -> List[str]:
        if inline:
            return [str(item).strip() for item in inline if str(item).strip()]
        return read_lines(self._resolve(filename))

    def listar(self) -> Sequence[Conta]:
        """Lê as contas configuradas."""
        keys = self._source(self.config.private_keys, self.config.keys_file)
        smart = self._source(self.config.smart_addresses, self.config.smart_addresses_file)
        proxies = self._source(self.config.proxies, self.config.proxies_file)

        if not keys:
            self.logger.aviso(f"Nenhuma chave encontrada em {self._resolve(self.config.keys_file)}")
            return []

        self.validate_proxies(len(keys), len(proxies))

        contas = [
            Conta(
                segredo=key,
                indice=i + 1,
                smart_address=smart[i] if i < len(smart) else None,
                proxy=proxies[i] if i < len(proxies) else None,
            )
            for i, key in enumerate(keys)
        ]
        self.logger.debug(f"Carregadas {len(contas)} contas")
        return contas

    @staticmethod
    def validate_proxies(accounts: int, proxies: int) -> None:
        """A quantidade de proxies deve ser zero ou igual à de contas."""
        if proxies != 0 and proxies != accounts:
            raise InvalidConfigException(
                "The number of proxies must match the number of accounts or be empty.",
                details={"contas": accounts, "proxies": proxies},
            )
