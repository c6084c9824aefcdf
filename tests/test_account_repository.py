"""Testes do repositório de contas em arquivo."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fakes import PRIVATE_KEY, SMART, make_logger

from sonix.adapters.repositories.file_account_repository import FileAccountRepository, read_lines
from sonix.config.models import AccountsConfig
from sonix.core.exceptions import InvalidConfigException

OUTRA_CHAVE = "0x" + "1" * 64


class TestFileAccountRepository(unittest.TestCase):

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name)
        self.logger, self.handler = make_logger()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write(self, name: str, *lines: str) -> None:
        (self.base / name).write_text("\n".join(lines) + "\n", encoding="utf-8")

    def repo(self, **config) -> FileAccountRepository:
        return FileAccountRepository(AccountsConfig(**config), base_dir=self.base, logger=self.logger)

    def test_le_arquivos_ignorando_comentarios(self) -> None:
        self.write("privatekey.txt", "# minhas chaves", PRIVATE_KEY, "", OUTRA_CHAVE)
        self.write("wallet.txt", SMART)

        contas = self.repo().listar()

        self.assertEqual([c.indice for c in contas], [1, 2])
        self.assertEqual(contas[0].segredo, PRIVATE_KEY)
        self.assertEqual(contas[0].smart_address, SMART)
        self.assertIsNone(contas[1].smart_address)
        self.assertIsNone(contas[0].proxy)

    def test_listas_inline_tem_precedencia(self) -> None:
        self.write("privatekey.txt", OUTRA_CHAVE)

        contas = self.repo(private_keys=[PRIVATE_KEY], proxies=["http://p:1"]).listar()

        self.assertEqual(len(contas), 1)
        self.assertEqual(contas[0].segredo, PRIVATE_KEY)
        self.assertEqual(contas[0].proxy, "http://p:1")

    def test_proxies_por_indice(self) -> None:
        self.write("privatekey.txt", PRIVATE_KEY, OUTRA_CHAVE)
        self.write("proxy.txt", "http://a:1", "http://b:2")

        contas = self.repo(proxies_file="proxy.txt").listar()

        self.assertEqual([c.proxy for c in contas], ["http://a:1", "http://b:2"])

    def test_quantidade_de_proxies_incompativel(self) -> None:
        self.write("privatekey.txt", PRIVATE_KEY, OUTRA_CHAVE)

        with self.assertRaises(InvalidConfigException) as ctx:
            self.repo(proxies=["http://a:1"]).listar()
        self.assertIn("number of proxies", str(ctx.exception))

    def test_arquivo_ausente(self) -> None:
        self.assertEqual(self.repo(keys_file="nao_existe.txt").listar(), [])
        self.assertTrue(any("Nenhuma chave" in m for m in self.handler.messages))

    def test_read_lines_arquivo_ausente(self) -> None:
        self.assertEqual(read_lines(self.base / "x.txt"), [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
