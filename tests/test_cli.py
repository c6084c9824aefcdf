"""Testes dos comandos de inspeção da CLI."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import yaml
from fakes import PRIVATE_KEY
from typer.testing import CliRunner

from sonix.cli import app


class TestCli(unittest.TestCase):

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.yaml"
        self.runner = CliRunner()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write_config(self, data: dict) -> str:
        self.config_path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return str(self.config_path)

    def test_accounts_list_mascara_segredos(self) -> None:
        path = self.write_config({"accounts": {"private_keys": [PRIVATE_KEY]}, "logging": {"usar_cores": False}})

        result = self.runner.invoke(app, ["accounts", "list", "-c", path])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn(PRIVATE_KEY, result.output)
        self.assertIn(PRIVATE_KEY[:6], result.output)

    def test_config_show_oculta_chaves(self) -> None:
        path = self.write_config({"accounts": {"private_keys": [PRIVATE_KEY]}})

        result = self.runner.invoke(app, ["config", "show", "-c", path])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn(PRIVATE_KEY, result.output)
        self.assertIn("<1 ocultas>", result.output)

    def test_run_rejeita_tabela_de_jogos_vazia(self) -> None:
        path = self.write_config({"accounts": {"private_keys": [PRIVATE_KEY]}})

        result = self.runner.invoke(app, ["run", "--once", "-c", path])

        self.assertEqual(result.exit_code, 2, result.output)
        self.assertIn("Jogos sem payload", result.output)

    def test_configuracao_invalida(self) -> None:
        path = self.write_config({"games": {"randomness_recovery": "pray"}})

        result = self.runner.invoke(app, ["config", "show", "-c", path])

        self.assertEqual(result.exit_code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
