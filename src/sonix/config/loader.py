"""
Carregador de configuração (Loader).

Responsável por ler arquivos de configuração (YAML) e aplicar overrides
via variáveis de ambiente, retornando uma instância válida de AppConfig.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sonix.config.models import AppConfig
from sonix.core.exceptions import ConfigurationException, InvalidConfigException


class ConfigLoaderException(ConfigurationException):
    """Erro ao carregar configurações."""
    pass


class ConfigLoader:
    """Carregador de configurações."""

    DEFAULT_FILENAME = "config.yaml"

    @classmethod
    def load(cls, path: Optional[Path | str] = None) -> AppConfig:
        """
        Carrega a configuração completa.

        Ordem de precedência:
        1. Defaults do código
        2. Arquivo YAML
        3. Variáveis de Ambiente (SONIX_*)

        Args:
            path: Caminho opcional para o arquivo config.yaml

        Returns:
            AppConfig: Configuração validada e carregada.

        Raises:
            ConfigLoaderException: Se houver erro de parsing ou IO.
        """
        config_path = Path(path) if path else Path(cls.DEFAULT_FILENAME)

        file_data = cls._read_yaml(config_path)
        merged_data = cls._apply_env_overrides(file_data)

        try:
            return AppConfig.from_dict(merged_data)
        except InvalidConfigException:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigLoaderException(f"Erro ao validar configuração: {e}", cause=e) from e

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """Lê arquivo YAML com segurança."""
        if not path.exists():
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoaderException(f"Erro ao ler arquivo {path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigLoaderException(f"Arquivo {path} deve conter um mapeamento YAML")
        return data

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Aplica overrides via variáveis de ambiente (SONIX_...)."""
        out = {k: (dict(v) if isinstance(v, dict) else v) for k, v in data.items()}

        # Mapeamento: ENV_VAR -> (path.no.dict, type_func)
        overrides = {
            "SONIX_DEBUG": (["debug"], cls._parse_bool),
            "SONIX_ENVIRONMENT": (["environment"], str),
            "SONIX_LOG_LEVEL": (["logging", "nivel_minimo"], str),
            "SONIX_KEYS_FILE": (["accounts", "keys_file"], str),
            "SONIX_REFERRER_CODE": (["accounts", "referrer_code"], str),
            "SONIX_RANDOMNESS_RECOVERY": (["games", "randomness_recovery"], str),
        }

        for env_var, (keys, type_func) in overrides.items():
            val = os.getenv(env_var)
            if val is not None:
                cls._set_nested(out, keys, type_func(val))

        return out

    @staticmethod
    def _set_nested(data: Dict[str, Any], keys: list, value: Any) -> None:
        """Helper para setar valor em dict aninhado."""
        current = data
        for key in keys[:-1]:
            current = current.setdefault(key, {})
        current[keys[-1]] = value

    @staticmethod
    def _parse_bool(val: str) -> bool:
        """Parse seguro de boolean."""
        return val.lower() in ("true", "1", "yes", "on")
