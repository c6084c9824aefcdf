"""
Sonix: automação do arcade da Sonic Testnet.

Sessão, permit e jogos repetidos por conta, com acompanhamento de pontos.
"""

__version__ = "1.0.0"

from sonix.config import AppConfig, get_config
from sonix.core.exceptions import SonixBaseException

__all__ = ["__version__", "AppConfig", "get_config", "SonixBaseException"]
