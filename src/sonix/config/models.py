"""
Modelos de dados de configuração.

Define a estrutura tipada das configurações usando Dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from sonix.config.constants import (
    CHAIN_ID,
    DEFAULT_GAME_ORDER,
    DEFAULTS,
    LEVEL_VALUES,
    MINES_GAME,
    TOKEN_APPROVAL_CONTRACT,
    URLS,
    VALID_ENVIRONMENTS,
    VALID_RECOVERY_POLICIES,
)
from sonix.config.validators import (
    ensure_path_exists,
    validate_choice,
    validate_non_negative_float,
    validate_not_empty,
    validate_positive_int,
    validate_type,
)
from sonix.core.exceptions import InvalidConfigException


@dataclass
class LoggerConfig:
    """Configuração para o sistema de logging."""

    nome: str = "sonix"
    nivel_minimo: str = "INFO"
    arquivo_log: Optional[Path] = None
    sobrescrever_arquivo: bool = False
    mostrar_tempo: bool = True
    mostrar_contexto: bool = True
    usar_cores: bool = True

    def __post_init__(self):
        self.nivel_minimo = self.nivel_minimo.upper()
        validate_choice(self.nivel_minimo, set(LEVEL_VALUES.keys()), "nivel_minimo")
        if self.arquivo_log:
            self.arquivo_log = ensure_path_exists(self.arquivo_log)

    def validate(self):
        """Valida a configuração (compatibilidade com o logger)."""
        self.__post_init__()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LoggerConfig:
        clean_data = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "usar_cores" in clean_data: validate_type(clean_data["usar_cores"], bool, "logging.usar_cores")
        if "nivel_minimo" in clean_data: validate_type(clean_data["nivel_minimo"], str, "logging.nivel_minimo")

        if clean_data.get("arquivo_log"):
            clean_data["arquivo_log"] = Path(clean_data["arquivo_log"])

        return cls(**clean_data)


@dataclass
class AccountsConfig:
    """Origem das contas: arquivos de texto e/ou listas inline."""

    keys_file: str = DEFAULTS["keys_file"]
    smart_addresses_file: str = DEFAULTS["smart_addresses_file"]
    proxies_file: str = DEFAULTS["proxies_file"]
    private_keys: List[str] = field(default_factory=list)
    smart_addresses: List[str] = field(default_factory=list)
    proxies: List[str] = field(default_factory=list)
    referrer_code: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AccountsConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        for key in ("private_keys", "smart_addresses", "proxies"):
            if key in clean: validate_type(clean[key], list, f"accounts.{key}")
        if "referrer_code" in clean: validate_type(clean["referrer_code"], str, "accounts.referrer_code")

        return cls(**clean)


@dataclass
class RelayConfig:
    """Endpoints e contratos usados pelo relay e pela rede."""

    relay_url: str = URLS["relay"]
    points_url: str = URLS["points"]
    airdrop_url: str = URLS["airdrop_trpc"]
    chain_rpc_url: str = URLS["chain_rpc"]
    chain_id: int = CHAIN_ID
    origin: str = URLS["arcade_origin"]
    referer: str = URLS["arcade_referer"]
    arcade_contract: str = ""
    token_approval_contract: str = TOKEN_APPROVAL_CONTRACT

    def __post_init__(self):
        validate_not_empty(self.relay_url, "relay_url")
        validate_positive_int(self.chain_id, "chain_id")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RelayConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}
        if "chain_id" in clean: validate_type(clean["chain_id"], int, "relay.chain_id")
        return cls(**clean)


@dataclass
class TimingConfig:
    """Esperas fixas (em segundos) do fluxo."""

    step_delay: float = 4.0
    game_wait: float = 4.0
    claim_confirmation_wait: float = 4.0
    randomness_cooldown: float = 20.0
    game_retry_backoff: float = 30.0
    cycle_interval: float = 2 * 3600.0
    cycle_retry_delay: float = 60.0

    def __post_init__(self):
        for name in self.__annotations__:
            validate_non_negative_float(getattr(self, name), f"timing.{name}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TimingConfig:
        return cls(**{k: v for k, v in data.items() if k in cls.__annotations__})

    @classmethod
    def instant(cls) -> TimingConfig:
        """Todas as esperas zeradas (testes e execuções de diagnóstico)."""
        return cls(**{name: 0.0 for name in cls.__annotations__})


@dataclass
class RetryConfig:
    """Política de retry com backoff exponencial (usada no registro do token)."""

    max_attempts: int = 5
    base_delay: float = 2.0
    factor: float = 2.0
    max_delay: float = 60.0

    def __post_init__(self):
        validate_positive_int(self.max_attempts, "retry.max_attempts")
        validate_non_negative_float(self.base_delay, "retry.base_delay")
        validate_non_negative_float(self.max_delay, "retry.max_delay")
        if self.factor < 1:
            raise InvalidConfigException("retry.factor deve ser >= 1", details={"value": self.factor})

    def delay_for(self, attempt: int) -> float:
        """Espera antes da próxima tentativa, após a tentativa `attempt` (1-based) falhar."""
        return min(self.base_delay * (self.factor ** (attempt - 1)), self.max_delay)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RetryConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}
        if "max_attempts" in clean: validate_type(clean["max_attempts"], int, "retry.max_attempts")
        return cls(**clean)


@dataclass
class GamesConfig:
    """Tabela de payloads dos jogos e política de jogo."""

    order: List[str] = field(default_factory=lambda: list(DEFAULT_GAME_ORDER))
    payloads: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    randomness_recovery: str = "reiterate"
    register_on_start: bool = False
    max_game_attempts: int = 0

    def __post_init__(self):
        validate_not_empty(self.order, "games.order")
        validate_choice(self.randomness_recovery, VALID_RECOVERY_POLICIES, "games.randomness_recovery")
        validate_positive_int(self.max_game_attempts, "games.max_game_attempts", min_value=0)
        for name, payload in self.payloads.items():
            if not isinstance(payload, dict) or "dest" not in payload or "data" not in payload:
                raise InvalidConfigException(
                    f"Payload do jogo '{name}' deve conter 'dest' e 'data'",
                    details={"game": name}
                )
        if self.payloads and self.missing_payloads():
            raise InvalidConfigException(
                f"Jogos sem payload: {', '.join(self.missing_payloads())}",
                details={"missing": self.missing_payloads()}
            )

    def missing_payloads(self) -> List[str]:
        """Jogos de `order` sem entrada em `payloads`."""
        return [name for name in self.order if name not in self.payloads]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GamesConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "order" in clean: validate_type(clean["order"], list, "games.order")
        if "payloads" in clean: validate_type(clean["payloads"], dict, "games.payloads")
        if "register_on_start" in clean: validate_type(clean["register_on_start"], bool, "games.register_on_start")
        if "max_game_attempts" in clean: validate_type(clean["max_game_attempts"], int, "games.max_game_attempts")

        return cls(**clean)


@dataclass
class TransportConfig:
    """Configuração do cliente HTTP."""

    timeout: float = float(DEFAULTS["timeout_api"])
    verify_proxy_ssl: bool = False
    ua_limit: int = 100

    def __post_init__(self):
        validate_non_negative_float(self.timeout, "transport.timeout")
        validate_positive_int(self.ua_limit, "transport.ua_limit")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TransportConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}
        if "verify_proxy_ssl" in clean: validate_type(clean["verify_proxy_ssl"], bool, "transport.verify_proxy_ssl")
        return cls(**clean)


@dataclass
class SchedulerConfig:
    """Limites do supervisor e dos ciclos (None = sem limite)."""

    max_cycles: Optional[int] = None
    max_restarts: Optional[int] = None
    reset_logs_on_start: bool = True

    def __post_init__(self):
        if self.max_cycles is not None:
            validate_positive_int(self.max_cycles, "scheduler.max_cycles")
        if self.max_restarts is not None:
            validate_positive_int(self.max_restarts, "scheduler.max_restarts", min_value=0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SchedulerConfig:
        return cls(**{k: v for k, v in data.items() if k in cls.__annotations__})


@dataclass
class AppConfig:
    """
    Configuração raiz da aplicação.
    Agrega todas as outras configurações.
    """

    app_name: str = "Sonix"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "prod"
    logs_dir: Optional[Path] = None

    accounts: Optional[AccountsConfig] = None
    relay: Optional[RelayConfig] = None
    timing: Optional[TimingConfig] = None
    retry: Optional[RetryConfig] = None
    games: Optional[GamesConfig] = None
    transport: Optional[TransportConfig] = None
    scheduler: Optional[SchedulerConfig] = None
    logging: Optional[LoggerConfig] = None

    def __post_init__(self):
        validate_choice(self.environment, VALID_ENVIRONMENTS, "environment")

        # Inicialização Lazy segura
        if self.accounts is None: self.accounts = AccountsConfig()
        if self.relay is None: self.relay = RelayConfig()
        if self.timing is None: self.timing = TimingConfig()
        if self.retry is None: self.retry = RetryConfig()
        if self.games is None: self.games = GamesConfig()
        if self.transport is None: self.transport = TransportConfig()
        if self.scheduler is None: self.scheduler = SchedulerConfig()
        if self.logging is None: self.logging = LoggerConfig()

        self.logs_dir = Path(self.logs_dir) if self.logs_dir else Path(DEFAULTS["logs_dir"])

    def validate_games(self) -> None:
        """
        Valida a tabela de jogos antes de iniciar as contas.

        Raises:
            InvalidConfigException: Jogo da ordem sem payload ou mines sem contrato do arcade
        """
        missing = self.games.missing_payloads()
        if missing:
            raise InvalidConfigException(
                f"Jogos sem payload: {', '.join(missing)}", details={"missing": missing}
            )
        if MINES_GAME in self.games.order and not self.relay.arcade_contract:
            raise InvalidConfigException(
                "relay.arcade_contract é obrigatório quando mines está em games.order",
                details={"game": MINES_GAME},
            )

    @property
    def is_dev(self) -> bool:
        return self.environment == "dev"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        sections = {
            "accounts": AccountsConfig,
            "relay": RelayConfig,
            "timing": TimingConfig,
            "retry": RetryConfig,
            "games": GamesConfig,
            "transport": TransportConfig,
            "scheduler": SchedulerConfig,
            "logging": LoggerConfig,
        }
        nested = {}
        for key, model in sections.items():
            section = data.get(key) or {}
            validate_type(section, dict, key)
            nested[key] = model.from_dict(section)

        root_args = {k: v for k, v in data.items() if k in cls.__annotations__ and k not in sections}

        if "debug" in root_args: validate_type(root_args["debug"], bool, "debug")
        if "environment" in root_args: validate_type(root_args["environment"], str, "environment")
        if root_args.get("logs_dir"):
            root_args["logs_dir"] = Path(root_args["logs_dir"])

        return cls(**root_args, **nested)
