"""
Constantes globais do sistema Sonix.

Este módulo centraliza todas as constantes 'hardcoded' do sistema
(endpoints, contratos, payloads fixos e níveis de log).
"""

from typing import Dict, Set, Tuple

# ============================================================================
# Definições de Domínio
# ============================================================================

# Ordem fixa em que os jogos são jogados em cada ciclo
DEFAULT_GAME_ORDER: Tuple[str, ...] = ("plinko", "mines", "singlewheel")

# Único jogo com etapa de claim no contrato do arcade
MINES_GAME = "mines"

# Estratégias de recuperação quando o número aleatório não chega
VALID_RECOVERY_POLICIES: Set[str] = {"reiterate", "refund"}

# Ambientes de execução suportados
VALID_ENVIRONMENTS: Set[str] = {"dev", "staging", "prod"}

# Validade da sessão criada no relay (24h em milissegundos)
SESSION_TTL_MS: int = 24 * 3600 * 1000

# Quantidades de palavras aceitas em uma frase mnemônica
MNEMONIC_WORD_COUNTS: Set[int] = {12, 15, 18, 21, 24}

# ============================================================================
# URLs e Endpoints
# ============================================================================

URLS: Dict[str, str] = {
    "relay": "https://sonic-hub1.joinrebellion.com/rpc",
    "arcade_origin": "https://arcade.soniclabs.com",
    "arcade_referer": "https://arcade.soniclabs.com/",
    "points": "https://arcade.gateway.soniclabs.com/game/points-by-player",
    "airdrop_trpc": "https://airdrop.soniclabs.com/api/trpc",
    "chain_rpc": "https://rpc.testnet.soniclabs.com/",
}

CHAIN_ID: int = 64165

# ============================================================================
# Contratos e payloads fixos
# ============================================================================

TOKEN_APPROVAL_CONTRACT = "0x4Cc7b0ddCD0597496E57C5325cf4c73dBA30cdc9"

SMART_WALLET_FACTORY = "0x5a174Dd1272Ea03A41b24209ed2A3e9ee68f9148"
SMART_WALLET_SELECTOR = "0x5fbfb9cf"

# Chamada "endGame" do mines (reivindicação do prêmio)
MINES_CLAIM_DATA = (
    "0x0d942fd0"
    "0000000000000000000000008bbd8f37a3349d83c85de1f2e32b3fd2fce2468e"
    "0000000000000000000000000000000000000000000000000000000000000002"
    "000000000000000000000000e328a0b1e0be7043c9141c2073e408d1086e1175"
    "00000000000000000000000000000000000000000000000000000000000000a0"
    "00000000000000000000000000000000000000000000000000000000000000e0"
    "0000000000000000000000000000000000000000000000000000000000000007"
    "656e6447616d6500000000000000000000000000000000000000000000000000"
    "0000000000000000000000000000000000000000000000000000000000000000"
)

# ============================================================================
# Mensagens
# ============================================================================

CONNECTION_MESSAGE_TEMPLATE = (
    "I'm joining Sonic Airdrop Dashboard with my wallet, referred by {referrer}, "
    "and I agree to the terms and conditions.\nWallet address:\n{address}\n"
)

# ============================================================================
# Cabeçalhos HTTP
# ============================================================================

DEFAULT_RELAY_HEADERS: Dict[str, str] = {
    "network": "SONIC",
    "pragma": "no-cache",
    "priority": "u=1, i",
}

BROWSER_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
    "Content-Type": "application/json",
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Site": "cross-site",
    "Sec-Fetch-Mode": "cors",
    "Pragma": "no-cache",
}

# ============================================================================
# Logging
# ============================================================================

LEVEL_VALUES: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,  # Nível customizado
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

LEVEL_NAMES: Dict[int, str] = {v: k for k, v in LEVEL_VALUES.items()}

# ============================================================================
# Padrões
# ============================================================================

DEFAULTS = {
    "keys_file": "privatekey.txt",
    "smart_addresses_file": "wallet.txt",
    "proxies_file": "proxy.txt",
    "logs_dir": "logs",
    "log_format_date": "%Y-%m-%d %H:%M:%S",
    "timeout_api": 30,
}
