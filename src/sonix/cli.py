"""Ponto de entrada da Interface de Linha de Comando (CLI) do Sonix."""

from __future__ import annotations

import asyncio
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
import yaml
from dependency_injector import providers
from typing_extensions import Annotated

from sonix.adapters.chain.chain_client import ChainClient
from sonix.adapters.repositories.file_account_repository import read_lines
from sonix.config import AppConfig, get_config
from sonix.container import ApplicationContainer
from sonix.core.exceptions import ConfigurationException, SonixBaseException
from sonix.core.services.smart_address_service import SmartAddressService
from sonix.infrastructure.logging import NoopLogResetter, configure_logger
from sonix.ui.console import get_console, print_error, print_info, print_success, print_warning
from sonix.ui.tables import accounts_table, summary_table

# --- Configuração da Aplicação CLI ---
app = typer.Typer(
    name="sonix",
    help="CLI para executar a automação do arcade da Sonic.",
    add_completion=False,
    rich_markup_mode="rich",
)
accounts_app = typer.Typer(name="accounts", help="Listar contas configuradas.")
wallets_app = typer.Typer(name="wallets", help="Utilitários de carteira.")
config_app = typer.Typer(name="config", help="Inspecionar a configuração.")
app.add_typer(accounts_app, no_args_is_help=True)
app.add_typer(wallets_app, no_args_is_help=True)
app.add_typer(config_app, no_args_is_help=True)

# --- Instâncias Globais ---
console = get_console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Caminho do config.yaml."),
]


def _build_container(config_path: Optional[Path]) -> tuple[ApplicationContainer, AppConfig]:
    """Carrega a configuração e cria o container desta execução."""
    try:
        app_config = get_config(reload=True, config_path=str(config_path) if config_path else None)
    except ConfigurationException as e:
        print_error(f"Configuração inválida: {e}")
        raise typer.Exit(code=2)

    configure_logger(app_config.logging)

    container = ApplicationContainer()
    container.config.override(providers.Object(app_config))
    return container, app_config


# --- Comando Principal: run ---
@app.command(help="[bold green]Executa os ciclos de todas as contas. Este é o comando principal.[/bold green]")
def run(
    config_path: ConfigOption = None,
    once: Annotated[
        bool,
        typer.Option("--once", help="Executa um único ciclo por conta e encerra."),
    ] = False,
    keep_logs: Annotated[
        bool,
        typer.Option("--keep-logs", help="Não limpa o diretório de logs na inicialização."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Ativa logs de depuração."),
    ] = False,
) -> None:
    """Executa o agendador com as contas configuradas."""
    container, app_config = _build_container(config_path)
    try:
        app_config.validate_games()
    except ConfigurationException as e:
        print_error(str(e))
        raise typer.Exit(code=2)

    if once:
        app_config.scheduler.max_cycles = 1
    if keep_logs:
        container.log_resetter.override(providers.Object(NoopLogResetter()))

    logger = container.logger()
    if debug or app_config.debug:
        logger.set_level("DEBUG")
        logger.debug("Nível de log ajustado para DEBUG via CLI/Config")

    try:
        contas = container.account_repository().listar()
    except ConfigurationException as e:
        print_error(str(e))
        raise typer.Exit(code=2)

    if not contas:
        print_error("Nenhuma conta encontrada.")
        raise typer.Exit(code=1)

    print_info(f"Iniciando {len(contas)} conta(s)...")
    scheduler = container.scheduler()

    try:
        resultados = asyncio.run(scheduler.run_all(contas))
    except KeyboardInterrupt:
        print_warning("Execução interrompida pelo usuário.")
        raise typer.Exit(code=130)
    except SonixBaseException as e:
        print_error(f"Execução encerrada: {e}")
        raise typer.Exit(code=1)
    finally:
        logger.flush()

    console.print(summary_table(resultados))
    print_success("Execução concluída.")


@accounts_app.command("list", help="Lista as contas configuradas (segredos mascarados).")
def list_accounts(config_path: ConfigOption = None) -> None:
    """Exibe as contas configuradas."""
    container, _ = _build_container(config_path)
    try:
        contas = container.account_repository().listar()
    except ConfigurationException as e:
        print_error(str(e))
        raise typer.Exit(code=2)

    if not contas:
        print_warning("Nenhuma conta encontrada.")
        return
    console.print(accounts_table(contas))


@wallets_app.command("smart-address", help="Resolve o smart address de cada chave configurada.")
def smart_address(
    config_path: ConfigOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Arquivo de saída (padrão: smart_addresses_file da config)."),
    ] = None,
) -> None:
    """Consulta a factory de smart wallets e grava um endereço por linha."""
    container, app_config = _build_container(config_path)

    accounts = app_config.accounts
    secrets = accounts.private_keys or read_lines(Path(accounts.keys_file))
    if not secrets:
        print_error(f"Nenhuma chave encontrada em {accounts.keys_file}.")
        raise typer.Exit(code=1)

    transport = container.transport_factory()
    service = SmartAddressService(
        ChainClient(transport, app_config.relay.chain_rpc_url),
        container.signer_factory.provider,
        logger=container.logger(),
    )
    try:
        resultados = asyncio.run(service.resolve(secrets))
    finally:
        transport.close()

    destino = SmartAddressService.write(resultados, output or Path(accounts.smart_addresses_file))
    erros = sum(1 for r in resultados if not r.smart_address)
    if erros:
        print_warning(f"{erros} carteira(s) com erro.")
    print_success(f"Smart addresses gravados em {destino}")


@config_app.command("show", help="Mostra a configuração efetiva (segredos ocultos).")
def show_config(config_path: ConfigOption = None) -> None:
    """Imprime a configuração carregada em YAML."""
    _, app_config = _build_container(config_path)

    data = asdict(app_config)
    data["accounts"]["private_keys"] = [f"<{len(data['accounts']['private_keys'])} ocultas>"]
    console.print(yaml.safe_dump(_plain(data), sort_keys=False, allow_unicode=True), markup=False, highlight=False)


def _plain(value):
    """Converte Path e tuplas para tipos serializáveis em YAML."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, Path):
        return str(value)
    return value


if __name__ == "__main__":
    app()
