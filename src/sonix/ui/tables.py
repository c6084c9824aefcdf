"""
Tabelas Rich exibidas pela CLI.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from rich import box
from rich.markup import escape
from rich.table import Table

from sonix.core.domain.account import Conta
from sonix.core.domain.execution import CicloResult


def _fmt(value) -> str:
    return "-" if value is None else escape(str(value))


def accounts_table(contas: Sequence[Conta]) -> Table:
    table = Table(title="Contas Configuradas", show_header=True, header_style="bold magenta", box=box.ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("Segredo")
    table.add_column("Tipo")
    table.add_column("Smart Address")
    table.add_column("Proxy")

    for conta in contas:
        tipo_style = "green" if conta.is_valid else "red"
        table.add_row(
            str(conta.indice),
            conta.rotulo.split(" ", 1)[1],
            f"[{tipo_style}]{conta.tipo.value}[/{tipo_style}]",
            _fmt(conta.smart_address),
            "sim" if conta.proxy else "não",
        )
    return table


def summary_table(resultados: Dict[str, List[CicloResult]]) -> Table:
    """Resumo por conta do último ciclo executado."""
    table = Table(title="Resumo da Execução", show_header=True, header_style="bold cyan", box=box.ROUNDED)
    table.add_column("Conta")
    table.add_column("Ciclos", justify="right")
    table.add_column("Status")
    table.add_column("Pontos", justify="right")
    table.add_column("Jogos")
    table.add_column("Erro")

    for conta, ciclos in resultados.items():
        if not ciclos:
            table.add_row(conta, "0", "-", "-", "-", "-")
            continue
        ultimo = ciclos[-1]
        status = "[green]OK[/green]" if ultimo.sucesso_geral else "[red]FALHA[/red]"
        jogos = ", ".join(f"{nome}: {escape(msg)}" for nome, msg in ultimo.jogos.items()) or "-"
        table.add_row(
            conta,
            str(len(ciclos)),
            status,
            _fmt(ultimo.pontos_finais),
            jogos,
            _fmt(ultimo.erro_fatal),
        )
    return table
