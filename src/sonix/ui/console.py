"""
Wrapper centralizado para a interface de console (Rich).
"""

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.theme import Theme

# Tema personalizado para o Sonix
sonix_theme = Theme({
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "critical": "bold magenta",
    "success": "bold green",
    "highlight": "magenta",
})

# Singleton do Console
_console = RichConsole(theme=sonix_theme, stderr=True)


def get_console() -> RichConsole:
    """Retorna a instância global do console."""
    return _console


def print_info(message: str) -> None:
    _console.print(f"[info]ℹ[/info] {escape(message)}")


def print_success(message: str) -> None:
    _console.print(f"[success]✔[/success] {escape(message)}")


def print_warning(message: str) -> None:
    _console.print(f"[warning]⚠[/warning] {escape(message)}")


def print_error(message: str) -> None:
    _console.print(f"[error]✖ {escape(message)}[/error]")
