from sonix.ui.console import get_console, print_error, print_info, print_success, print_warning
from sonix.ui.tables import accounts_table, summary_table

__all__ = [
    "get_console",
    "print_info",
    "print_success",
    "print_warning",
    "print_error",
    "accounts_table",
    "summary_table",
]
