"""
Funções de validação reutilizáveis.

Este módulo contém funções puras para validar dados de configuração,
garantindo integridade dos dados antes da utilização.
"""

from typing import Any, Iterable, Optional, Set
from pathlib import Path

from sonix.core.exceptions import InvalidConfigException


def validate_positive_int(value: int, field_name: str, min_value: int = 1) -> None:
    """
    Valida se um número inteiro é maior ou igual a um mínimo.

    Args:
        value: O valor a ser validado.
        field_name: Nome do campo para mensagem de erro.
        min_value: Valor mínimo aceitável (default: 1).

    Raises:
        InvalidConfigException: Se o valor for menor que min_value.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidConfigException(
            f"{field_name} deve ser um número inteiro.",
            details={"value": value, "type": type(value).__name__}
        )

    if value < min_value:
        raise InvalidConfigException(
            f"{field_name} deve ser >= {min_value}",
            details={"value": value, "min_value": min_value}
        )


def validate_non_negative_float(value: float, field_name: str) -> None:
    """Valida se um número (segundos, fatores) não é negativo."""
    if not isinstance(value, (float, int)) or isinstance(value, bool):
        raise InvalidConfigException(
            f"{field_name} deve ser um número.",
            details={"value": value, "type": type(value).__name__}
        )

    if value < 0:
        raise InvalidConfigException(
            f"{field_name} não pode ser negativo",
            details={"value": value}
        )


def validate_not_empty(value: Iterable[Any], field_name: str) -> None:
    """Valida se uma coleção (lista, set, string) não está vazia."""
    if not value:
        raise InvalidConfigException(f"{field_name} não pode estar vazio")


def validate_choice(value: str, valid_choices: Set[str], field_name: str) -> None:
    """
    Valida se um valor único está dentro das opções permitidas.

    Args:
        value: Valor a validar.
        valid_choices: Conjunto de escolhas permitidas.
        field_name: Nome do campo.
    """
    if value not in valid_choices:
        raise InvalidConfigException(
            f"{field_name} inválido: {value}. Use um dos: {', '.join(sorted(valid_choices))}",
            details={"value": value, "valid_choices": sorted(valid_choices)}
        )


def ensure_path_exists(path: Optional[str | Path]) -> Optional[Path]:
    """
    Garante que o diretório pai de um caminho exista.
    Se o caminho for um diretório, cria ele mesmo.

    Args:
        path: Caminho a verificar.

    Returns:
        Path: Objeto Path resolvido ou None se path for None.
    """
    if path is not None:
        resolved = Path(path).expanduser().resolve()
        # Se não tem extensão, assume que é diretório e cria
        if not resolved.suffix:
            resolved.mkdir(parents=True, exist_ok=True)
        else:
            resolved.parent.mkdir(parents=True, exist_ok=True)
        return resolved
    return None


def validate_type(value: Any, expected_type: type, field_name: str) -> None:
    """
    Valida estritamente se o valor corresponde ao tipo esperado.
    Não aceita conversão implícita (ex: "true" para bool).

    Raises:
        InvalidConfigException: Se o tipo estiver incorreto.
    """
    if value is None:
        return

    if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
        raise InvalidConfigException(
            f"{field_name} deve ser do tipo {expected_type.__name__}.",
            details={
                "value": value,
                "expected": expected_type.__name__,
                "got": type(value).__name__
            }
        )
