"""
Deep-merge de configuração em camadas.

Regras, por chave do override:
    - mapeamento sobre mapeamento → mescla recursiva
    - lista → substitui a lista anterior por inteiro
    - mesmo tipo escalar → substitui
    - tipos diferentes → `ConfigTypeConflictError`

Nenhuma das entradas é mutada; o resultado não compartilha objetos
aninhados com elas.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _type_names(a: Any, b: Any) -> Tuple[str, str]:
    return type(a).__name__, type(b).__name__


def _merge_value(path: str, current: Any, incoming: Any) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_mappings(path, current, incoming)
    if isinstance(incoming, list) or type(current) is type(incoming):
        return deepcopy(incoming)

    left, right = _type_names(current, incoming)
    raise ConfigTypeConflictError(f"Conflito de tipo em '{path}': {left} vs {right}")


def _merge_mappings(prefix: str, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = deepcopy(base)
    for key, incoming in override.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if key in result:
            result[key] = _merge_value(path, result[key], incoming)
        else:
            result[key] = deepcopy(incoming)
    return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Devolve um novo dicionário com `override` aplicado sobre `base`.

    Raises:
        ConfigTypeConflictError: Alguma raiz não é dict, ou uma chave muda
            de tipo. A mensagem traz o caminho pontuado da chave
            (ex.: `engine.abort_policy`).
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        left, right = _type_names(base, override)
        raise ConfigTypeConflictError(f"deep_merge requer dois dicts, recebido {left} e {right}")
    return _merge_mappings("", base, override)
