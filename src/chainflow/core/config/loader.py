"""
Leitura de arquivos de configuração do ChainFlow.

A configuração efetiva de um engine vem de duas camadas:
    - defaults (obrigatório), versionado junto ao projeto
    - local (opcional), overrides de máquina/desenvolvedor

O formato é decidido pela extensão do arquivo; o parser de cada formato
fica registrado em `_PARSERS`.

Limites explícitos:
    - Não interpreta a seção `engine` (ver `settings.py`)
    - Não procura arquivos em diretórios implícitos
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO, Union

import yaml  # PyYAML

from .errors import (
    ConfigParseError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

PathLike = Union[str, Path]

_PARSERS: Dict[str, Callable[[TextIO], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def read_config_file(path: PathLike) -> Dict[str, Any]:
    """
    Lê um único arquivo de configuração e devolve seu mapeamento raiz.

    Um arquivo vazio equivale a `{}`.

    Raises:
        DefaultsNotFoundError: O arquivo não existe.
        UnsupportedConfigFormatError: Extensão sem parser registrado.
        ConfigParseError: Conteúdo YAML/JSON malformado.
        InvalidConfigRootTypeError: A raiz não é um mapeamento.
    """
    path = Path(path)
    if not path.is_file():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        supported = ", ".join(sorted(_PARSERS))
        raise UnsupportedConfigFormatError(
            f"Formato '{path.suffix}' não suportado em {path.name} (aceitos: {supported})"
        )

    with path.open("r", encoding="utf-8") as fh:
        try:
            content = parser(fh)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigParseError(f"Conteúdo inválido em {path}: {exc}") from exc

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise InvalidConfigRootTypeError(
            f"{path.name}: raiz deve ser um mapeamento, encontrado {type(content).__name__}"
        )
    return content


def load_config(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Resolve a configuração efetiva (defaults + local).

    O arquivo local tem precedência e é ignorado quando não existe.

    Raises:
        DefaultsNotFoundError: Defaults ausente.
        ConfigTypeConflictError: O local muda o tipo de uma chave dos defaults.
        ConfigError: Demais falhas de leitura (ver `read_config_file`).
    """
    config = read_config_file(defaults_path)

    if local_path is None or not Path(local_path).is_file():
        return config
    return deep_merge(config, read_config_file(local_path))
