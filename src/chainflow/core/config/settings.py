"""
Settings do engine de continuações.

Este módulo interpreta a seção `engine` da configuração resolvida e a
converte em um `EngineSettings` imutável, consumido pelo `Pipeline`.

Chaves reconhecidas (seção `engine`):
    - abort_policy: "raise" | "return"
    - max_chain_length: inteiro positivo ou null (padrão: sem limite)
    - record_step_events: bool

Decisões arquiteturais:
    - Chaves desconhecidas são ignoradas (pertencem a outras camadas)
    - Valores inválidos são erro de configuração do pipeline, não de config

Invariantes:
    - A mesma configuração sempre produz os mesmos settings
    - Settings nunca mudam após construídos
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from chainflow.core.exceptions import PipelineConfigurationError

from .loader import load_config


class AbortPolicy(str, Enum):
    """
    O que `Pipeline.run` faz após disparar o callback de abort.

    - RAISE: levanta `PipelineAborted` (padrão); um pipeline abortado nunca
      é confundido com um pipeline concluído
    - RETURN: retorna `None`, o mesmo formato de um retorno bem-sucedido
    """
    RAISE = "raise"
    RETURN = "return"


# None: nenhum limite de Steps por Pipeline.
DEFAULT_MAX_CHAIN_LENGTH: Optional[int] = None

DEFAULT_ENGINE_CONFIG: Dict[str, Any] = {
    "abort_policy": AbortPolicy.RAISE.value,
    "max_chain_length": DEFAULT_MAX_CHAIN_LENGTH,
    "record_step_events": True,
}


@dataclass(frozen=True)
class EngineSettings:
    """
    Settings efetivos de um Pipeline.

    Campos:
        - abort_policy: comportamento de retorno no caminho de abort
        - max_chain_length: número máximo de Steps (incluindo Steps de
          composição) aceito por um Pipeline; `None` desativa o limite
        - record_step_events: registra `step_started` no Event Log
    """
    abort_policy: AbortPolicy = AbortPolicy.RAISE
    max_chain_length: Optional[int] = DEFAULT_MAX_CHAIN_LENGTH
    record_step_events: bool = True


def settings_from_config(config: Optional[Dict[str, Any]]) -> EngineSettings:
    """
    Constrói `EngineSettings` a partir da configuração resolvida.

    Args:
        config: Configuração efetiva (ex.: retorno de `load_config`).

    Raises:
        PipelineConfigurationError: Se algum valor da seção `engine` for inválido.
    """
    section = (config or {}).get("engine") or {}
    if not isinstance(section, dict):
        raise PipelineConfigurationError(
            message="Seção engine deve ser um mapeamento",
            details={"engine": section, "received": type(section).__name__},
            hint="Declare engine como chaves (abort_policy, max_chain_length, record_step_events)",
        )

    engine_cfg = dict(DEFAULT_ENGINE_CONFIG)
    engine_cfg.update(section)

    raw_policy = engine_cfg.get("abort_policy")
    try:
        policy = AbortPolicy(str(raw_policy).lower())
    except ValueError:
        raise PipelineConfigurationError(
            message="abort_policy inválida",
            details={"abort_policy": raw_policy, "allowed": [p.value for p in AbortPolicy]},
            hint="Use 'raise' ou 'return' em engine.abort_policy",
        ) from None

    max_len = engine_cfg.get("max_chain_length")
    if max_len is not None and (
        isinstance(max_len, bool) or not isinstance(max_len, int) or max_len <= 0
    ):
        raise PipelineConfigurationError(
            message="max_chain_length deve ser um inteiro positivo",
            details={"max_chain_length": max_len},
            hint="Informe um inteiro > 0 ou null para desativar o limite",
        )

    return EngineSettings(
        abort_policy=policy,
        max_chain_length=max_len,
        record_step_events=bool(engine_cfg.get("record_step_events", True)),
    )


def load_settings(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> EngineSettings:
    """Atalho para `settings_from_config(load_config(...))`."""
    return settings_from_config(
        load_config(defaults_path=defaults_path, local_path=local_path)
    )
