"""
ChainFlow — Canonical Error Structures (v1)

Este módulo define o formato serializável com que falhas do pipeline são
registradas no Event Log.

Erros registrados devem ser:

- explícitos
- serializáveis
- rastreáveis

O payload é apenas uma representação: a exceção original continua sendo
propagada ao chamador sem alteração.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    ChainflowException,
    PipelineAborted,
    PipelineConfigurationError,
    PipelineReusedError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChainflowErrorPayload:
    """
    Payload canônico de erro do ChainFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

PIPELINE_STEP_ERROR = "PIPELINE_STEP_ERROR"
PIPELINE_ABORTED = "PIPELINE_ABORTED"
PIPELINE_REUSED = "PIPELINE_REUSED"
PIPELINE_CONFIGURATION_ERROR = "PIPELINE_CONFIGURATION_ERROR"

_CODES = {
    PipelineAborted: PIPELINE_ABORTED,
    PipelineReusedError: PIPELINE_REUSED,
    PipelineConfigurationError: PIPELINE_CONFIGURATION_ERROR,
}


def exception_to_error(exc: BaseException) -> ChainflowErrorPayload:
    """Converte uma exceção em ChainflowErrorPayload (serializável).

    Regras:
    - ChainflowException: já vem com message/details/hint; o código é
      derivado da classe.
    - Outras exceções (falhas de Step): PIPELINE_STEP_ERROR, sem stack trace.
    """
    if isinstance(exc, ChainflowException):
        code = next(
            (c for cls, c in _CODES.items() if isinstance(exc, cls)),
            PIPELINE_STEP_ERROR,
        )
        return ChainflowErrorPayload(
            type=code,
            message=exc.message or "Erro de execução",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return ChainflowErrorPayload(
        type=PIPELINE_STEP_ERROR,
        message=str(exc) or "Erro inesperado durante execução do Step",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique a implementação do Step que falhou",
    )
