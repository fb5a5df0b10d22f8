"""
ChainFlow — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do ChainFlow.

Objetivo:
- Distinguir aborto por cancelamento de falha de Step
- Expressar mau uso na construção/configuração do pipeline
- Facilitar o mapeamento determinístico para ChainflowErrorPayload

Regras:
- Exceções levantadas por Steps NUNCA são encapsuladas por estas classes;
  o pipeline as propaga exatamente como foram levantadas.
- `details` deve carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class ChainflowException(Exception):
    """Base class para exceções internas do ChainFlow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - Não pode ser frozen: ao relançar, o interpretador e `contextlib`
      atribuem `__traceback__` à instância
    - Igualdade e hash são por identidade, como em qualquer exceção
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Execução
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class PipelineAborted(ChainflowException):
    """O sinal de cancelamento estava ativo antes de um Step pendente.

    `value` é o valor que seria entregue ao Step não executado.
    """

    value: Any = None


@dataclass(eq=False)
class PipelineReusedError(ChainflowException):
    """Um pipeline embutido como Step foi invocado mais de uma vez."""


# ---------------------------------------------------------------------------
# Construção / Configuração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class PipelineConfigurationError(ChainflowException):
    """Construção ou configuração inválida do pipeline."""
