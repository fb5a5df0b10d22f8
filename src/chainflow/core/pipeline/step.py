# src/chainflow/core/pipeline/step.py
"""
Contrato canônico de Step do ChainFlow.

Um Step é a menor unidade executável de um Pipeline de continuações.
Diferente de um estágio de pipeline sequencial comum, o Step recebe, além
do valor corrente, a continuação `next` e decide explicitamente se e
quando avançar a cadeia:

    def increment(value, next):
        next(value + 1)

Responsabilidades de um Step:
    - executar sua lógica sobre o valor recebido
    - chamar `next(novo_valor)` zero ou uma vez
    - sinalizar falha levantando uma exceção

Princípios fundamentais:
    - Chamar `next` zero vezes encerra a cadeia intencionalmente, sem erro
    - Chamar `next` mais de uma vez é comportamento indefinido e
      responsabilidade do Step; o Pipeline não verifica
    - Recursos adquiridos antes de `next` permanecem retidos até que todo
      o restante da cadeia retorne
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - O protocolo não impõe herança; qualquer chamável com a assinatura
      `(value, next)` é um Step válido
    - Não define retry; um Step que deseje repetir sua lógica o faz antes
      de chamar (ou não) a continuação
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from .types import Continuation

T = TypeVar("T")


@runtime_checkable
class Step(Protocol[T]):
    """
    Contrato canônico de um Step do ChainFlow.

    Invariantes:
        - O retorno do Step é ignorado pelo Pipeline
        - Uma exceção levantada pelo Step (ou propagada por `next`) sobe
          inalterada até o chamador externo de `Pipeline.run`
    """

    def __call__(self, value: T, next: Continuation[T]) -> Any:
        """Executa o Step e, opcionalmente, avança a cadeia via `next`."""
        ...


def empty_next(value: Any) -> None:
    """Continuação que não faz nada.

    Útil para exercitar um Step isoladamente, fora de um Pipeline.
    """
    return None
