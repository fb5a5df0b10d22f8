"""
Tipos canônicos do pipeline de continuações do ChainFlow.

Este módulo define os contratos de chamada compartilhados por Pipeline,
Steps e callbacks de ciclo de vida, além do slot de callback que torna
explícita a garantia de disparo único.

Componentes principais:
    - Continuation  → `(value) -> None`, avança o pipeline um Step
    - Callback      → `(value) -> None`, hooks de sucesso e abort
    - ErrorCallback → `(value, exc) -> None`, hook de erro
    - SlotState     → estados de um slot de callback
    - CallbackSlot  → callback opcional com disparo no máximo uma vez

Invariantes:
    - Um CallbackSlot dispara seu callback no máximo uma vez
    - Um slot FIRED nunca volta a PENDING
    - Tipos não dependem do Pipeline nem da configuração

Limites explícitos:
    - Não executa Steps
    - Não decide quando um callback deve disparar
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from chainflow.core.exceptions import PipelineConfigurationError

T = TypeVar("T")

Continuation = Callable[[T], None]
Callback = Callable[[T], None]
ErrorCallback = Callable[[T, BaseException], None]


class SlotState(str, Enum):
    """
    Estados de um CallbackSlot.

    - EMPTY: nenhum callback registrado (disparo é no-op)
    - PENDING: callback registrado e ainda não disparado
    - FIRED: callback já disparado; o slot está esgotado
    """
    EMPTY = "empty"
    PENDING = "pending"
    FIRED = "fired"


class CallbackSlot:
    """
    Slot de callback com disparo no máximo uma vez.

    O slot substitui o idioma "chamar e anular a referência" por uma
    máquina de estados explícita e testável. Disparar um slot EMPTY ou
    FIRED não faz nada e retorna False.

    Decisões arquiteturais:
        - O estado passa a FIRED antes da chamada; um callback que
          reentra no pipeline não consegue disparar o próprio slot de novo
        - Exceções levantadas pelo callback propagam ao chamador
    """

    __slots__ = ("name", "_callback", "_state")

    def __init__(self, name: str) -> None:
        self.name = name
        self._callback: Optional[Callable[..., Any]] = None
        self._state = SlotState.EMPTY

    @property
    def state(self) -> SlotState:
        return self._state

    @property
    def fired(self) -> bool:
        return self._state is SlotState.FIRED

    def set(self, callback: Optional[Callable[..., Any]]) -> None:
        """
        Registra (ou substitui) o callback. `None` esvazia o slot.

        Raises:
            PipelineConfigurationError: Se o slot já disparou ou se o
                callback não for chamável.
        """
        if self._state is SlotState.FIRED:
            raise PipelineConfigurationError(
                message=f"Callback '{self.name}' já disparou e não pode ser substituído",
                details={"slot": self.name, "state": self._state.value},
            )
        if callback is not None and not callable(callback):
            raise PipelineConfigurationError(
                message=f"Callback '{self.name}' deve ser chamável",
                details={"slot": self.name, "received": type(callback).__name__},
            )
        self._callback = callback
        self._state = SlotState.EMPTY if callback is None else SlotState.PENDING

    def fire(self, *args: Any) -> bool:
        """Dispara o callback se PENDING. Retorna True quando disparou."""
        if self._state is not SlotState.PENDING:
            return False
        callback = self._callback
        self._callback = None
        self._state = SlotState.FIRED
        callback(*args)
        return True

    def __repr__(self) -> str:
        return f"CallbackSlot(name={self.name!r}, state={self._state.value!r})"
