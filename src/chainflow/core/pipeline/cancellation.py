"""
Sinal de cancelamento compartilhado por uma cadeia de Steps.

O Pipeline consulta o sinal uma vez por invocação de `run`, antes do Step
pendente, sem bloquear. O modelo é cooperativo: um Step em execução nunca
é interrompido, e o cancelamento só impede que Steps ainda não iniciados
comecem.

Componentes:
    - CancellationSignal     → protocolo mínimo (`is_cancelled()`)
    - CancellationToken      → sinal manual, com pai opcional e deadline
    - NEVER_CANCELLED        → sinal que nunca cancela
    - as_cancellation_signal → adapta fontes comuns ao protocolo

Invariantes:
    - Uma vez cancelado, um CancellationToken permanece cancelado
    - Cancelar um token filho nunca cancela o pai
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from chainflow.core.exceptions import PipelineConfigurationError


@runtime_checkable
class CancellationSignal(Protocol):
    """Capacidade injetada: consulta não bloqueante de cancelamento."""

    def is_cancelled(self) -> bool:
        ...


class CancellationToken:
    """
    Sinal de cancelamento manual, thread-safe.

    Um token está cancelado quando:
        - `cancel()` foi chamado nele
        - seu pai (se houver) está cancelado
        - seu deadline (se houver) foi ultrapassado

    `cancel()` pode ser chamado de outra thread enquanto o Pipeline executa;
    o efeito é observado antes do próximo Step.
    """

    def __init__(
        self,
        parent: Optional[CancellationSignal] = None,
        deadline: Optional[float] = None,
    ) -> None:
        self._event = threading.Event()
        self._parent = parent
        self._deadline = deadline

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        parent: Optional[CancellationSignal] = None,
    ) -> "CancellationToken":
        """Token que se cancela sozinho após `seconds` (relógio monotônico)."""
        return cls(parent=parent, deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        if self._parent is not None and self._parent.is_cancelled():
            self._event.set()
            return True
        return False

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled()})"


class _NeverCancelled:
    def is_cancelled(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NEVER_CANCELLED"


NEVER_CANCELLED: CancellationSignal = _NeverCancelled()


class _EventSignal:
    def __init__(self, event: threading.Event) -> None:
        self._event = event

    def is_cancelled(self) -> bool:
        return self._event.is_set()


class _CallableSignal:
    def __init__(self, predicate: Callable[[], Any]) -> None:
        self._predicate = predicate

    def is_cancelled(self) -> bool:
        return bool(self._predicate())


def as_cancellation_signal(source: Any) -> CancellationSignal:
    """
    Adapta uma fonte de cancelamento ao protocolo `CancellationSignal`.

    Fontes aceitas:
        - qualquer objeto com `is_cancelled()`
        - `threading.Event` (cancelado quando `is_set()`)
        - chamável sem argumentos que retorna bool

    Raises:
        PipelineConfigurationError: Para `None` ou qualquer outra fonte.
    """
    if isinstance(source, CancellationSignal):
        return source
    if isinstance(source, threading.Event):
        return _EventSignal(source)
    if source is not None and callable(source):
        return _CallableSignal(source)
    raise PipelineConfigurationError(
        message="Fonte de cancelamento inválida",
        details={"received": type(source).__name__},
        hint="Use NEVER_CANCELLED quando a cadeia não puder ser cancelada",
    )
