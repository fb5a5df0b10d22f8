# src/chainflow/core/pipeline/pipeline.py
"""
Pipeline de continuações do ChainFlow.

O Pipeline executa uma sequência ordenada de Steps em que cada Step recebe
a continuação `next` e decide se e quando avançar. A continuação entregue
a todo Step é o próprio `Pipeline.run`: avançar é reentrar em `run`, que
incrementa o cursor e executa o Step seguinte.

Ciclo de `run(value)`:
    0. desfecho de falha ou aborto já registrado → repete o desfecho
    1. incrementa o cursor
    2. cursor == total → terminal de sucesso: dispara `on_success(value)`
    3. sinal cancelado → dispara `on_abort(value)` e aplica a AbortPolicy
    4. caso contrário → executa `steps[cursor](value, self.run)`; se o
       Step levantar, dispara `on_error(value, exc)` e relança

Custo explícito do modelo:
    - A profundidade da pilha nativa é proporcional ao número de Steps
      pendentes; `EngineSettings.max_chain_length` (opcional) limita o
      total de Steps de uma instância
    - Recursos retidos por um Step em volta de `next` só são liberados
      quando todo o restante da cadeia retorna

Invariantes:
    - 0 <= cursor <= total após a primeira chamada de `run`
    - Com cursor == total nenhum Step volta a executar
    - Cada callback de ciclo de vida dispara no máximo uma vez por instância
    - `on_error` só dispara antes do terminal de sucesso, de modo que
      sucesso e erro são desfechos mutuamente exclusivos
    - Falha e aborto são terminais: depois deles `run` não executa Steps
      e `on_success` nunca dispara
    - Exceções de Steps sobem inalteradas; nenhuma é engolida

Limites explícitos:
    - Não é seguro para chamadas concorrentes de `run` na mesma instância
    - Não faz retry nem interrompe Steps bloqueados
    - Não reordena Steps após a construção
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Generic, List, Optional, Tuple, TypeVar

from chainflow.core.config.settings import AbortPolicy, EngineSettings
from chainflow.core.errors import exception_to_error
from chainflow.core.exceptions import PipelineAborted, PipelineConfigurationError
from chainflow.core.traceability.event_log import (
    EVENT_PIPELINE_ABORTED,
    EVENT_PIPELINE_FAILED,
    EVENT_PIPELINE_SUCCEEDED,
    EVENT_STEP_STARTED,
    EventLog,
)

from .cancellation import CancellationSignal, as_cancellation_signal
from .step import Step
from .types import Callback, CallbackSlot, ErrorCallback

if TYPE_CHECKING:
    from .composition import PipelineStep

T = TypeVar("T")


def step_name(step: Any) -> str:
    """Nome legível de um Step para eventos e mensagens de erro."""
    return (
        getattr(step, "step_name", None)
        or getattr(step, "__name__", None)
        or type(step).__name__
    )


class Pipeline(Generic[T]):
    """
    Cadeia de Steps encadeados por continuações.

    Exemplo:
        >>> seen = []
        >>> p = Pipeline(NEVER_CANCELLED, lambda v, n: n(v + 1), lambda v, n: n(v + 1))
        >>> p.with_success_callback(seen.append).run(1)
        >>> seen
        [3]

    Args:
        cancellation: Fonte de cancelamento (ver `as_cancellation_signal`).
        *steps: Steps na ordem de execução.
        settings: Settings do engine; padrão `EngineSettings()`.
        event_log: Event Log opcional para eventos de execução.
        name: Identificador do pipeline nos eventos.

    Raises:
        PipelineConfigurationError: Fonte de cancelamento inválida, Step não
            chamável ou cadeia maior que `settings.max_chain_length`.
    """

    def __init__(
        self,
        cancellation: Any,
        *steps: Step[T],
        settings: Optional[EngineSettings] = None,
        event_log: Optional[EventLog] = None,
        name: str = "pipeline",
    ) -> None:
        self.name = name
        self._cancellation: CancellationSignal = as_cancellation_signal(cancellation)
        self._settings = settings or EngineSettings()
        self._event_log = event_log

        self._steps: List[Step[T]] = []
        self._cursor = -1
        self._failure: Optional[BaseException] = None
        self._abort: Optional[PipelineAborted] = None
        self._as_step: Optional["PipelineStep[T]"] = None

        self._on_success = CallbackSlot("on_success")
        self._on_abort = CallbackSlot("on_abort")
        self._on_error = CallbackSlot("on_error")

        for step in steps:
            self._add(step)

    # -----------------------------
    # Estado
    # -----------------------------
    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def total(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> Tuple[Step[T], ...]:
        return tuple(self._steps)

    @property
    def started(self) -> bool:
        return self._cursor >= 0

    @property
    def completed(self) -> bool:
        """True quando o terminal de sucesso foi alcançado."""
        return self.started and self._cursor >= self.total

    @property
    def failed(self) -> bool:
        return self._failure is not None

    @property
    def aborted(self) -> bool:
        return self._abort is not None

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def cancellation(self) -> CancellationSignal:
        return self._cancellation

    @property
    def callbacks(self) -> Dict[str, CallbackSlot]:
        return {
            "on_success": self._on_success,
            "on_abort": self._on_abort,
            "on_error": self._on_error,
        }

    # -----------------------------
    # Construção
    # -----------------------------
    def _add(self, step: Step[T]) -> None:
        if not callable(step):
            raise PipelineConfigurationError(
                message="Step deve ser chamável com (value, next)",
                details={"pipeline": self.name, "received": type(step).__name__},
            )

        limit = self._settings.max_chain_length
        if limit is not None and len(self._steps) + 1 > limit:
            raise PipelineConfigurationError(
                message="Cadeia excede max_chain_length",
                details={"pipeline": self.name, "max_chain_length": limit},
                hint="Aumente engine.max_chain_length ou divida a cadeia em pipelines menores",
            )

        self._steps.append(step)

    def append(self, step: Step[T]) -> "Pipeline[T]":
        """
        Acrescenta um Step ao final da cadeia.

        Raises:
            PipelineConfigurationError: Se `run` já foi chamado.
        """
        if self.started:
            raise PipelineConfigurationError(
                message="Não é possível acrescentar Steps após o início da execução",
                details={"pipeline": self.name, "cursor": self._cursor},
            )
        self._add(step)
        return self

    def with_success_callback(self, callback: Optional[Callback[T]]) -> "Pipeline[T]":
        self._on_success.set(callback)
        return self

    def with_abort_callback(self, callback: Optional[Callback[T]]) -> "Pipeline[T]":
        self._on_abort.set(callback)
        return self

    def with_error_callback(self, callback: Optional[ErrorCallback[T]]) -> "Pipeline[T]":
        self._on_error.set(callback)
        return self

    def as_step(self) -> "PipelineStep[T]":
        """
        Expõe este pipeline como um único Step de outro pipeline.

        A primeira chamada acrescenta o Step de emenda (total + 1); chamadas
        seguintes retornam o mesmo adaptador.
        """
        if self._as_step is None:
            from .composition import PipelineStep

            self._as_step = PipelineStep(self)
        return self._as_step

    # -----------------------------
    # Execução
    # -----------------------------
    def _record(self, event_type: str, **payload: Any) -> None:
        if self._event_log is None:
            return
        self._event_log.add_event(
            event_type=event_type,
            pipeline=self.name,
            cursor=self._cursor,
            payload=payload,
        )

    def run(self, value: T) -> None:
        """
        Executa o Step sob o cursor (ou o terminal) com `value`.

        É o ponto de entrada externo e também a continuação entregue a cada
        Step.

        Falha e aborto são terminais: chamadas posteriores não executam
        Steps nem disparam callbacks. Após uma falha a mesma exceção é
        relançada; após um aborto a AbortPolicy é aplicada de novo.

        Raises:
            PipelineAborted: Sinal cancelado com `AbortPolicy.RAISE`.
            Exception: A exceção levantada por um Step, inalterada.
        """
        if self._failure is not None:
            raise self._failure
        if self._abort is not None:
            return self._apply_abort_policy()

        previous = self._cursor
        self._cursor = min(previous + 1, self.total)

        if self._cursor >= self.total:
            if previous < self.total:
                self._record(EVENT_PIPELINE_SUCCEEDED, total=self.total)
            self._on_success.fire(value)
            return None

        if self._cancellation.is_cancelled():
            self._abort = PipelineAborted(
                message="Pipeline abortado por cancelamento",
                details={
                    "pipeline": self.name,
                    "cursor": self._cursor,
                    "total": self.total,
                },
                value=value,
            )
            self._record(EVENT_PIPELINE_ABORTED, total=self.total)
            self._on_abort.fire(value)
            return self._apply_abort_policy()

        step = self._steps[self._cursor]
        if self._settings.record_step_events:
            self._record(EVENT_STEP_STARTED, step=step_name(step))

        try:
            step(value, self.run)
        except PipelineAborted as exc:
            # aborto de um pipeline embutido também encerra este
            if self._abort is None and self._cursor < self.total:
                self._abort = exc
            raise
        except Exception as exc:
            # exceções que chegam após o terminal vêm de Steps externos (composição)
            if self._failure is None and self._cursor < self.total:
                self._failure = exc
                self._record(
                    EVENT_PIPELINE_FAILED,
                    step=step_name(step),
                    error=exception_to_error(exc).to_dict(),
                )
                self._on_error.fire(value, exc)
            raise

        return None

    def _apply_abort_policy(self) -> None:
        if self._settings.abort_policy is AbortPolicy.RAISE:
            raise self._abort
        return None

    def __repr__(self) -> str:
        return (
            f"Pipeline(name={self.name!r}, cursor={self._cursor}, total={self.total})"
        )
