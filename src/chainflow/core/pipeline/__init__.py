# src/chainflow/core/pipeline/__init__.py
"""
# Pipeline Core — ChainFlow

Este pacote define o **engine de continuações** do ChainFlow: uma cadeia
ordenada de Steps em que cada Step recebe a continuação `next` e decide
explicitamente se e quando avançar.

## Componentes

- **types**
  - `CallbackSlot` / `SlotState`: callbacks com disparo no máximo uma vez
  - `Continuation`, `Callback`, `ErrorCallback`: contratos de chamada

- **step**
  - `Step` (Protocol): `(value, next) -> None`
  - `empty_next`: continuação no-op

- **cancellation**
  - `CancellationToken`, `NEVER_CANCELLED`, `as_cancellation_signal`

- **pipeline**
  - `Pipeline`: cursor, Steps, sinal de cancelamento e callbacks

- **composition**
  - `PipelineStep`: adaptador que embute um Pipeline como Step

## Limites Explícitos

- Execução síncrona, em uma única thread
- Sem retry, sem persistência de estado, sem reordenação de Steps
"""

from .cancellation import (
    NEVER_CANCELLED,
    CancellationSignal,
    CancellationToken,
    as_cancellation_signal,
)
from .composition import PipelineStep
from .pipeline import Pipeline, step_name
from .step import Step, empty_next
from .types import Callback, CallbackSlot, Continuation, ErrorCallback, SlotState

__all__ = [
    "Callback",
    "CallbackSlot",
    "CancellationSignal",
    "CancellationToken",
    "Continuation",
    "ErrorCallback",
    "NEVER_CANCELLED",
    "Pipeline",
    "PipelineStep",
    "SlotState",
    "Step",
    "as_cancellation_signal",
    "empty_next",
    "step_name",
]
