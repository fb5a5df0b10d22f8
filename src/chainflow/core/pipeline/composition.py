# src/chainflow/core/pipeline/composition.py
"""
Composição de pipelines: um Pipeline embutido como Step de outro.

`PipelineStep` é o adaptador explícito que implementa o contrato de Step
sobre um Pipeline interno. Embutir um pipeline equivale a emendar os Steps
dele na cadeia externa, naquela posição:

    externo:  a → [interno: x → y] → b
    efeito:   a → x → y → b

Mecânica da emenda:
    - Ao criar o adaptador, um Step de emenda é acrescentado ao final do
      pipeline interno (total + 1)
    - Quando a cadeia interna chega à emenda, ela leva o pipeline interno
      ao terminal de sucesso (o `on_success` interno dispara) e em seguida
      chama a continuação externa com o mesmo valor
    - Sem continuação externa, o efeito é o de executar o pipeline interno
      isoladamente

Invariantes:
    - Callbacks e checagens de cancelamento do pipeline interno continuam
      valendo; cada pipeline observa seu próprio sinal
    - O adaptador executa no máximo uma vez; uma segunda invocação levanta
      `PipelineReusedError` e nunca redispara callbacks internos
    - Steps externos posteriores executam dentro da recursão interna, de
      modo que recursos retidos pelos Steps internos continuam retidos até
      o fim da cadeia externa
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from chainflow.core.exceptions import PipelineConfigurationError, PipelineReusedError

from .pipeline import Pipeline
from .types import Continuation

T = TypeVar("T")


class PipelineStep(Generic[T]):
    """Adaptador que expõe um Pipeline como Step."""

    def __init__(self, pipeline: Pipeline[T]) -> None:
        if pipeline.started:
            raise PipelineConfigurationError(
                message="Pipeline já iniciado não pode ser embutido como Step",
                details={"pipeline": pipeline.name, "cursor": pipeline.cursor},
            )
        self._pipeline = pipeline
        self._outer: Optional[Continuation[T]] = None
        self._invoked = False
        self.step_name = pipeline.name
        pipeline.append(self.splice_into_outer)

    @property
    def pipeline(self) -> Pipeline[T]:
        return self._pipeline

    @property
    def invoked(self) -> bool:
        return self._invoked

    def splice_into_outer(self, value: T, done: Continuation[T]) -> None:
        done(value)
        outer = self._outer
        if outer is not None:
            outer(value)

    def __call__(self, value: T, next: Optional[Continuation[T]] = None) -> None:
        if self._invoked or self._pipeline.started:
            raise PipelineReusedError(
                message="Pipeline embutido já foi executado",
                details={
                    "pipeline": self._pipeline.name,
                    "cursor": self._pipeline.cursor,
                    "total": self._pipeline.total,
                },
                hint="Construa um novo Pipeline para cada execução",
            )

        self._invoked = True
        self._outer = next
        try:
            self._pipeline.run(value)
        finally:
            self._outer = None

    def __repr__(self) -> str:
        return f"PipelineStep(pipeline={self._pipeline!r})"
