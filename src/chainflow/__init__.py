# src/chainflow/__init__.py
"""
ChainFlow — engine de continuações encadeadas.

Um Pipeline executa uma sequência ordenada de Steps em que cada Step decide
explicitamente se e como chamar o próximo, compartilhando um único sinal de
cancelamento. Um Pipeline pode ser embutido como Step de outro Pipeline
(composição auto-similar).

Arquitetura em alto nível:
    - core.pipeline     → Step, Pipeline, cancelamento e composição
    - core.config       → configuração (YAML/JSON) e settings do engine
    - core.traceability → Event Log estruturado
    - core.exceptions   → aborto, reuso e erros de configuração

Limites explícitos:
    - Sem execução paralela ou distribuída
    - Sem persistência de estado do pipeline entre processos
"""

from .core.config import AbortPolicy, EngineSettings, load_settings, settings_from_config
from .core.exceptions import (
    ChainflowException,
    PipelineAborted,
    PipelineConfigurationError,
    PipelineReusedError,
)
from .core.pipeline import (
    NEVER_CANCELLED,
    CancellationToken,
    Pipeline,
    PipelineStep,
    Step,
    as_cancellation_signal,
    empty_next,
)
from .core.traceability import EventLog

__version__ = "0.1.0"

__all__ = [
    "AbortPolicy",
    "CancellationToken",
    "ChainflowException",
    "EngineSettings",
    "EventLog",
    "NEVER_CANCELLED",
    "Pipeline",
    "PipelineAborted",
    "PipelineConfigurationError",
    "PipelineReusedError",
    "PipelineStep",
    "Step",
    "as_cancellation_signal",
    "empty_next",
    "load_settings",
    "settings_from_config",
]
