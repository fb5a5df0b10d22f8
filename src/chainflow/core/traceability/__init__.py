# src/chainflow/core/traceability/__init__.py
"""
Pacote de rastreabilidade do ChainFlow — Event Log v1.

API pública exposta:
    - EventLog        → registro ordenado de eventos estruturados
    - save_event_log  → persistência do Event Log em JSON
    - load_event_log  → restauração do Event Log
    - EVENT_*         → tipos canônicos de evento emitidos pelo Pipeline

Limites explícitos:
    - Não executa pipeline
    - Não decide políticas de execução
"""

from .event_log import (
    EVENT_PIPELINE_ABORTED,
    EVENT_PIPELINE_FAILED,
    EVENT_PIPELINE_SUCCEEDED,
    EVENT_STEP_STARTED,
    EventLog,
    load_event_log,
    save_event_log,
)

__all__ = [
    "EVENT_PIPELINE_ABORTED",
    "EVENT_PIPELINE_FAILED",
    "EVENT_PIPELINE_SUCCEEDED",
    "EVENT_STEP_STARTED",
    "EventLog",
    "load_event_log",
    "save_event_log",
]
