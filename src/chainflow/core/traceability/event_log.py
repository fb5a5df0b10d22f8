"""
Event Log estruturado de execução do ChainFlow.

Este módulo define o `EventLog`, o registro ordenado de eventos produzidos
por um ou mais Pipelines durante uma execução. É o mecanismo canônico de
observabilidade do ChainFlow: eventos são dicionários estruturados, nunca
strings livres.

Eventos emitidos pelo Pipeline:
    - step_started        → um Step pendente vai ser executado
    - pipeline_succeeded  → o cursor alcançou o total de Steps
    - pipeline_aborted    → o sinal de cancelamento foi observado
    - pipeline_failed     → um Step levantou exceção (com payload de erro)

Decisões arquiteturais:
    - A ordem do log reflete estritamente a ordem de chamada
    - Timestamps são sempre UTC timezone-aware, em ISO 8601
    - Registrar um evento nunca altera o fluxo de controle do Pipeline

Invariantes:
    - Todo evento contém `run_id`, `event_type` e `ts`
    - Eventos nunca são reordenados ou removidos
    - A estrutura completa é serializável em JSON

Limites explícitos:
    - Não executa Steps
    - Não persiste automaticamente
    - Não é um estado recuperável do Pipeline (não há resume)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from chainflow.core.config.hashing import compute_config_hash


EVENT_STEP_STARTED = "step_started"
EVENT_PIPELINE_SUCCEEDED = "pipeline_succeeded"
EVENT_PIPELINE_ABORTED = "pipeline_aborted"
EVENT_PIPELINE_FAILED = "pipeline_failed"


def _iso(dt: datetime) -> str:
    """Normaliza para UTC (naive é assumido como UTC) e formata em ISO 8601."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


@dataclass
class EventLog:
    """
    Registro ordenado de eventos de uma execução.

    Campos:
        - run_id: identificador da execução, repetido em todos os eventos
        - config_hash: hash da configuração efetiva (opcional)
        - events: lista ordenada de eventos estruturados

    Um mesmo EventLog pode ser compartilhado por Pipelines compostos;
    o campo `pipeline` de cada evento identifica a origem.
    """
    run_id: str
    config_hash: Optional[str] = None
    events: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def for_config(cls, run_id: str, config: Dict[str, Any]) -> "EventLog":
        """Cria um log vazio marcado com o hash da configuração efetiva."""
        return cls(run_id=run_id, config_hash=compute_config_hash(config))

    def add_event(
        self,
        *,
        event_type: str,
        pipeline: Optional[str] = None,
        cursor: Optional[int] = None,
        ts: Optional[datetime] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Acrescenta um evento ao final do log e o retorna.

        Campos opcionais ausentes não aparecem no evento.
        """
        event: Dict[str, Any] = {
            "run_id": self.run_id,
            "event_type": event_type,
            "ts": _iso(ts or datetime.now(timezone.utc)),
        }
        if pipeline is not None:
            event["pipeline"] = pipeline
        if cursor is not None:
            event["cursor"] = cursor
        if payload:
            event["payload"] = dict(payload)

        self.events.append(event)
        return event

    def of_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["event_type"] == event_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "config_hash": self.config_hash,
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EventLog":
        return cls(
            run_id=str(data.get("run_id", "")),
            config_hash=data.get("config_hash"),
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def save_event_log(log: EventLog, path: Path) -> None:
    """
    Persiste o Event Log em JSON (UTF-8, indentado, chaves ordenadas).

    Valores não serializáveis em payloads são convertidos com `str`.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(log.to_dict(), f, ensure_ascii=False, indent=2, sort_keys=True, default=str)


def load_event_log(path: Path) -> EventLog:
    """Restaura um Event Log salvo por `save_event_log`."""
    with Path(path).open("r", encoding="utf-8") as f:
        return EventLog.from_dict(json.load(f))
