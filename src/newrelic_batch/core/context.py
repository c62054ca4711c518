# src/newrelic_batch/core/context.py
"""
BatchContext — contexto canônico de execução do newrelic-batch.

Este módulo define o **BatchContext**, a estrutura compartilhada passada a
leitores, escritores e à orquestração de batch.

O BatchContext é o **único meio permitido** de:
- registro de logs estruturados (eventos)
- coleta de warnings não fatais por tipo de registro
- acesso à configuração efetiva da execução

Princípios fundamentais:
- Isolamento por execução (cada batch possui seu próprio contexto)
- Nenhum leitor/escritor escreve em stdout ou em logger global
- Eventos são dados: podem ser inspecionados em testes e serializados
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class BatchContext:
    """
    Contexto de execução compartilhado de um batch.

    Campos canônicos:
    - batch_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto
    - config: configuração efetiva (defaults + local deep-merge)
    - warnings: warnings por kind (tipo de template ou estágio)
    - events: log estruturado de eventos
    """

    batch_id: str
    created_at: str
    config: Dict[str, Any] = field(default_factory=dict)

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def new(cls, config: Optional[Dict[str, Any]] = None) -> "BatchContext":
        return cls(
            batch_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc).isoformat(),
            config=dict(config or {}),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, kind: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "batch_id": self.batch_id,
            "kind": kind,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, kind: str, message: str) -> None:
        if kind not in self.warnings:
            self.warnings[kind] = []
        self.warnings[kind].append(message)

    def events_for(self, kind: str, *, level: Optional[str] = None) -> List[Dict[str, Any]]:
        return [
            e for e in self.events
            if e["kind"] == kind and (level is None or e["level"] == level)
        ]
