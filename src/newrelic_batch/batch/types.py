# src/newrelic_batch/batch/types.py
"""
Tipos canônicos de resultado de batch.

    - StageStatus → estados finais de um estágio (SUCCESS, SKIPPED, FAILED)
    - StageResult → resultado imutável de um estágio
    - BatchResult → resultados por estágio + entidades criadas

Invariantes:
    - Enums possuem valores textuais canônicos
    - Resultados são imutáveis (frozen)
    - Nenhuma lógica de execução vive neste módulo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class StageStatus(str, Enum):
    """
    Estados finais de um estágio de batch.

    - SUCCESS: todas as entidades do estágio foram lidas e criadas
    - SKIPPED: estágio não executado porque um estágio anterior falhou
    - FAILED: erro fatal; `payload["error"]` traz o BatchErrorPayload
    """
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StageResult:
    """Resultado imutável de um estágio (ex.: `channels.slack-channel`, `policies`)."""

    stage_id: str
    status: StageStatus
    summary: str
    metrics: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BatchResult:
    """Resultado agregado de um batch, na ordem de execução dos estágios."""

    stages: Dict[str, StageResult] = field(default_factory=dict)
    created: Dict[str, List[Any]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(s.status == StageStatus.SUCCESS for s in self.stages.values())

    def failed(self) -> List[StageResult]:
        return [s for s in self.stages.values() if s.status == StageStatus.FAILED]
