# src/newrelic_batch/model/policies.py
"""
AlertPolicy — política de alerta.

Uma política agrupa condições e é ligada a canais de notificação.
O `id` só existe depois que a política foi criada no serviço remoto;
condições não podem ser resolvidas contra uma política sem id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


INCIDENT_PREFERENCES = ("PER_POLICY", "PER_CONDITION", "PER_CONDITION_AND_TARGET")


@dataclass(frozen=True)
class AlertPolicy:
    name: str
    incident_preference: str = "PER_POLICY"
    id: Optional[int] = None
    channel_ids: Tuple[int, ...] = ()
