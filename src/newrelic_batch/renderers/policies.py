# src/newrelic_batch/renderers/policies.py
"""Escritor de políticas de alerta; canais ligados viram nomes na coluna `Channels`."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..core.context import BatchContext
from ..model.channels import AlertChannel
from ..model.policies import AlertPolicy
from ..schema import templates as t
from ..schema.registry import TemplateRegistry
from ..xref import channel_names_for
from .base import RecordWriter


class AlertPolicyWriter(RecordWriter[AlertPolicy]):
    kind = t.ALERT_POLICY

    def prepare(self, channels: Iterable[AlertChannel] = ()) -> Dict[str, Any]:
        return {"channels": list(channels)}

    def values(self, entity: AlertPolicy, *, channels) -> Dict[str, Any]:
        return {
            t.NAME: entity.name,
            t.INCIDENT_PREFERENCE: entity.incident_preference,
            t.CHANNELS: ",".join(channel_names_for(entity, channels)),
        }


def render_alert_policies(
    policies: Iterable[AlertPolicy],
    channels: Iterable[AlertChannel] = (),
    *,
    registry: Optional[TemplateRegistry] = None,
    ctx: Optional[BatchContext] = None,
) -> List[List[str]]:
    return AlertPolicyWriter(registry=registry, ctx=ctx).render(policies, channels=channels)
