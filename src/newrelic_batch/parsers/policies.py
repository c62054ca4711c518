# src/newrelic_batch/parsers/policies.py
"""Leitor de políticas de alerta (`alert-policy`)."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.context import BatchContext
from ..model.channels import AlertChannel
from ..model.policies import AlertPolicy
from ..schema import templates as t
from ..schema.instance import SchemaInstance
from ..schema.registry import TemplateRegistry
from ..xref import build_index, resolve_channel_ids
from .base import RecordReader, Row


class AlertPolicyReader(RecordReader[AlertPolicy]):
    """Canais da coluna `Channels` são resolvidos para ids (desconhecidos: warning)."""

    kind = t.ALERT_POLICY

    def prepare(self, channels: Iterable[AlertChannel] = ()) -> Dict[str, Any]:
        return {"channels": build_index(channels)}

    def create(self, instance: SchemaInstance, row: Row, *, channels) -> AlertPolicy:
        names = instance.get_list(t.CHANNELS, row)
        return AlertPolicy(
            name=instance.get_string(t.NAME, row),
            incident_preference=instance.get_string(t.INCIDENT_PREFERENCE, row),
            channel_ids=resolve_channel_ids(names, channels, kind=self.kind, ctx=self.ctx),
        )


def parse_alert_policies(
    headers: Sequence[Any],
    rows: Iterable[Row],
    channels: Iterable[AlertChannel] = (),
    *,
    registry: Optional[TemplateRegistry] = None,
    ctx: Optional[BatchContext] = None,
) -> List[AlertPolicy]:
    return AlertPolicyReader(registry=registry, ctx=ctx).read(headers, rows, channels=channels)
