# src/newrelic_batch/renderers/channels.py
"""Escritor de canais, simétrico ao leitor (mesmo `CHANNEL_FIELDS`)."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..core.context import BatchContext
from ..model.channels import AlertChannel
from ..parsers.channels import CHANNEL_CLASSES, CHANNEL_FIELDS
from ..schema import templates as t
from ..schema.registry import TemplateRegistry
from .base import RecordWriter


class ChannelWriter(RecordWriter[AlertChannel]):

    def __init__(self, kind: str, **kwargs: Any):
        if kind not in CHANNEL_CLASSES:
            raise ValueError(f"not a channel kind: {kind}")
        super().__init__(**kwargs)
        self.kind = kind

    def values(self, entity: AlertChannel) -> Dict[str, Any]:
        out = {t.NAME: entity.name}
        for attr, column, _ in CHANNEL_FIELDS[self.kind]:
            out[column] = getattr(entity, attr)
        return out


def render_channels(
    kind: str,
    channels: Iterable[AlertChannel],
    *,
    registry: Optional[TemplateRegistry] = None,
    ctx: Optional[BatchContext] = None,
) -> List[List[str]]:
    """Renderiza apenas os canais do tipo `kind` (os demais são ignorados)."""
    selected = [c for c in channels if c.kind == kind]
    return ChannelWriter(kind, registry=registry, ctx=ctx).render(selected)
