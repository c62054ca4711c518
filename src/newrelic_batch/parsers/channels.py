# src/newrelic_batch/parsers/channels.py
"""
Leitores de canais de notificação.

Cada tipo de canal é monomórfico (um template, uma classe). O mapeamento
coluna → atributo é declarado em `CHANNEL_FIELDS`, usado também pelo
escritor de canais para manter leitura e escrita simétricas.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from ..core.context import BatchContext
from ..model.channels import (
    AlertChannel,
    CampfireChannel,
    EmailChannel,
    HipChatChannel,
    OpsGenieChannel,
    PagerDutyChannel,
    SlackChannel,
    UserChannel,
    VictorOpsChannel,
    XMattersChannel,
)
from ..schema import templates as t
from ..schema.instance import SchemaInstance
from ..schema.registry import TemplateRegistry
from .base import RecordReader, Row

STRING = "string"
INTEGER = "integer"
BOOLEAN = "boolean"

# (atributo da entidade, coluna do template, tipo)
FieldMap = Tuple[Tuple[str, str, str], ...]

CHANNEL_CLASSES: Dict[str, Type[AlertChannel]] = {
    cls.kind: cls
    for cls in (
        EmailChannel,
        SlackChannel,
        CampfireChannel,
        HipChatChannel,
        OpsGenieChannel,
        PagerDutyChannel,
        UserChannel,
        VictorOpsChannel,
        XMattersChannel,
    )
}

CHANNEL_FIELDS: Dict[str, FieldMap] = {
    t.EMAIL_CHANNEL: (
        ("recipients", t.RECIPIENTS, STRING),
        ("include_json_attachment", t.INCLUDE_JSON_ATTACHMENT, BOOLEAN),
    ),
    t.SLACK_CHANNEL: (
        ("url", t.URL, STRING),
        ("channel", t.CHANNEL, STRING),
    ),
    t.CAMPFIRE_CHANNEL: (
        ("subdomain", t.SUBDOMAIN, STRING),
        ("token", t.TOKEN, STRING),
        ("room", t.ROOM, STRING),
    ),
    t.HIPCHAT_CHANNEL: (
        ("auth_token", t.AUTH_TOKEN, STRING),
        ("room_id", t.ROOM_ID, STRING),
    ),
    t.OPSGENIE_CHANNEL: (
        ("api_key", t.API_KEY, STRING),
        ("teams", t.TEAMS, STRING),
        ("tags", t.TAGS, STRING),
        ("recipients", t.RECIPIENTS, STRING),
    ),
    t.PAGERDUTY_CHANNEL: (
        ("service_key", t.SERVICE_KEY, STRING),
    ),
    t.USER_CHANNEL: (
        ("user_id", t.USER_ID, INTEGER),
    ),
    t.VICTOROPS_CHANNEL: (
        ("key", t.KEY, STRING),
        ("route_key", t.ROUTE_KEY, STRING),
    ),
    t.XMATTERS_CHANNEL: (
        ("url", t.URL, STRING),
        ("channel", t.CHANNEL, STRING),
    ),
}


def _read_value(instance: SchemaInstance, column: str, dtype: str, row: Row) -> Any:
    if dtype == INTEGER:
        return instance.get_integer(column, row)
    if dtype == BOOLEAN:
        return instance.get_boolean(column, row)
    return instance.get_string(column, row)


class ChannelReader(RecordReader[AlertChannel]):
    """Leitor genérico parametrizado pelo tipo de canal."""

    def __init__(self, kind: str, **kwargs: Any):
        if kind not in CHANNEL_CLASSES:
            raise ValueError(f"not a channel kind: {kind}")
        super().__init__(**kwargs)
        self.kind = kind

    def create(self, instance: SchemaInstance, row: Row) -> AlertChannel:
        payload = {
            attr: _read_value(instance, column, dtype, row)
            for attr, column, dtype in CHANNEL_FIELDS[self.kind]
        }
        return CHANNEL_CLASSES[self.kind](name=instance.get_string(t.NAME, row), **payload)


CHANNEL_READERS = tuple(CHANNEL_CLASSES)


def parse_channels(
    kind: str,
    headers: Sequence[Any],
    rows: Iterable[Row],
    *,
    registry: Optional[TemplateRegistry] = None,
    ctx: Optional[BatchContext] = None,
) -> List[AlertChannel]:
    return ChannelReader(kind, registry=registry, ctx=ctx).read(headers, rows)
