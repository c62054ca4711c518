# src/newrelic_batch/model/channels.py
"""
Canais de notificação (variantes por tipo).

Cada variante é uma dataclass congelada que herda o envelope comum
(`name`, `id`, `policy_ids`) e declara o seu payload específico.
O tipo de template associado fica em `kind` (ClassVar).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple

from ..schema import templates as t


class ChannelType(str, Enum):
    EMAIL = "email"
    SLACK = "slack"
    CAMPFIRE = "campfire"
    HIPCHAT = "hipchat"
    OPSGENIE = "opsgenie"
    PAGERDUTY = "pagerduty"
    USER = "user"
    VICTOROPS = "victorops"
    XMATTERS = "xmatters"


@dataclass(frozen=True)
class AlertChannel:
    name: str
    id: Optional[int] = None
    policy_ids: Tuple[int, ...] = ()

    kind: ClassVar[str] = ""
    channel_type: ClassVar[ChannelType]


@dataclass(frozen=True)
class EmailChannel(AlertChannel):
    recipients: str = ""
    include_json_attachment: Optional[bool] = None

    kind: ClassVar[str] = t.EMAIL_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.EMAIL


@dataclass(frozen=True)
class SlackChannel(AlertChannel):
    url: str = ""
    channel: Optional[str] = None

    kind: ClassVar[str] = t.SLACK_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.SLACK


@dataclass(frozen=True)
class CampfireChannel(AlertChannel):
    subdomain: str = ""
    token: str = ""
    room: str = ""

    kind: ClassVar[str] = t.CAMPFIRE_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.CAMPFIRE


@dataclass(frozen=True)
class HipChatChannel(AlertChannel):
    auth_token: str = ""
    room_id: str = ""

    kind: ClassVar[str] = t.HIPCHAT_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.HIPCHAT


@dataclass(frozen=True)
class OpsGenieChannel(AlertChannel):
    api_key: str = ""
    teams: Optional[str] = None
    tags: Optional[str] = None
    recipients: Optional[str] = None

    kind: ClassVar[str] = t.OPSGENIE_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.OPSGENIE


@dataclass(frozen=True)
class PagerDutyChannel(AlertChannel):
    service_key: str = ""

    kind: ClassVar[str] = t.PAGERDUTY_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.PAGERDUTY


@dataclass(frozen=True)
class UserChannel(AlertChannel):
    user_id: Optional[int] = None

    kind: ClassVar[str] = t.USER_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.USER


@dataclass(frozen=True)
class VictorOpsChannel(AlertChannel):
    key: str = ""
    route_key: str = ""

    kind: ClassVar[str] = t.VICTOROPS_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.VICTOROPS


@dataclass(frozen=True)
class XMattersChannel(AlertChannel):
    url: str = ""
    channel: Optional[str] = None

    kind: ClassVar[str] = t.XMATTERS_CHANNEL
    channel_type: ClassVar[ChannelType] = ChannelType.XMATTERS
