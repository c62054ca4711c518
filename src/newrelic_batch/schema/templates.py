# src/newrelic_batch/schema/templates.py
"""
Catálogo canônico de templates tabulares (v1).

Cada função `*_template()` devolve um SchemaTemplate NOVO (não congelado),
para que cada TemplateRegistry possua suas próprias instâncias.

Convenções:
    - Nomes de coluna são constantes deste módulo e são usados por leitores
      e escritores; cabeçalhos são o texto externo da planilha
    - Colunas opcionais declaram default quando o serviço remoto tem um
    - `Application Filter` é coluna apenas de entrada (não é escrita)
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .column import FieldDefinition
from .template import SchemaTemplate

# ---------------------------------------------------------------------------
# Constantes de tipo (discriminadores)
# ---------------------------------------------------------------------------

ALERT_POLICY = "alert-policy"

EMAIL_CHANNEL = "email-channel"
SLACK_CHANNEL = "slack-channel"
CAMPFIRE_CHANNEL = "campfire-channel"
HIPCHAT_CHANNEL = "hipchat-channel"
OPSGENIE_CHANNEL = "opsgenie-channel"
PAGERDUTY_CHANNEL = "pagerduty-channel"
USER_CHANNEL = "user-channel"
VICTOROPS_CHANNEL = "victorops-channel"
XMATTERS_CHANNEL = "xmatters-channel"

ALERT_CONDITION = "alert-condition"
EXTERNAL_SERVICE_ALERT_CONDITION = "external-service-alert-condition"
NRQL_ALERT_CONDITION = "nrql-alert-condition"
INFRA_METRIC_ALERT_CONDITION = "infra-metric-alert-condition"
INFRA_PROCESS_RUNNING_ALERT_CONDITION = "infra-process-alert-condition"
INFRA_HOST_NOT_REPORTING_ALERT_CONDITION = "infra-host-alert-condition"

# ---------------------------------------------------------------------------
# Nomes de coluna
# ---------------------------------------------------------------------------

NAME = "name"
INCIDENT_PREFERENCE = "incident_preference"
CHANNELS = "channels"

RECIPIENTS = "recipients"
INCLUDE_JSON_ATTACHMENT = "include_json_attachment"
URL = "url"
CHANNEL = "channel"
SUBDOMAIN = "subdomain"
TOKEN = "token"
ROOM = "room"
AUTH_TOKEN = "auth_token"
ROOM_ID = "room_id"
API_KEY = "api_key"
TEAMS = "teams"
TAGS = "tags"
SERVICE_KEY = "service_key"
USER_ID = "user_id"
KEY = "key"
ROUTE_KEY = "route_key"

POLICY_NAME = "policy_name"
CONDITION_TYPE = "condition_type"
CONDITION_SCOPE = "condition_scope"
METRIC = "metric"
OPERATOR = "operator"
WARNING_THRESHOLD = "warning_threshold"
CRITICAL_THRESHOLD = "critical_threshold"
DURATION = "duration"
TIME_FUNCTION = "time_function"
VIOLATION_CLOSE_TIMER = "violation_close_timer"
ENTITY_FILTER = "entity_filter"
ENTITIES = "entities"
EXTERNAL_SERVICE_URL = "external_service_url"
QUERY = "query"
VALUE_FUNCTION = "value_function"
SINCE_VALUE = "since_value"
EVENT_TYPE = "event_type"
SELECT_VALUE = "select_value"
COMPARISON = "comparison"
WHERE_CLAUSE = "where_clause"
PROCESS_WHERE_CLAUSE = "process_where_clause"


def _col(name: str, header: str) -> FieldDefinition:
    return FieldDefinition(name=name, header=header)


def _opt(name: str, header: str, default: Optional[str] = None, *, output: bool = True) -> FieldDefinition:
    return FieldDefinition.optional(name, header, default, output=output)


# ---------------------------------------------------------------------------
# Policies / Channels
# ---------------------------------------------------------------------------

def alert_policy_template() -> SchemaTemplate:
    return SchemaTemplate(ALERT_POLICY, [
        _col(NAME, "Name"),
        _opt(INCIDENT_PREFERENCE, "Incident Preference", "PER_POLICY"),
        _opt(CHANNELS, "Channels"),
    ])


def email_channel_template() -> SchemaTemplate:
    return SchemaTemplate(EMAIL_CHANNEL, [
        _col(NAME, "Name"),
        _col(RECIPIENTS, "Recipients"),
        _opt(INCLUDE_JSON_ATTACHMENT, "Include JSON Attachment", "true"),
    ])


def slack_channel_template() -> SchemaTemplate:
    return SchemaTemplate(SLACK_CHANNEL, [
        _col(NAME, "Name"),
        _col(URL, "URL"),
        _opt(CHANNEL, "Channel"),
    ])


def campfire_channel_template() -> SchemaTemplate:
    return SchemaTemplate(CAMPFIRE_CHANNEL, [
        _col(NAME, "Name"),
        _col(SUBDOMAIN, "Subdomain"),
        _col(TOKEN, "Token"),
        _col(ROOM, "Room"),
    ])


def hipchat_channel_template() -> SchemaTemplate:
    return SchemaTemplate(HIPCHAT_CHANNEL, [
        _col(NAME, "Name"),
        _col(AUTH_TOKEN, "Auth Token"),
        _col(ROOM_ID, "Room ID"),
    ])


def opsgenie_channel_template() -> SchemaTemplate:
    return SchemaTemplate(OPSGENIE_CHANNEL, [
        _col(NAME, "Name"),
        _col(API_KEY, "API Key"),
        _opt(TEAMS, "Teams"),
        _opt(TAGS, "Tags"),
        _opt(RECIPIENTS, "Recipients"),
    ])


def pagerduty_channel_template() -> SchemaTemplate:
    return SchemaTemplate(PAGERDUTY_CHANNEL, [
        _col(NAME, "Name"),
        _col(SERVICE_KEY, "Service Key"),
    ])


def user_channel_template() -> SchemaTemplate:
    return SchemaTemplate(USER_CHANNEL, [
        _col(NAME, "Name"),
        _col(USER_ID, "User ID"),
    ])


def victorops_channel_template() -> SchemaTemplate:
    return SchemaTemplate(VICTOROPS_CHANNEL, [
        _col(NAME, "Name"),
        _col(KEY, "Key"),
        _col(ROUTE_KEY, "Route Key"),
    ])


def xmatters_channel_template() -> SchemaTemplate:
    return SchemaTemplate(XMATTERS_CHANNEL, [
        _col(NAME, "Name"),
        _col(URL, "URL"),
        _opt(CHANNEL, "Channel"),
    ])


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------

def _term_columns() -> List[FieldDefinition]:
    return [
        _col(OPERATOR, "Operator"),
        _opt(WARNING_THRESHOLD, "Warning"),
        _opt(CRITICAL_THRESHOLD, "Critical"),
        _col(DURATION, "Duration"),
        _opt(TIME_FUNCTION, "Time Function", "all"),
    ]


def alert_condition_template() -> SchemaTemplate:
    return SchemaTemplate(ALERT_CONDITION, [
        _col(POLICY_NAME, "Alert Policy"),
        _col(NAME, "Name"),
        _col(CONDITION_TYPE, "Condition Type"),
        _col(CONDITION_SCOPE, "Condition Scope"),
        _col(METRIC, "Metric"),
        *_term_columns(),
        _opt(VIOLATION_CLOSE_TIMER, "Violation Close Timer", "24"),
        _opt(ENTITY_FILTER, "Application Filter", output=False),
        _opt(ENTITIES, "Entities"),
    ])


def external_service_alert_condition_template() -> SchemaTemplate:
    return SchemaTemplate(EXTERNAL_SERVICE_ALERT_CONDITION, [
        _col(POLICY_NAME, "Alert Policy"),
        _col(NAME, "Name"),
        _col(CONDITION_TYPE, "Condition Type"),
        _col(METRIC, "Metric"),
        *_term_columns(),
        _col(EXTERNAL_SERVICE_URL, "External Service URL"),
        _opt(ENTITY_FILTER, "Application Filter", output=False),
        _opt(ENTITIES, "Entities"),
    ])


def nrql_alert_condition_template() -> SchemaTemplate:
    return SchemaTemplate(NRQL_ALERT_CONDITION, [
        _col(POLICY_NAME, "Alert Policy"),
        _col(NAME, "Name"),
        _col(QUERY, "Query"),
        _opt(VALUE_FUNCTION, "Value Function", "single_value"),
        _opt(SINCE_VALUE, "Since Value", "3"),
        *_term_columns(),
    ])


def infra_metric_alert_condition_template() -> SchemaTemplate:
    return SchemaTemplate(INFRA_METRIC_ALERT_CONDITION, [
        _col(POLICY_NAME, "Alert Policy"),
        _col(NAME, "Name"),
        _col(EVENT_TYPE, "Event Type"),
        _col(SELECT_VALUE, "Metric"),
        _col(COMPARISON, "Comparison"),
        _opt(WARNING_THRESHOLD, "Warning"),
        _opt(CRITICAL_THRESHOLD, "Critical"),
        _col(DURATION, "Duration"),
        _opt(TIME_FUNCTION, "Time Function", "all"),
        _opt(WHERE_CLAUSE, "Where Clause"),
    ])


def infra_process_running_alert_condition_template() -> SchemaTemplate:
    return SchemaTemplate(INFRA_PROCESS_RUNNING_ALERT_CONDITION, [
        _col(POLICY_NAME, "Alert Policy"),
        _col(NAME, "Name"),
        _col(COMPARISON, "Comparison"),
        _opt(CRITICAL_THRESHOLD, "Critical"),
        _col(DURATION, "Duration"),
        _opt(PROCESS_WHERE_CLAUSE, "Process Where Clause"),
        _opt(WHERE_CLAUSE, "Where Clause"),
    ])


def infra_host_not_reporting_alert_condition_template() -> SchemaTemplate:
    return SchemaTemplate(INFRA_HOST_NOT_REPORTING_ALERT_CONDITION, [
        _col(POLICY_NAME, "Alert Policy"),
        _col(NAME, "Name"),
        _col(DURATION, "Duration"),
        _opt(WHERE_CLAUSE, "Where Clause"),
    ])


TEMPLATE_FACTORIES: Dict[str, Callable[[], SchemaTemplate]] = {
    ALERT_POLICY: alert_policy_template,
    EMAIL_CHANNEL: email_channel_template,
    SLACK_CHANNEL: slack_channel_template,
    CAMPFIRE_CHANNEL: campfire_channel_template,
    HIPCHAT_CHANNEL: hipchat_channel_template,
    OPSGENIE_CHANNEL: opsgenie_channel_template,
    PAGERDUTY_CHANNEL: pagerduty_channel_template,
    USER_CHANNEL: user_channel_template,
    VICTOROPS_CHANNEL: victorops_channel_template,
    XMATTERS_CHANNEL: xmatters_channel_template,
    ALERT_CONDITION: alert_condition_template,
    EXTERNAL_SERVICE_ALERT_CONDITION: external_service_alert_condition_template,
    NRQL_ALERT_CONDITION: nrql_alert_condition_template,
    INFRA_METRIC_ALERT_CONDITION: infra_metric_alert_condition_template,
    INFRA_PROCESS_RUNNING_ALERT_CONDITION: infra_process_running_alert_condition_template,
    INFRA_HOST_NOT_REPORTING_ALERT_CONDITION: infra_host_not_reporting_alert_condition_template,
}

CHANNEL_KINDS = (
    EMAIL_CHANNEL,
    SLACK_CHANNEL,
    CAMPFIRE_CHANNEL,
    HIPCHAT_CHANNEL,
    OPSGENIE_CHANNEL,
    PAGERDUTY_CHANNEL,
    USER_CHANNEL,
    VICTOROPS_CHANNEL,
    XMATTERS_CHANNEL,
)

CONDITION_KINDS = (
    ALERT_CONDITION,
    EXTERNAL_SERVICE_ALERT_CONDITION,
    NRQL_ALERT_CONDITION,
    INFRA_METRIC_ALERT_CONDITION,
    INFRA_PROCESS_RUNNING_ALERT_CONDITION,
    INFRA_HOST_NOT_REPORTING_ALERT_CONDITION,
)
