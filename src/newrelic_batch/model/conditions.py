# src/newrelic_batch/model/conditions.py
"""
Condições de alerta — união etiquetada por família e por tipo.

Famílias:
    - AlertCondition (métricas APM/Servers/Browser/Mobile), discriminada por
      `AlertConditionType`
    - ExternalServiceAlertCondition, discriminada por
      `ExternalServiceConditionType`
    - NrqlAlertCondition
    - Condições de infraestrutura (métrica, processo, host sem reporte)

Decisões arquiteturais:
    - Cada variante é uma dataclass congelada que compartilha o envelope
      `BaseCondition` (`name`, `policy_id`, `id`, `enabled`)
    - O tipo concreto carrega, como ClassVar, o seu discriminador e o
      conjunto de métricas permitidas; a escolha do tipo é feita por tabela
      (ver `dispatch.conditions`), nunca por cadeia de isinstance
    - `policy_id` é preenchido via `dataclasses.replace` após a resolução
      da referência cruzada

Invariantes:
    - Uma condição retornada por um leitor sempre tem `policy_id` resolvido
    - Condições com termos têm ao menos um termo (critical antes de warning)
    - A métrica é armazenada exatamente como informada
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Iterable, Optional, Tuple

from ..schema import templates as t


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Priority(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


class AlertConditionType(str, Enum):
    APM_APP = "apm_app_metric"
    APM_KEY_TRANSACTION = "apm_kt_metric"
    APM_JVM = "apm_jvm_metric"
    SERVERS = "servers_metric"
    BROWSER = "browser_metric"
    MOBILE = "mobile_metric"

    @classmethod
    def from_value(cls, value: str) -> Optional["AlertConditionType"]:
        for member in cls:
            if member.value == value:
                return member
        return None


class ExternalServiceConditionType(str, Enum):
    APM = "apm_external_service"
    MOBILE = "mobile_external_service"

    @classmethod
    def from_value(cls, value: str) -> Optional["ExternalServiceConditionType"]:
        for member in cls:
            if member.value == value:
                return member
        return None


# ---------------------------------------------------------------------------
# Métricas permitidas
# ---------------------------------------------------------------------------

def _camel(value: str) -> str:
    return "".join(part.capitalize() for part in value.split("_"))


class MetricSet:
    """Conjunto fechado de métricas: valor da API + rótulo de exibição.

    Ex.: `apdex` é aceito também como `ApdexScore`.
    """

    def __init__(self, values: Iterable[str], labels: Optional[Dict[str, str]] = None):
        self._values: Tuple[str, ...] = tuple(values)
        overrides = labels or {}
        self._labels: Dict[str, str] = {v: overrides.get(v, _camel(v)) for v in self._values}

    @property
    def values(self) -> Tuple[str, ...]:
        return self._values

    def label(self, value: str) -> str:
        return self._labels[value]

    def accepted(self) -> FrozenSet[str]:
        return frozenset(self._values) | frozenset(self._labels.values())

    def contains(self, metric: Optional[str]) -> bool:
        return metric is not None and metric in self.accepted()

    def __contains__(self, metric: object) -> bool:
        return isinstance(metric, str) and self.contains(metric)


_APDEX = {"apdex": "ApdexScore"}

APM_APP_METRICS = MetricSet(
    ["apdex", "error_percentage", "response_time_background", "response_time_web",
     "throughput_background", "throughput_web", "user_defined"],
    labels=_APDEX,
)
APM_KEY_TRANSACTION_METRICS = MetricSet(
    ["apdex", "error_count", "error_percentage", "response_time", "throughput", "user_defined"],
    labels=_APDEX,
)
APM_JVM_METRICS = MetricSet(
    ["cpu_utilization_time", "deadlocked_threads", "gc_cpu_time", "heap_memory_usage"],
)
SERVERS_METRICS = MetricSet(
    ["cpu_percentage", "disk_io_percentage", "fullest_disk_percentage",
     "load_average_one_minute", "memory_percentage", "user_defined"],
)
BROWSER_METRICS = MetricSet(
    ["ajax_response_time", "ajax_throughput", "dom_processing", "end_user_apdex",
     "network", "page_rendering", "page_view_throughput", "page_views_with_js_errors",
     "request_queuing", "total_page_load", "user_defined", "web_application"],
)
MOBILE_METRICS = MetricSet(
    ["database", "images", "json", "mobile_crash_rate", "network",
     "network_error_percentage", "status_error_percentage", "user_defined", "view_loading"],
)
EXTERNAL_SERVICE_METRICS = MetricSet(
    ["response_time_average", "response_time_maximum", "response_time_minimum", "throughput"],
)


# ---------------------------------------------------------------------------
# Termos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Term:
    """Cláusula de limiar (warning ou critical) de uma condição."""

    threshold: str
    priority: Priority
    duration: Optional[str] = None
    operator: Optional[str] = None
    time_function: Optional[str] = None


def term_for(terms: Iterable[Term], priority: Priority) -> Optional[Term]:
    for term in terms:
        if term.priority == priority:
            return term
    return None


# ---------------------------------------------------------------------------
# Envelope comum
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseCondition:
    name: str
    policy_id: Optional[int] = None
    id: Optional[int] = None
    enabled: bool = True

    kind: ClassVar[str] = ""


# ---------------------------------------------------------------------------
# Alert conditions (APM, Servers, Browser, Mobile)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlertCondition(BaseCondition):
    metric: str = ""
    condition_scope: Optional[str] = None
    terms: Tuple[Term, ...] = ()
    violation_close_timer: Optional[int] = 24
    entities: Tuple[int, ...] = ()

    kind: ClassVar[str] = t.ALERT_CONDITION
    condition_type: ClassVar[AlertConditionType]
    metrics: ClassVar[MetricSet]


@dataclass(frozen=True)
class ApmAppAlertCondition(AlertCondition):
    condition_type: ClassVar[AlertConditionType] = AlertConditionType.APM_APP
    metrics: ClassVar[MetricSet] = APM_APP_METRICS


@dataclass(frozen=True)
class ApmKeyTransactionAlertCondition(AlertCondition):
    condition_type: ClassVar[AlertConditionType] = AlertConditionType.APM_KEY_TRANSACTION
    metrics: ClassVar[MetricSet] = APM_KEY_TRANSACTION_METRICS


@dataclass(frozen=True)
class ApmJvmAlertCondition(AlertCondition):
    condition_type: ClassVar[AlertConditionType] = AlertConditionType.APM_JVM
    metrics: ClassVar[MetricSet] = APM_JVM_METRICS


@dataclass(frozen=True)
class ServersAlertCondition(AlertCondition):
    condition_type: ClassVar[AlertConditionType] = AlertConditionType.SERVERS
    metrics: ClassVar[MetricSet] = SERVERS_METRICS


@dataclass(frozen=True)
class BrowserAlertCondition(AlertCondition):
    condition_type: ClassVar[AlertConditionType] = AlertConditionType.BROWSER
    metrics: ClassVar[MetricSet] = BROWSER_METRICS


@dataclass(frozen=True)
class MobileAlertCondition(AlertCondition):
    condition_type: ClassVar[AlertConditionType] = AlertConditionType.MOBILE
    metrics: ClassVar[MetricSet] = MOBILE_METRICS


# ---------------------------------------------------------------------------
# External service conditions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExternalServiceAlertCondition(BaseCondition):
    metric: str = ""
    external_service_url: str = ""
    terms: Tuple[Term, ...] = ()
    entities: Tuple[int, ...] = ()

    kind: ClassVar[str] = t.EXTERNAL_SERVICE_ALERT_CONDITION
    condition_type: ClassVar[ExternalServiceConditionType]
    metrics: ClassVar[MetricSet] = EXTERNAL_SERVICE_METRICS


@dataclass(frozen=True)
class ApmExternalServiceAlertCondition(ExternalServiceAlertCondition):
    condition_type: ClassVar[ExternalServiceConditionType] = ExternalServiceConditionType.APM


@dataclass(frozen=True)
class MobileExternalServiceAlertCondition(ExternalServiceAlertCondition):
    condition_type: ClassVar[ExternalServiceConditionType] = ExternalServiceConditionType.MOBILE


# ---------------------------------------------------------------------------
# NRQL
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NrqlAlertCondition(BaseCondition):
    query: str = ""
    since_value: Optional[str] = None
    value_function: Optional[str] = None
    terms: Tuple[Term, ...] = ()

    kind: ClassVar[str] = t.NRQL_ALERT_CONDITION


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InfraAlertCondition(BaseCondition):
    where_clause: Optional[str] = None


@dataclass(frozen=True)
class InfraMetricAlertCondition(InfraAlertCondition):
    event_type: str = ""
    select_value: str = ""
    comparison: str = ""
    critical_threshold: Optional[int] = None
    warning_threshold: Optional[int] = None
    duration: Optional[int] = None
    time_function: Optional[str] = None

    kind: ClassVar[str] = t.INFRA_METRIC_ALERT_CONDITION


@dataclass(frozen=True)
class InfraProcessRunningAlertCondition(InfraAlertCondition):
    comparison: str = ""
    critical_threshold: Optional[int] = None
    duration: Optional[int] = None
    process_where_clause: Optional[str] = None

    kind: ClassVar[str] = t.INFRA_PROCESS_RUNNING_ALERT_CONDITION


@dataclass(frozen=True)
class InfraHostNotReportingAlertCondition(InfraAlertCondition):
    duration: Optional[int] = None

    kind: ClassVar[str] = t.INFRA_HOST_NOT_REPORTING_ALERT_CONDITION
