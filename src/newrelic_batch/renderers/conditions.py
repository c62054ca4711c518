# src/newrelic_batch/renderers/conditions.py
"""
Escritores de condições de alerta.

O id de política de cada condição é re-resolvido para o nome da política
(coluna `Alert Policy`). Política sem id, ou id desconhecido, é erro fatal.

As colunas específicas de cada família são produzidas por funções
registradas em `CONDITION_VALUES`, indexadas pelo tipo de template.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from ..core.context import BatchContext
from ..model.conditions import (
    AlertCondition,
    BaseCondition,
    ExternalServiceAlertCondition,
    InfraHostNotReportingAlertCondition,
    InfraMetricAlertCondition,
    InfraProcessRunningAlertCondition,
    NrqlAlertCondition,
    Priority,
    term_for,
)
from ..model.policies import AlertPolicy
from ..schema import templates as t
from ..schema.registry import TemplateRegistry
from ..xref import build_index, resolve_policy_name
from .base import RecordWriter


def _term_values(terms) -> Dict[str, Any]:
    critical = term_for(terms, Priority.CRITICAL)
    warning = term_for(terms, Priority.WARNING)
    first = critical or warning
    return {
        t.OPERATOR: first.operator if first else None,
        t.WARNING_THRESHOLD: warning.threshold if warning else None,
        t.CRITICAL_THRESHOLD: critical.threshold if critical else None,
        t.DURATION: first.duration if first else None,
        t.TIME_FUNCTION: first.time_function if first else None,
    }


def _entities(ids) -> str:
    return ",".join(str(i) for i in ids or ())


def _alert_values(c: AlertCondition) -> Dict[str, Any]:
    return {
        t.CONDITION_TYPE: c.condition_type.value,
        t.CONDITION_SCOPE: c.condition_scope,
        t.METRIC: c.metric,
        **_term_values(c.terms),
        t.VIOLATION_CLOSE_TIMER: c.violation_close_timer,
        t.ENTITIES: _entities(c.entities),
    }


def _external_service_values(c: ExternalServiceAlertCondition) -> Dict[str, Any]:
    return {
        t.CONDITION_TYPE: c.condition_type.value,
        t.METRIC: c.metric,
        **_term_values(c.terms),
        t.EXTERNAL_SERVICE_URL: c.external_service_url,
        t.ENTITIES: _entities(c.entities),
    }


def _nrql_values(c: NrqlAlertCondition) -> Dict[str, Any]:
    return {
        t.QUERY: c.query,
        t.VALUE_FUNCTION: c.value_function,
        t.SINCE_VALUE: c.since_value,
        **_term_values(c.terms),
    }


def _infra_metric_values(c: InfraMetricAlertCondition) -> Dict[str, Any]:
    return {
        t.EVENT_TYPE: c.event_type,
        t.SELECT_VALUE: c.select_value,
        t.COMPARISON: c.comparison,
        t.WARNING_THRESHOLD: c.warning_threshold,
        t.CRITICAL_THRESHOLD: c.critical_threshold,
        t.DURATION: c.duration,
        t.TIME_FUNCTION: c.time_function,
        t.WHERE_CLAUSE: c.where_clause,
    }


def _infra_process_values(c: InfraProcessRunningAlertCondition) -> Dict[str, Any]:
    return {
        t.COMPARISON: c.comparison,
        t.CRITICAL_THRESHOLD: c.critical_threshold,
        t.DURATION: c.duration,
        t.PROCESS_WHERE_CLAUSE: c.process_where_clause,
        t.WHERE_CLAUSE: c.where_clause,
    }


def _infra_host_values(c: InfraHostNotReportingAlertCondition) -> Dict[str, Any]:
    return {
        t.DURATION: c.duration,
        t.WHERE_CLAUSE: c.where_clause,
    }


CONDITION_VALUES: Dict[str, Callable[[Any], Dict[str, Any]]] = {
    t.ALERT_CONDITION: _alert_values,
    t.EXTERNAL_SERVICE_ALERT_CONDITION: _external_service_values,
    t.NRQL_ALERT_CONDITION: _nrql_values,
    t.INFRA_METRIC_ALERT_CONDITION: _infra_metric_values,
    t.INFRA_PROCESS_RUNNING_ALERT_CONDITION: _infra_process_values,
    t.INFRA_HOST_NOT_REPORTING_ALERT_CONDITION: _infra_host_values,
}

CONDITION_WRITERS = tuple(CONDITION_VALUES)


class ConditionWriter(RecordWriter[BaseCondition]):

    def __init__(self, kind: str, **kwargs: Any):
        if kind not in CONDITION_VALUES:
            raise ValueError(f"not a condition kind: {kind}")
        super().__init__(**kwargs)
        self.kind = kind

    def prepare(self, policies: Iterable[AlertPolicy] = ()) -> Dict[str, Any]:
        return {"policies": build_index(policies)}

    def values(self, entity: BaseCondition, *, policies) -> Dict[str, Any]:
        if entity.kind != self.kind:
            raise ValueError(f"{type(entity).__name__} is not a {self.kind}")
        return {
            t.POLICY_NAME: resolve_policy_name(entity.name, entity.policy_id, policies),
            t.NAME: entity.name,
            **CONDITION_VALUES[self.kind](entity),
        }


def render_conditions(
    kind: str,
    conditions: Iterable[BaseCondition],
    policies: Iterable[AlertPolicy],
    *,
    registry: Optional[TemplateRegistry] = None,
    ctx: Optional[BatchContext] = None,
) -> List[List[str]]:
    """Renderiza as condições do tipo `kind` (as demais são ignoradas)."""
    selected = [c for c in conditions if c.kind == kind]
    return ConditionWriter(kind, registry=registry, ctx=ctx).render(selected, policies=policies)
