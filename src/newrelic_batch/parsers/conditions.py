# src/newrelic_batch/parsers/conditions.py
"""
Leitores de condições de alerta.

Todas as condições pertencem a uma política: o nome da coluna
`Alert Policy` é resolvido para o id da política imediatamente após a
construção. Política ausente, ou sem id, aborta a leitura inteira.

Famílias polimórficas (alert-condition, external-service) escolhem a
classe concreta por tabela em `dispatch.conditions`; as demais são
monomórficas.

Entidades (`Entities` / `Application Filter`):
    - filtro preenchido → ids das aplicações cujo nome casa com o glob
    - senão, lista explícita de ids separada por vírgula
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.context import BatchContext
from ..core.exceptions import ValidationError
from ..dispatch.conditions import (
    build_alert_condition,
    build_external_service_condition,
    build_terms,
    require_terms,
)
from ..model.conditions import (
    AlertCondition,
    BaseCondition,
    ExternalServiceAlertCondition,
    InfraHostNotReportingAlertCondition,
    InfraMetricAlertCondition,
    InfraProcessRunningAlertCondition,
    NrqlAlertCondition,
    Term,
)
from ..model.entities import Entity
from ..model.policies import AlertPolicy
from ..schema import templates as t
from ..schema.instance import SchemaInstance
from ..schema.registry import TemplateRegistry
from ..xref import CrossReferenceIndex, build_index, resolve_entity_ids, resolve_policy_id
from .base import RecordReader, Row


class ConditionReader(RecordReader[BaseCondition]):
    """Base: resolução de política e montagem de termos."""

    def prepare(
        self,
        policies: Iterable[AlertPolicy] = (),
        applications: Iterable[Entity] = (),
    ) -> Dict[str, Any]:
        return {
            "policies": build_index(policies),
            "applications": build_index(applications),
        }

    def create(self, instance: SchemaInstance, row: Row, *, policies, applications) -> BaseCondition:
        condition = self.build(instance, row, applications=applications)
        policy_id = resolve_policy_id(condition.name, instance.get_string(t.POLICY_NAME, row), policies)
        return replace(condition, policy_id=policy_id)

    def build(self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex) -> BaseCondition:
        raise NotImplementedError

    @staticmethod
    def terms(instance: SchemaInstance, row: Row) -> Tuple[Term, ...]:
        return build_terms(
            critical=instance.get_string(t.CRITICAL_THRESHOLD, row),
            warning=instance.get_string(t.WARNING_THRESHOLD, row),
            duration=instance.get_string(t.DURATION, row),
            operator=instance.get_string(t.OPERATOR, row),
            time_function=instance.get_string(t.TIME_FUNCTION, row),
        )

    @staticmethod
    def entities(instance: SchemaInstance, row: Row, applications: CrossReferenceIndex) -> Tuple[int, ...]:
        return resolve_entity_ids(
            instance.get_string(t.ENTITY_FILTER, row),
            instance.get_string(t.ENTITIES, row),
            applications,
        )


# ---------------------------------------------------------------------------
# alert-condition
# ---------------------------------------------------------------------------

class AlertConditionReader(ConditionReader):
    kind = t.ALERT_CONDITION

    def build(self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex) -> AlertCondition:
        return build_alert_condition(
            condition_type=instance.get_string(t.CONDITION_TYPE, row),
            name=instance.get_string(t.NAME, row),
            metric=instance.get_string(t.METRIC, row),
            terms=self.terms(instance, row),
            condition_scope=instance.get_string(t.CONDITION_SCOPE, row),
            violation_close_timer=instance.get_integer(t.VIOLATION_CLOSE_TIMER, row),
            entities=self.entities(instance, row, applications),
        )


# ---------------------------------------------------------------------------
# external-service-alert-condition
# ---------------------------------------------------------------------------

class ExternalServiceAlertConditionReader(ConditionReader):
    kind = t.EXTERNAL_SERVICE_ALERT_CONDITION

    def build(
        self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex
    ) -> ExternalServiceAlertCondition:
        return build_external_service_condition(
            condition_type=instance.get_string(t.CONDITION_TYPE, row),
            name=instance.get_string(t.NAME, row),
            metric=instance.get_string(t.METRIC, row),
            terms=self.terms(instance, row),
            external_service_url=instance.get_string(t.EXTERNAL_SERVICE_URL, row),
            entities=self.entities(instance, row, applications),
        )


# ---------------------------------------------------------------------------
# nrql-alert-condition
# ---------------------------------------------------------------------------

class NrqlAlertConditionReader(ConditionReader):
    kind = t.NRQL_ALERT_CONDITION

    def build(self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex) -> NrqlAlertCondition:
        name = instance.get_string(t.NAME, row)
        terms = self.terms(instance, row)
        require_terms(terms, name=name)
        return NrqlAlertCondition(
            name=name,
            query=instance.get_string(t.QUERY, row),
            since_value=instance.get_string(t.SINCE_VALUE, row),
            value_function=instance.get_string(t.VALUE_FUNCTION, row),
            terms=terms,
        )


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------

def _require_critical(name: str, critical: Optional[int]) -> None:
    if critical is None:
        raise ValidationError(
            f"Infra alert condition missing critical threshold: {name}",
            details={"condition": name},
        )


class InfraMetricAlertConditionReader(ConditionReader):
    kind = t.INFRA_METRIC_ALERT_CONDITION

    def build(
        self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex
    ) -> InfraMetricAlertCondition:
        name = instance.get_string(t.NAME, row)
        critical = instance.get_integer(t.CRITICAL_THRESHOLD, row)
        _require_critical(name, critical)
        return InfraMetricAlertCondition(
            name=name,
            event_type=instance.get_string(t.EVENT_TYPE, row),
            select_value=instance.get_string(t.SELECT_VALUE, row),
            comparison=instance.get_string(t.COMPARISON, row),
            critical_threshold=critical,
            warning_threshold=instance.get_integer(t.WARNING_THRESHOLD, row),
            duration=instance.get_integer(t.DURATION, row),
            time_function=instance.get_string(t.TIME_FUNCTION, row),
            where_clause=instance.get_string(t.WHERE_CLAUSE, row),
        )


class InfraProcessRunningAlertConditionReader(ConditionReader):
    kind = t.INFRA_PROCESS_RUNNING_ALERT_CONDITION

    def build(
        self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex
    ) -> InfraProcessRunningAlertCondition:
        name = instance.get_string(t.NAME, row)
        critical = instance.get_integer(t.CRITICAL_THRESHOLD, row)
        _require_critical(name, critical)
        return InfraProcessRunningAlertCondition(
            name=name,
            comparison=instance.get_string(t.COMPARISON, row),
            critical_threshold=critical,
            duration=instance.get_integer(t.DURATION, row),
            process_where_clause=instance.get_string(t.PROCESS_WHERE_CLAUSE, row),
            where_clause=instance.get_string(t.WHERE_CLAUSE, row),
        )


class InfraHostNotReportingAlertConditionReader(ConditionReader):
    kind = t.INFRA_HOST_NOT_REPORTING_ALERT_CONDITION

    def build(
        self, instance: SchemaInstance, row: Row, *, applications: CrossReferenceIndex
    ) -> InfraHostNotReportingAlertCondition:
        return InfraHostNotReportingAlertCondition(
            name=instance.get_string(t.NAME, row),
            duration=instance.get_integer(t.DURATION, row),
            where_clause=instance.get_string(t.WHERE_CLAUSE, row),
        )


CONDITION_READERS = {
    cls.kind: cls
    for cls in (
        AlertConditionReader,
        ExternalServiceAlertConditionReader,
        NrqlAlertConditionReader,
        InfraMetricAlertConditionReader,
        InfraProcessRunningAlertConditionReader,
        InfraHostNotReportingAlertConditionReader,
    )
}


# ---------------------------------------------------------------------------
# Funções de conveniência
# ---------------------------------------------------------------------------

def parse_conditions(
    kind: str,
    headers: Sequence[Any],
    rows: Iterable[Row],
    policies: Iterable[AlertPolicy],
    applications: Iterable[Entity] = (),
    *,
    registry: Optional[TemplateRegistry] = None,
    ctx: Optional[BatchContext] = None,
) -> List[BaseCondition]:
    if kind not in CONDITION_READERS:
        raise ValueError(f"not a condition kind: {kind}")
    reader = CONDITION_READERS[kind](registry=registry, ctx=ctx)
    return reader.read(headers, rows, policies=policies, applications=applications)


def parse_alert_conditions(headers, rows, policies, applications=(), *, registry=None, ctx=None):
    return parse_conditions(t.ALERT_CONDITION, headers, rows, policies, applications,
                            registry=registry, ctx=ctx)


def parse_external_service_alert_conditions(headers, rows, policies, applications=(), *, registry=None, ctx=None):
    return parse_conditions(t.EXTERNAL_SERVICE_ALERT_CONDITION, headers, rows, policies, applications,
                            registry=registry, ctx=ctx)


def parse_nrql_alert_conditions(headers, rows, policies, *, registry=None, ctx=None):
    return parse_conditions(t.NRQL_ALERT_CONDITION, headers, rows, policies,
                            registry=registry, ctx=ctx)


def parse_infra_metric_alert_conditions(headers, rows, policies, *, registry=None, ctx=None):
    return parse_conditions(t.INFRA_METRIC_ALERT_CONDITION, headers, rows, policies,
                            registry=registry, ctx=ctx)


def parse_infra_process_running_alert_conditions(headers, rows, policies, *, registry=None, ctx=None):
    return parse_conditions(t.INFRA_PROCESS_RUNNING_ALERT_CONDITION, headers, rows, policies,
                            registry=registry, ctx=ctx)


def parse_infra_host_not_reporting_alert_conditions(headers, rows, policies, *, registry=None, ctx=None):
    return parse_conditions(t.INFRA_HOST_NOT_REPORTING_ALERT_CONDITION, headers, rows, policies,
                            registry=registry, ctx=ctx)
