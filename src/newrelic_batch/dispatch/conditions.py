# src/newrelic_batch/dispatch/conditions.py
"""
Despacho de condições de alerta por tipo.

Dado o valor textual de `Condition Type`, seleciona exatamente uma classe
concreta, valida a métrica contra o conjunto permitido dessa classe e
constrói a condição com os termos já montados.

Decisões arquiteturais:
    - Tipo vazio é ValidationError; tipo desconhecido é UnknownDiscriminatorValue
    - Métrica fora do conjunto é ValidationError (nunca um default silencioso)
    - Zero termos após o parse é ValidationError
    - Termo critical é sempre adicionado antes do warning
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Type

from ..core.exceptions import UnknownDiscriminatorValue, ValidationError
from ..model.conditions import (
    AlertCondition,
    AlertConditionType,
    ApmAppAlertCondition,
    ApmExternalServiceAlertCondition,
    ApmJvmAlertCondition,
    ApmKeyTransactionAlertCondition,
    BrowserAlertCondition,
    ExternalServiceAlertCondition,
    ExternalServiceConditionType,
    MobileAlertCondition,
    MobileExternalServiceAlertCondition,
    Priority,
    ServersAlertCondition,
    Term,
)


ALERT_CONDITION_CLASSES: Dict[AlertConditionType, Type[AlertCondition]] = {
    AlertConditionType.APM_APP: ApmAppAlertCondition,
    AlertConditionType.APM_KEY_TRANSACTION: ApmKeyTransactionAlertCondition,
    AlertConditionType.APM_JVM: ApmJvmAlertCondition,
    AlertConditionType.SERVERS: ServersAlertCondition,
    AlertConditionType.BROWSER: BrowserAlertCondition,
    AlertConditionType.MOBILE: MobileAlertCondition,
}

EXTERNAL_SERVICE_CONDITION_CLASSES: Dict[ExternalServiceConditionType, Type[ExternalServiceAlertCondition]] = {
    ExternalServiceConditionType.APM: ApmExternalServiceAlertCondition,
    ExternalServiceConditionType.MOBILE: MobileExternalServiceAlertCondition,
}


# -----------------------------
# Termos
# -----------------------------

def build_terms(
    *,
    critical: Optional[str],
    warning: Optional[str],
    duration: Optional[str],
    operator: Optional[str],
    time_function: Optional[str],
) -> Tuple[Term, ...]:
    terms = []
    for threshold, priority in ((critical, Priority.CRITICAL), (warning, Priority.WARNING)):
        if threshold:
            terms.append(Term(
                threshold=threshold,
                priority=priority,
                duration=duration,
                operator=operator,
                time_function=time_function,
            ))
    return tuple(terms)


def require_terms(terms: Tuple[Term, ...], *, name: str) -> None:
    if not terms:
        raise ValidationError(
            f"alert condition missing thresholds: {name}",
            details={"condition": name},
        )


# -----------------------------
# Seleção de classe
# -----------------------------

def alert_condition_class(condition_type: Optional[str], *, name: str) -> Type[AlertCondition]:
    if not condition_type:
        raise ValidationError(f"alert condition missing type: {name}", details={"condition": name})
    member = AlertConditionType.from_value(condition_type)
    if member is None:
        raise UnknownDiscriminatorValue(
            f"Unknown alert condition type: {condition_type}",
            details={"condition": name, "condition_type": condition_type,
                     "allowed": [m.value for m in AlertConditionType]},
        )
    return ALERT_CONDITION_CLASSES[member]


def external_service_condition_class(
    condition_type: Optional[str], *, name: str
) -> Type[ExternalServiceAlertCondition]:
    if not condition_type:
        raise ValidationError(f"alert condition missing type: {name}", details={"condition": name})
    member = ExternalServiceConditionType.from_value(condition_type)
    if member is None:
        raise UnknownDiscriminatorValue(
            f"Unknown external service alert condition type: {condition_type}",
            details={"condition": name, "condition_type": condition_type,
                     "allowed": [m.value for m in ExternalServiceConditionType]},
        )
    return EXTERNAL_SERVICE_CONDITION_CLASSES[member]


def check_metric(cls, metric: Optional[str], *, condition_type: str) -> str:
    if not cls.metrics.contains(metric):
        raise ValidationError(
            f"invalid metric for {condition_type} alert condition: {metric}",
            details={"condition_type": condition_type, "metric": metric},
        )
    return metric


# -----------------------------
# Construção
# -----------------------------

def build_alert_condition(
    *,
    condition_type: Optional[str],
    name: str,
    metric: Optional[str],
    terms: Tuple[Term, ...],
    **payload,
) -> AlertCondition:
    cls = alert_condition_class(condition_type, name=name)
    check_metric(cls, metric, condition_type=condition_type)
    require_terms(terms, name=name)
    return cls(name=name, metric=metric, terms=terms, **payload)


def build_external_service_condition(
    *,
    condition_type: Optional[str],
    name: str,
    metric: Optional[str],
    terms: Tuple[Term, ...],
    **payload,
) -> ExternalServiceAlertCondition:
    cls = external_service_condition_class(condition_type, name=name)
    check_metric(cls, metric, condition_type=condition_type)
    require_terms(terms, name=name)
    return cls(name=name, metric=metric, terms=terms, **payload)
