# tests/core/parsers/test_alert_condition_reader.py
"""
Testes do leitor de condições de alerta (alert-condition).

Cenário de referência:
    uma linha `apm_app_metric` / `ApdexScore` com warning 0.8 e critical
    0.5, referenciando a política "MyPolicy" (id 100), deve produzir uma
    ApmAppAlertCondition com dois termos e policy_id 100.

Os testes asseguram também que:
- linhas de outros tipos são ignoradas (com warning), nunca fatais
- tipo de condição desconhecido numa linha do tipo certo é fatal
- colunas obrigatórias ausentes abortam a leitura inteira
"""

import pytest

from newrelic_batch.core.errors import RECORD_TYPE_MISMATCH
from newrelic_batch.core.exceptions import (
    CrossReferenceError,
    SchemaError,
    UnknownDiscriminatorValue,
    ValidationError,
)
from newrelic_batch.model.conditions import ApmAppAlertCondition, Priority, term_for
from newrelic_batch.model.policies import AlertPolicy
from newrelic_batch.parsers import parse_alert_conditions


def test_concrete_scenario(scenario_headers, scenario_rows, policies, ctx):
    """
    Verifica o cenário de referência de ponta a ponta.

    Invariantes:
        - exatamente uma condição, do tipo ApmAppAlertCondition
        - policy_id resolvido a partir do nome da política
        - métrica preservada como informada (rótulo de exibição)
        - dois termos: warning "0.8" e critical "0.5"
        - `Violation Close Timer` vazio cai no default (24)
    """
    conditions = parse_alert_conditions(scenario_headers, scenario_rows, policies, ctx=ctx)

    assert len(conditions) == 1
    condition = conditions[0]
    assert isinstance(condition, ApmAppAlertCondition)
    assert condition.name == "HighCPU"
    assert condition.policy_id == 100
    assert condition.metric == "ApdexScore"
    assert condition.condition_scope == "application"
    assert condition.violation_close_timer == 24
    assert condition.entities == ()

    assert len(condition.terms) == 2
    assert term_for(condition.terms, Priority.WARNING).threshold == "0.8"
    assert term_for(condition.terms, Priority.CRITICAL).threshold == "0.5"
    critical = term_for(condition.terms, Priority.CRITICAL)
    assert critical.operator == "below"
    assert critical.duration == "5"
    assert critical.time_function == "all"


def test_reading_logs_progress(scenario_headers, scenario_rows, policies, ctx):
    parse_alert_conditions(scenario_headers, scenario_rows, policies, ctx=ctx)
    messages = [e["message"] for e in ctx.events_for("alert-condition", level="info")]
    assert messages[0] == "Processing alert-condition file: headers=13 lines=1"
    assert messages[-1] == "Read 1 alert-condition records"


def test_rows_of_other_types_are_skipped(scenario_headers, scenario_rows, policies, ctx):
    rows = scenario_rows + [
        ["MyPolicy", "Ignored", "nrql-alert-condition", "", "", "", "", "", "", "", "", "", ""],
    ]
    conditions = parse_alert_conditions(scenario_headers, rows, policies, ctx=ctx)

    assert [c.name for c in conditions] == ["HighCPU"]
    assert ctx.warnings["alert-condition"] == [
        "found illegal line in alert-condition file: nrql-alert-condition",
    ]
    warning = ctx.events_for("alert-condition", level="warning")[0]
    assert warning["error"]["type"] == RECORD_TYPE_MISMATCH
    assert warning["error"]["details"]["row_index"] == 1


def test_unknown_condition_type_is_fatal(scenario_headers, scenario_rows, policies, ctx):
    row = list(scenario_rows[0])
    row[3] = "apm_magic_metric"
    with pytest.raises(UnknownDiscriminatorValue):
        parse_alert_conditions(scenario_headers, [row], policies, ctx=ctx)


def test_missing_mandatory_column(scenario_headers, scenario_rows, policies):
    headers = [h for h in scenario_headers if h != "Metric"]
    rows = [[v for h, v in zip(scenario_headers, scenario_rows[0]) if h != "Metric"]]
    with pytest.raises(SchemaError, match="missing mandatory column: metric"):
        parse_alert_conditions(headers, rows, policies)


def test_only_warning_is_enough(scenario_headers, scenario_rows, policies):
    row = list(scenario_rows[0])
    row[8] = ""  # Critical
    condition = parse_alert_conditions(scenario_headers, [row], policies)[0]
    assert [term.priority for term in condition.terms] == [Priority.WARNING]


def test_no_thresholds_fails(scenario_headers, scenario_rows, policies):
    row = list(scenario_rows[0])
    row[7] = ""
    row[8] = ""
    with pytest.raises(ValidationError, match="missing thresholds"):
        parse_alert_conditions(scenario_headers, [row], policies)


def test_unknown_policy_fails(scenario_headers, scenario_rows):
    with pytest.raises(CrossReferenceError, match="unable to find policy"):
        parse_alert_conditions(scenario_headers, scenario_rows, [AlertPolicy(name="Other", id=1)])


@pytest.mark.parametrize("policy_id", [None, 0])
def test_policy_without_id_fails(scenario_headers, scenario_rows, policy_id):
    with pytest.raises(CrossReferenceError, match="missing policy_id"):
        parse_alert_conditions(scenario_headers, scenario_rows, [AlertPolicy(name="MyPolicy", id=policy_id)])


def test_policy_id_42(scenario_headers, scenario_rows):
    conditions = parse_alert_conditions(scenario_headers, scenario_rows, [AlertPolicy(name="MyPolicy", id=42)])
    assert conditions[0].policy_id == 42


def test_application_filter_selects_entities(scenario_headers, scenario_rows, policies, applications):
    row = list(scenario_rows[0])
    row[12] = "checkout-*"
    condition = parse_alert_conditions(scenario_headers, [row], policies, applications)[0]
    assert condition.entities == (11, 12)
