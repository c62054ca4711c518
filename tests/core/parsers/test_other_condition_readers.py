# tests/core/parsers/test_other_condition_readers.py
"""
Testes dos leitores de condições externas, NRQL e de infraestrutura.
"""

import pytest

from newrelic_batch.core.exceptions import TypeCoercionError, ValidationError
from newrelic_batch.model.conditions import (
    ApmExternalServiceAlertCondition,
    InfraHostNotReportingAlertCondition,
    InfraMetricAlertCondition,
    InfraProcessRunningAlertCondition,
    NrqlAlertCondition,
    Priority,
)
from newrelic_batch.parsers import (
    parse_external_service_alert_conditions,
    parse_infra_host_not_reporting_alert_conditions,
    parse_infra_metric_alert_conditions,
    parse_infra_process_running_alert_conditions,
    parse_nrql_alert_conditions,
)


def test_external_service_condition(policies):
    headers = [
        "Type", "Alert Policy", "Name", "Condition Type", "Metric", "Operator", "Warning", "Critical",
        "Duration", "Time Function", "External Service URL", "Entities",
    ]
    rows = [[
        "external-service-alert-condition", "MyPolicy", "Slow payments", "apm_external_service",
        "response_time_average", "above", "", "3", "10", "", "payments.example.com", "11,12",
    ]]
    condition = parse_external_service_alert_conditions(headers, rows, policies)[0]
    assert isinstance(condition, ApmExternalServiceAlertCondition)
    assert condition.policy_id == 100
    assert condition.external_service_url == "payments.example.com"
    assert condition.entities == (11, 12)
    assert [term.priority for term in condition.terms] == [Priority.CRITICAL]
    assert condition.terms[0].time_function == "all"


def test_nrql_condition_defaults(policies):
    headers = ["Type", "Alert Policy", "Name", "Query", "Operator", "Critical", "Duration"]
    rows = [["nrql-alert-condition", "MyPolicy", "Errors", "SELECT count(*) FROM TransactionError",
             "above", "10", "5"]]
    condition = parse_nrql_alert_conditions(headers, rows, policies)[0]
    assert isinstance(condition, NrqlAlertCondition)
    assert condition.value_function == "single_value"
    assert condition.since_value == "3"
    assert condition.terms[0].threshold == "10"


def test_nrql_condition_requires_a_threshold(policies):
    headers = ["Type", "Alert Policy", "Name", "Query", "Operator", "Duration"]
    rows = [["nrql-alert-condition", "MyPolicy", "Errors", "SELECT 1", "above", "5"]]
    with pytest.raises(ValidationError, match="alert condition missing thresholds: Errors"):
        parse_nrql_alert_conditions(headers, rows, policies)


def test_infra_metric_condition(policies):
    headers = [
        "Type", "Alert Policy", "Name", "Event Type", "Metric", "Comparison", "Warning", "Critical",
        "Duration", "Where Clause",
    ]
    rows = [[
        "infra-metric-alert-condition", "MyPolicy", "CPU", "SystemSample", "cpuPercent", "above",
        "80", "95", "5", "(`hostname` LIKE 'web-%')",
    ]]
    condition = parse_infra_metric_alert_conditions(headers, rows, policies)[0]
    assert condition == InfraMetricAlertCondition(
        name="CPU",
        policy_id=100,
        event_type="SystemSample",
        select_value="cpuPercent",
        comparison="above",
        critical_threshold=95,
        warning_threshold=80,
        duration=5,
        time_function="all",
        where_clause="(`hostname` LIKE 'web-%')",
    )


def test_infra_metric_requires_critical(policies):
    headers = ["Type", "Alert Policy", "Name", "Event Type", "Metric", "Comparison", "Warning", "Duration"]
    rows = [["infra-metric-alert-condition", "MyPolicy", "CPU", "SystemSample", "cpuPercent", "above", "80", "5"]]
    with pytest.raises(ValidationError, match="Infra alert condition missing critical threshold: CPU"):
        parse_infra_metric_alert_conditions(headers, rows, policies)


def test_infra_metric_rejects_non_integer_threshold(policies):
    headers = ["Type", "Alert Policy", "Name", "Event Type", "Metric", "Comparison", "Critical", "Duration"]
    rows = [["infra-metric-alert-condition", "MyPolicy", "CPU", "SystemSample", "cpuPercent", "above", "9.5", "5"]]
    with pytest.raises(TypeCoercionError):
        parse_infra_metric_alert_conditions(headers, rows, policies)


def test_infra_process_and_host_conditions(policies):
    process = parse_infra_process_running_alert_conditions(
        ["Type", "Alert Policy", "Name", "Comparison", "Critical", "Duration", "Process Where Clause"],
        [["infra-process-alert-condition", "MyPolicy", "nginx down", "equal", "0", "5", "commandName = 'nginx'"]],
        policies,
    )[0]
    assert isinstance(process, InfraProcessRunningAlertCondition)
    assert process.critical_threshold == 0
    assert process.process_where_clause == "commandName = 'nginx'"

    host = parse_infra_host_not_reporting_alert_conditions(
        ["Type", "Alert Policy", "Name", "Duration"],
        [["infra-host-alert-condition", "MyPolicy", "Host gone", "10"]],
        policies,
    )[0]
    assert host == InfraHostNotReportingAlertCondition(name="Host gone", policy_id=100, duration=10)
