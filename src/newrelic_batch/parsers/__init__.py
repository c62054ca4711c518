# src/newrelic_batch/parsers/__init__.py
"""
Leitores de registros (linhas tabulares ou árvore YAML → entidades).

Todos os leitores tabulares seguem o mesmo ciclo (ver `base.RecordReader`):
bind → check_required → filtro por tipo → construção → resolução → lista.
"""

from .base import RecordReader
from .channels import CHANNEL_READERS, parse_channels
from .conditions import (
    AlertConditionReader,
    ExternalServiceAlertConditionReader,
    InfraHostNotReportingAlertConditionReader,
    InfraMetricAlertConditionReader,
    InfraProcessRunningAlertConditionReader,
    NrqlAlertConditionReader,
    parse_alert_conditions,
    parse_conditions,
    parse_external_service_alert_conditions,
    parse_infra_host_not_reporting_alert_conditions,
    parse_infra_metric_alert_conditions,
    parse_infra_process_running_alert_conditions,
    parse_nrql_alert_conditions,
)
from .dashboards import DashboardReader, parse_dashboards
from .policies import AlertPolicyReader, parse_alert_policies
