# src/newrelic_batch/model/__init__.py
"""
Entidades de configuração do New Relic como dataclasses congeladas.

Famílias:
    - AlertPolicy
    - AlertChannel e variantes por tipo de canal
    - Condições (alert, external service, NRQL, infraestrutura)
    - Dashboard e variantes de widget
    - Entity (aplicações/hosts usados em filtros)

Invariantes:
    - Entidades são imutáveis; atualizações usam `dataclasses.replace`
    - Nenhuma entidade conhece o serviço remoto nem o formato de arquivo
"""

from .channels import (
    AlertChannel,
    CampfireChannel,
    ChannelType,
    EmailChannel,
    HipChatChannel,
    OpsGenieChannel,
    PagerDutyChannel,
    SlackChannel,
    UserChannel,
    VictorOpsChannel,
    XMattersChannel,
)
from .conditions import (
    AlertCondition,
    AlertConditionType,
    ApmAppAlertCondition,
    ApmExternalServiceAlertCondition,
    ApmJvmAlertCondition,
    ApmKeyTransactionAlertCondition,
    BaseCondition,
    BrowserAlertCondition,
    ExternalServiceAlertCondition,
    ExternalServiceConditionType,
    InfraHostNotReportingAlertCondition,
    InfraMetricAlertCondition,
    InfraProcessRunningAlertCondition,
    MobileAlertCondition,
    MobileExternalServiceAlertCondition,
    NrqlAlertCondition,
    Priority,
    ServersAlertCondition,
    Term,
)
from .dashboards import (
    BreakdownMetricChart,
    Dashboard,
    DashboardFilter,
    EventChart,
    EventsData,
    FacetChart,
    InventoryChart,
    InventoryData,
    Layout,
    Markdown,
    MarkdownData,
    Metric,
    MetricLineChart,
    MetricsData,
    Threshold,
    ThresholdEventChart,
    TrafficLight,
    TrafficLightChart,
    TrafficLightState,
    Widget,
    WidgetKind,
)
from .entities import Entity
from .policies import AlertPolicy
