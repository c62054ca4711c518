# src/newrelic_batch/renderers/__init__.py
"""
Escritores de registros (entidades → linhas tabulares ou árvore YAML).

Linhas sempre trazem todas as colunas de saída (valor ausente = "");
a árvore de dashboards omite campos opcionais ausentes. Essa assimetria
acompanha as convenções de cada formato externo.
"""

from .base import RecordWriter
from .channels import ChannelWriter, render_channels
from .conditions import CONDITION_WRITERS, ConditionWriter, render_conditions
from .dashboards import DashboardWriter, banner, render_dashboards
from .policies import AlertPolicyWriter, render_alert_policies
