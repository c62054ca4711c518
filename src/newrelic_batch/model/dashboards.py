# src/newrelic_batch/model/dashboards.py
"""
Dashboards e widgets.

Um Dashboard contém widgets tipados. Cada variante de widget declara:
    - `widget_kind` (ClassVar): etiqueta da união
    - `visualizations` (ClassVar): conjunto fechado de visualizações aceitas

A escolha da variante a partir de uma string de visualização é feita em
`dispatch.widgets`, percorrendo as variantes numa ordem fixa de prioridade.

Decisões arquiteturais:
    - Coleções são tuplas (entidades imutáveis e comparáveis)
    - Campos opcionais ausentes são None e não são emitidos na árvore
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Tuple, Union


class WidgetKind(str, Enum):
    EVENT_CHART = "event_chart"
    BREAKDOWN_METRIC = "breakdown_metric"
    FACET = "facet"
    INVENTORY = "inventory"
    MARKDOWN = "markdown"
    METRIC_LINE = "metric_line"
    THRESHOLD_EVENT = "threshold_event"
    TRAFFIC_LIGHT = "traffic_light"


# -----------------------------
# Dados de widget
# -----------------------------

@dataclass(frozen=True)
class EventsData:
    nrql: str


@dataclass(frozen=True)
class Metric:
    name: Optional[str] = None
    units: Optional[str] = None
    scope: Optional[str] = None
    values: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class MetricsData:
    duration: Optional[int] = None
    end_time: Optional[int] = None
    entity_ids: Optional[Tuple[int, ...]] = None
    metrics: Optional[Tuple[Metric, ...]] = None
    order_by: Optional[str] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class InventoryData:
    sources: Tuple[str, ...] = ()
    filters: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MarkdownData:
    source: str


WidgetData = Union[EventsData, MetricsData, InventoryData, MarkdownData]


# -----------------------------
# Apresentação
# -----------------------------

@dataclass(frozen=True)
class Layout:
    row: Optional[int] = None
    column: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class Threshold:
    red: int
    yellow: int


@dataclass(frozen=True)
class TrafficLightState:
    type: str
    min: int
    max: int


@dataclass(frozen=True)
class TrafficLight:
    id: str
    states: Tuple[TrafficLightState, ...]
    title: Optional[str] = None
    subtitle: Optional[str] = None


# -----------------------------
# Widgets
# -----------------------------

@dataclass(frozen=True)
class Widget:
    title: str
    visualization: str
    data: Optional[WidgetData] = None
    account_id: Optional[int] = None
    notes: Optional[str] = None
    layout: Optional[Layout] = None

    widget_kind: ClassVar[WidgetKind]
    visualizations: ClassVar[FrozenSet[str]] = frozenset()


@dataclass(frozen=True)
class EventChart(Widget):
    widget_kind: ClassVar[WidgetKind] = WidgetKind.EVENT_CHART
    visualizations: ClassVar[FrozenSet[str]] = frozenset({
        "attribute_sheet", "single_event", "histogram", "funnel", "raw_json",
        "event_feed", "event_table", "uniques_list", "line_chart",
        "comparison_line_chart",
    })


@dataclass(frozen=True)
class BreakdownMetricChart(Widget):
    widget_kind: ClassVar[WidgetKind] = WidgetKind.BREAKDOWN_METRIC
    visualizations: ClassVar[FrozenSet[str]] = frozenset({"application_breakdown"})


@dataclass(frozen=True)
class FacetChart(Widget):
    drilldown_dashboard_id: Optional[int] = None

    widget_kind: ClassVar[WidgetKind] = WidgetKind.FACET
    visualizations: ClassVar[FrozenSet[str]] = frozenset({
        "facet_bar_chart", "faceted_line_chart", "facet_pie_chart",
        "facet_table", "faceted_area_chart", "heatmap",
    })


@dataclass(frozen=True)
class InventoryChart(Widget):
    widget_kind: ClassVar[WidgetKind] = WidgetKind.INVENTORY
    visualizations: ClassVar[FrozenSet[str]] = frozenset({"inventory"})


@dataclass(frozen=True)
class Markdown(Widget):
    widget_kind: ClassVar[WidgetKind] = WidgetKind.MARKDOWN
    visualizations: ClassVar[FrozenSet[str]] = frozenset({"markdown"})


@dataclass(frozen=True)
class MetricLineChart(Widget):
    widget_kind: ClassVar[WidgetKind] = WidgetKind.METRIC_LINE
    visualizations: ClassVar[FrozenSet[str]] = frozenset({"metric_line_chart"})


@dataclass(frozen=True)
class ThresholdEventChart(Widget):
    threshold: Optional[Threshold] = None

    widget_kind: ClassVar[WidgetKind] = WidgetKind.THRESHOLD_EVENT
    visualizations: ClassVar[FrozenSet[str]] = frozenset({
        "billboard", "gauge", "billboard_comparison",
    })


@dataclass(frozen=True)
class TrafficLightChart(Widget):
    traffic_light: Optional[TrafficLight] = None

    widget_kind: ClassVar[WidgetKind] = WidgetKind.TRAFFIC_LIGHT
    visualizations: ClassVar[FrozenSet[str]] = frozenset({"traffic_light"})


# -----------------------------
# Dashboard
# -----------------------------

@dataclass(frozen=True)
class DashboardFilter:
    event_types: Tuple[str, ...] = ()
    attributes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Dashboard:
    title: str
    version: int = 1
    visibility: Optional[str] = None
    editable: Optional[str] = None
    icon: Optional[str] = None
    widgets: Tuple[Widget, ...] = ()
    filter: Optional[DashboardFilter] = None
    id: Optional[int] = None
