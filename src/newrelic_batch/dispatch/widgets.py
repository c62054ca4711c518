# src/newrelic_batch/dispatch/widgets.py
"""
Despacho de widgets por visualização.

A visualização é comparada com o conjunto permitido de cada tipo de widget
numa ordem FIXA de prioridade; o primeiro conjunto que a contém vence.
Visualização desconhecida produz None: quem chama decide (o leitor de
dashboards registra "unsupported visualization" e descarta o widget).

Ordem de prioridade:
    event chart, breakdown-metric, facet, inventory, markdown,
    metric-line, threshold-event, traffic-light
"""

from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple, Type

from ..model.dashboards import (
    BreakdownMetricChart,
    EventChart,
    FacetChart,
    InventoryChart,
    Markdown,
    MetricLineChart,
    ThresholdEventChart,
    TrafficLightChart,
    Widget,
    WidgetKind,
)


WIDGET_PRIORITY: Tuple[WidgetKind, ...] = (
    WidgetKind.EVENT_CHART,
    WidgetKind.BREAKDOWN_METRIC,
    WidgetKind.FACET,
    WidgetKind.INVENTORY,
    WidgetKind.MARKDOWN,
    WidgetKind.METRIC_LINE,
    WidgetKind.THRESHOLD_EVENT,
    WidgetKind.TRAFFIC_LIGHT,
)

WIDGET_CLASSES: Dict[WidgetKind, Type[Widget]] = {
    WidgetKind.EVENT_CHART: EventChart,
    WidgetKind.BREAKDOWN_METRIC: BreakdownMetricChart,
    WidgetKind.FACET: FacetChart,
    WidgetKind.INVENTORY: InventoryChart,
    WidgetKind.MARKDOWN: Markdown,
    WidgetKind.METRIC_LINE: MetricLineChart,
    WidgetKind.THRESHOLD_EVENT: ThresholdEventChart,
    WidgetKind.TRAFFIC_LIGHT: TrafficLightChart,
}

VISUALIZATIONS: Dict[WidgetKind, FrozenSet[str]] = {
    kind: cls.visualizations for kind, cls in WIDGET_CLASSES.items()
}


def widget_kind_for(
    visualization: Optional[str],
    *,
    visualizations: Mapping[WidgetKind, FrozenSet[str]] = VISUALIZATIONS,
    priority: Tuple[WidgetKind, ...] = WIDGET_PRIORITY,
) -> Optional[WidgetKind]:
    if visualization is None:
        return None
    for kind in priority:
        if visualization in visualizations.get(kind, frozenset()):
            return kind
    return None


class WidgetDispatcher:
    """Associa cada WidgetKind a uma função (construção ou serialização)."""

    def __init__(
        self,
        handlers: Mapping[WidgetKind, Callable[..., Any]],
        *,
        visualizations: Mapping[WidgetKind, FrozenSet[str]] = VISUALIZATIONS,
        priority: Tuple[WidgetKind, ...] = WIDGET_PRIORITY,
    ):
        missing = [k.value for k in priority if k not in handlers]
        if missing:
            raise ValueError(f"missing widget handlers: {missing}")
        self._handlers = dict(handlers)
        self._visualizations = visualizations
        self._priority = priority

    def kind_for(self, visualization: Optional[str]) -> Optional[WidgetKind]:
        return widget_kind_for(
            visualization,
            visualizations=self._visualizations,
            priority=self._priority,
        )

    def handler(self, kind: WidgetKind) -> Callable[..., Any]:
        return self._handlers[kind]

    def dispatch(self, visualization: Optional[str], *args: Any, **kwargs: Any) -> Optional[Any]:
        kind = self.kind_for(visualization)
        if kind is None:
            return None
        return self._handlers[kind](kind, *args, **kwargs)
