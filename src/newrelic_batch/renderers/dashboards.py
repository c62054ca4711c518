# src/newrelic_batch/renderers/dashboards.py
"""
Escritor de dashboards (lista de Dashboard → árvore YAML).

A árvore tem a mesma forma aceita por `parsers.dashboards`:
    - chave de topo = título do dashboard
    - widgets indexados pelo título
    - campos opcionais ausentes (None) são omitidos
    - layout sempre emitido na forma de mapa

A serialização dos dados de cada widget é escolhida pelo `widget_kind`,
pela mesma tabela de despacho usada na leitura.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, TextIO

import yaml

from ..core.context import BatchContext
from ..model.dashboards import (
    Dashboard,
    EventsData,
    FacetChart,
    InventoryData,
    Layout,
    MarkdownData,
    MetricsData,
    ThresholdEventChart,
    TrafficLight,
    TrafficLightChart,
    Widget,
    WidgetKind,
)
from ..parsers import dashboards as f

BANNER_WIDTH = 80


def _compact(items: Iterable[tuple]) -> Dict[str, Any]:
    return {k: v for k, v in items if v is not None}


def _plain(value: Any) -> Any:
    # yaml.safe_dump não representa tuplas
    if isinstance(value, (tuple, list)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


# -----------------------------
# Dados
# -----------------------------

def events_node(data: EventsData) -> Dict[str, Any]:
    return {f.NRQL: data.nrql}


def metrics_node(data: MetricsData) -> Dict[str, Any]:
    metrics = None
    if data.metrics is not None:
        metrics = [
            _compact([
                (f.NAME, m.name),
                (f.UNITS, m.units),
                (f.SCOPE, m.scope),
                (f.VALUES, _plain(m.values) if m.values is not None else None),
            ])
            for m in data.metrics
        ]
    return _compact([
        (f.DURATION, data.duration),
        (f.END_TIME, data.end_time),
        (f.ENTITY_IDS, _plain(data.entity_ids) if data.entity_ids is not None else None),
        (f.METRICS, metrics),
        (f.ORDER_BY, data.order_by),
        (f.LIMIT, data.limit),
    ])


def inventory_node(data: InventoryData) -> Dict[str, Any]:
    node: Dict[str, Any] = {f.SOURCES: _plain(data.sources)}
    if data.filters:
        node[f.FILTERS] = _plain(data.filters)
    return node


def markdown_node(data: MarkdownData) -> Dict[str, Any]:
    return {f.SOURCE: data.source}


DATA_SERIALIZERS = {
    WidgetKind.EVENT_CHART: events_node,
    WidgetKind.BREAKDOWN_METRIC: metrics_node,
    WidgetKind.FACET: events_node,
    WidgetKind.INVENTORY: inventory_node,
    WidgetKind.MARKDOWN: markdown_node,
    WidgetKind.METRIC_LINE: metrics_node,
    WidgetKind.THRESHOLD_EVENT: events_node,
    WidgetKind.TRAFFIC_LIGHT: events_node,
}


# -----------------------------
# Apresentação
# -----------------------------

def layout_node(value: Layout) -> Dict[str, Any]:
    return _compact([
        (f.ROW, value.row),
        (f.COLUMN, value.column),
        (f.WIDTH, value.width),
        (f.HEIGHT, value.height),
    ])


def traffic_light_node(value: TrafficLight) -> Dict[str, Any]:
    return _compact([
        (f.ID, value.id),
        (f.TITLE, value.title),
        (f.SUBTITLE, value.subtitle),
        (f.STATES, [{f.TYPE: s.type, f.MIN: s.min, f.MAX: s.max} for s in value.states]),
    ])


def _facet_extras(widget: FacetChart) -> Dict[str, Any]:
    return _compact([(f.DRILLDOWN_DASHBOARD_ID, widget.drilldown_dashboard_id)])


def _threshold_extras(widget: ThresholdEventChart) -> Dict[str, Any]:
    if widget.threshold is None:
        return {}
    return {f.THRESHOLD: {f.RED: widget.threshold.red, f.YELLOW: widget.threshold.yellow}}


def _traffic_light_extras(widget: TrafficLightChart) -> Dict[str, Any]:
    if widget.traffic_light is None:
        return {}
    return {f.TRAFFIC_LIGHT: traffic_light_node(widget.traffic_light)}


EXTRA_SERIALIZERS = {
    WidgetKind.FACET: _facet_extras,
    WidgetKind.THRESHOLD_EVENT: _threshold_extras,
    WidgetKind.TRAFFIC_LIGHT: _traffic_light_extras,
}


def banner(title: Optional[str] = None, *, now: Optional[datetime] = None) -> str:
    """Cabeçalho de comentário YAML (caixa de '#' com 80 colunas)."""
    now = now or datetime.now(timezone.utc)
    border = "#" * BANNER_WIDTH
    lines = [border]
    if title:
        lines.append(f"# {title}")
    lines.append(f"# Generated by newrelic-batch {now.isoformat(timespec='seconds')}")
    lines.append(border)
    return "\n".join(lines) + "\n"


# -----------------------------
# Escritor
# -----------------------------

class DashboardWriter:
    """Converte uma lista de Dashboard na árvore de documento e em texto YAML."""

    def __init__(self, *, ctx: Optional[BatchContext] = None):
        self._ctx = ctx if ctx is not None else BatchContext.new()

    @property
    def ctx(self) -> BatchContext:
        return self._ctx

    def widget_node(self, widget: Widget) -> Dict[str, Any]:
        node: Dict[str, Any] = {f.VISUALIZATION: widget.visualization}
        if widget.account_id is not None:
            node[f.ACCOUNT_ID] = widget.account_id
        if widget.notes is not None:
            node[f.NOTES] = widget.notes
        if widget.layout is not None:
            node[f.LAYOUT] = layout_node(widget.layout)

        if widget.widget_kind in EXTRA_SERIALIZERS:
            node.update(EXTRA_SERIALIZERS[widget.widget_kind](widget))

        if widget.data is not None:
            node[f.DATA] = DATA_SERIALIZERS[widget.widget_kind](widget.data)
        return node

    def dashboard_node(self, dashboard: Dashboard) -> Dict[str, Any]:
        node = _compact([
            (f.ICON, dashboard.icon),
            (f.VERSION, dashboard.version),
            (f.VISIBILITY, dashboard.visibility),
            (f.EDITABLE, dashboard.editable),
        ])
        if dashboard.filter is not None:
            node[f.FILTER] = {
                f.EVENT_TYPES: _plain(dashboard.filter.event_types),
                f.ATTRIBUTES: _plain(dashboard.filter.attributes),
            }
        node[f.WIDGETS] = {w.title: self.widget_node(w) for w in dashboard.widgets}
        return node

    def render_tree(self, dashboards: Iterable[Dashboard]) -> Dict[str, Any]:
        dashboards = list(dashboards)
        self._ctx.log(kind=f.KIND, level="info", message=f"Writing {len(dashboards)} dashboards")
        return {d.title: self.dashboard_node(d) for d in dashboards}

    def to_yaml(
        self,
        dashboards: Iterable[Dashboard],
        *,
        stream: Optional[TextIO] = None,
        banner_title: Optional[str] = None,
        with_banner: Optional[bool] = None,
    ) -> str:
        """
        Serializa em YAML (ordem de inserção preservada).

        `with_banner`, `banner_title` e o estilo de fluxo seguem a seção
        `dashboards` da configuração quando não informados.
        """
        cfg = self._ctx.config.get("dashboards", {}) if isinstance(self._ctx.config, dict) else {}
        if with_banner is None:
            with_banner = bool(cfg.get("banner", False))
        if banner_title is None:
            banner_title = cfg.get("title")

        text = yaml.safe_dump(
            self.render_tree(dashboards),
            sort_keys=False,
            default_flow_style=bool(cfg.get("default_flow_style", False)),
            allow_unicode=True,
        )
        if with_banner:
            text = banner(banner_title) + text
        if stream is not None:
            stream.write(text)
        return text


def render_dashboards(
    dashboards: Iterable[Dashboard],
    *,
    ctx: Optional[BatchContext] = None,
) -> Dict[str, Any]:
    return DashboardWriter(ctx=ctx).render_tree(dashboards)
