# src/newrelic_batch/parsers/dashboards.py
"""
Leitor de dashboards a partir de um documento YAML (mapa de mapas).

Formato:
    <título do dashboard>:
      icon: ...            (opcional)
      version: <int>        (opcional, default 1)
      visibility: <str>     (opcional)
      editable: <str>       (opcional)
      filter: {event_types: [...], attributes: [...]}   (opcional)
      widgets:             (opcional; ausente = nenhum widget)
        <título do widget>:
          visualization: <str>
          account_id: <int>  (opcional)
          layout: {row, column, width, height} | [row, column, width, height]
          data: {...}      (forma depende do tipo do widget)

Decisões arquiteturais:
    - Chave obrigatória ausente → ValidationError "<chave>: expected <tipo> but was missing"
    - Tipo incompatível → TypeCoercionError "<chave>: expected <tipo> but was <tipo>"
    - Valor de dashboard/widget que não é mapa → evento de erro e skip
    - Visualização desconhecida → evento "unsupported visualization" e skip
    - Traffic light sem estados → ValidationError
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.context import BatchContext
from ..core.exceptions import TypeCoercionError, ValidationError
from ..dispatch.widgets import WIDGET_CLASSES, WidgetDispatcher
from ..model.dashboards import (
    Dashboard,
    DashboardFilter,
    EventsData,
    InventoryData,
    Layout,
    MarkdownData,
    Metric,
    MetricsData,
    Threshold,
    TrafficLight,
    TrafficLightState,
    Widget,
    WidgetKind,
)

KIND = "dashboard"
DEFAULT_VERSION = 1

# Nomes de campo do documento
TITLE = "title"
SUBTITLE = "subtitle"
NOTES = "notes"
ICON = "icon"
VERSION = "version"
VISIBILITY = "visibility"
EDITABLE = "editable"
FILTER = "filter"
EVENT_TYPES = "event_types"
ATTRIBUTES = "attributes"
WIDGETS = "widgets"
VISUALIZATION = "visualization"
ACCOUNT_ID = "account_id"
DATA = "data"
NRQL = "nrql"
SOURCE = "source"
SOURCES = "sources"
DRILLDOWN_DASHBOARD_ID = "drilldown_dashboard_id"
THRESHOLD = "threshold"
DURATION = "duration"
METRICS = "metrics"
ENTITY_IDS = "entity_ids"
END_TIME = "end_time"
ORDER_BY = "order_by"
LIMIT = "limit"
FILTERS = "filters"
ID = "id"
RED = "red"
YELLOW = "yellow"
NAME = "name"
UNITS = "units"
SCOPE = "scope"
VALUES = "values"
TRAFFIC_LIGHT = "traffic_light"
STATES = "states"
TYPE = "type"
MIN = "min"
MAX = "max"
LAYOUT = "layout"
ROW = "row"
COLUMN = "column"
WIDTH = "width"
HEIGHT = "height"


# -----------------------------
# Acesso tipado a nós
# -----------------------------

def _type_name(target: type) -> str:
    return target.__name__


def coerce_to(name: str, value: Any, target: type) -> Any:
    # bool é subclasse de int em Python; não é aceito como inteiro
    if target is int and isinstance(value, bool):
        ok = False
    else:
        ok = isinstance(value, target)
    if not ok:
        raise TypeCoercionError(
            f"{name}: expected {_type_name(target)} but was {type(value).__name__}",
            details={"field": name, "expected": _type_name(target), "actual": type(value).__name__},
        )
    return value


def get_as(node: Mapping[str, Any], name: str, target: type, mandatory: bool = True) -> Any:
    value = node.get(name)
    if value is None:
        if mandatory:
            raise ValidationError(
                f"{name}: expected {_type_name(target)} but was missing",
                details={"field": name, "expected": _type_name(target)},
            )
        return None
    return coerce_to(name, value, target)


def _tuple_or_none(value: Optional[List[Any]]) -> Optional[Tuple[Any, ...]]:
    return tuple(value) if value is not None else None


# -----------------------------
# Dados
# -----------------------------

def events_data(node: Mapping[str, Any]) -> EventsData:
    return EventsData(nrql=get_as(node, NRQL, str))


def markdown_data(node: Mapping[str, Any]) -> MarkdownData:
    return MarkdownData(source=get_as(node, SOURCE, str))


def metric(node: Mapping[str, Any]) -> Metric:
    return Metric(
        name=get_as(node, NAME, str, False),
        units=get_as(node, UNITS, str, False),
        scope=get_as(node, SCOPE, str, False),
        values=_tuple_or_none(get_as(node, VALUES, list, False)),
    )


def metrics_data(node: Mapping[str, Any]) -> MetricsData:
    items = get_as(node, METRICS, list, False)
    metrics = None
    if items is not None:
        metrics = tuple(metric(coerce_to(METRICS, item, dict)) for item in items)
    return MetricsData(
        duration=get_as(node, DURATION, int, False),
        end_time=get_as(node, END_TIME, int, False),
        entity_ids=_tuple_or_none(get_as(node, ENTITY_IDS, list, False)),
        metrics=metrics,
        order_by=get_as(node, ORDER_BY, str, False),
        limit=get_as(node, LIMIT, int, False),
    )


def inventory_data(node: Mapping[str, Any]) -> InventoryData:
    filters = get_as(node, FILTERS, dict, False)
    return InventoryData(
        sources=tuple(get_as(node, SOURCES, list)),
        filters=dict(filters) if filters is not None else {},
    )


# -----------------------------
# Apresentação
# -----------------------------

def layout(value: Any) -> Optional[Layout]:
    if isinstance(value, dict):
        return Layout(
            row=get_as(value, ROW, int),
            column=get_as(value, COLUMN, int),
            width=get_as(value, WIDTH, int, False),
            height=get_as(value, HEIGHT, int, False),
        )
    if isinstance(value, list):
        items = [coerce_to(LAYOUT, v, int) for v in value]
        row, column, width, height = None, None, None, None
        if len(items) >= 2:
            row, column = items[0], items[1]
        if len(items) >= 4:
            width, height = items[2], items[3]
        return Layout(row=row, column=column, width=width, height=height)
    return None


def threshold(node: Mapping[str, Any]) -> Threshold:
    return Threshold(red=get_as(node, RED, int), yellow=get_as(node, YELLOW, int))


def traffic_light_states(items: List[Any]) -> Tuple[TrafficLightState, ...]:
    states = []
    for item in items:
        if isinstance(item, dict):
            states.append(TrafficLightState(
                type=get_as(item, TYPE, str),
                min=get_as(item, MIN, int),
                max=get_as(item, MAX, int),
            ))
    if not states:
        raise ValidationError("traffic light must contain at least one state")
    return tuple(states)


def traffic_light(node: Mapping[str, Any]) -> TrafficLight:
    return TrafficLight(
        id=get_as(node, ID, str),
        title=get_as(node, TITLE, str, False),
        subtitle=get_as(node, SUBTITLE, str, False),
        states=traffic_light_states(get_as(node, STATES, list)),
    )


# -----------------------------
# Widgets (construtores por tipo)
# -----------------------------

def _common(visualization: str, title: str, node: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": title,
        "visualization": visualization,
        "notes": get_as(node, NOTES, str, False),
        "account_id": get_as(node, ACCOUNT_ID, int, False),
        "layout": layout(node.get(LAYOUT)),
    }


# campos específicos de variante, lidos ao lado dos dados do widget
WIDGET_EXTRAS = {
    WidgetKind.FACET: lambda node: {
        "drilldown_dashboard_id": get_as(node, DRILLDOWN_DASHBOARD_ID, int, False),
    },
    WidgetKind.THRESHOLD_EVENT: lambda node: {
        "threshold": threshold(get_as(node, THRESHOLD, dict)),
    },
    WidgetKind.TRAFFIC_LIGHT: lambda node: {
        "traffic_light": traffic_light(get_as(node, TRAFFIC_LIGHT, dict)),
    },
}


def _events_widget(kind: WidgetKind, visualization: str, title: str, node: Mapping[str, Any]) -> Widget:
    extra = WIDGET_EXTRAS[kind](node) if kind in WIDGET_EXTRAS else {}
    return WIDGET_CLASSES[kind](
        data=events_data(get_as(node, DATA, dict)),
        **_common(visualization, title, node),
        **extra,
    )


def _metrics_widget(kind: WidgetKind, visualization: str, title: str, node: Mapping[str, Any]) -> Widget:
    return WIDGET_CLASSES[kind](
        data=metrics_data(get_as(node, DATA, dict)),
        **_common(visualization, title, node),
    )


def _inventory_widget(kind: WidgetKind, visualization: str, title: str, node: Mapping[str, Any]) -> Widget:
    return WIDGET_CLASSES[kind](
        data=inventory_data(get_as(node, DATA, dict)),
        **_common(visualization, title, node),
    )


def _markdown_widget(kind: WidgetKind, visualization: str, title: str, node: Mapping[str, Any]) -> Widget:
    return WIDGET_CLASSES[kind](
        data=markdown_data(get_as(node, DATA, dict)),
        **_common(visualization, title, node),
    )


WIDGET_BUILDERS = {
    WidgetKind.EVENT_CHART: _events_widget,
    WidgetKind.BREAKDOWN_METRIC: _metrics_widget,
    WidgetKind.FACET: _events_widget,
    WidgetKind.INVENTORY: _inventory_widget,
    WidgetKind.MARKDOWN: _markdown_widget,
    WidgetKind.METRIC_LINE: _metrics_widget,
    WidgetKind.THRESHOLD_EVENT: _events_widget,
    WidgetKind.TRAFFIC_LIGHT: _events_widget,
}


# -----------------------------
# Leitor
# -----------------------------

class DashboardReader:
    """Converte a árvore de documento em uma lista de Dashboard."""

    def __init__(self, *, ctx: Optional[BatchContext] = None, dispatcher: Optional[WidgetDispatcher] = None):
        self._ctx = ctx if ctx is not None else BatchContext.new()
        self._dispatcher = dispatcher if dispatcher is not None else WidgetDispatcher(WIDGET_BUILDERS)

    @property
    def ctx(self) -> BatchContext:
        return self._ctx

    def build_widget(self, title: str, node: Mapping[str, Any]) -> Optional[Widget]:
        visualization = get_as(node, VISUALIZATION, str)
        return self._dispatcher.dispatch(visualization, visualization, title, node)

    def read_tree(self, document: Any) -> List[Dashboard]:
        out: List[Dashboard] = []
        if not isinstance(document, dict):
            self._error("Not a YAML document")
            return out

        for title, node in document.items():
            if not isinstance(node, dict):
                self._error("Not a YAML document", dashboard=str(title))
                continue
            out.append(self._dashboard(str(title), node))

        self._ctx.log(kind=KIND, level="info", message=f"Read {len(out)} dashboards")
        return out

    def _dashboard(self, title: str, node: Mapping[str, Any]) -> Dashboard:
        filter_node = get_as(node, FILTER, dict, False)
        dashboard_filter = None
        if filter_node is not None:
            dashboard_filter = DashboardFilter(
                event_types=tuple(get_as(filter_node, EVENT_TYPES, list)),
                attributes=tuple(get_as(filter_node, ATTRIBUTES, list)),
            )

        version = get_as(node, VERSION, int, False)
        return Dashboard(
            title=title,
            icon=get_as(node, ICON, str, False),
            version=DEFAULT_VERSION if version is None else version,
            visibility=get_as(node, VISIBILITY, str, False),
            editable=get_as(node, EDITABLE, str, False),
            filter=dashboard_filter,
            widgets=self._widgets(title, get_as(node, WIDGETS, dict, False) or {}),
        )

    def _widgets(self, dashboard: str, node: Mapping[str, Any]) -> Tuple[Widget, ...]:
        widgets: List[Widget] = []
        for title, widget_node in node.items():
            if not isinstance(widget_node, dict):
                self._error("Not a widget document", dashboard=dashboard, widget=str(title))
                continue
            widget = self.build_widget(str(title), widget_node)
            if widget is None:
                message = f"unsupported visualization: {widget_node.get(VISUALIZATION)}"
                self._ctx.log(kind=KIND, level="warning", message=message, dashboard=dashboard, widget=str(title))
                self._ctx.add_warning(kind=KIND, message=message)
                continue
            widgets.append(widget)
        return tuple(widgets)

    def _error(self, message: str, **extra: Any) -> None:
        self._ctx.log(kind=KIND, level="error", message=message, **extra)
        self._ctx.add_warning(kind=KIND, message=message)


def parse_dashboards(document: Any, *, ctx: Optional[BatchContext] = None) -> List[Dashboard]:
    return DashboardReader(ctx=ctx).read_tree(document)
