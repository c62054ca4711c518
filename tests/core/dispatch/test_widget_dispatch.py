# tests/core/dispatch/test_widget_dispatch.py
"""
Testes do despacho de widgets por visualização.

A ordem de prioridade é fixa; a primeira variante cujo conjunto contém
a visualização vence. Visualização desconhecida produz None.
"""

import pytest

from newrelic_batch.dispatch.widgets import (
    WIDGET_PRIORITY,
    WidgetDispatcher,
    widget_kind_for,
)
from newrelic_batch.model.dashboards import WidgetKind


@pytest.mark.parametrize(
    "visualization, expected",
    [
        ("event_table", WidgetKind.EVENT_CHART),
        ("application_breakdown", WidgetKind.BREAKDOWN_METRIC),
        ("facet_pie_chart", WidgetKind.FACET),
        ("inventory", WidgetKind.INVENTORY),
        ("markdown", WidgetKind.MARKDOWN),
        ("metric_line_chart", WidgetKind.METRIC_LINE),
        ("gauge", WidgetKind.THRESHOLD_EVENT),
        ("traffic_light", WidgetKind.TRAFFIC_LIGHT),
    ],
)
def test_known_visualizations(visualization, expected):
    assert widget_kind_for(visualization) == expected


def test_unknown_visualization_is_none():
    assert widget_kind_for("hologram") is None
    assert widget_kind_for(None) is None


def test_priority_order_wins_on_overlap():
    """
    Se uma visualização pertence a mais de um conjunto, vence a variante
    que aparece primeiro na ordem de prioridade.
    """
    overlapping = {
        WidgetKind.EVENT_CHART: frozenset({"billboard"}),
        WidgetKind.THRESHOLD_EVENT: frozenset({"billboard"}),
    }
    assert widget_kind_for("billboard", visualizations=overlapping) == WidgetKind.EVENT_CHART
    reversed_priority = tuple(reversed(WIDGET_PRIORITY))
    assert (
        widget_kind_for("billboard", visualizations=overlapping, priority=reversed_priority)
        == WidgetKind.THRESHOLD_EVENT
    )


def test_dispatcher_requires_every_handler():
    with pytest.raises(ValueError, match="missing widget handlers"):
        WidgetDispatcher({WidgetKind.MARKDOWN: lambda kind: kind})


def test_dispatcher_calls_handler_with_kind():
    handlers = {kind: (lambda k, value: (k, value)) for kind in WIDGET_PRIORITY}
    dispatcher = WidgetDispatcher(handlers)
    assert dispatcher.dispatch("markdown", "x") == (WidgetKind.MARKDOWN, "x")
    assert dispatcher.dispatch("hologram", "x") is None
