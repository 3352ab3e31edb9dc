"""HTML rendering of chart payloads for the benchart page."""

from __future__ import annotations

from collections.abc import Iterable

from django.conf import settings
from django.template.loader import render_to_string

from analysis.dto import Chart

from .codec import encode_charts

CHARTS_SCRIPT_ID = "benchart-data"


def render_charts_html(charts: Iterable[Chart], *, template_name: str | None = None) -> str:
    """Render a self-contained HTML page for the given charts.

    Args:
        charts: Charts in display order.
        template_name: Optional template override. Defaults to
            `settings.BENCHART_HTML_TEMPLATE`.

    Returns:
        Rendered HTML text.
    """

    context = {
        "charts": encode_charts(charts),
        "charts_script_id": CHARTS_SCRIPT_ID,
        "chart_js_url": settings.BENCHART_CHART_JS_URL,
    }
    return render_to_string(template_name or settings.BENCHART_HTML_TEMPLATE, context)
