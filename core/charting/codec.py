"""Payload encoding for chart DTOs."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from analysis.dto import Chart, Point


def encode_point(point: Point) -> dict[str, str]:
    """Encode a Point into a JSON-serializable dictionary."""

    return {"x": point.x, "y": point.y, "error": point.error}


def encode_chart(chart: Chart) -> dict[str, Any]:
    """Encode a Chart into a JSON-serializable dictionary.

    Args:
        chart: Chart to encode.

    Returns:
        Dict payload with case and point order preserved.
    """

    return {
        "id": chart.id,
        "name": chart.name,
        "yAxisLabel": chart.y_axis_label,
        "options": dict(chart.options),
        "cases": {
            case_name: [encode_point(point) for point in points]
            for case_name, points in chart.cases.items()
        },
    }


def encode_charts(charts: Iterable[Chart]) -> list[dict[str, Any]]:
    """Encode charts in order."""

    return [encode_chart(chart) for chart in charts]


def dumps_charts(charts: Iterable[Chart]) -> str:
    """Serialize charts as indented JSON text."""

    return json.dumps(encode_charts(charts), indent=2, ensure_ascii=False)
