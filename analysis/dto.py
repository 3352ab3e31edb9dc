"""DTO types produced by benchmark decoding and chart aggregation.

DTOs are plain data containers handed to the rendering layer. They avoid any
Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field


@dataclass(frozen=True, slots=True)
class Point:
    """A single measurement within a case.

    Attributes:
        x: X coordinate text, taken verbatim from the X-axis attribute.
        y: Y value text, taken verbatim from the input cell.
        error: Absolute error magnitude rendered with default float formatting.
    """

    x: str
    y: str
    error: str


@dataclass(frozen=True, slots=True)
class DecodedAttributes:
    """Result of decoding a benchmark identifier cell.

    Attributes:
        chart_name: Chart identity (base name plus discriminator pairs).
        case_name: Value of the `type` attribute.
        x_value: X coordinate text.
        x_axis_label: Key of the attribute used as the X axis.
        benchmark_name: Benchmark base name (text before the first `/`).
    """

    chart_name: str
    case_name: str
    x_value: str
    x_axis_label: str
    benchmark_name: str


@dataclass(frozen=True, slots=True)
class DecodedRow:
    """A decoded measurement row ready for aggregation."""

    attributes: DecodedAttributes
    point: Point


@dataclass(slots=True)
class Chart:
    """One chart of the output dataset.

    Cases and their points are appended while the input is scanned; options
    are merged once after the scan completes.

    Attributes:
        id: SHA-256 hex digest of the chart name.
        name: Chart identity, also used as the display name.
        y_axis_label: Y-axis label shared by every chart of the input.
        cases: Case name to ordered points.
        options: Display options keyed by option name.
    """

    id: str
    name: str
    y_axis_label: str
    cases: dict[str, list[Point]] = field(default_factory=dict)
    options: dict[str, str] = field(default_factory=dict)

    def add_point(self, case_name: str, point: Point) -> None:
        """Append a point to the named case, creating the case when needed."""

        self.cases.setdefault(case_name, []).append(point)
