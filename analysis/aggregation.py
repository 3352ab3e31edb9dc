"""Chart aggregation for decoded benchmark measurements.

The scan is a single ordered pass: the X-axis label resolved for a benchmark
on one line is consulted when decoding the following lines, so rows cannot be
reordered or decoded independently.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Mapping
from typing import Final

from .benchmark_line import decode_benchmark_name, parse_point
from .chart_options import ChartOptionKind, ChartOptions
from .dto import Chart, DecodedRow
from .errors import BenchartError, BenchartErrorKind

logger = logging.getLogger(__name__)

MIN_CELLS_PER_ROW: Final[int] = 3
TABLE_HEADER_PREFIX: Final[str] = "name"


def compute_chart_id(chart_name: str) -> str:
    """Return a stable hex-encoded SHA-256 identifier for a chart name."""

    return hashlib.sha256(chart_name.encode("utf-8")).hexdigest()


def new_chart(chart_name: str, *, x_axis_label: str, y_axis_label: str) -> Chart:
    """Create an empty chart seeded with its resolved X-axis label."""

    return Chart(
        id=compute_chart_id(chart_name),
        name=chart_name,
        y_axis_label=y_axis_label,
        options={ChartOptionKind.x_axis_name.value: x_axis_label},
    )


def seed_x_axis_labels(options: Mapping[str, ChartOptions]) -> dict[str, str]:
    """Build the benchmark name -> X-axis label table from option blocks.

    Only blocks whose prefix is exactly a benchmark name and which declare
    `xAxisName` contribute.
    """

    return {
        prefix: chart_options[ChartOptionKind.x_axis_name]
        for prefix, chart_options in options.items()
        if ChartOptionKind.x_axis_name in chart_options
    }


def aggregate(
    rows: Iterable[DecodedRow],
    y_axis_label: str,
    options: Mapping[str, ChartOptions] | None = None,
) -> list[Chart]:
    """Group decoded rows into charts and apply display options.

    Args:
        rows: Decoded rows in input order.
        y_axis_label: Y-axis label shared by every chart.
        options: Chart name prefix -> options to merge after aggregation.

    Returns:
        Charts in first-seen order.

    Raises:
        BenchartError: When an option prefix matches no chart.
    """

    charts: dict[str, Chart] = {}
    for row in rows:
        attributes = row.attributes
        chart = charts.get(attributes.chart_name)
        if chart is None:
            chart = new_chart(
                attributes.chart_name,
                x_axis_label=attributes.x_axis_label,
                y_axis_label=y_axis_label,
            )
            charts[attributes.chart_name] = chart
            logger.debug("Created chart %r (%s)", chart.name, chart.id)
        chart.add_point(attributes.case_name, row.point)

    ordered = list(charts.values())
    apply_options(ordered, options or {})
    return ordered


def apply_options(charts: list[Chart], options: Mapping[str, ChartOptions]) -> None:
    """Merge option blocks into every chart whose name starts with the prefix.

    Raises:
        BenchartError: When a prefix matches no chart.
    """

    for prefix, chart_options in options.items():
        matched = [chart for chart in charts if chart.name.startswith(prefix)]
        if not matched:
            raise BenchartError(
                BenchartErrorKind.option_chart_name_not_found,
                f"you've passed options for chart with name `{prefix}`, "
                "but we didn't find such benchmark within input file",
            )
        for chart in matched:
            for kind, value in chart_options.items():
                chart.options[kind.value] = value
        logger.debug("Applied options for prefix %r to %d chart(s)", prefix, len(matched))


def decode_rows(
    lines: Iterable[str],
    *,
    x_axis_labels: dict[str, str] | None = None,
) -> tuple[str, list[DecodedRow]]:
    """Decode the first measurement table of benchstat CSV text.

    Args:
        lines: Input lines (with or without line terminators).
        x_axis_labels: Benchmark name -> X-axis label table. It is consulted
            and updated for every decoded row.

    Returns:
        The Y-axis label from the header line and the decoded rows.

    Raises:
        BenchartError: On the first malformed line, annotated with the 1-based
            line number and line text.
    """

    labels = {} if x_axis_labels is None else x_axis_labels
    y_axis_label = ""
    header_seen = False
    rows: list[DecodedRow] = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        if header_seen and line.startswith(TABLE_HEADER_PREFIX):
            # TODO: render the allocation tables that follow the first table.
            break

        cells = line.split(",")
        if len(cells) < MIN_CELLS_PER_ROW:
            raise BenchartError(
                BenchartErrorKind.not_enough_columns,
                f"expected at least {MIN_CELLS_PER_ROW}, got {len(cells)}",
                line_number=line_number,
                line=line,
            )

        if not header_seen:
            header_seen = True
            y_axis_label = cells[1]
            continue

        try:
            benchmark_name = cells[0].partition("/")[0]
            attributes = decode_benchmark_name(cells[0], labels.get(benchmark_name))
            point = parse_point(attributes.x_value, cells[1], cells[2])
        except BenchartError as exc:
            raise exc.with_line(line_number=line_number, line=line) from exc

        labels[attributes.benchmark_name] = attributes.x_axis_label
        rows.append(DecodedRow(attributes=attributes, point=point))

    return y_axis_label, rows


def parse_benchmark_results(
    lines: Iterable[str],
    options: Mapping[str, ChartOptions] | None = None,
) -> list[Chart]:
    """Parse benchstat CSV text into ordered charts.

    Args:
        lines: Input lines in file order.
        options: Chart name prefix -> display options.

    Returns:
        Charts in first-seen order with options applied.

    Raises:
        BenchartError: On malformed input or unmatched option prefixes.
    """

    options = options or {}
    y_axis_label, rows = decode_rows(lines, x_axis_labels=seed_x_axis_labels(options))
    logger.debug("Decoded %d measurement row(s)", len(rows))
    return aggregate(rows, y_axis_label, options)
