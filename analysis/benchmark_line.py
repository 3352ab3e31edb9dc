"""Benchmark measurement line decoding.

A measurement row looks like:

    Hash/type:crc32;bytes:4-8,4.13067E+00,1%

The first cell names the benchmark (`Hash`), its attributes (`type:crc32`,
`bytes:4`) and a parallelism suffix (`-8`) that is ignored. The `type`
attribute names the case, one attribute is the X axis and every other
attribute discriminates the chart the row belongs to.

Decoding is strict: malformed cells raise `BenchartError` instead of being
skipped.
"""

from __future__ import annotations

import math
from typing import Final

from .dto import DecodedAttributes, Point
from .errors import BenchartError, BenchartErrorKind

CASE_ATTRIBUTE: Final[str] = "type"

_PERCENTS: Final[float] = 100.0
_INFINITY_LITERALS: Final[frozenset[str]] = frozenset({"inf", "infinity"})


def decode_benchmark_name(cell: str, known_x_axis_label: str | None = None) -> DecodedAttributes:
    """Decode the identifier cell of a measurement row.

    Args:
        cell: Identifier cell, e.g. `Hash/type:crc32;bytes:4-8`.
        known_x_axis_label: X-axis label already established for this
            benchmark, if any.

    Returns:
        DecodedAttributes with the chart identity, case, X value and label.

    Raises:
        BenchartError: When the cell does not follow the
            `<name>/<key:value;...>-<suffix>` shape or has no `type` attribute.

    Notes:
        When `known_x_axis_label` names one of the row's attributes, that
        attribute is the X axis and the last attribute is treated like any
        other. Otherwise the last attribute is the X axis, so attribute order
        in the input matters. Every attribute key, `type` included, may
        appear at most once per row.
    """

    benchmark_name, slash, rest = cell.partition("/")
    if not slash:
        raise BenchartError(BenchartErrorKind.cannot_parse_benchmark_name, f"`{cell}`")

    attributes_text, dash, _suffix = rest.partition("-")
    if not dash:
        raise BenchartError(BenchartErrorKind.cannot_parse_measurement_attributes, f"`{rest}`")

    attributes = _split_attributes(attributes_text)
    keys = [key for key, _value in attributes]
    if known_x_axis_label is not None and known_x_axis_label in keys:
        x_index = keys.index(known_x_axis_label)
    else:
        x_index = len(attributes) - 1

    case_name = ""
    x_axis_label, x_value = attributes[x_index]
    discriminators = [benchmark_name]
    for index, (key, value) in enumerate(attributes):
        if index == x_index:
            continue
        if key == CASE_ATTRIBUTE:
            case_name = value
            continue
        discriminators.append(f"{key}={value}")

    if not case_name:
        raise BenchartError(BenchartErrorKind.measurement_line_has_no_type_attribute, f"`{attributes_text}`")

    return DecodedAttributes(
        chart_name=" ".join(discriminators),
        case_name=case_name,
        x_value=x_value,
        x_axis_label=x_axis_label,
        benchmark_name=benchmark_name,
    )


def _split_attributes(attributes_text: str) -> list[tuple[str, str]]:
    """Split `key:value;key:value` into ordered pairs."""

    pairs: list[tuple[str, str]] = []
    seen: set[str] = set()
    for attribute in attributes_text.split(";"):
        key, colon, value = attribute.partition(":")
        if not colon:
            raise BenchartError(BenchartErrorKind.cannot_parse_attribute_pair, f"`{attribute}`")
        if key in seen:
            raise BenchartError(
                BenchartErrorKind.cannot_parse_measurement_attributes,
                f"attribute `{key}` is repeated in `{attributes_text}`",
            )
        seen.add(key)
        pairs.append((key, value))
    return pairs


def _parse_float(text: str) -> float | None:
    """Parse a decimal number strictly, returning None when it is invalid.

    Surrounding whitespace, `_` digit separators and finite literals that
    overflow to infinity are rejected.
    """

    if not text or text != text.strip() or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isinf(value) and text.lstrip("+-").lower() not in _INFINITY_LITERALS:
        return None
    return value


def parse_y_value(cell: str) -> float:
    """Parse the Y-value cell as a float.

    Raises:
        BenchartError: When the cell is not numeric or out of range.
    """

    value = _parse_float(cell)
    if value is None:
        raise BenchartError(BenchartErrorKind.cannot_parse_y_value, f"`{cell}`")
    return value


def parse_error_rate(cell: str) -> float:
    """Parse an error-rate cell such as `1%` into its percentage value.

    Raises:
        BenchartError: When the cell does not end with `%` or the remainder is
            not numeric.
    """

    if len(cell) < 2 or not cell.endswith("%"):
        raise BenchartError(
            BenchartErrorKind.cannot_parse_error_rate,
            f"error rate cell should end with percent symbol `{cell}`",
        )
    error_rate = _parse_float(cell[:-1])
    if error_rate is None:
        raise BenchartError(BenchartErrorKind.cannot_parse_error_rate, f"`{cell}`")
    return error_rate


def parse_point(x_value: str, y_cell: str, error_cell: str) -> Point:
    """Build a Point, converting the error percentage into an absolute value.

    Args:
        x_value: X coordinate text.
        y_cell: Raw Y-value cell.
        error_cell: Raw error-rate cell (e.g. `5%`).

    Returns:
        Point whose `error` is `y * rate / 100` as text.
    """

    y_value = parse_y_value(y_cell)
    error_rate = parse_error_rate(error_cell)
    return Point(x=x_value, y=y_cell, error=str(y_value * (error_rate / _PERCENTS)))
