"""Per-chart display options.

Options target charts by name prefix, so a single block such as
`PoolOverhead;xAxisType=log` applies to every chart whose name starts with
`PoolOverhead`. The option vocabulary is closed: each `ChartOptionKind`
declares which values it accepts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Final

import yaml

from .errors import BenchartError, BenchartErrorKind


class ChartOptionKind(StrEnum):
    """Supported chart options, valued with their output key."""

    title = "title"
    x_axis_name = "xAxisName"
    x_axis_type = "xAxisType"
    y_axis_type = "yAxisType"


class AxisType(StrEnum):
    """Axis scale types accepted by the axis-type options."""

    log = "log"


@dataclass(frozen=True, slots=True)
class OptionRule:
    """Validation rule for an option kind.

    Args:
        allowed_values: Accepted literal values, or None when any string is
            accepted.
    """

    allowed_values: frozenset[str] | None = None

    def accepts(self, value: str) -> bool:
        """Return True when `value` satisfies this rule."""

        return self.allowed_values is None or value in self.allowed_values

    def describe(self) -> str:
        """Return a short description of accepted values for error messages."""

        if self.allowed_values is None:
            return "any string"
        return ", ".join(sorted(self.allowed_values))


OPTION_RULES: Final[dict[ChartOptionKind, OptionRule]] = {
    ChartOptionKind.title: OptionRule(),
    ChartOptionKind.x_axis_name: OptionRule(),
    ChartOptionKind.x_axis_type: OptionRule(allowed_values=frozenset(AxisType)),
    ChartOptionKind.y_axis_type: OptionRule(allowed_values=frozenset(AxisType)),
}

ChartOptions = dict[ChartOptionKind, str]


def supported_options_help() -> str:
    """Return the supported option vocabulary as `key (values)` entries."""

    return "; ".join(f"{kind.value} ({rule.describe()})" for kind, rule in OPTION_RULES.items())


def parse_chart_option(key: str, value: str) -> tuple[ChartOptionKind, str]:
    """Validate a single option against the vocabulary.

    Args:
        key: Option key, e.g. `xAxisType`.
        value: Option value, e.g. `log`.

    Returns:
        The option kind and the accepted value.

    Raises:
        BenchartError: When the key is unknown or the value is not accepted.
    """

    try:
        kind = ChartOptionKind(key)
    except ValueError:
        raise BenchartError(
            BenchartErrorKind.option_is_not_supported,
            f"{key}={value}; list of supported options: {supported_options_help()}",
        ) from None

    rule = OPTION_RULES[kind]
    if not rule.accepts(value):
        raise BenchartError(
            BenchartErrorKind.option_type_is_wrong,
            f"option {kind.value} allows only {rule.describe()}, got {value!r}",
        )
    return kind, value


def parse_option_argument(argument: str) -> tuple[str, ChartOptions]:
    """Parse a `<chartPrefix>;<key>=<value>;...` option argument.

    Args:
        argument: Raw option argument, e.g.
            `Hash;xAxisName=bytes size;title=Benchmark of hash functions`.

    Returns:
        The chart name prefix and its validated options.

    Raises:
        BenchartError: When the argument or one of its options is malformed.
    """

    prefix, separator, rest = argument.partition(";")
    if not separator:
        raise BenchartError(BenchartErrorKind.cannot_parse_chart_options, f"`{argument}`")

    options: ChartOptions = {}
    for option_text in rest.split(";"):
        parts = option_text.split("=")
        if len(parts) != 2:
            raise BenchartError(BenchartErrorKind.cannot_parse_option, f"`{option_text}`")
        kind, value = parse_chart_option(parts[0], parts[1])
        options[kind] = value
    return prefix, options


def merge_option_arguments(arguments: Iterable[str]) -> dict[str, ChartOptions]:
    """Parse option arguments, merging blocks that share a prefix.

    Later values win when the same option is given twice for a prefix.
    """

    merged: dict[str, ChartOptions] = {}
    for argument in arguments:
        prefix, options = parse_option_argument(argument)
        merged.setdefault(prefix, {}).update(options)
    return merged


def parse_options_mapping(payload: Any) -> dict[str, ChartOptions]:
    """Validate a `prefix -> {key: value}` mapping loaded from a config file.

    Raises:
        BenchartError: When the payload shape or an option is invalid.
    """

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise BenchartError(
            BenchartErrorKind.cannot_parse_chart_options,
            f"expected a mapping of chart name prefixes, got {type(payload).__name__}",
        )

    parsed: dict[str, ChartOptions] = {}
    for prefix, entries in payload.items():
        if not isinstance(entries, Mapping):
            raise BenchartError(
                BenchartErrorKind.cannot_parse_chart_options,
                f"options for `{prefix}` must be a mapping",
            )
        options: ChartOptions = {}
        for key, value in entries.items():
            if value is None:
                raise BenchartError(
                    BenchartErrorKind.cannot_parse_chart_options,
                    f"option `{key}` for `{prefix}` has no value",
                )
            kind, accepted = parse_chart_option(str(key), str(value))
            options[kind] = accepted
        parsed["" if prefix is None else str(prefix)] = options
    return parsed


def load_options_file(path: str | Path) -> dict[str, ChartOptions]:
    """Load chart options from a YAML file.

    The file maps chart name prefixes to option mappings:

        Hash:
          title: Benchmark of hash functions
          xAxisName: bytes size
        PoolOverhead:
          xAxisType: log

    Raises:
        BenchartError: When the file is not UTF-8, the YAML is malformed, or
            an option is invalid.
        OSError: When the file cannot be read.
    """

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise BenchartError(
            BenchartErrorKind.cannot_parse_chart_options, f"{path} is not valid UTF-8: {exc}"
        ) from exc
    try:
        payload = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise BenchartError(BenchartErrorKind.cannot_parse_chart_options, f"{path}: {exc}") from exc
    return parse_options_mapping(payload)


def combine_options(*sources: Mapping[str, ChartOptions]) -> dict[str, ChartOptions]:
    """Combine option sources; later sources override earlier ones per key."""

    combined: dict[str, ChartOptions] = {}
    for source in sources:
        for prefix, options in source.items():
            combined.setdefault(prefix, {}).update(options)
    return combined
