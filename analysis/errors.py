"""Error taxonomy for benchmark parsing and chart option handling.

Every failure is fatal to the whole run. Errors keep the offending token and,
once the scan knows it, the 1-based line number and raw line text.
"""

from __future__ import annotations

from enum import StrEnum


class BenchartErrorKind(StrEnum):
    """Stable error kinds, valued with their human-readable message."""

    not_enough_columns = "not enough columns"
    cannot_parse_benchmark_name = "can't parse benchmark name"
    cannot_parse_measurement_attributes = "can't parse measurement attributes"
    cannot_parse_attribute_pair = "can't parse measurement attribute pair"
    measurement_line_has_no_type_attribute = "measurement line has no 'type' attribute"
    cannot_parse_y_value = "can't parse y value"
    cannot_parse_error_rate = "can't parse error rate"
    option_chart_name_not_found = "option chart name not found"
    option_is_not_supported = "option is not supported"
    option_type_is_wrong = "option type is wrong"
    cannot_parse_chart_options = "can't parse chart options"
    cannot_parse_option = "can't parse option"


class BenchartError(ValueError):
    """Raised when benchmark input or chart options cannot be processed."""

    def __init__(
        self,
        kind: BenchartErrorKind,
        detail: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            kind: Error kind.
            detail: Offending token or a short explanation.
            line_number: Optional 1-based input line number.
            line: Optional raw input line text.
        """

        self.kind = kind
        self.detail = detail
        self.line_number = line_number
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"{self.kind.value}: {self.detail}"
        if self.line_number is not None:
            message += f" on line [{self.line_number}]: `{self.line}`"
        return message

    def with_line(self, *, line_number: int, line: str) -> "BenchartError":
        """Return a copy of this error annotated with input line context."""

        return BenchartError(self.kind, self.detail, line_number=line_number, line=line)
