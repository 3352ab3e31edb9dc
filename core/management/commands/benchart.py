"""Render benchstat CSV output as an HTML page of charts."""

from __future__ import annotations

import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from analysis.aggregation import parse_benchmark_results
from analysis.chart_options import (
    ChartOptions,
    combine_options,
    load_options_file,
    merge_option_arguments,
    supported_options_help,
)
from analysis.errors import BenchartError
from core.charting.codec import dumps_charts
from core.charting.render import render_charts_html

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Convert a benchstat CSV file into charts."""

    help = (
        "Convert benchstat CSV output into an HTML page of charts. Chart options are "
        "passed as '<chart name prefix>;<key>=<value>;...', e.g. "
        "'PoolOverhead;xAxisType=log;yAxisType=log'. Supported options: "
        f"{supported_options_help()}."
    )

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "option_specs",
            nargs="*",
            metavar="OPTIONS",
            help="Chart options: '<chart name prefix>;<key>=<value>;...'.",
        )
        parser.add_argument("input_path", metavar="INPUT", help="benchstat CSV file to read.")
        parser.add_argument("output_path", metavar="OUTPUT", help="File to write.")
        parser.add_argument(
            "--options-file",
            default=None,
            help="YAML file mapping chart name prefixes to options. Command-line options win.",
        )
        parser.add_argument(
            "--format",
            choices=("html", "json"),
            default="html",
            help="Output format (default: html).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        input_path = Path(options["input_path"])
        output_path = Path(options["output_path"])
        output_format: str = options["format"]

        try:
            chart_options = self._load_chart_options(options["options_file"], options["option_specs"])
        except BenchartError as exc:
            raise CommandError(str(exc)) from exc

        logger.info("Reading benchmark results from %s", input_path)
        try:
            with input_path.open(encoding="utf-8") as input_file:
                charts = parse_benchmark_results(input_file, chart_options)
        except OSError as exc:
            raise CommandError(f"can't open input file: {input_path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise CommandError(f"can't decode input file as UTF-8: {input_path}: {exc}") from exc
        except BenchartError as exc:
            raise CommandError(str(exc)) from exc

        if output_format == "json":
            content = dumps_charts(charts) + "\n"
        else:
            content = render_charts_html(charts)

        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise CommandError(f"can't open or create output file: {output_path}: {exc}") from exc

        logger.info("Wrote %d chart(s) to %s", len(charts), output_path)
        self.stdout.write(f"Wrote {len(charts)} chart(s) to {output_path}")
        return None

    @staticmethod
    def _load_chart_options(options_file: str | None, option_specs: list[str]) -> dict[str, ChartOptions]:
        """Combine options from the YAML file and the command line."""

        from_file: dict[str, ChartOptions] = {}
        if options_file is not None:
            try:
                from_file = load_options_file(options_file)
            except OSError as exc:
                raise CommandError(f"can't open options file: {options_file}: {exc}") from exc
        return combine_options(from_file, merge_option_arguments(option_specs))
