"""Integration tests for the benchart management command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from core.charting.render import CHARTS_SCRIPT_ID

pytestmark = pytest.mark.integration


def _write_csv(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "input.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_benchart_writes_json_with_options(input_csv: Path, tmp_path: Path) -> None:
    """The command groups the sample input and applies command-line options."""

    output = tmp_path / "result.json"

    call_command(
        "benchart",
        "Hash;xAxisName=bytes size;title=Benchmark of hash functions",
        "PoolOverhead;xAxisType=log;yAxisType=log",
        "RateLimiter;xAxisType=log;xAxisName=goroutines",
        str(input_csv),
        str(output),
        "--format=json",
    )

    charts = json.loads(output.read_text(encoding="utf-8"))
    assert [chart["name"] for chart in charts] == [
        "Hash",
        "PoolOverhead",
        "RateLimiter mode=blocking",
        "RateLimiter mode=nonblocking",
    ]
    hash_chart = charts[0]
    assert hash_chart["yAxisLabel"] == "time/op (ns/op)"
    assert hash_chart["options"] == {"xAxisName": "bytes size", "title": "Benchmark of hash functions"}
    assert list(hash_chart["cases"]) == ["crc32", "fnv"]
    assert [point["x"] for point in hash_chart["cases"]["crc32"]] == ["4", "16", "64"]
    assert charts[1]["options"] == {"xAxisName": "tasks", "xAxisType": "log", "yAxisType": "log"}
    assert list(charts[2]["cases"]) == ["mutex", "atomic"]
    assert charts[3]["options"]["xAxisType"] == "log"


def test_benchart_renders_html_page(input_csv: Path, tmp_path: Path) -> None:
    """HTML output embeds the chart payload as a JSON script element."""

    output = tmp_path / "result.html"

    call_command("benchart", str(input_csv), str(output))

    html = output.read_text(encoding="utf-8")
    assert html.startswith("<!doctype html>")
    assert f'<script id="{CHARTS_SCRIPT_ID}" type="application/json">' in html
    assert "RateLimiter mode=nonblocking" in html
    assert "chart.umd.min.js" in html


def test_benchart_reads_options_file(testdata_dir: Path, input_csv: Path, tmp_path: Path) -> None:
    """YAML options apply, and command-line options override them."""

    output = tmp_path / "result.json"

    call_command(
        "benchart",
        "Hash;title=Hashes",
        str(input_csv),
        str(output),
        "--format=json",
        f"--options-file={testdata_dir / 'options.yaml'}",
    )

    charts = {chart["name"]: chart for chart in json.loads(output.read_text(encoding="utf-8"))}
    assert charts["Hash"]["options"] == {"xAxisName": "bytes size", "title": "Hashes"}
    assert charts["PoolOverhead"]["options"]["yAxisType"] == "log"


def test_benchart_rejects_unmatched_option_prefix_without_writing(input_csv: Path, tmp_path: Path) -> None:
    """Errors abort the run before any output is written."""

    output = tmp_path / "result.html"

    with pytest.raises(CommandError, match="option chart name not found"):
        call_command("benchart", "Missing;title=x", str(input_csv), str(output))

    assert not output.exists()


def test_benchart_reports_malformed_line(tmp_path: Path) -> None:
    """Decode errors surface with their line context."""

    input_path = _write_csv(
        tmp_path,
        "name,time/op (ns/op),±\nHash/type:crc32;bytes:4-8,4.1,1%\nHash/bytes:4-8,4.1,1%\n",
    )

    with pytest.raises(CommandError) as exc_info:
        call_command("benchart", str(input_path), str(tmp_path / "out.html"))

    message = str(exc_info.value)
    assert "measurement line has no 'type' attribute" in message
    assert "on line [3]" in message


@pytest.mark.parametrize(
    ("option", "message"),
    [
        ("", "can't parse chart options"),
        (";", "can't parse option"),
        (";someOption=", "option is not supported"),
        (";xAxisType=exp", "option type is wrong"),
    ],
)
def test_benchart_rejects_invalid_options(input_csv: Path, tmp_path: Path, option: str, message: str) -> None:
    """Invalid option arguments fail before the input is read."""

    with pytest.raises(CommandError, match=message):
        call_command("benchart", option, str(input_csv), str(tmp_path / "out.html"))


def test_benchart_reports_missing_input(tmp_path: Path) -> None:
    """A missing input file is reported with its path."""

    with pytest.raises(CommandError, match="can't open input file"):
        call_command("benchart", str(tmp_path / "missing.csv"), str(tmp_path / "out.html"))


def test_benchart_reports_unwritable_output(input_csv: Path, tmp_path: Path) -> None:
    """An output path in a missing directory is reported."""

    with pytest.raises(CommandError, match="can't open or create output file"):
        call_command("benchart", str(input_csv), str(tmp_path / "missing" / "out.html"))


def test_benchart_requires_input_and_output() -> None:
    """Both positional paths are required."""

    with pytest.raises(CommandError):
        call_command("benchart", "only-one-argument")


def test_benchart_reports_input_that_is_not_utf8(tmp_path: Path) -> None:
    """Undecodable input bytes fail with the input path and write nothing."""

    input_path = tmp_path / "latin1.csv"
    input_path.write_bytes(b"name,time/op (ns/op),\xb1\nHash/type:crc32;bytes:4-8,4.1,1%\n")
    output = tmp_path / "out.html"

    with pytest.raises(CommandError, match="can't decode input file as UTF-8") as exc_info:
        call_command("benchart", str(input_path), str(output))

    assert str(input_path) in str(exc_info.value)
    assert not output.exists()


def test_benchart_reports_options_file_that_is_not_utf8(input_csv: Path, tmp_path: Path) -> None:
    """Undecodable options files fail with the options file path."""

    options_path = tmp_path / "options.yaml"
    options_path.write_bytes(b"Hash:\n  title: \xb1\n")

    with pytest.raises(CommandError, match="can't parse chart options") as exc_info:
        call_command(
            "benchart",
            str(input_csv),
            str(tmp_path / "out.html"),
            f"--options-file={options_path}",
        )

    assert str(options_path) in str(exc_info.value)
