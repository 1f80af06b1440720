from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.console import Console

from src.datatypes import DisplayConfig, ParseConfig
from src.jpeg_check.errors import CLIAppError, DispatchError, DocumentError
from src.jpeg_check.runner import RunRequest, consistency_warnings, run
from src.jpeg_check.selectors import parse_options
from tests.helpers.fake_document import RecordingDocument, RecordingLoader



@pytest.fixture
def quiet_console(tmp_path: Path):
    with open(tmp_path / "console.txt", "w", encoding="utf-8") as handle:
        yield Console(file=handle, highlight=False, width=200)


def test_run_without_selectors(loader: RecordingLoader, quiet_console: Console) -> None:
    result = run(RunRequest(Path("in.jpg"), loader, console=quiet_console))
    assert loader.loaded[0][0] == Path("in.jpg")
    assert loader.document.calls == [("image_info",), ("frame_info", 0)]
    assert result.actual_length == 1000
    assert result.original_length == 1200
    assert result.written_bytes is None
    assert [report.option for report in result.reports] == [
        "-meta", "-qu", "-en", "-sc", "-sthumb", "-spict", "-rmeta",
    ]


def test_frame_info_can_be_disabled(loader: RecordingLoader, quiet_console: Console) -> None:
    request = RunRequest(
        Path("in.jpg"),
        loader,
        display=DisplayConfig(tables=True, frame_info=False),
        console=quiet_console,
    )
    run(request)
    assert loader.document.calls == [("image_info",), ("segments",)]


def test_run_passes_parse_controls(loader: RecordingLoader, quiet_console: Console) -> None:
    control = ParseConfig(warn=True, mcu=True, begin=3, end=7)
    run(RunRequest(Path("in.jpg"), loader, control=control, console=quiet_console))
    assert loader.loaded[0][1] is control


def test_dispatch_failure_propagates_after_partial_output(quiet_console: Console) -> None:
    document = RecordingDocument(frames=2, fail_when=lambda call: call[0] == "table" and call[2].value == "entropy")
    request = RunRequest(
        Path("in.jpg"),
        RecordingLoader(document),
        selectors=parse_options({"meta": "1", "qu": "0:*", "en": "DC:0", "rmeta": "2"}),
        console=quiet_console,
    )
    with pytest.raises(DispatchError) as excinfo:
        run(request)
    assert excinfo.value.option == "-en"
    assert [call[0] for call in document.calls] == [
        "image_info", "frame_info", "metadata", "table", "table", "table",
    ]
    assert document.calls_named("remove") == []


def test_load_error_becomes_cli_error(quiet_console: Console) -> None:
    loader = RecordingLoader(error=DocumentError("truncated SOI"))
    with pytest.raises(CLIAppError) as excinfo:
        run(RunRequest(Path("in.jpg"), loader, console=quiet_console))
    assert excinfo.value.code == 1
    assert "truncated SOI" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, DocumentError)


def test_incomplete_document_stops_after_image_info(quiet_console: Console) -> None:
    loader = RecordingLoader(RecordingDocument(complete=False))
    request = RunRequest(
        Path("in.jpg"),
        loader,
        selectors=parse_options({"qu": "0"}),
        output_path=Path("out.jpg"),
        console=quiet_console,
    )
    with pytest.raises(CLIAppError, match="incomplete"):
        run(request)
    assert loader.document.calls == [("image_info",)]


def test_write_failure_becomes_cli_error(quiet_console: Console) -> None:
    document = RecordingDocument(fail_when=lambda call: call[0] == "write", error=DocumentError("disk full"))
    request = RunRequest(
        Path("in.jpg"),
        RecordingLoader(document),
        control=ParseConfig(tidyup=True),
        output_path=Path("out.jpg"),
        console=quiet_console,
    )
    with pytest.raises(CLIAppError, match="disk full"):
        run(request)


def test_output_written_after_removals(loader: RecordingLoader, quiet_console: Console) -> None:
    request = RunRequest(
        Path("in.jpg"),
        loader,
        selectors=parse_options({"rmeta": "-1"}),
        output_path=Path("out.jpg"),
        console=quiet_console,
    )
    result = run(request)
    assert loader.document.calls[-2:] == [("remove", -1, ()), ("write", Path("out.jpg"))]
    assert result.written_bytes == 1000


@pytest.mark.parametrize(
    ("tidyup", "rmeta", "output", "expected"),
    [
        (False, None, None, []),
        (True, None, None, ["tidying up"]),
        (False, "1", None, ["removing metadata"]),
        (True, "1", None, ["tidying up", "removing metadata"]),
        (False, None, Path("out.jpg"), ["NOT requested"]),
        (True, None, Path("out.jpg"), []),
        (False, "1", Path("out.jpg"), []),
    ],
)
def test_consistency_warnings(loader, tidyup: bool, rmeta, output, expected) -> None:
    request = RunRequest(
        Path("in.jpg"),
        loader,
        selectors=parse_options({"rmeta": rmeta}),
        control=ParseConfig(tidyup=tidyup),
        output_path=output,
    )
    warnings = consistency_warnings(request)
    assert len(warnings) == len(expected)
    for warning, fragment in zip(warnings, expected):
        assert fragment in warning


def test_warnings_are_logged(loader, quiet_console: Console, caplog: pytest.LogCaptureFixture) -> None:
    request = RunRequest(Path("in.jpg"), loader, control=ParseConfig(tidyup=True), console=quiet_console)
    with caplog.at_level(logging.WARNING, logger="src.jpeg_check.runner"):
        run(request)
    assert any("tidying up" in record.getMessage() for record in caplog.records)
