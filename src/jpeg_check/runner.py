"""End-to-end check workflow shared by the CLI and library callers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from src.datatypes import DisplayConfig, ParseConfig
from src.jpeg_check.dispatch import (
    DispatchReport,
    dispatch_metadata,
    dispatch_picture,
    dispatch_removals,
    dispatch_tables,
    dispatch_thumbnails,
)
from src.jpeg_check.document import DocumentLoader, JpegDocument
from src.jpeg_check.errors import CLIAppError, DocumentError
from src.jpeg_check.selectors.options import SelectorSet

logger = logging.getLogger(__name__)


@dataclass
class RunRequest:
    """Everything needed to check one document."""

    input_path: Path
    loader: DocumentLoader
    selectors: SelectorSet = field(default_factory=SelectorSet)
    control: ParseConfig = field(default_factory=ParseConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    output_path: Optional[Path] = None
    console: Optional[Console] = None


@dataclass
class RunResult:
    document: JpegDocument
    reports: List[DispatchReport] = field(default_factory=list)
    actual_length: Optional[int] = None
    original_length: Optional[int] = None
    written_bytes: Optional[int] = None


def consistency_warnings(request: RunRequest) -> List[str]:
    """Return warnings for modification flags that do not match the output request."""

    warnings: List[str] = []
    removing = bool(request.selectors.rmeta)
    if request.output_path is None:
        if request.control.tidyup:
            warnings.append(
                "although tidying up the original file is requested, NO output file is requested; proceeding anyway"
            )
        if removing:
            warnings.append(
                "although removing metadata from the original file is requested, "
                "NO output file is requested; proceeding anyway"
            )
    elif not request.control.tidyup and not removing:
        warnings.append(
            "although an output file is requested, tidying up or removing metadata from the "
            "original file is NOT requested; proceeding anyway"
        )
    return warnings


def _finish(result: RunResult, report: DispatchReport) -> None:
    result.reports.append(report)
    report.raise_for_failure()


def run(request: RunRequest) -> RunResult:
    """
    Load the document and execute every requested action in the tool's fixed order.

    Order: image info, frame 0 info, all tables, metadata, quantization, entropy and
    scan tables, thumbnails, picture, metadata removal, then the optional copy.

    Raises:
        CLIAppError: If the document cannot be loaded, is incomplete, or cannot be written.
        DispatchError: If an operation fails while a selector list is executing; earlier
            output is not undone.
    """
    console = request.console or Console(highlight=False)
    for warning in consistency_warnings(request):
        logger.warning(warning)

    console.print(f"jcheck: checking file {escape(str(request.input_path))}")
    try:
        document = request.loader(request.input_path, request.control)
    except DocumentError as exc:
        raise CLIAppError(
            f"Failed to load {request.input_path}: {exc}",
            rich_message=f"[red]Failed to load[/red] {escape(str(request.input_path))}: {escape(str(exc))}",
        ) from exc

    result = RunResult(document=document)
    try:
        document.format_image_info()
        if not document.is_complete():
            raise CLIAppError(
                f"{request.input_path} is incomplete; skipping table display and modifications",
                rich_message=(
                    f"[yellow]{escape(str(request.input_path))} is incomplete;[/yellow] "
                    "skipping table display and modifications"
                ),
            )

        if request.display.frame_info:
            document.format_frame_info(0)
        if request.display.tables:
            written = document.format_segments()
            console.print(f"jcheck: formatted {written} bytes")

        selectors = request.selectors
        _finish(result, dispatch_metadata(document, selectors.meta))
        _finish(result, dispatch_tables(document, selectors.qu, option="-qu"))
        _finish(result, dispatch_tables(document, selectors.en, option="-en"))
        _finish(result, dispatch_tables(document, selectors.sc, option="-sc"))
        _finish(result, dispatch_thumbnails(document, selectors.sthumb))
        _finish(result, dispatch_picture(document, selectors.spict))
        _finish(result, dispatch_removals(document, selectors.rmeta))

        actual, original = document.actual_lengths()
        result.actual_length, result.original_length = actual, original
        console.print(f"Actual JPEG length: {actual} (original data length: {original})")

        if request.output_path is not None:
            console.print(f"Generating a copy as '{escape(str(request.output_path))}'")
            result.written_bytes = document.write(request.output_path)
            console.print(f"jcheck: written {result.written_bytes} bytes")
    except DocumentError as exc:
        raise CLIAppError(
            f"{request.input_path}: {exc}",
            rich_message=f"[red]jcheck:[/red] {escape(str(exc))}",
        ) from exc
    return result


__all__ = ["RunRequest", "RunResult", "consistency_warnings", "run"]
