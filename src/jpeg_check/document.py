"""Protocols describing the document backend and how it is located."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Protocol, Sequence, Tuple, cast

from src.datatypes import ParseConfig
from src.jpeg_check.errors import CLIAppError
from src.jpeg_check.selectors.types import (
    OutputMode,
    PictureSaveSelector,
    TableDomain,
    ThumbnailSelector,
)


class JpegDocument(Protocol):
    """A parsed document as seen by the dispatch driver.

    Every operation raises :class:`~src.jpeg_check.errors.DocumentError` on failure.
    Integer arguments use ``-1`` for "all".
    """

    def frame_count(self) -> int:
        """Return the number of frames in the document."""
        ...

    def is_complete(self) -> bool:
        """Return ``True`` when parsing reached the end of the document."""
        ...

    def format_image_info(self) -> int:
        ...

    def format_frame_info(self, frame: int) -> int:
        ...

    def format_segments(self) -> int:
        """Print every table in file order and return the number of bytes written."""
        ...

    def format_metadata(self, container_id: int, sub_ids: Sequence[int]) -> int:
        ...

    def format_table(self, frame: int, domain: TableDomain, destination: int, mode: OutputMode) -> int:
        """Print one table (or all of a domain with ``destination=-1``); return bytes written."""
        ...

    def save_thumbnails(self, selectors: Sequence[ThumbnailSelector]) -> None:
        ...

    def save_picture(self, selector: PictureSaveSelector) -> None:
        ...

    def remove_container(self, container_id: int, sub_ids: Sequence[int]) -> None:
        """Remove a whole container, or only the listed sub-containers."""
        ...

    def actual_lengths(self) -> Tuple[int, int]:
        """Return the current encoded length and the original data length."""
        ...

    def write(self, path: Path) -> int:
        ...


class DocumentLoader(Protocol):
    """Callable that parses *path* into a document, raising ``DocumentError`` on failure."""

    def __call__(self, path: Path, control: ParseConfig) -> JpegDocument:
        ...


def resolve_loader(spec: str) -> DocumentLoader:
    """
    Import the loader named by *spec* (``package.module:callable``).

    Raises:
        CLIAppError: If *spec* is empty or malformed, or the target cannot be imported.
    """
    if not spec:
        raise CLIAppError(
            "No document loader configured; set [document].loader or pass --loader.",
            code=2,
            rich_message=(
                "[red]No document loader configured.[/red] "
                "Set [bold]\\[document].loader[/bold] in the config or pass [bold]--loader[/bold]."
            ),
        )
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise CLIAppError(f"Invalid loader '{spec}'; expected 'package.module:callable'.", code=2)
    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise CLIAppError(f"Cannot import loader module '{module_name}': {exc}", code=2) from exc
    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise CLIAppError(f"Loader '{spec}' not found: {exc}", code=2) from exc
    if not callable(target):
        raise CLIAppError(f"Loader '{spec}' is not callable.", code=2)
    return cast(DocumentLoader, target)


__all__ = ["DocumentLoader", "JpegDocument", "resolve_loader"]
