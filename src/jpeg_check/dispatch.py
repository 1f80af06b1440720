"""
Wildcard resolution and sequential dispatch of selector lists.

Selectors are parsed before the document exists, so ALL frames can only be expanded
once ``frame_count()`` is known. Each list runs in input order, frames in increasing
order within a selector, and the first :class:`DocumentError` ends the list. The
outcome is aggregated into a :class:`DispatchReport` so callers can inspect exactly
which calls completed before the failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from src.jpeg_check.document import JpegDocument
from src.jpeg_check.errors import DispatchError, DocumentError
from src.jpeg_check.selectors.types import (
    ALL,
    ALL_INDEX,
    EntropySelector,
    Field,
    MetadataSelector,
    OutputMode,
    PictureSaveSelector,
    QuantizationSelector,
    ScanSelector,
    TableDomain,
    TableSelector,
    ThumbnailSelector,
    field_index,
)

logger = logging.getLogger(__name__)

ENTROPY_DESTINATIONS_PER_CLASS = 4


@dataclass(frozen=True, slots=True)
class TableCall:
    """One concrete ``format_table`` invocation."""

    frame: int
    domain: TableDomain
    destination: int
    mode: OutputMode


@dataclass(frozen=True, slots=True)
class DispatchFailure:
    selector: Any
    error: DocumentError
    call: Optional[TableCall] = None

    @property
    def frame(self) -> Optional[int]:
        return self.call.frame if self.call is not None else None


@dataclass
class DispatchReport:
    """Calls completed for one option, plus the failure that stopped it, if any."""

    option: str
    completed: List[Any] = field(default_factory=list)
    bytes_written: int = 0
    failure: Optional[DispatchFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def error(self) -> Optional[DocumentError]:
        return self.failure.error if self.failure is not None else None

    def raise_for_failure(self) -> None:
        """Raise :class:`DispatchError` chained to the backend error when the run failed."""

        if self.failure is None:
            return
        raise DispatchError(
            self.option,
            self.failure.selector,
            self.failure.error,
            frame=self.failure.frame,
        ) from self.failure.error


def expand_frames(frame: Field, frame_count: Callable[[], int]) -> range:
    """Return the concrete frames for *frame*; ``frame_count`` is only consulted for ALL."""

    if frame is ALL:
        return range(frame_count())
    return range(frame, frame + 1)


def entropy_destinations(selector: EntropySelector) -> Tuple[int, ...]:
    """
    Flatten class and destination into the backend's single entropy index.

    DC tables are 0-3 and AC tables 4-7. An ALL class passes ``-1`` so the backend
    prints all eight; an ALL destination within one class expands to its four tables.
    """
    if selector.table_class is ALL:
        return (ALL_INDEX,)
    base = int(selector.table_class) * ENTROPY_DESTINATIONS_PER_CLASS
    if selector.destination is ALL:
        return tuple(base + offset for offset in range(ENTROPY_DESTINATIONS_PER_CLASS))
    return (base + selector.destination,)


def _destinations(selector: TableSelector) -> Tuple[TableDomain, Tuple[int, ...]]:
    if isinstance(selector, QuantizationSelector):
        return TableDomain.QUANTIZATION, (field_index(selector.destination),)
    if isinstance(selector, EntropySelector):
        return TableDomain.ENTROPY, entropy_destinations(selector)
    if isinstance(selector, ScanSelector):
        return TableDomain.SCAN, (field_index(selector.index),)
    raise TypeError(f"not a table selector: {selector!r}")


def resolve_table_calls(selector: TableSelector, frame_count: Callable[[], int]) -> Iterator[TableCall]:
    """Yield the concrete calls for *selector*, frame by frame."""

    domain, destinations = _destinations(selector)
    for frame in expand_frames(selector.frame, frame_count):
        for destination in destinations:
            yield TableCall(frame, domain, destination, selector.mode)


def dispatch_tables(
    document: JpegDocument,
    selectors: Sequence[TableSelector],
    *,
    option: str,
) -> DispatchReport:
    """Run ``format_table`` for every concrete call of *selectors*, stopping at the first failure."""

    report = DispatchReport(option)
    for selector in selectors:
        for call in resolve_table_calls(selector, document.frame_count):
            logger.debug(
                "%s: frame %d %s destination %d (%s)",
                option,
                call.frame,
                call.domain.value,
                call.destination,
                call.mode.name.lower(),
            )
            try:
                written = document.format_table(call.frame, call.domain, call.destination, call.mode)
            except DocumentError as exc:
                report.failure = DispatchFailure(selector, exc, call)
                return report
            report.completed.append(call)
            report.bytes_written += written or 0
    return report


def dispatch_metadata(
    document: JpegDocument,
    selectors: Sequence[MetadataSelector],
    *,
    option: str = "-meta",
) -> DispatchReport:
    report = DispatchReport(option)
    for selector in selectors:
        container_id = field_index(selector.container_id)
        logger.debug("%s: container %d sub-ids %s", option, container_id, list(selector.sub_ids))
        try:
            written = document.format_metadata(container_id, list(selector.sub_ids))
        except DocumentError as exc:
            report.failure = DispatchFailure(selector, exc)
            return report
        report.completed.append(selector)
        report.bytes_written += written or 0
    return report


def dispatch_removals(
    document: JpegDocument,
    selectors: Sequence[MetadataSelector],
    *,
    option: str = "-rmeta",
) -> DispatchReport:
    """Remove containers in order; containers are not per-frame so nothing is expanded."""

    report = DispatchReport(option)
    for selector in selectors:
        container_id = field_index(selector.container_id)
        logger.debug("%s: removing container %d sub-ids %s", option, container_id, list(selector.sub_ids))
        try:
            document.remove_container(container_id, list(selector.sub_ids))
        except DocumentError as exc:
            report.failure = DispatchFailure(selector, exc)
            return report
        report.completed.append(selector)
    return report


def dispatch_thumbnails(
    document: JpegDocument,
    selectors: Sequence[ThumbnailSelector],
    *,
    option: str = "-sthumb",
) -> DispatchReport:
    report = DispatchReport(option)
    if not selectors:
        return report
    try:
        document.save_thumbnails(list(selectors))
    except DocumentError as exc:
        report.failure = DispatchFailure(",".join(str(selector) for selector in selectors), exc)
        return report
    report.completed.extend(selectors)
    return report


def dispatch_picture(
    document: JpegDocument,
    selector: Optional[PictureSaveSelector],
    *,
    option: str = "-spict",
) -> DispatchReport:
    report = DispatchReport(option)
    if selector is None:
        return report
    try:
        document.save_picture(selector)
    except DocumentError as exc:
        report.failure = DispatchFailure(selector, exc)
        return report
    report.completed.append(selector)
    return report


__all__ = [
    "DispatchFailure",
    "DispatchReport",
    "TableCall",
    "dispatch_metadata",
    "dispatch_picture",
    "dispatch_removals",
    "dispatch_tables",
    "dispatch_thumbnails",
    "entropy_destinations",
    "expand_frames",
    "resolve_table_calls",
]
