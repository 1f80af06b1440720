"""Recording document backend used by dispatch, runner and CLI tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from src.datatypes import ParseConfig
from src.jpeg_check.errors import DocumentError
from src.jpeg_check.selectors.types import (
    OutputMode,
    PictureSaveSelector,
    TableDomain,
    ThumbnailSelector,
)

Call = Tuple[Any, ...]


class RecordingDocument:
    """Records every operation as a tuple; ``fail_when`` makes matching calls raise."""

    def __init__(
        self,
        frames: int = 1,
        *,
        complete: bool = True,
        fail_when: Optional[Callable[[Call], bool]] = None,
        error: Optional[DocumentError] = None,
    ) -> None:
        self.frames = frames
        self.complete = complete
        self.fail_when = fail_when
        self.error = error or DocumentError("backend failure")
        self.calls: List[Call] = []
        self.frame_count_calls = 0
        self.path: Optional[Path] = None
        self.control: Optional[ParseConfig] = None

    def _record(self, call: Call) -> None:
        self.calls.append(call)
        if self.fail_when is not None and self.fail_when(call):
            raise self.error

    def calls_named(self, name: str) -> List[Call]:
        return [call for call in self.calls if call[0] == name]

    def frame_count(self) -> int:
        self.frame_count_calls += 1
        return self.frames

    def is_complete(self) -> bool:
        return self.complete

    def format_image_info(self) -> int:
        self._record(("image_info",))
        return 10

    def format_frame_info(self, frame: int) -> int:
        self._record(("frame_info", frame))
        return 10

    def format_segments(self) -> int:
        self._record(("segments",))
        return 42

    def format_metadata(self, container_id: int, sub_ids: Sequence[int]) -> int:
        self._record(("metadata", container_id, tuple(sub_ids)))
        return 5

    def format_table(self, frame: int, domain: TableDomain, destination: int, mode: OutputMode) -> int:
        self._record(("table", frame, domain, destination, mode))
        return 7

    def save_thumbnails(self, selectors: Sequence[ThumbnailSelector]) -> None:
        self._record(("thumbnails", tuple(selectors)))

    def save_picture(self, selector: PictureSaveSelector) -> None:
        self._record(("picture", selector))

    def remove_container(self, container_id: int, sub_ids: Sequence[int]) -> None:
        self._record(("remove", container_id, tuple(sub_ids)))

    def actual_lengths(self) -> Tuple[int, int]:
        return 1000, 1200

    def write(self, path: Path) -> int:
        self._record(("write", Path(path)))
        return 1000


class RecordingLoader:
    """Loader returning a prepared :class:`RecordingDocument` (or raising ``error``)."""

    def __init__(self, document: Optional[RecordingDocument] = None, *, error: Optional[DocumentError] = None) -> None:
        self.document = document or RecordingDocument()
        self.error = error
        self.loaded: List[Tuple[Path, ParseConfig]] = []

    def __call__(self, path: Path, control: ParseConfig) -> RecordingDocument:
        self.loaded.append((path, control))
        if self.error is not None:
            raise self.error
        self.document.path = path
        self.document.control = control
        return self.document


def load(path: Path, control: ParseConfig) -> RecordingDocument:
    """Module-level loader usable as ``--loader tests.helpers.fake_document:load``."""

    return RecordingLoader()(path, control)


__all__ = ["RecordingDocument", "RecordingLoader", "load"]
