"""Selector records produced by the option grammars."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Final, Optional, Tuple, Union


class OutputMode(str, Enum):
    """Which textual rendering(s) of a table the backend should produce."""

    STANDARD = "s"
    EXTRA = "x"
    BOTH = "b"


class Wildcard(Enum):
    """Tagged sentinel for a field given as ``*`` (every legal value)."""

    ALL = "*"

    def __repr__(self) -> str:
        return "ALL"


ALL: Final = Wildcard.ALL

ALL_INDEX: Final[int] = -1
"""Integer form of :data:`ALL` expected by document backends."""

Field = Union[int, Wildcard]


def _token(value: Field) -> str:
    return "*" if value is ALL else str(int(value))


def field_index(value: Field) -> int:
    """Return the backend integer for *value* (``-1`` for :data:`ALL`)."""

    return ALL_INDEX if value is ALL else value


class TableDomain(str, Enum):
    """Table families addressed by ``format_table``."""

    QUANTIZATION = "quantization"
    ENTROPY = "entropy"
    SCAN = "scan"


class TableClass(IntEnum):
    """Entropy table classes."""

    DC = 0
    AC = 1


class Side(str, Enum):
    """Picture edge used to describe where row 0 or column 0 is displayed."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


Orientation = Tuple[Side, Side]


@dataclass(frozen=True, slots=True)
class QuantizationSelector:
    destination: Field
    frame: Field = 0
    mode: OutputMode = OutputMode.STANDARD

    def __str__(self) -> str:
        return f"{_token(self.destination)}:{_token(self.frame)}{self.mode.value}"


@dataclass(frozen=True, slots=True)
class EntropySelector:
    table_class: Union[TableClass, Wildcard]
    destination: Field
    frame: Field = 0
    mode: OutputMode = OutputMode.STANDARD

    def __str__(self) -> str:
        table_class = "*" if self.table_class is ALL else self.table_class.name
        return f"{table_class}:{_token(self.destination)}:{_token(self.frame)}{self.mode.value}"


@dataclass(frozen=True, slots=True)
class ScanSelector:
    index: Field
    frame: Field = 0
    mode: OutputMode = OutputMode.STANDARD

    def __str__(self) -> str:
        return f"{_token(self.index)}:{_token(self.frame)}{self.mode.value}"


@dataclass(frozen=True, slots=True)
class MetadataSelector:
    """Container id plus optional sub-container ids; no sub-ids means the whole container."""

    container_id: Field
    sub_ids: Tuple[int, ...] = ()

    def __str__(self) -> str:
        container = str(ALL_INDEX) if self.container_id is ALL else str(self.container_id)
        return ":".join([container, *(str(sub_id) for sub_id in self.sub_ids)])


@dataclass(frozen=True, slots=True)
class ThumbnailSelector:
    thumbnail_id: int
    path: str

    def __str__(self) -> str:
        return f"{self.thumbnail_id}:{self.path}"


@dataclass(frozen=True, slots=True)
class PictureSaveSelector:
    """Where and how to save the picture.

    ``orientation`` is ``None`` when no code was given, in which case the backend
    defers to the document's own metadata or its default.
    """

    path: str
    orientation: Optional[Orientation] = None
    monochrome: bool = False

    @property
    def row_zero_side(self) -> Optional[Side]:
        return self.orientation[0] if self.orientation else None

    @property
    def col_zero_side(self) -> Optional[Side]:
        return self.orientation[1] if self.orientation else None


TableSelector = Union[QuantizationSelector, EntropySelector, ScanSelector]

__all__ = [
    "ALL",
    "ALL_INDEX",
    "EntropySelector",
    "Field",
    "MetadataSelector",
    "Orientation",
    "OutputMode",
    "PictureSaveSelector",
    "QuantizationSelector",
    "ScanSelector",
    "Side",
    "TableClass",
    "TableDomain",
    "TableSelector",
    "ThumbnailSelector",
    "Wildcard",
    "field_index",
]
