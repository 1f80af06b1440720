"""One-shot grammars for thumbnail and picture saving."""

from __future__ import annotations

from typing import Dict, List, Optional

from src.jpeg_check.errors import InvalidSelectorError, SelectorSyntaxError

from .tokens import ENTRY_SEPARATOR, FIELD_SEPARATOR, OptionTokens, split_entries, split_fields
from .types import Orientation, PictureSaveSelector, Side, ThumbnailSelector

THUMBNAIL_IDS = (0, 1)

ORIENTATION_CODES: Dict[str, Orientation] = {
    "tl": (Side.TOP, Side.LEFT),
    "tr": (Side.TOP, Side.RIGHT),
    "br": (Side.BOTTOM, Side.RIGHT),
    "bl": (Side.BOTTOM, Side.LEFT),
    "lt": (Side.LEFT, Side.TOP),
    "rt": (Side.RIGHT, Side.TOP),
    "rb": (Side.RIGHT, Side.BOTTOM),
    "lb": (Side.LEFT, Side.BOTTOM),
}
"""Orientation code to (row 0 side, column 0 side); listed in EXIF orientation order 1-8."""

FORMAT_CODES: Dict[str, bool] = {
    "co": False,
    "bw": True,
}
"""Format code to monochrome flag."""


def parse_thumbnails(value: str, *, option: str = "-sthumb") -> List[ThumbnailSelector]:
    """Parse ``<0|1>:<path>[,...]``; 0 is the main thumbnail and 1 an optional preview."""

    tokens = OptionTokens(option, value)
    selectors: List[ThumbnailSelector] = []
    for entry in split_entries(value):
        fields = split_fields(entry)
        if len(fields) != 2 or not fields[1]:
            raise tokens.error(InvalidSelectorError, "missing path or id", entry)
        thumbnail_id = tokens.integer(fields[0], "thumbnail Id", low=0, high=THUMBNAIL_IDS[-1])
        selectors.append(ThumbnailSelector(thumbnail_id, fields[1]))
    return selectors


def parse_picture_save(value: str, *, option: str = "-spict") -> PictureSaveSelector:
    """
    Parse ``[<orientation>[,<format>]:]<path>``.

    Without a ``:`` the whole value is the path and the orientation stays unset so the
    backend can fall back on the document's own metadata.
    """

    tokens = OptionTokens(option, value)
    if value.count(FIELD_SEPARATOR) > 1:
        raise tokens.error(SelectorSyntaxError, "syntax error, too many ':'")
    if FIELD_SEPARATOR not in value:
        path = value
        if not path:
            raise tokens.error(InvalidSelectorError, "missing path")
        return PictureSaveSelector(path)

    settings, path = value.split(FIELD_SEPARATOR)
    if not path:
        raise tokens.error(InvalidSelectorError, "missing path")
    if settings.count(ENTRY_SEPARATOR) > 1:
        raise tokens.error(SelectorSyntaxError, "syntax error, too many ','", settings)

    orientation_code, _, format_code = settings.partition(ENTRY_SEPARATOR)
    orientation: Optional[Orientation] = ORIENTATION_CODES.get(orientation_code)
    if orientation is None:
        raise tokens.error(InvalidSelectorError, "invalid orientation", orientation_code)
    monochrome = False
    if ENTRY_SEPARATOR in settings:
        if format_code not in FORMAT_CODES:
            raise tokens.error(InvalidSelectorError, "invalid format", format_code)
        monochrome = FORMAT_CODES[format_code]
    return PictureSaveSelector(path, orientation, monochrome)


__all__ = [
    "FORMAT_CODES",
    "ORIENTATION_CODES",
    "THUMBNAIL_IDS",
    "parse_picture_save",
    "parse_thumbnails",
]
