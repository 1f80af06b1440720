"""Selector mini-language: option grammars and the records they produce."""

from .auxiliary import FORMAT_CODES, ORIENTATION_CODES, parse_picture_save, parse_thumbnails
from .grammar import parse_entropy, parse_metadata, parse_quantization, parse_scan
from .options import OPTIONS, OptionSpec, SelectorSet, parse_options
from .tokens import parse_int, parse_mode_suffix
from .types import (
    ALL,
    ALL_INDEX,
    EntropySelector,
    MetadataSelector,
    OutputMode,
    PictureSaveSelector,
    QuantizationSelector,
    ScanSelector,
    Side,
    TableClass,
    TableDomain,
    ThumbnailSelector,
    Wildcard,
    field_index,
)

__all__ = [
    "ALL",
    "ALL_INDEX",
    "EntropySelector",
    "FORMAT_CODES",
    "MetadataSelector",
    "OPTIONS",
    "ORIENTATION_CODES",
    "OptionSpec",
    "OutputMode",
    "PictureSaveSelector",
    "QuantizationSelector",
    "ScanSelector",
    "SelectorSet",
    "Side",
    "TableClass",
    "TableDomain",
    "ThumbnailSelector",
    "Wildcard",
    "field_index",
    "parse_entropy",
    "parse_int",
    "parse_metadata",
    "parse_mode_suffix",
    "parse_options",
    "parse_picture_save",
    "parse_quantization",
    "parse_scan",
    "parse_thumbnails",
]
