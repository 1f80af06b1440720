"""Option grammars for table, scan and metadata selection."""

from __future__ import annotations

from typing import List, Sequence

from src.jpeg_check.errors import (
    InvalidSelectorError,
    SelectorConstraintError,
    SelectorSyntaxError,
)

from .tokens import WILDCARD_TOKEN, OptionTokens, split_entries, split_fields
from .types import (
    ALL,
    ALL_INDEX,
    EntropySelector,
    Field,
    MetadataSelector,
    QuantizationSelector,
    ScanSelector,
    TableClass,
    Wildcard,
)

MAX_TABLE_DESTINATION = 3
MAX_SCAN_INDEX = 3
MAX_CONTAINER_ID = 15

DISPLAY_LOW_BOUND = 0
REMOVAL_LOW_BOUND = 1

_CLASS_TOKENS = {
    WILDCARD_TOKEN: ALL,
    "DC": TableClass.DC,
    "AC": TableClass.AC,
}


def _frame(tokens: OptionTokens, fields: Sequence[str], position: int, label: str) -> Field:
    if len(fields) <= position:
        return 0
    return tokens.field(fields[position], f"{label} frame")


def parse_quantization(value: str, *, option: str = "-qu") -> List[QuantizationSelector]:
    """Parse ``<dest|*>[:<frame|*>][s|x|b][,...]`` into quantization selectors."""

    tokens = OptionTokens(option, value)
    selectors: List[QuantizationSelector] = []
    for entry in split_entries(value):
        mode, entry = tokens.mode(entry)
        fields = tokens.fields(entry, minimum=1, maximum=2, label="Quantization table")
        destination = tokens.field(
            fields[0], "Quantization table destination", high=MAX_TABLE_DESTINATION
        )
        frame = _frame(tokens, fields, 1, "Quantization table")
        selectors.append(QuantizationSelector(destination, frame, mode))
    return selectors


def parse_entropy(value: str, *, option: str = "-en") -> List[EntropySelector]:
    """
    Parse ``<DC|AC|*>:<dest|*>[:<frame|*>][s|x|b][,...]`` into entropy selectors.

    A wildcard class covers both classes and every destination, so it cannot be
    combined with a specific destination.
    """

    tokens = OptionTokens(option, value)
    selectors: List[EntropySelector] = []
    for entry in split_entries(value):
        mode, entry = tokens.mode(entry)
        fields = tokens.fields(entry, minimum=2, maximum=3, label="Entropy table")
        if fields[0] not in _CLASS_TOKENS:
            raise tokens.error(
                InvalidSelectorError, "invalid Entropy table class", fields[0]
            )
        table_class = _CLASS_TOKENS[fields[0]]
        destination = tokens.field(
            fields[1], "Entropy table destination", high=MAX_TABLE_DESTINATION
        )
        if table_class is ALL and destination is not ALL:
            raise tokens.error(
                SelectorConstraintError,
                "unsupported case: specific destination for all classes",
                entry,
            )
        frame = _frame(tokens, fields, 2, "Entropy table")
        selectors.append(EntropySelector(table_class, destination, frame, mode))
    return selectors


def parse_scan(value: str, *, option: str = "-sc") -> List[ScanSelector]:
    """Parse ``<index|*>[:<frame|*>][s|x|b][,...]`` into scan selectors."""

    tokens = OptionTokens(option, value)
    selectors: List[ScanSelector] = []
    for entry in split_entries(value):
        mode, entry = tokens.mode(entry)
        fields = tokens.fields(entry, minimum=1, maximum=2, label="Scan table")
        index = tokens.field(fields[0], "Scan table index", high=MAX_SCAN_INDEX)
        frame = _frame(tokens, fields, 1, "Scan table")
        selectors.append(ScanSelector(index, frame, mode))
    return selectors


def parse_metadata(value: str, *, removal: bool = False, option: str | None = None) -> List[MetadataSelector]:
    """
    Parse ``<id>[:<sub>]*[,...]`` into metadata container selectors.

    Container ids range from the low bound to 15; ``-1`` (or ``*``) selects every
    container. The low bound is 0 for display and 1 for removal, since container 0
    can be shown but never removed. Sub-ids share the same low bound.

    An ALL selector ends the list: entries after it are neither parsed nor returned.
    """

    if option is None:
        option = "-rmeta" if removal else "-meta"
    low = REMOVAL_LOW_BOUND if removal else DISPLAY_LOW_BOUND
    tokens = OptionTokens(option, value)
    selectors: List[MetadataSelector] = []
    for entry in split_entries(value):
        if not entry:
            raise tokens.error(SelectorSyntaxError, "syntax error, empty selector")
        fields = split_fields(entry)
        container: Field
        if fields[0] == WILDCARD_TOKEN:
            container = ALL
        else:
            number = tokens.integer(
                fields[0],
                "Id",
                low=low,
                high=MAX_CONTAINER_ID,
                accept=lambda n: n == ALL_INDEX,
            )
            container = ALL if number == ALL_INDEX else number
        if isinstance(container, Wildcard):
            selectors.append(MetadataSelector(ALL))
            return selectors
        sub_ids = tuple(tokens.integer(sub, "Id", low=low) for sub in fields[1:])
        selectors.append(MetadataSelector(container, sub_ids))
    return selectors


__all__ = [
    "DISPLAY_LOW_BOUND",
    "MAX_CONTAINER_ID",
    "MAX_SCAN_INDEX",
    "MAX_TABLE_DESTINATION",
    "REMOVAL_LOW_BOUND",
    "parse_entropy",
    "parse_metadata",
    "parse_quantization",
    "parse_scan",
]
