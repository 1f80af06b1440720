"""Registry of the selector-valued command-line options."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .auxiliary import parse_picture_save, parse_thumbnails
from .grammar import parse_entropy, parse_metadata, parse_quantization, parse_scan
from .types import (
    EntropySelector,
    MetadataSelector,
    PictureSaveSelector,
    QuantizationSelector,
    ScanSelector,
    ThumbnailSelector,
)


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """How one selector option is spelled, parsed and documented."""

    flag: str
    parse: Callable[..., Any]
    metavar: str
    help: str
    multiple: bool = True


OPTIONS: Dict[str, OptionSpec] = {
    "meta": OptionSpec(
        flag="-meta",
        parse=partial(parse_metadata, removal=False, option="-meta"),
        metavar="ID[:SID]*[,...]",
        help=(
            "Print metadata from app segments 0-15 (-1 for all), optionally restricted "
            "to sub-container ids, e.g. -meta=0,1:0:2."
        ),
    ),
    "rmeta": OptionSpec(
        flag="-rmeta",
        parse=partial(parse_metadata, removal=True, option="-rmeta"),
        metavar="ID[:SID]*[,...]",
        help=(
            "Remove app segments 1-15 (-1 for all) or only the listed sub-containers, "
            "e.g. -rmeta=1:5:6."
        ),
    ),
    "qu": OptionSpec(
        flag="-qu",
        parse=partial(parse_quantization, option="-qu"),
        metavar="DEST[:FRAME][s|x|b][,...]",
        help="Print quantization tables; DEST 0-3 or *, FRAME defaults to 0 (* for all).",
    ),
    "en": OptionSpec(
        flag="-en",
        parse=partial(parse_entropy, option="-en"),
        metavar="CLASS:DEST[:FRAME][s|x|b][,...]",
        help="Print entropy tables; CLASS is DC, AC or * (with DEST *), e.g. -en=DC:1x,AC:*.",
    ),
    "sc": OptionSpec(
        flag="-sc",
        parse=partial(parse_scan, option="-sc"),
        metavar="INDEX[:FRAME][s|x|b][,...]",
        help="Print scan information; INDEX 0-3 or *, FRAME defaults to 0 (* for all).",
    ),
    "sthumb": OptionSpec(
        flag="-sthumb",
        parse=partial(parse_thumbnails, option="-sthumb"),
        metavar="TID:PATH[,...]",
        help="Save thumbnail 0 (main) or 1 (preview) to PATH.",
    ),
    "spict": OptionSpec(
        flag="-spict",
        parse=partial(parse_picture_save, option="-spict"),
        metavar="[ORIENT[,FMT]:]PATH",
        help="Save the picture to PATH; ORIENT is tl/tr/br/bl/lt/rt/rb/lb, FMT is co or bw.",
        multiple=False,
    ),
}


@dataclass(frozen=True)
class SelectorSet:
    """All selector lists requested on one command line, in execution order per option."""

    meta: Tuple[MetadataSelector, ...] = ()
    rmeta: Tuple[MetadataSelector, ...] = ()
    qu: Tuple[QuantizationSelector, ...] = ()
    en: Tuple[EntropySelector, ...] = ()
    sc: Tuple[ScanSelector, ...] = ()
    sthumb: Tuple[ThumbnailSelector, ...] = ()
    spict: Optional[PictureSaveSelector] = field(default=None)


def parse_options(values: Mapping[str, Optional[str]]) -> SelectorSet:
    """
    Parse every provided selector option into a :class:`SelectorSet`.

    Parameters:
        values (Mapping[str, Optional[str]]): Raw option values keyed by registry name;
            ``None`` marks an option that was not given.

    Raises:
        KeyError: If a key is not a registered selector option.
        SelectorError: On the first option value that fails to parse.
    """
    unknown = set(values) - set(OPTIONS)
    if unknown:
        raise KeyError(f"unknown selector options: {', '.join(sorted(unknown))}")
    parsed: Dict[str, Any] = {}
    for name, spec in OPTIONS.items():
        raw = values.get(name)
        if raw is None:
            continue
        result = spec.parse(raw)
        parsed[name] = tuple(result) if spec.multiple else result
    return SelectorSet(**parsed)


__all__ = ["OPTIONS", "OptionSpec", "SelectorSet", "parse_options"]
