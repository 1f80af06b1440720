"""Configuration dataclasses for the jcheck tool."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ParseConfig:
    """Controls handed to the document backend while it parses the input."""

    warn: bool = False
    tidyup: bool = False
    recurse: bool = False
    markers: bool = False
    mcu: bool = False
    du: bool = False
    begin: int = 0
    end: Optional[int] = None


@dataclass
class DisplayConfig:
    """What is printed after a successful parse, besides the selector options."""

    tables: bool = False
    frame_info: bool = True


@dataclass
class DocumentConfig:
    """Document backend selection as ``module:callable``."""

    loader: str = ""


@dataclass
class CLIConfig:
    """Console presentation defaults."""

    verbose: bool = False
    no_color: bool = False


@dataclass
class AppConfig:
    """Top-level configuration composed of all sections."""

    parse: ParseConfig = field(default_factory=ParseConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
