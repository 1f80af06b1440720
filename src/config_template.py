"""Default configuration template written by ``jcheck --write-config``."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "jcheck.toml"

DEFAULT_CONFIG_TEXT = """\
# jcheck configuration. Command-line flags override these values.

[parse]
warn = false
tidyup = false
recurse = false
markers = false
mcu = false
du = false
begin = 0
# end = 100  # last MCU printed with mcu/du; omitted means end of scan

[display]
tables = false
frame_info = true

[document]
# Document backend as "package.module:callable"; called as loader(path, parse_config).
loader = ""

[cli]
verbose = false
no_color = false
"""


def default_config_text() -> str:
    """Return the default configuration as TOML text."""

    return DEFAULT_CONFIG_TEXT


def copy_default_config(destination: str | Path, *, overwrite: bool = False) -> Path:
    """
    Write the default configuration to *destination* and return its path.

    Raises:
        FileExistsError: If the file exists and *overwrite* is false.
    """
    target = Path(destination).expanduser()
    if target.exists() and not overwrite:
        raise FileExistsError(f"Config already exists at {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(default_config_text(), encoding="utf-8")
    return target


__all__ = ["DEFAULT_CONFIG_FILENAME", "DEFAULT_CONFIG_TEXT", "copy_default_config", "default_config_text"]
