"""Helpers for merging command-line flags with configuration defaults."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

import click
from click.core import ParameterSource

T = TypeVar("T")


def explicit_value(ctx: click.Context, name: str, value: Optional[T]) -> Optional[T]:
    """
    Return ``value`` when the parameter *name* was typed on the command line, else ``None``.

    Defaults and environment-provided values defer to the configuration file.
    """

    if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE:
        return value
    return None


def merged_flag(ctx: click.Context, name: str, value: bool, *, default: bool) -> bool:
    """Return the flag when passed explicitly, otherwise the configured *default*."""

    override = explicit_value(ctx, name, value)
    return default if override is None else bool(override)


class AttachedValue(click.ParamType):
    """
    Wrap *inner* so a single-letter option also accepts ``-o=value``.

    Click parses ``-o=out.jpg`` as the short option ``-o`` followed by ``=out.jpg``; one
    leading ``=`` is dropped before *inner* converts the value.
    """

    def __init__(self, inner: click.ParamType) -> None:
        self.inner = inner
        self.name = inner.name

    def convert(self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]) -> Any:
        if isinstance(value, str) and value.startswith("="):
            value = value[1:]
        return self.inner.convert(value, param, ctx)


__all__ = ["AttachedValue", "explicit_value", "merged_flag"]
