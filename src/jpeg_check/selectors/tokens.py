"""Delimiter splitting, mode suffixes and integer tokens shared by every option grammar."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple, Type

from src.jpeg_check.errors import InvalidSelectorError, SelectorError, SelectorSyntaxError

from .types import ALL, Field, OutputMode

ENTRY_SEPARATOR = ","
FIELD_SEPARATOR = ":"
WILDCARD_TOKEN = "*"

_MODE_LETTERS = {mode.value: mode for mode in OutputMode}

# Signed integer with an optional 0x/0o/0b prefix; a leading 0 followed by digits is octal.
_INT_PATTERN = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|0[0-7]*|[1-9][0-9]*)")


def split_entries(value: str) -> List[str]:
    return value.split(ENTRY_SEPARATOR)


def split_fields(entry: str) -> List[str]:
    return entry.split(FIELD_SEPARATOR)


def parse_mode_suffix(
    fragment: str,
    *,
    option: str = "",
    value: Optional[str] = None,
) -> Tuple[OutputMode, str]:
    """
    Strip the optional trailing mode letter from *fragment*.

    Returns:
        tuple[OutputMode, str]: The requested mode (``STANDARD`` when no letter is present)
            and the remaining fragment.

    Raises:
        SelectorSyntaxError: If *fragment* is empty.
    """
    if not fragment:
        raise SelectorSyntaxError(
            "syntax error, empty selector",
            option=option,
            value=fragment if value is None else value,
        )
    mode = _MODE_LETTERS.get(fragment[-1])
    if mode is None:
        return OutputMode.STANDARD, fragment
    return mode, fragment[:-1]


def parse_int(token: str) -> int:
    """Parse *token* as a base-10 or prefixed integer, rejecting blanks and underscores."""

    if not _INT_PATTERN.fullmatch(token):
        raise ValueError(f"not an integer: {token!r}")
    sign = -1 if token[:1] == "-" else 1
    digits = token.lstrip("+-")
    if len(digits) > 1 and digits[0] == "0" and digits[1].isdigit():
        return sign * int(digits, 8)
    return int(token, 0)


class OptionTokens:
    """
    Error-reporting context for one option value.

    Every failure raised through this helper names the offending token together with
    the complete original option value so the user can locate the mistake.
    """

    def __init__(self, option: str, value: str) -> None:
        self.option = option
        self.value = value

    def error(
        self,
        kind: Type[SelectorError],
        problem: str,
        token: Optional[str] = None,
    ) -> SelectorError:
        return kind(problem, option=self.option, value=self.value, token=token)

    def mode(self, entry: str) -> Tuple[OutputMode, str]:
        return parse_mode_suffix(entry, option=self.option, value=self.value)

    def fields(self, entry: str, *, minimum: int, maximum: int, label: str) -> List[str]:
        fields = split_fields(entry)
        if not minimum <= len(fields) <= maximum:
            raise self.error(SelectorSyntaxError, f"{label} syntax error", entry)
        return fields

    def integer(
        self,
        token: str,
        label: str,
        *,
        low: int = 0,
        high: Optional[int] = None,
        accept: Callable[[int], bool] = lambda _: False,
    ) -> int:
        """Parse *token* within ``[low, high]``; *accept* admits extra out-of-range values."""

        try:
            number = parse_int(token)
        except ValueError:
            raise self.error(InvalidSelectorError, f"invalid {label}", token) from None
        in_range = number >= low and (high is None or number <= high)
        if not in_range and not accept(number):
            raise self.error(InvalidSelectorError, f"invalid {label}", token)
        return number

    def field(self, token: str, label: str, *, high: Optional[int] = None) -> Field:
        """Parse a field that is either ``*`` or a non-negative integer up to *high*."""

        if token == WILDCARD_TOKEN:
            return ALL
        return self.integer(token, label, low=0, high=high)


__all__ = [
    "ENTRY_SEPARATOR",
    "FIELD_SEPARATOR",
    "OptionTokens",
    "WILDCARD_TOKEN",
    "parse_int",
    "parse_mode_suffix",
    "split_entries",
    "split_fields",
]
