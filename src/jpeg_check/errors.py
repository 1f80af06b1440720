"""Exception hierarchy shared by the selector parsers, the dispatch driver and the CLI."""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "CLIAppError",
    "DispatchError",
    "DocumentError",
    "InvalidSelectorError",
    "SelectorConstraintError",
    "SelectorError",
    "SelectorSyntaxError",
]


class SelectorError(ValueError):
    """Base class for option values that cannot be turned into selectors."""

    def __init__(self, problem: str, *, option: str, value: str, token: Optional[str] = None) -> None:
        self.problem = problem
        self.option = option
        self.value = value
        self.token = token
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.option}={self.value}"
        if self.token is None:
            return f"{self.problem}: {where}"
        return f"{self.problem} '{self.token}': {where}"


class SelectorSyntaxError(SelectorError):
    """Raised on a wrong delimiter count or an empty fragment."""


class InvalidSelectorError(SelectorError):
    """Raised when a token falls outside its legal domain."""


class SelectorConstraintError(SelectorError):
    """Raised when individually valid tokens form a combination that is not supported."""


class DocumentError(RuntimeError):
    """Raised by document backends when loading or an operation fails."""


class DispatchError(RuntimeError):
    """Raised when a document operation fails while a selector list is being executed."""

    def __init__(
        self,
        option: str,
        selector: Any,
        cause: BaseException,
        *,
        frame: Optional[int] = None,
    ) -> None:
        self.option = option
        self.selector = selector
        self.frame = frame
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        context = f"{self.option} {self.selector}"
        if self.frame is not None:
            context += f" (frame {self.frame})"
        return f"{context}: {self.cause}"


class CLIAppError(RuntimeError):
    """Raised when the CLI cannot complete its work."""

    def __init__(self, message: str, *, code: int = 1, rich_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code
        self.rich_message = rich_message or message
