"""
Custom exceptions for Murajaa library.

All exceptions inherit from MurajaaError for easy catching of library-specific errors.
"""

from typing import Any


class MurajaaError(Exception):
    """Base exception for all Murajaa errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ConfigurationError(MurajaaError):
    """Raised when configuration or a tuning parameter is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting_name:
            ctx["setting"] = setting_name
        super().__init__(message, ctx)
        self.setting_name = setting_name


class RefinementError(MurajaaError):
    """
    Raised inside a semantic analyzer when the remote call fails.

    Analyzers convert this into a tagged outcome before returning, so it
    never escapes a verification call.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message, ctx)
        self.status_code = status_code


class ProgressionError(MurajaaError):
    """Raised when a learner position or task is structurally invalid."""

    def __init__(
        self,
        message: str,
        page: int | None = None,
        line: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if page is not None:
            ctx["page"] = page
        if line is not None:
            ctx["line"] = line
        super().__init__(message, ctx)
        self.page = page
        self.line = line
