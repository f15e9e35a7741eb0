"""Parse diagnostics and the package exception types."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class WarningCode(str, Enum):
    """Standardized diagnostic codes recorded while parsing."""

    UNEXPECTED_TOKEN = "unexpected_token"
    UNKNOWN_COMMAND = "unknown_command"
    MISSING_ARGUMENT = "missing_argument"
    UNTERMINATED_GROUP = "unterminated_group"
    ENVIRONMENT_MISMATCH = "environment_mismatch"
    MAX_DEPTH_EXCEEDED = "max_depth_exceeded"
    INTERNAL_ERROR = "internal_error"


class ParseWarning(BaseModel):
    """Non-fatal issue captured during a parse."""

    code: WarningCode
    message: str
    position: int = 0
    details: dict | None = None


class MathAstError(Exception):
    """Base class for mathast errors."""


class NestingDepthError(MathAstError):
    """Raised when a construct nests deeper than the configured bound."""

    def __init__(self, *, depth: int, position: int) -> None:
        self.depth = depth
        self.position = position
        super().__init__(f"nesting depth {depth} exceeded at offset {position}")
