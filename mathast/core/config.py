"""Parser configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 100
MAX_DEPTH_ENV = "MATHAST_MAX_DEPTH"


@dataclass(frozen=True)
class ParserConfig:
    """Tunables for a single parse."""

    max_depth: int = DEFAULT_MAX_DEPTH
    placeholder: str = "?"

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")
        if not self.placeholder:
            raise ValueError("placeholder must be a non-empty string")

    @classmethod
    def from_env(cls, *, max_depth: int | None = None, placeholder: str | None = None) -> "ParserConfig":
        """Build a config; explicit arguments win over the environment."""

        if max_depth is None:
            raw = os.getenv(MAX_DEPTH_ENV)
            if raw:
                try:
                    max_depth = int(raw)
                except ValueError as exc:
                    raise ValueError(f"{MAX_DEPTH_ENV} must be an integer, got {raw!r}") from exc
        return cls(
            max_depth=max_depth if max_depth is not None else DEFAULT_MAX_DEPTH,
            placeholder=placeholder or "?",
        )
