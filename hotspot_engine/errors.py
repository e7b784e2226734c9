"""Error types and the Result-style outcome returned by scoring strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .models import Hotspot


class HotspotEngineError(Exception):
    """Base exception for the hotspot engine."""
    pass


class InferenceError(HotspotEngineError):
    """The inference-backed scorer could not produce a usable ranking."""

    NOT_CONFIGURED = "not_configured"
    SERVICE_ERROR = "service_error"
    TIMEOUT = "timeout"
    MALFORMED_RESPONSE = "malformed_response"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind}: {self.args[0]}"


@dataclass
class ScoringOutcome:
    """What a strategy produced. ``error`` is set instead of raising."""
    strategy: str
    hotspots: List[Hotspot] = field(default_factory=list)
    error: Optional[InferenceError] = None
    requested: int = 0
    prompt_hash: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, strategy: str, error: InferenceError,
                prompt_hash: Optional[str] = None) -> "ScoringOutcome":
        return cls(strategy=strategy, error=error, prompt_hash=prompt_hash)
