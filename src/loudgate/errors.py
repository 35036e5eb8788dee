"""Error taxonomy for loudness analysis and normalization."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class LoudnessValidationError(ValueError):
    """Raised when an input buffer violates the analysis contract."""

    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ConfigurationError(NotImplementedError):
    """Raised when a meter is configured with a filter class that cannot be built."""
