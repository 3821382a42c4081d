"""Error types raised while loading coin parameters."""

from __future__ import annotations

from pydantic import ValidationError

from .types import ConfigErrorDict


class ConfigurationError(ValueError):
    """A coin configuration failed to load or validate.

    Raised once, at start-up. The process is expected to refuse to start.
    """

    def __init__(self, message: str, errors: list[ConfigErrorDict] | None = None):
        super().__init__(message)
        self.message = message
        self.errors: list[ConfigErrorDict] = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        details = "; ".join(f"{e['field']}: {e['message']}" for e in self.errors)
        return f"{self.message} ({details})"

    @classmethod
    def from_validation_error(cls, exc: ValidationError, source: str) -> ConfigurationError:
        """Flatten a pydantic ValidationError into field/message pairs."""
        errors: list[ConfigErrorDict] = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
            errors.append({"field": field, "message": error.get("msg", "invalid value")})
        return cls(f"Invalid coin configuration from {source}", errors)
