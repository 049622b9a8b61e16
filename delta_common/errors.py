from __future__ import annotations


class DeltaError(Exception):
    """Base class for all weapon-code errors."""


class ExtractionError(DeltaError):
    """A source workbook could not be read at all."""


class SourceNotFoundError(ExtractionError):
    """None of the candidate paths for a source workbook exist or open."""


class SheetNotFoundError(ExtractionError):
    def __init__(self, sheet: str, available: list[str] | None = None) -> None:
        self.sheet = sheet
        self.available = list(available or [])
        detail = f"; available sheets: {', '.join(self.available)}" if self.available else ""
        super().__init__(f"Sheet '{sheet}' not found{detail}")


class NoDataError(DeltaError):
    """Raised when an extraction or load run yields zero weapon codes."""


class CacheError(DeltaError):
    """Raised when the cache file exists but cannot be read or parsed."""


class ApiError(DeltaError):
    """Raised when the remote weapon-code API fails or reports an error."""


class ConfigError(DeltaError, ValueError):
    """Raised when the layout YAML configuration is invalid."""
