"""Custom exceptions for the ESOP strategy calculator."""

from pathlib import Path


class EsopError(Exception):
    """Base exception for ESOP calculator errors."""


class DataValidationError(EsopError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class InputFileError(EsopError):
    """Raised when an input fields file cannot be loaded."""

    def __init__(self, path: Path | str, message: str):
        self.path = str(path)
        super().__init__(f"Input file error for {path}: {message}")


class ConfigurationError(EsopError):
    """Raised when evaluator configuration is unusable."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class NoCandidatesError(EsopError):
    """Raised when a ranking is requested over an empty candidate list."""

    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__(f"No strike price candidates to rank for quantity {quantity}")
