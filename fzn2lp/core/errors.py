"""
Fatal error types raised while translating a statement stream.

Every error aborts the run. Facts already written stay written.
"""

from typing import Optional


class TranslationError(Exception):
    """Base exception for fatal translation errors."""

    def __init__(self, message: str, location: Optional[tuple] = None):
        self.message = message
        self.location = location
        # Filled in by the runtime with the partial TranslationResult
        self.result = None
        prefix = f"Line {location[0]}, Col {location[1]}: " if location else ""
        super().__init__(f"{prefix}{message}")


class MultipleSolveItems(TranslationError):
    """A second solve item followed an accepted one."""

    def __init__(self, location: Optional[tuple] = None):
        super().__init__("More than one solve item", location)


class NoSolveItem(TranslationError):
    """The stream ended without a solve item."""

    def __init__(self):
        super().__init__("No solve item")


class InputParseError(TranslationError):
    """The statement parser rejected a unit of input; its diagnostic is kept verbatim."""

    def __init__(self, error: Exception):
        self.parse_error = error
        super().__init__(f"ParseError: {error}")


class MalformedAnnotation(TranslationError):
    """An output annotation whose arguments do not have the expected shape."""
    pass


class OrderingViolation(TranslationError):
    """A statement arrived after a later phase; only raised in strict ordering mode."""
    pass
