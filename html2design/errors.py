"""Compiler error types."""


class CompileError(ValueError):
    """Raised when an HTML document cannot be turned into a design tree."""


class EmptyInputError(CompileError):
    """Raised for blank or whitespace-only HTML."""

    def __init__(self, message: str = "HTML content is empty"):
        super().__init__(message)


class NoElementsFoundError(CompileError):
    """Raised when the tag scanner finds no top-level elements."""

    def __init__(self, message: str = "No valid HTML elements found, check the HTML markup"):
        super().__init__(message)


class NothingRenderedError(CompileError):
    """Raised when every top-level element failed to become a design node."""

    def __init__(self, message: str, warnings=None):
        self.warnings = list(warnings or [])
        super().__init__(message)
