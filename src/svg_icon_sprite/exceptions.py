"""Custom exception hierarchy for the SVG icon sprite builder.

This module defines domain-specific exceptions to provide better error handling,
clearer intent, and improved debugging capabilities throughout the application.

Exception Hierarchy:
    SvgSpriteError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   ├── MissingConfigError
    │   └── ConfigFileNotFoundError
    └── SymbolError
        ├── EmptyIdentifierError
        └── SymbolContentError
            ├── EmptySvgError
            ├── InvalidSvgError
            └── MissingSvgRootError
"""

from typing import Any


# Base Exception
class SvgSpriteError(Exception):
    """Base exception for all sprite builder errors.

    This is the root exception that all custom exceptions inherit from,
    allowing for broad exception handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SvgSpriteError):
    """Base exception for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Unknown processor",
            {"processor": "remove_colors", "available": ["remove_sizes", "css_prefix"]}
        )
    """

    pass


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing.

    Example:
        raise MissingConfigError(
            "Processor spec has no name",
            {"spec": {"options": {"tags": ["title"]}}}
        )
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "/project/sprites.yaml", "cwd": "/project"}
        )
    """

    pass


# Symbol Exceptions
class SymbolError(SvgSpriteError):
    """Base exception for errors concerning a single symbol."""

    pass


class EmptyIdentifierError(SymbolError):
    """Raised when no valid identifier can be derived for a symbol.

    Example:
        raise EmptyIdentifierError(
            "Failed to generate ID for symbol",
            {"input": "   "}
        )
    """

    pass


class SymbolContentError(SymbolError):
    """Base exception for unusable SVG file contents."""

    pass


class EmptySvgError(SymbolContentError):
    """Raised when an SVG file is empty.

    Example:
        raise EmptySvgError("SVG file is empty", {"path": "/icons/blank.svg"})
    """

    pass


class InvalidSvgError(SymbolContentError):
    """Raised when a file does not contain parsable SVG markup.

    Example:
        raise InvalidSvgError("Invalid SVG", {"path": "/icons/readme.svg"})
    """

    pass


class MissingSvgRootError(SymbolContentError):
    """Raised when the parsed document contains no <svg> element.

    Example:
        raise MissingSvgRootError(
            "Failed to find <svg> in file",
            {"path": "/icons/broken.svg", "root": "html"}
        )
    """

    pass


# Utility function for exception chaining
def chain_exception(new_exception: SvgSpriteError, cause: Exception) -> SvgSpriteError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            root = parse_svg(markup)
        except ParseError as e:
            raise chain_exception(InvalidSvgError("Invalid SVG", {"path": path}), e)
    """
    new_exception.__cause__ = cause
    return new_exception
