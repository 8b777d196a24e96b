"""
Project-wide custom exception hierarchy.
All modules raise subclasses of GeneratorBaseError — never bare Exception.

Validation problems found while resolving an enum (a missing or invalid
default property) are NOT exceptions: they are collected as
GenerationError records.  The classes below are for failures that stop
a piece of work from completing at all.
"""

__all__ = [
    "GeneratorBaseError",
    "SourceError",
    "SourceReadError",
    "SourceParseError",
    "AttributeDataError",
    "EmitterError",
    "OutputError",
]


class GeneratorBaseError(Exception):
    """Root exception for all enum-string-gen errors."""


# ── Source reading / parsing ──────────────────────────────────────────────────

class SourceError(GeneratorBaseError):
    """Base class for problems with the C# input sources."""


class SourceReadError(SourceError):
    """Raised when a source file cannot be read from disk."""


class SourceParseError(SourceError):
    """Raised when a source file cannot be split into declarations."""

    def __init__(self, message: str, path: str = "", line: int = 0) -> None:
        self.path = path
        self.line = line
        where = f"{path}({line}): " if path else ""
        super().__init__(f"{where}{message}")


# ── Attribute data ────────────────────────────────────────────────────────────

class AttributeDataError(GeneratorBaseError):
    """Raised when a localisation attribute carries arguments we cannot use."""


# ── Emission / output ─────────────────────────────────────────────────────────

class EmitterError(GeneratorBaseError):
    """Raised when a resolved mapping cannot be rendered as source text."""


class OutputError(GeneratorBaseError):
    """Raised when generated sources cannot be written out."""
