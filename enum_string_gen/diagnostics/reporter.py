"""
Diagnostic rendering — turns GenerationError records into user-facing
Diagnostic objects and MSBuild-style text lines.

Line format (understood by IDEs and CI log parsers)::

    Colours.cs(12,5): error ESG0001: Enum type Colour requires a default ...
    enum-string-gen: error ESG0000: Unexpected error generating ...
"""

import logging
from typing import Iterable, Iterator, Optional

from enum_string_gen.syntax.models import SourceLocation
from .models import Diagnostic, GenerationError, GenerationErrorCode, Severity

__all__ = ["DIAGNOSTIC_TITLE", "create_diagnostic", "format_diagnostic", "DiagnosticBag"]

logger = logging.getLogger(__name__)

DIAGNOSTIC_TITLE = "String Generator"
_TOOL_NAME = "enum-string-gen"
_DEFAULT_METHOD_NAME = "GetDescription"


def create_diagnostic(
    error: GenerationError,
    location: Optional[SourceLocation] = None,
) -> Diagnostic:
    """
    Build the Diagnostic for one GenerationError.

    The internal-error kind never carries a location: the failure is not
    something the user can fix at the enum declaration.

    Raises:
        ValueError: Unrecognised error code.
    """
    code = error.code

    if code == GenerationErrorCode.UNSPECIFIED_INTERNAL_ERROR:
        detail = error.extra_data.get(GenerationError.EXCEPTION_MESSAGE, "")
        return Diagnostic(
            id=code.id,
            title=DIAGNOSTIC_TITLE,
            message=f"Unexpected error generating extension helpers; error is {detail}",
            severity=Severity.ERROR,
        )

    method_name = error.extra_data.get(GenerationError.METHOD_NAME, _DEFAULT_METHOD_NAME)

    if code == GenerationErrorCode.MISSING_REQUIRED_DEFAULT:
        return Diagnostic(
            id=code.id,
            title=DIAGNOSTIC_TITLE,
            message=(
                f"Enum type {error.enum_type_name} requires a default string for "
                f"{method_name} and none is available; a method has been generated "
                "anyway but will likely result in runtime errors"
            ),
            severity=Severity.ERROR,
            location=location,
        )

    if code == GenerationErrorCode.INVALID_DEFAULT_PROPERTY:
        original = error.extra_data.get(GenerationError.ORIGINAL_DEFAULT_PROPERTY_NAME, "")
        return Diagnostic(
            id=code.id,
            title=DIAGNOSTIC_TITLE,
            message=(
                f"Enum type {error.enum_type_name} was given a default property of "
                f"{original} for {method_name}, but that property wasn't found"
            ),
            severity=Severity.ERROR,
            location=location,
        )

    raise ValueError(f"Unrecognised error type {code!r}")


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render one diagnostic as a single MSBuild-style line."""
    origin = str(diagnostic.location) if diagnostic.location else _TOOL_NAME
    return f"{origin}: {diagnostic.severity.value} {diagnostic.id}: {diagnostic.message}"


class DiagnosticBag:
    """
    Ordered collection of diagnostics produced by one generation pass.

    Diagnostics keep the order in which they were reported; `sorted()`
    gives a location-stable ordering for display.
    """

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()) -> None:
        self._items: list[Diagnostic] = list(diagnostics)

    def report(self, diagnostic: Diagnostic) -> None:
        logger.debug("Reported %s: %s", diagnostic.id, diagnostic.message)
        self._items.append(diagnostic)

    def report_error(self, error: GenerationError, location: Optional[SourceLocation]) -> None:
        self.report(create_diagnostic(error, location))

    @property
    def error_count(self) -> int:
        return sum(1 for d in self._items if d.is_error)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def ids(self) -> list[str]:
        return [d.id for d in self._items]

    def sorted(self) -> list[Diagnostic]:
        def key(d: Diagnostic):
            loc = d.location
            if loc is None:
                return ("", 0, 0, d.id, d.message)
            return (loc.path, loc.line, loc.column, d.id, d.message)

        return sorted(self._items, key=key)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
