"""
Diagnostics — the error taxonomy of a generation pass and how it is shown.

GenerationErrorCode / GenerationError — produced by the resolver and generator
Diagnostic / DiagnosticBag            — the user-facing rendering of those errors
"""

from .models import (
    DIAGNOSTIC_PREFIX,
    Diagnostic,
    GenerationError,
    GenerationErrorCode,
    Severity,
)
from .reporter import DiagnosticBag, create_diagnostic, format_diagnostic

__all__ = [
    "DIAGNOSTIC_PREFIX",
    "Diagnostic",
    "DiagnosticBag",
    "GenerationError",
    "GenerationErrorCode",
    "Severity",
    "create_diagnostic",
    "format_diagnostic",
]
