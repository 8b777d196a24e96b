"""
Data models for the diagnostics module.

Key concepts
────────────
GenerationErrorCode — the three kinds of problem a generation pass reports
GenerationError     — one problem, tied to an enum, as produced by the resolver
Diagnostic          — a GenerationError rendered for the user (id, message, location)
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from enum_string_gen.syntax.models import SourceLocation

__all__ = [
    "DIAGNOSTIC_PREFIX",
    "GenerationErrorCode",
    "GenerationError",
    "Severity",
    "Diagnostic",
]

DIAGNOSTIC_PREFIX = "ESG"


class GenerationErrorCode(int, Enum):
    """
    Numeric codes are part of the diagnostic ids (ESG0000 …) and must
    never be renumbered.

    UNSPECIFIED_INTERNAL_ERROR
        Anything unexpected while processing one enum.  No location.

    MISSING_REQUIRED_DEFAULT
        Some enum values have no matching property and no usable
        default property was configured.

    INVALID_DEFAULT_PROPERTY
        DefaultPropertyName names a property the resource type lacks.
    """
    UNSPECIFIED_INTERNAL_ERROR = 0
    MISSING_REQUIRED_DEFAULT   = 1
    INVALID_DEFAULT_PROPERTY   = 2

    @property
    def id(self) -> str:
        return f"{DIAGNOSTIC_PREFIX}{self.value:04d}"


class Severity(str, Enum):
    ERROR   = "error"
    WARNING = "warning"
    INFO    = "info"


@dataclass(frozen=True)
class GenerationError:
    """
    One validation failure for one enum.

    extra_data keys:
      OriginalDefaultPropertyName — INVALID_DEFAULT_PROPERTY: the name as supplied
      MethodName                  — MISSING_REQUIRED_DEFAULT, INVALID_DEFAULT_PROPERTY:
                                    the generated method, when known
      ExceptionMessage            — UNSPECIFIED_INTERNAL_ERROR: failure description
    """
    enum_type_name: str
    code:           GenerationErrorCode
    extra_data:     Mapping[str, Any] = field(default_factory=dict)

    ORIGINAL_DEFAULT_PROPERTY_NAME = "OriginalDefaultPropertyName"
    EXCEPTION_MESSAGE = "ExceptionMessage"
    METHOD_NAME = "MethodName"

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra_data", MappingProxyType(dict(self.extra_data)))

    @classmethod
    def missing_required_default(
        cls, enum_type_name: str, method_name: Optional[str] = None
    ) -> "GenerationError":
        extra = {cls.METHOD_NAME: method_name} if method_name else {}
        return cls(enum_type_name, GenerationErrorCode.MISSING_REQUIRED_DEFAULT, extra)

    @classmethod
    def invalid_default_property(
        cls, enum_type_name: str, original_property_name: str, method_name: Optional[str] = None
    ) -> "GenerationError":
        extra = {cls.ORIGINAL_DEFAULT_PROPERTY_NAME: original_property_name}
        if method_name:
            extra[cls.METHOD_NAME] = method_name
        return cls(enum_type_name, GenerationErrorCode.INVALID_DEFAULT_PROPERTY, extra)

    @classmethod
    def internal(cls, enum_type_name: str, description: str) -> "GenerationError":
        return cls(
            enum_type_name,
            GenerationErrorCode.UNSPECIFIED_INTERNAL_ERROR,
            {cls.EXCEPTION_MESSAGE: description},
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenerationError):
            return NotImplemented
        return (
            self.enum_type_name == other.enum_type_name
            and self.code == other.code
            and dict(self.extra_data) == dict(other.extra_data)
        )

    def __hash__(self) -> int:
        return hash((self.enum_type_name, self.code, tuple(sorted(self.extra_data.items()))))

    def __str__(self) -> str:
        return f"GenerationError({self.code.id} {self.enum_type_name})"


@dataclass(frozen=True)
class Diagnostic:
    id:       str
    title:    str
    message:  str
    severity: Severity = Severity.ERROR
    location: Optional[SourceLocation] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR
