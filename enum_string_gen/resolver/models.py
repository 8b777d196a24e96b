"""
Data models for the resolver module.

Key concepts
────────────
FormattingMode   — literal lookup vs. lookup + string.Format(detail)
EnumDescriptor   — the enum being localised (name, namespace, members)
AttributeConfig  — what one localisation attribute asked for
TypeMembers      — the static string properties a resource type offers
ResolvedMapping  — validated member → property bindings for one attribute
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from enum_string_gen.exceptions import AttributeDataError
from enum_string_gen.syntax.models import Accessibility, SourceLocation

__all__ = [
    "FormattingMode",
    "EnumDescriptor",
    "AttributeConfig",
    "TypeMembers",
    "DefaultLocalisation",
    "EnumValueLocalisation",
    "ResolvedMapping",
]


class FormattingMode(str, Enum):
    """
    Which attribute variant produced a request.

    LITERAL
        [WithLiteralLocalisation] — GetDescription(this E value) returns the
        resource string unchanged.

    FORMATTED
        [WithFormattedLocalisation] — GetDescription(this E value, string detail)
        returns string.Format(resourceString, detail).
    """
    LITERAL   = "literal"
    FORMATTED = "formatted"

    @property
    def attribute_name(self) -> str:
        return _ATTRIBUTE_NAMES[self]

    @property
    def has_formatting(self) -> bool:
        return self is FormattingMode.FORMATTED


_ATTRIBUTE_NAMES = {
    FormattingMode.LITERAL:   "WithLiteralLocalisation",
    FormattingMode.FORMATTED: "WithFormattedLocalisation",
}


@dataclass(frozen=True)
class EnumDescriptor:
    """
    One annotated enum, as seen by the resolver.

    accessibility is normalised to PUBLIC / INTERNAL / PRIVATE; anything
    else becomes NOT_APPLICABLE (no modifier in generated code).
    """
    name:           str
    namespace:      str
    accessibility:  Accessibility
    members:        tuple[str, ...]
    type_reference: str = ""                 # e.g. "Outer.Inner" for nested enums
    location:       Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        if not self.type_reference:
            object.__setattr__(self, "type_reference", self.name)

    @property
    def extension_class_name(self) -> str:
        return f"{self.name}LocalizationExtensions"

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.type_reference}" if self.namespace else self.type_reference


@dataclass(frozen=True)
class AttributeConfig:
    """
    The configuration carried by one localisation attribute.

    Named values are kept as written; the typed accessors apply the
    "blank means not supplied" rule.
    """
    mode:               FormattingMode
    resource_type_name: str
    named_values:       tuple[tuple[str, object], ...] = ()

    DEFAULT_PROPERTY_NAME = "DefaultPropertyName"
    RESOURCE_NAME_FORMAT  = "ResourceNameFormat"
    METHOD_NAME           = "MethodName"

    def named_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Return a named string value; missing, null or whitespace → `default`.

        Raises:
            AttributeDataError: The value is present but not a string.
        """
        for name, value in self.named_values:
            if name != key:
                continue
            if value is None:
                return default
            if not isinstance(value, str):
                raise AttributeDataError(
                    f"{self.mode.attribute_name}.{key} must be a constant string, got {value}"
                )
            return value if value.strip() else default
        return default

    @property
    def default_property_name(self) -> Optional[str]:
        return self.named_str(self.DEFAULT_PROPERTY_NAME)

    def name_format(self, default: str) -> str:
        return self.named_str(self.RESOURCE_NAME_FORMAT, default) or default

    def method_name(self, default: str) -> str:
        return self.named_str(self.METHOD_NAME, default) or default


@dataclass(frozen=True)
class TypeMembers:
    """Static, string-typed property names offered by one resource-holder type."""
    qualified_name: str
    property_names: frozenset = field(default_factory=frozenset)

    @classmethod
    def of(cls, qualified_name: str, names: Iterable[str]) -> "TypeMembers":
        return cls(qualified_name, frozenset(names))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and bool(name.strip()) and name in self.property_names

    def reference(self, property_name: str) -> str:
        """Fully-qualified C# expression for one of this type's properties."""
        return f"global::{self.qualified_name}.{property_name}"


@dataclass(frozen=True)
class DefaultLocalisation:
    """What the unmatched branch of the generated switch returns."""
    original_property_name: Optional[str] = None
    value_to_return:        Optional[str] = None

    @property
    def has_return_value(self) -> bool:
        return bool(self.value_to_return)


@dataclass(frozen=True)
class EnumValueLocalisation:
    original_value_name: str
    value_to_return:     Optional[str] = None

    @property
    def has_return_value(self) -> bool:
        return bool(self.value_to_return)


@dataclass(frozen=True)
class ResolvedMapping:
    """
    A validated localisation request, ready for the emitter.

    localisations holds only members with a bound property, in
    declaration order; every other member falls through to `default`.
    """
    enum:          EnumDescriptor
    mode:          FormattingMode
    method_name:   str
    default:       DefaultLocalisation
    localisations: tuple[EnumValueLocalisation, ...] = ()

    @property
    def has_formatting(self) -> bool:
        return self.mode.has_formatting

    @property
    def enum_type_name(self) -> str:
        return self.enum.name

    def __str__(self) -> str:
        return (
            f"ResolvedMapping({self.enum.qualified_name} [{self.mode.value}] "
            f"{len(self.localisations)}/{len(self.enum.members)} bound, "
            f"default={'yes' if self.default.has_return_value else 'no'})"
        )
