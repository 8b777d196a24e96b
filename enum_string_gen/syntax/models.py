"""
Data models for the syntax module — the declaration-level view of a set of
C# source files that the generator works against.

Key concepts
────────────
SourceFile   — declarations found in one .cs file
Compilation  — every SourceFile of one generation pass, plus type lookup
AttributeData — one attribute application with its evaluated arguments
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

__all__ = [
    "CSHARP_KEYWORDS",
    "escape_identifier",
    "SourceLocation",
    "Accessibility",
    "TypeRef",
    "RawExpression",
    "AttributeData",
    "EnumDeclaration",
    "PropertyDeclaration",
    "TypeDeclaration",
    "SourceFile",
    "Compilation",
]

# Reserved words that need an "@" prefix when used as identifiers
CSHARP_KEYWORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params",
    "private", "protected", "public", "readonly", "ref", "return", "sbyte",
    "sealed", "short", "sizeof", "stackalloc", "static", "string", "struct",
    "switch", "this", "throw", "true", "try", "typeof", "uint", "ulong",
    "unchecked", "unsafe", "ushort", "using", "virtual", "void", "volatile",
    "while",
})


def escape_identifier(name: str) -> str:
    """Prefix a C# keyword with "@" so it can be used as an identifier."""
    return f"@{name}" if name in CSHARP_KEYWORDS else name


@dataclass(frozen=True)
class SourceLocation:
    """1-based position of a declaration inside a source file."""
    path:   str
    line:   int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.path}({self.line},{self.column})"


class Accessibility(str, Enum):
    PUBLIC             = "public"
    INTERNAL           = "internal"
    PROTECTED          = "protected"
    PRIVATE            = "private"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE_PROTECTED  = "private protected"
    NOT_APPLICABLE     = ""

    @classmethod
    def from_modifiers(cls, modifiers: list[str], nested: bool) -> "Accessibility":
        """
        Derive declared accessibility from a declaration's modifier list.
        Types without an explicit modifier are internal at namespace level
        and private when nested in another type.
        """
        mods = set(modifiers)
        if "public" in mods:
            return cls.PUBLIC
        if "protected" in mods and "internal" in mods:
            return cls.PROTECTED_INTERNAL
        if "private" in mods and "protected" in mods:
            return cls.PRIVATE_PROTECTED
        if "internal" in mods:
            return cls.INTERNAL
        if "protected" in mods:
            return cls.PROTECTED
        if "private" in mods:
            return cls.PRIVATE
        return cls.PRIVATE if nested else cls.INTERNAL


@dataclass(frozen=True)
class TypeRef:
    """A type named by a `typeof(...)` attribute argument."""
    name: str

    def __str__(self) -> str:
        return f"typeof({self.name})"


@dataclass(frozen=True)
class RawExpression:
    """An attribute argument expression that is not a compile-time literal we understand."""
    text: str

    def __str__(self) -> str:
        return self.text


ArgumentValue = Union[str, bool, int, float, None, TypeRef, RawExpression]


@dataclass
class AttributeData:
    name:              str
    constructor_args:  list = field(default_factory=list)
    named_args:        dict = field(default_factory=dict)
    location:          Optional[SourceLocation] = None

    @property
    def short_name(self) -> str:
        """Attribute class name without namespace qualifier or `Attribute` suffix."""
        short = self.name.rsplit(".", 1)[-1]
        if short.startswith("global::"):
            short = short[len("global::"):]
        if short.endswith("Attribute") and short != "Attribute":
            short = short[: -len("Attribute")]
        return short

    def named(self, key: str, default: ArgumentValue = None) -> ArgumentValue:
        return self.named_args.get(key, default)


@dataclass
class EnumDeclaration:
    name:             str
    namespace:        str
    accessibility:    Accessibility
    members:          list[str] = field(default_factory=list)
    attributes:       list[AttributeData] = field(default_factory=list)
    containing_types: list[str] = field(default_factory=list)
    location:         Optional[SourceLocation] = None
    usings:           list[str] = field(default_factory=list)

    @property
    def type_reference(self) -> str:
        """How the enum is referred to from inside its own namespace."""
        return ".".join([*self.containing_types, self.name])

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.type_reference}"
        return self.type_reference

    def __str__(self) -> str:
        return f"enum {self.qualified_name} ({len(self.members)} members)"


_STRING_TYPE_NAMES = {
    "string", "String", "System.String", "global::System.String",
}


@dataclass
class PropertyDeclaration:
    name:      str
    type_name: str
    is_static: bool = False

    @property
    def is_static_string(self) -> bool:
        return self.is_static and self.type_name.rstrip("?") in _STRING_TYPE_NAMES


@dataclass
class TypeDeclaration:
    name:             str
    namespace:        str
    kind:             str                 # "class" | "struct" | "record" | "interface"
    accessibility:    Accessibility = Accessibility.INTERNAL
    properties:       list[PropertyDeclaration] = field(default_factory=list)
    containing_types: list[str] = field(default_factory=list)
    location:         Optional[SourceLocation] = None
    constants:        dict[str, str] = field(default_factory=dict)   # const string fields

    @property
    def qualified_name(self) -> str:
        parts = [self.namespace] if self.namespace else []
        parts.extend(self.containing_types)
        parts.append(self.name)
        return ".".join(parts)

    def static_string_property_names(self) -> list[str]:
        return [p.name for p in self.properties if p.is_static_string]


@dataclass
class SourceFile:
    path:          str
    usings:        list[str] = field(default_factory=list)
    enums:         list[EnumDeclaration] = field(default_factory=list)
    types:         list[TypeDeclaration] = field(default_factory=list)
    global_usings: list[str] = field(default_factory=list)


@dataclass
class Compilation:
    """
    All declarations visible to one generation pass.

    Lookups follow the C# order for a simple or qualified name used inside
    a declaration: relative to each containing type from innermost
    outwards, then relative to each enclosing namespace, then as written
    (global), then relative to each `using` and each `global using` of
    any file.  A `global::` name is only ever looked up as written.
    """
    files: list[SourceFile] = field(default_factory=list)

    def enums(self) -> list[EnumDeclaration]:
        return [e for f in self.files for e in f.enums]

    def types(self) -> list[TypeDeclaration]:
        return [t for f in self.files for t in f.types]

    def global_usings(self) -> list[str]:
        """`global using` namespaces of every file, first occurrence first."""
        return list(dict.fromkeys(u for f in self.files for u in f.global_usings))

    def find_type(
        self,
        name: str,
        context_namespace: str = "",
        usings: Optional[list[str]] = None,
        containing_types: Optional[list[str]] = None,
    ) -> Optional[TypeDeclaration]:
        if name.startswith("global::"):
            return self._by_qualified_name().get(name[len("global::"):])

        index = self._by_qualified_name()
        imported = list(dict.fromkeys([*(usings or []), *self.global_usings()]))
        candidates = _candidate_names(name, context_namespace, imported, containing_types or [])
        for candidate in candidates:
            found = index.get(candidate)
            if found is not None:
                return found
        return None

    def _by_qualified_name(self) -> dict[str, TypeDeclaration]:
        index: dict[str, TypeDeclaration] = {}
        for t in self.types():
            # first declaration wins; partial classes merge properties and constants
            existing = index.get(t.qualified_name)
            if existing is None:
                index[t.qualified_name] = TypeDeclaration(
                    name=t.name,
                    namespace=t.namespace,
                    kind=t.kind,
                    accessibility=t.accessibility,
                    properties=list(t.properties),
                    containing_types=list(t.containing_types),
                    location=t.location,
                    constants=dict(t.constants),
                )
            else:
                existing.properties.extend(t.properties)
                for key, value in t.constants.items():
                    existing.constants.setdefault(key, value)
        return index


def _candidate_names(
    name: str,
    context_namespace: str,
    usings: list[str],
    containing_types: list[str],
) -> list[str]:
    candidates: list[str] = []
    scope = [context_namespace] if context_namespace else []
    outer = containing_types[:]
    while outer:
        candidates.append(".".join([*scope, *outer, name]))
        outer.pop()
    parts = context_namespace.split(".") if context_namespace else []
    while parts:
        candidates.append(".".join([*parts, name]))
        parts.pop()
    candidates.append(name)
    candidates.extend(f"{u}.{name}" for u in usings)
    return candidates
