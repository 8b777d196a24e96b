from .cs_parser import CSharpDeclarationParser
from .discovery import SourceDiscovery
from .models import (
    CSHARP_KEYWORDS,
    Accessibility,
    AttributeData,
    Compilation,
    EnumDeclaration,
    PropertyDeclaration,
    RawExpression,
    SourceFile,
    SourceLocation,
    TypeDeclaration,
    TypeRef,
    escape_identifier,
)

__all__ = [
    "CSharpDeclarationParser",
    "SourceDiscovery",
    "CSHARP_KEYWORDS",
    "escape_identifier",
    "Accessibility",
    "AttributeData",
    "Compilation",
    "EnumDeclaration",
    "PropertyDeclaration",
    "RawExpression",
    "SourceFile",
    "SourceLocation",
    "TypeDeclaration",
    "TypeRef",
]
