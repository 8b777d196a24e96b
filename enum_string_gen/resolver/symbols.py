"""
Adapters from parsed declarations to the resolver's read-only inputs.

The resolver never touches syntax models directly: it consumes an
EnumDescriptor, an AttributeConfig and a TypeMembers.  This module builds
those from a Compilation and reports malformed attribute usage as
AttributeDataError.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Optional

from enum_string_gen.exceptions import AttributeDataError
from enum_string_gen.syntax.models import (
    CSHARP_KEYWORDS,
    Accessibility,
    AttributeData,
    Compilation,
    EnumDeclaration,
    RawExpression,
    TypeRef,
)
from .models import AttributeConfig, EnumDescriptor, FormattingMode, TypeMembers

__all__ = [
    "bind_constants",
    "describe_enum",
    "localisation_attributes",
    "read_attribute_config",
    "type_members_for",
]

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^@?[A-Za-z_][A-Za-z0-9_]*$")
_MEMBER_ACCESS_RE = re.compile(r"^(?:global::)?@?[A-Za-z_]\w*(?:(?:\.|::)@?[A-Za-z_]\w*)*$")
_KEPT_ACCESSIBILITY = {Accessibility.PUBLIC, Accessibility.INTERNAL, Accessibility.PRIVATE}


def describe_enum(declaration: EnumDeclaration) -> EnumDescriptor:
    """Build the resolver's view of one enum declaration."""
    accessibility = declaration.accessibility
    if accessibility not in _KEPT_ACCESSIBILITY:
        accessibility = Accessibility.NOT_APPLICABLE
    return EnumDescriptor(
        name=declaration.name,
        namespace=declaration.namespace,
        accessibility=accessibility,
        members=tuple(declaration.members),
        type_reference=declaration.type_reference,
        location=declaration.location,
    )


def localisation_attributes(declaration: EnumDeclaration) -> dict[FormattingMode, AttributeData]:
    """
    Return the recognised localisation attributes of an enum, keyed by mode,
    in FormattingMode order.

    Raises:
        AttributeDataError: The same attribute kind is applied twice.
    """
    by_name = {mode.attribute_name: mode for mode in FormattingMode}
    found: dict[FormattingMode, AttributeData] = {}
    for attribute in declaration.attributes:
        mode = by_name.get(attribute.short_name)
        if mode is None:
            continue
        if mode in found:
            raise AttributeDataError(
                f"{mode.attribute_name} is applied more than once to {declaration.name}"
            )
        found[mode] = attribute
    return {mode: found[mode] for mode in FormattingMode if mode in found}


def read_attribute_config(attribute: AttributeData, mode: FormattingMode) -> AttributeConfig:
    """
    Validate an attribute's arguments and wrap them as an AttributeConfig.

    Raises:
        AttributeDataError: No typeof(...) resource argument, an unknown
                            named argument, or an unusable MethodName.
    """
    if not attribute.constructor_args:
        raise AttributeDataError(f"{mode.attribute_name} requires a resource type argument")
    resource = attribute.constructor_args[0]
    if not isinstance(resource, TypeRef):
        raise AttributeDataError(
            f"{mode.attribute_name} expects typeof(ResourceType) as its first argument, got {resource}"
        )
    if len(attribute.constructor_args) > 1:
        raise AttributeDataError(
            f"{mode.attribute_name} takes one constructor argument, got {len(attribute.constructor_args)}"
        )

    known = {
        AttributeConfig.DEFAULT_PROPERTY_NAME,
        AttributeConfig.RESOURCE_NAME_FORMAT,
        AttributeConfig.METHOD_NAME,
    }
    unknown = sorted(set(attribute.named_args) - known)
    if unknown:
        raise AttributeDataError(
            f"{mode.attribute_name} has no settable propert{'y' if len(unknown) == 1 else 'ies'} "
            f"{', '.join(unknown)}"
        )

    config = AttributeConfig(
        mode=mode,
        resource_type_name=resource.name,
        named_values=tuple(sorted(attribute.named_args.items())),
    )

    # named_str raises on non-string values
    values = {key: config.named_str(key) for key in known}
    method_name = values[AttributeConfig.METHOD_NAME]
    if method_name is not None and not _is_identifier(method_name):
        raise AttributeDataError(f"MethodName {method_name!r} is not a valid C# identifier")
    return config


def type_members_for(
    compilation: Compilation,
    resource_type_name: str,
    declaration: EnumDeclaration,
) -> TypeMembers:
    """
    Look up a resource type from the point of view of the enum declaration
    and list its static string properties.

    A type that cannot be found behaves like a type with no members, the
    same as an unresolved typeof(...) in the compiler.
    """
    found = compilation.find_type(
        resource_type_name,
        context_namespace=declaration.namespace,
        usings=declaration.usings,
        containing_types=declaration.containing_types,
    )
    if found is None:
        logger.warning(
            "Resource type %s used by %s was not found in the compilation",
            resource_type_name, declaration.qualified_name,
        )
        return TypeMembers.of(resource_type_name, ())
    return TypeMembers.of(found.qualified_name, found.static_string_property_names())


def bind_constants(
    compilation: Compilation,
    attribute: AttributeData,
    declaration: EnumDeclaration,
) -> AttributeData:
    """
    Replace named arguments that refer to `const string` fields, such as
    `DefaultPropertyName = Keys.Fallback`, with the constant's value.

    Anything that does not name a known constant is left as written, so
    read_attribute_config still reports it.
    """
    named_args = dict(attribute.named_args)
    changed = False
    for key, value in attribute.named_args.items():
        if not isinstance(value, RawExpression):
            continue
        constant = _constant_value(compilation, value.text, declaration)
        if constant is not None:
            logger.debug("%s.%s = %s resolved to %r", attribute.name, key, value.text, constant)
            named_args[key] = constant
            changed = True
    if not changed:
        return attribute
    return replace(attribute, named_args=named_args)


def _constant_value(
    compilation: Compilation,
    expression: str,
    declaration: EnumDeclaration,
) -> Optional[str]:
    if not _MEMBER_ACCESS_RE.match(expression):
        return None
    type_name, _, member = expression.rpartition(".")
    member = member.lstrip("@")
    if type_name:
        found = compilation.find_type(
            type_name,
            context_namespace=declaration.namespace,
            usings=declaration.usings,
            containing_types=declaration.containing_types,
        )
        return found.constants.get(member) if found is not None else None

    # unqualified: a constant of one of the enum's containing types
    scope = [declaration.namespace] if declaration.namespace else []
    outer = list(declaration.containing_types)
    while outer:
        found = compilation.find_type("global::" + ".".join([*scope, *outer]))
        if found is not None and member in found.constants:
            return found.constants[member]
        outer.pop()
    return None


def _is_identifier(name: str) -> bool:
    if not _IDENTIFIER_RE.match(name):
        return False
    return name.startswith("@") or name not in CSHARP_KEYWORDS
