"""
Localisation resolution — binds enum members to resource properties.

Given an enum, the configuration of one localisation attribute and the
static string properties of the resource type, work out:

  • which members have a property named by the naming template
    (default "{0}{1}Description", i.e. <EnumType><Value>Description)
  • whether the configured DefaultPropertyName actually exists
  • whether a default is needed (some member unbound) but unavailable

Validation problems are returned as GenerationError records, never
raised.  Both default-related errors may be reported for one attribute.
"""

import logging
import re
from typing import Optional

from enum_string_gen.config import DEFAULT_METHOD_NAME, DEFAULT_NAME_FORMAT
from enum_string_gen.diagnostics.models import GenerationError
from enum_string_gen.exceptions import AttributeDataError
from .models import (
    AttributeConfig,
    DefaultLocalisation,
    EnumDescriptor,
    EnumValueLocalisation,
    ResolvedMapping,
    TypeMembers,
)

__all__ = ["format_property_name", "resolve_localisation"]

logger = logging.getLogger(__name__)

# .NET composite format items: {index[,alignment][:format]} and {{ }} escapes
_FORMAT_ITEM_RE = re.compile(r"\{\{|\}\}|\{(\d+)(?:,\s*(-?\d+))?(?::[^{}]*)?\}|[{}]")


def format_property_name(template: str, enum_type_name: str, value_name: str) -> str:
    """
    Substitute the enum type name ({0}) and value name ({1}) into *template*,
    following .NET string.Format rules for string arguments.

    Raises:
        AttributeDataError: The template is malformed or uses an index > 1.
    """
    args = (enum_type_name, value_name)

    def replace(m: re.Match) -> str:
        token = m.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        if m.group(1) is None:
            raise AttributeDataError(f"Resource name format {template!r} is not a valid format string")
        index = int(m.group(1))
        if index >= len(args):
            raise AttributeDataError(
                f"Resource name format {template!r} refers to argument {{{index}}}; "
                "only {0} (enum type) and {1} (value name) are available"
            )
        value = args[index]
        if m.group(2):
            width = int(m.group(2))
            value = value.rjust(width) if width > 0 else value.ljust(-width)
        return value

    return _FORMAT_ITEM_RE.sub(replace, template)


def resolve_localisation(
    enum: EnumDescriptor,
    config: AttributeConfig,
    members: TypeMembers,
    default_name_format: str = DEFAULT_NAME_FORMAT,
    default_method_name: str = DEFAULT_METHOD_NAME,
) -> tuple[Optional[ResolvedMapping], list[GenerationError]]:
    """
    Resolve one localisation attribute of one enum.

    Parameters
    ----------
    enum                : the annotated enum
    config              : the attribute's configuration
    members             : static string properties of config's resource type
    default_name_format : naming template used when the attribute gives none
    default_method_name : method name used when the attribute gives none

    Returns
    -------
    (mapping, errors) — mapping is None when nothing can be generated: the
    enum has no members, or no member is bound and there is no bound default.

    Raises
    ------
    AttributeDataError: malformed attribute values (e.g. a bad name format).
    """
    errors: list[GenerationError] = []

    name_format = config.name_format(default_name_format)
    method_name = config.method_name(default_method_name)

    # 1. Per-member bindings, declaration order
    localisations: list[EnumValueLocalisation] = []
    for value_name in enum.members:
        expected = format_property_name(name_format, enum.name, value_name)
        bound = members.reference(expected) if expected in members else None
        localisations.append(EnumValueLocalisation(value_name, bound))

    # 2. Default binding
    default_name = config.default_property_name
    default = DefaultLocalisation(
        original_property_name=default_name,
        value_to_return=members.reference(default_name) if default_name in members else None,
    )
    if default_name is not None and not default.has_return_value:
        errors.append(GenerationError.invalid_default_property(enum.name, default_name, method_name))

    # 3. Every member needs either its own property or a usable default
    unresolved = [loc.original_value_name for loc in localisations if not loc.has_return_value]
    if unresolved and not default.has_return_value:
        errors.append(GenerationError.missing_required_default(enum.name, method_name))

    bound = tuple(loc for loc in localisations if loc.has_return_value)
    logger.debug(
        "%s [%s]: %d/%d members bound via %r, default=%s, unresolved=%s",
        enum.qualified_name, config.mode.value, len(bound), len(enum.members),
        name_format, default.value_to_return, unresolved,
    )

    if not enum.members or not (bound or default.has_return_value):
        return None, errors

    mapping = ResolvedMapping(
        enum=enum,
        mode=config.mode,
        method_name=method_name,
        default=default,
        localisations=bound,
    )
    return mapping, errors
