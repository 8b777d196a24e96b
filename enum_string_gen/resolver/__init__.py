"""
Resolution of enum members to resource properties — the validation core.

resolve_localisation is a pure function over the read-only inputs built
by the `symbols` adapters; it returns a ResolvedMapping (or None) plus
the GenerationErrors found.
"""

from .localisation_resolver import format_property_name, resolve_localisation
from .models import (
    AttributeConfig,
    DefaultLocalisation,
    EnumDescriptor,
    EnumValueLocalisation,
    FormattingMode,
    ResolvedMapping,
    TypeMembers,
)
from .symbols import (
    bind_constants,
    describe_enum,
    localisation_attributes,
    read_attribute_config,
    type_members_for,
)

__all__ = [
    "format_property_name",
    "resolve_localisation",
    "AttributeConfig",
    "DefaultLocalisation",
    "EnumDescriptor",
    "EnumValueLocalisation",
    "FormattingMode",
    "ResolvedMapping",
    "TypeMembers",
    "bind_constants",
    "describe_enum",
    "localisation_attributes",
    "read_attribute_config",
    "type_members_for",
]
