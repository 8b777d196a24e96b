"""
emitter — turns resolved mappings into C# source text.

Public API
──────────
ExtensionSourceBuilder — ResolvedMapping → extension class source file
attribute_source       — source for the two localisation attribute classes
"""

from enum_string_gen.emitter.attribute_sources import attribute_file_name, attribute_source
from enum_string_gen.emitter.source_builder import (
    AUTO_GENERATED_HEADER,
    ExtensionSourceBuilder,
    in_namespace,
    indent,
)

__all__ = [
    "AUTO_GENERATED_HEADER",
    "ExtensionSourceBuilder",
    "attribute_file_name",
    "attribute_source",
    "in_namespace",
    "indent",
]
