"""
ExtensionSourceBuilder — renders a ResolvedMapping as a C# extension class.

Source layout produced (literal variant)
────────────────────────────────────────
// <auto-generated/>
namespace My.Namespace                              (omitted for global enums)
{
    public static partial class ColourLocalizationExtensions
    {
        public static string GetDescription(this Colour valueToLookup)
        {
            switch (valueToLookup)
            {
                case Colour.Red:
                    return global::My.Strings.ColourRedDescription;
                default:
                    return global::My.Strings.Unknown;      (or throw)
            }
        }
    }
}

The formatted variant takes an extra `string detail` argument, assigns
the looked-up string and returns string.Format(discoveredValue, detail).

Output depends only on the mapping: the same mapping always renders to
the same text.
"""

import logging
import textwrap

from enum_string_gen.exceptions import EmitterError
from enum_string_gen.resolver.models import EnumDescriptor, FormattingMode, ResolvedMapping
from enum_string_gen.syntax.models import Accessibility, escape_identifier

__all__ = ["ExtensionSourceBuilder", "AUTO_GENERATED_HEADER", "indent", "in_namespace"]

logger = logging.getLogger(__name__)

AUTO_GENERATED_HEADER = "// <auto-generated/>"
_INDENT = "    "
_VALUE_PARAMETER = "valueToLookup"
_DETAIL_PARAMETER = "detail"
_INVALID_VALUE_MESSAGE = "Provided value was invalid"

_ACCESSIBILITY_TEXT = {
    Accessibility.PUBLIC:   "public ",
    Accessibility.INTERNAL: "internal ",
}


def indent(code: str, levels: int = 1) -> str:
    """Indent every non-blank line of *code*."""
    return textwrap.indent(code, _INDENT * levels)


def in_namespace(code: str, namespace_name: str) -> str:
    """Wrap *code* in a namespace block, unless the namespace is global."""
    if not namespace_name.strip():
        return code
    return f"namespace {namespace_name}\n{{\n{indent(code)}\n}}"


class ExtensionSourceBuilder:
    """
    Builds the extension-class source file for one ResolvedMapping.

    Usage::

        builder = ExtensionSourceBuilder()
        text = builder.build(mapping)
        name = builder.file_name(mapping)
    """

    def build(self, mapping: ResolvedMapping) -> str:
        """
        Render the complete source file for *mapping*.

        Raises:
            EmitterError: The mapping's enum has no members.
        """
        enum = mapping.enum
        if not enum.members:
            raise EmitterError(f"Cannot generate {mapping.method_name} for empty enum {enum.name}")

        class_text = (
            f"{self._accessibility_text(enum.accessibility)}static partial class "
            f"{enum.extension_class_name}\n"
            "{\n"
            f"{indent(self.build_method(mapping))}\n"
            "}"
        )
        body = in_namespace(class_text, enum.namespace)
        logger.debug("Rendered %s", mapping)
        return f"{AUTO_GENERATED_HEADER}\n{body}\n"

    def build_method(self, mapping: ResolvedMapping) -> str:
        """Render only the extension method for *mapping*."""
        enum_type = self._enum_type(mapping.enum)
        parameters = f"this {enum_type} {_VALUE_PARAMETER}"
        if mapping.has_formatting:
            parameters += f", string {_DETAIL_PARAMETER}"

        lines = [
            f"public static string {mapping.method_name}({parameters})",
            "{",
        ]
        if mapping.has_formatting:
            lines.append(f"{_INDENT}string discoveredValue;")
        lines.append(f"{_INDENT}switch ({_VALUE_PARAMETER})")
        lines.append(f"{_INDENT}{{")
        for localisation in mapping.localisations:
            lines.append(
                f"{_INDENT * 2}case {enum_type}.{escape_identifier(localisation.original_value_name)}:"
            )
            lines.extend(self._branch(mapping, localisation.value_to_return))
        lines.append(f"{_INDENT * 2}default:")
        if mapping.default.has_return_value:
            lines.extend(self._branch(mapping, mapping.default.value_to_return))
        else:
            lines.append(
                f"{_INDENT * 3}throw new global::System.ArgumentOutOfRangeException("
                f"nameof({_VALUE_PARAMETER}), {_VALUE_PARAMETER}, \"{_INVALID_VALUE_MESSAGE}\");"
            )
        lines.append(f"{_INDENT}}}")
        if mapping.has_formatting:
            lines.append(f"{_INDENT}return string.Format(discoveredValue, {_DETAIL_PARAMETER});")
        lines.append("}")
        return "\n".join(lines)

    @staticmethod
    def file_name(mapping: ResolvedMapping) -> str:
        """Hint name of the generated file, e.g. `ColourLocalizationExtensions.cs`."""
        suffix = ".Formatted" if mapping.mode is FormattingMode.FORMATTED else ""
        return f"{mapping.enum.extension_class_name}{suffix}.cs"

    # ── helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    def _branch(mapping: ResolvedMapping, value: str) -> list[str]:
        if mapping.has_formatting:
            return [
                f"{_INDENT * 3}discoveredValue = {value};",
                f"{_INDENT * 3}break;",
            ]
        return [f"{_INDENT * 3}return {value};"]

    @staticmethod
    def _enum_type(enum: EnumDescriptor) -> str:
        return ".".join(escape_identifier(part) for part in enum.type_reference.split("."))

    @staticmethod
    def _accessibility_text(accessibility: Accessibility) -> str:
        return _ACCESSIBILITY_TEXT.get(accessibility, "")
