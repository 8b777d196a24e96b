"""
Source text for the two localisation attributes.

The attributes are generated into the consuming project (once per pass)
so enums can be annotated without referencing a runtime assembly.
"""

from enum_string_gen.resolver.models import FormattingMode
from .source_builder import AUTO_GENERATED_HEADER, in_namespace

__all__ = ["attribute_file_name", "attribute_source"]

_ATTRIBUTE_TEMPLATE = """\
/// <summary>
/// Generates a {method_hint} extension method for the annotated enum, looking up
/// each value on <see cref="ResourceManager"/> by the name
/// <c>string.Format(ResourceNameFormat, enumTypeName, valueName)</c>.
/// </summary>
[global::System.AttributeUsage(global::System.AttributeTargets.Enum, AllowMultiple = false, Inherited = true)]
internal sealed class {class_name} : global::System.Attribute
{{
    public {class_name}(global::System.Type resourceManager)
    {{
        ResourceManager = resourceManager;
    }}

    public global::System.Type ResourceManager {{ get; }}
    public string DefaultPropertyName {{ get; set; }}
    public string ResourceNameFormat {{ get; set; }}
    public string MethodName {{ get; set; }}
}}"""

_METHOD_HINTS = {
    FormattingMode.LITERAL:   "<c>GetDescription(this TEnum value)</c>",
    FormattingMode.FORMATTED: "<c>GetDescription(this TEnum value, string detail)</c>",
}


def attribute_file_name(mode: FormattingMode) -> str:
    return f"{mode.attribute_name}Attribute.cs"


def attribute_source(mode: FormattingMode, namespace_name: str) -> str:
    """Full source file declaring the attribute class for *mode*."""
    body = _ATTRIBUTE_TEMPLATE.format(
        class_name=f"{mode.attribute_name}Attribute",
        method_hint=_METHOD_HINTS[mode],
    )
    return f"{AUTO_GENERATED_HEADER}\n{in_namespace(body, namespace_name)}\n"
