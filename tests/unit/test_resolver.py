"""
Unit tests for the resolver module.

Covers:
  • format_property_name (.NET composite format rules)
  • AttributeConfig named-value accessors
  • TypeMembers membership / references
  • resolve_localisation scenarios A–E and the error-reporting properties
"""

import pytest

from enum_string_gen.diagnostics import GenerationError, GenerationErrorCode
from enum_string_gen.exceptions import AttributeDataError
from enum_string_gen.resolver import (
    AttributeConfig,
    EnumDescriptor,
    FormattingMode,
    TypeMembers,
    format_property_name,
    resolve_localisation,
)
from enum_string_gen.syntax.models import Accessibility


RESOURCE = "Test.Namespace.LocalisedStrings"


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def simple_enum() -> EnumDescriptor:
    return EnumDescriptor(
        name="SimpleEnum",
        namespace="Test.Namespace",
        accessibility=Accessibility.PUBLIC,
        members=("One", "Two"),
    )


def _config(mode=FormattingMode.LITERAL, **named) -> AttributeConfig:
    return AttributeConfig(mode=mode, resource_type_name=RESOURCE, named_values=tuple(named.items()))


def _members(*names) -> TypeMembers:
    return TypeMembers.of(RESOURCE, names)


def _codes(errors) -> list[GenerationErrorCode]:
    return [e.code for e in errors]


# ── format_property_name ──────────────────────────────────────────────────────

class TestFormatPropertyName:

    def test_default_template(self):
        assert format_property_name("{0}{1}Description", "SimpleEnum", "One") == "SimpleEnumOneDescription"

    def test_reordered_and_repeated_placeholders(self):
        assert format_property_name("{1}_{0}_{1}", "E", "V") == "V_E_V"

    def test_escaped_braces(self):
        assert format_property_name("{{{0}}}", "E", "V") == "{E}"

    def test_alignment_and_format_spec(self):
        assert format_property_name("{0,3}|{1,-3}|{1:x}", "E", "V") == "  E|V  |V"

    def test_template_without_placeholders(self):
        assert format_property_name("Fixed", "E", "V") == "Fixed"

    @pytest.mark.parametrize("template", ["{2}", "{0", "0}", "{a}", "{}"])
    def test_malformed_template_raises(self, template):
        with pytest.raises(AttributeDataError):
            format_property_name(template, "E", "V")


# ── AttributeConfig ───────────────────────────────────────────────────────────

class TestAttributeConfig:

    def test_missing_values_use_defaults(self):
        config = _config()
        assert config.default_property_name is None
        assert config.name_format("{0}{1}Description") == "{0}{1}Description"
        assert config.method_name("GetDescription") == "GetDescription"

    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_values_mean_not_supplied(self, blank):
        config = _config(DefaultPropertyName=blank, ResourceNameFormat=blank, MethodName=blank)
        assert config.default_property_name is None
        assert config.name_format("F") == "F"
        assert config.method_name("M") == "M"

    def test_supplied_values_win(self):
        config = _config(DefaultPropertyName="Fallback", ResourceNameFormat="{1}Text", MethodName="ToText")
        assert config.default_property_name == "Fallback"
        assert config.name_format("F") == "{1}Text"
        assert config.method_name("M") == "ToText"

    def test_non_string_value_raises(self):
        with pytest.raises(AttributeDataError):
            _ = _config(MethodName=42).method_name("M")


# ── TypeMembers ───────────────────────────────────────────────────────────────

class TestTypeMembers:

    def test_membership(self):
        members = _members("A", "B")
        assert "A" in members
        assert "C" not in members
        assert None not in members
        assert "" not in members

    def test_reference_is_global_qualified(self):
        assert _members("A").reference("A") == "global::Test.Namespace.LocalisedStrings.A"


# ── resolve_localisation: scenarios ───────────────────────────────────────────

class TestScenarios:

    def test_scenario_a_all_values_bound(self, simple_enum):
        mapping, errors = resolve_localisation(
            simple_enum, _config(), _members("SimpleEnumOneDescription", "SimpleEnumTwoDescription"),
        )
        assert errors == []
        assert [(l.original_value_name, l.value_to_return) for l in mapping.localisations] == [
            ("One", f"global::{RESOURCE}.SimpleEnumOneDescription"),
            ("Two", f"global::{RESOURCE}.SimpleEnumTwoDescription"),
        ]
        assert not mapping.default.has_return_value
        assert mapping.method_name == "GetDescription"
        assert mapping.has_formatting is False

    def test_scenario_b_default_only(self, simple_enum):
        mapping, errors = resolve_localisation(
            simple_enum, _config(DefaultPropertyName="Default"), _members("Default"),
        )
        assert errors == []
        assert mapping.localisations == ()
        assert mapping.default.value_to_return == f"global::{RESOURCE}.Default"
        assert mapping.default.original_property_name == "Default"

    def test_scenario_c_nothing_bound(self, simple_enum):
        mapping, errors = resolve_localisation(simple_enum, _config(), _members())
        assert errors == [GenerationError.missing_required_default("SimpleEnum", "GetDescription")]
        assert mapping is None

    def test_scenario_d_invalid_default_only(self, simple_enum):
        mapping, errors = resolve_localisation(
            simple_enum,
            _config(DefaultPropertyName="FaultyDefault"),
            _members("SimpleEnumOneDescription", "SimpleEnumTwoDescription"),
        )
        assert errors == [GenerationError.invalid_default_property("SimpleEnum", "FaultyDefault", "GetDescription")]
        assert len(mapping.localisations) == 2
        assert not mapping.default.has_return_value

    def test_scenario_e_both_errors(self, simple_enum):
        mapping, errors = resolve_localisation(
            simple_enum,
            _config(DefaultPropertyName="FaultyDefault"),
            _members("SimpleEnumOneDescription"),
        )
        assert _codes(errors) == [
            GenerationErrorCode.INVALID_DEFAULT_PROPERTY,
            GenerationErrorCode.MISSING_REQUIRED_DEFAULT,
        ]
        assert errors[0].extra_data[GenerationError.ORIGINAL_DEFAULT_PROPERTY_NAME] == "FaultyDefault"
        assert [l.original_value_name for l in mapping.localisations] == ["One"]


# ── resolve_localisation: properties ──────────────────────────────────────────

class TestResolutionProperties:

    def test_valid_default_never_reports_invalid_default(self, simple_enum):
        _, errors = resolve_localisation(
            simple_enum, _config(DefaultPropertyName="Default"), _members("Default", "SimpleEnumOneDescription"),
        )
        assert errors == []

    def test_missing_default_reported_once_for_many_unresolved(self):
        enum = EnumDescriptor("Big", "", Accessibility.INTERNAL, ("A", "B", "C", "D"))
        _, errors = resolve_localisation(enum, _config(), _members("BigADescription"))
        assert _codes(errors) == [GenerationErrorCode.MISSING_REQUIRED_DEFAULT]

    def test_partial_binding_without_default_still_generates(self, simple_enum):
        mapping, errors = resolve_localisation(simple_enum, _config(), _members("SimpleEnumTwoDescription"))
        assert _codes(errors) == [GenerationErrorCode.MISSING_REQUIRED_DEFAULT]
        assert [l.original_value_name for l in mapping.localisations] == ["Two"]

    def test_declaration_order_kept(self):
        enum = EnumDescriptor("E", "", Accessibility.PUBLIC, ("Zeta", "Alpha", "Mid"))
        mapping, _ = resolve_localisation(
            enum, _config(), _members("EAlphaDescription", "EMidDescription", "EZetaDescription"),
        )
        assert [l.original_value_name for l in mapping.localisations] == ["Zeta", "Alpha", "Mid"]

    def test_custom_name_format_and_method(self, simple_enum):
        mapping, errors = resolve_localisation(
            simple_enum,
            _config(ResourceNameFormat="{1}Of{0}", MethodName="ToDisplayString"),
            _members("OneOfSimpleEnum", "TwoOfSimpleEnum"),
        )
        assert errors == []
        assert mapping.method_name == "ToDisplayString"
        assert mapping.localisations[1].value_to_return == f"global::{RESOURCE}.TwoOfSimpleEnum"

    def test_errors_carry_effective_method_name(self, simple_enum):
        _, errors = resolve_localisation(
            simple_enum,
            _config(DefaultPropertyName="Missing", MethodName="ToDisplayString"),
            _members("SimpleEnumOneDescription"),
        )
        assert [e.extra_data[GenerationError.METHOD_NAME] for e in errors] == [
            "ToDisplayString", "ToDisplayString",
        ]

    def test_pass_wide_defaults_apply_when_attribute_is_silent(self, simple_enum):
        mapping, _ = resolve_localisation(
            simple_enum, _config(), _members("OneText", "TwoText"),
            default_name_format="{1}Text", default_method_name="Describe",
        )
        assert len(mapping.localisations) == 2
        assert mapping.method_name == "Describe"

    def test_formatted_mode_carries_flag(self, simple_enum):
        mapping, _ = resolve_localisation(
            simple_enum, _config(FormattingMode.FORMATTED),
            _members("SimpleEnumOneDescription", "SimpleEnumTwoDescription"),
        )
        assert mapping.mode is FormattingMode.FORMATTED
        assert mapping.has_formatting is True

    def test_empty_enum_produces_nothing(self):
        enum = EnumDescriptor("Empty", "", Accessibility.PUBLIC, ())
        mapping, errors = resolve_localisation(enum, _config(DefaultPropertyName="Default"), _members("Default"))
        assert mapping is None
        assert errors == []

    def test_malformed_format_raises(self, simple_enum):
        with pytest.raises(AttributeDataError):
            resolve_localisation(simple_enum, _config(ResourceNameFormat="{0}{9}"), _members())

    def test_resolution_is_repeatable(self, simple_enum):
        args = (simple_enum, _config(DefaultPropertyName="X"), _members("SimpleEnumOneDescription"))
        assert resolve_localisation(*args) == resolve_localisation(*args)
