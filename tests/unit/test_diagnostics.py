"""
Unit tests for enum_string_gen.diagnostics.
"""

import pytest

from enum_string_gen.diagnostics import (
    DIAGNOSTIC_PREFIX,
    Diagnostic,
    DiagnosticBag,
    GenerationError,
    GenerationErrorCode,
    Severity,
    create_diagnostic,
    format_diagnostic,
)
from enum_string_gen.syntax.models import SourceLocation


LOCATION = SourceLocation("Colours.cs", 12, 5)


# ── Error codes ───────────────────────────────────────────────────────────────

class TestGenerationErrorCode:

    @pytest.mark.parametrize("code, expected", [
        (GenerationErrorCode.UNSPECIFIED_INTERNAL_ERROR, "ESG0000"),
        (GenerationErrorCode.MISSING_REQUIRED_DEFAULT,   "ESG0001"),
        (GenerationErrorCode.INVALID_DEFAULT_PROPERTY,   "ESG0002"),
    ])
    def test_ids(self, code, expected):
        assert code.id == expected
        assert code.id.startswith(DIAGNOSTIC_PREFIX)


# ── GenerationError ───────────────────────────────────────────────────────────

class TestGenerationError:

    def test_invalid_default_keeps_original_name(self):
        error = GenerationError.invalid_default_property("Colour", "Fallback")
        assert error.code is GenerationErrorCode.INVALID_DEFAULT_PROPERTY
        assert error.extra_data[GenerationError.ORIGINAL_DEFAULT_PROPERTY_NAME] == "Fallback"

    def test_extra_data_is_read_only(self):
        error = GenerationError.internal("Colour", "boom")
        with pytest.raises(TypeError):
            error.extra_data["ExceptionMessage"] = "changed"

    def test_value_equality_and_hash(self):
        a = GenerationError.invalid_default_property("Colour", "X")
        b = GenerationError.invalid_default_property("Colour", "X")
        c = GenerationError.invalid_default_property("Colour", "Y")
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2


# ── create_diagnostic ─────────────────────────────────────────────────────────

class TestCreateDiagnostic:

    def test_missing_default_message(self):
        d = create_diagnostic(GenerationError.missing_required_default("Colour"), LOCATION)
        assert d.id == "ESG0001"
        assert d.title == "String Generator"
        assert d.severity is Severity.ERROR
        assert d.location == LOCATION
        assert d.message == (
            "Enum type Colour requires a default string for GetDescription and none is "
            "available; a method has been generated anyway but will likely result in "
            "runtime errors"
        )

    def test_invalid_default_message(self):
        d = create_diagnostic(GenerationError.invalid_default_property("Colour", "Fallback"), LOCATION)
        assert d.id == "ESG0002"
        assert d.message == (
            "Enum type Colour was given a default property of Fallback for "
            "GetDescription, but that property wasn't found"
        )

    def test_messages_name_the_generated_method(self):
        missing = create_diagnostic(GenerationError.missing_required_default("Colour", "ToText"), LOCATION)
        invalid = create_diagnostic(
            GenerationError.invalid_default_property("Colour", "Fallback", "ToText"), LOCATION
        )
        assert "default string for ToText and none" in missing.message
        assert "GetDescription" not in missing.message
        assert "of Fallback for ToText, but" in invalid.message

    def test_internal_error_has_no_location(self):
        d = create_diagnostic(GenerationError.internal("Colour", "KeyError: 'x'"), LOCATION)
        assert d.id == "ESG0000"
        assert d.location is None
        assert d.message.endswith("error is KeyError: 'x'")


# ── format_diagnostic ─────────────────────────────────────────────────────────

class TestFormatDiagnostic:

    def test_with_location(self):
        d = Diagnostic("ESG0001", "String Generator", "msg", Severity.ERROR, LOCATION)
        assert format_diagnostic(d) == "Colours.cs(12,5): error ESG0001: msg"

    def test_without_location(self):
        d = Diagnostic("ESG0000", "String Generator", "msg")
        assert format_diagnostic(d) == "enum-string-gen: error ESG0000: msg"

    def test_warning_severity(self):
        d = Diagnostic("ESG0009", "String Generator", "careful", Severity.WARNING)
        assert format_diagnostic(d) == "enum-string-gen: warning ESG0009: careful"


# ── DiagnosticBag ─────────────────────────────────────────────────────────────

class TestDiagnosticBag:

    def test_counts_errors_only(self):
        bag = DiagnosticBag()
        bag.report(Diagnostic("ESG0009", "t", "w", Severity.WARNING))
        assert not bag.has_errors
        bag.report_error(GenerationError.missing_required_default("E"), LOCATION)
        assert bag.error_count == 1
        assert bag.has_errors
        assert len(bag) == 2

    def test_keeps_report_order(self):
        bag = DiagnosticBag()
        bag.report_error(GenerationError.invalid_default_property("E", "X"), LOCATION)
        bag.report_error(GenerationError.missing_required_default("E"), LOCATION)
        assert bag.ids() == ["ESG0002", "ESG0001"]

    def test_sorted_by_location_then_id(self):
        bag = DiagnosticBag()
        bag.report_error(GenerationError.missing_required_default("B"), SourceLocation("b.cs", 1, 1))
        bag.report_error(GenerationError.invalid_default_property("A", "X"), SourceLocation("a.cs", 9, 1))
        bag.report_error(GenerationError.missing_required_default("A"), SourceLocation("a.cs", 9, 1))
        bag.report_error(GenerationError.internal("C", "boom"), None)
        assert [(d.location.path if d.location else None, d.id) for d in bag.sorted()] == [
            (None, "ESG0000"),
            ("a.cs", "ESG0001"),
            ("a.cs", "ESG0002"),
            ("b.cs", "ESG0001"),
        ]
