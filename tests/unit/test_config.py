"""
Unit tests for enum_string_gen.config.GeneratorConfig.
"""

import logging

import pytest

from enum_string_gen.config import (
    DEFAULT_ATTRIBUTE_NAMESPACE,
    DEFAULT_METHOD_NAME,
    DEFAULT_NAME_FORMAT,
    GeneratorConfig,
)


class TestGeneratorConfig:

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.attribute_namespace == DEFAULT_ATTRIBUTE_NAMESPACE == "EnumStringGenerator"
        assert config.default_name_format == DEFAULT_NAME_FORMAT == "{0}{1}Description"
        assert config.default_method_name == DEFAULT_METHOD_NAME == "GetDescription"
        assert config.emit_attribute_sources is True
        assert config.encoding == "utf-8"

    def test_from_env_empty(self):
        assert GeneratorConfig.from_env({}) == GeneratorConfig()

    def test_from_env_overrides(self):
        config = GeneratorConfig.from_env({
            "ESG_ATTRIBUTE_NAMESPACE": " My.Attributes ",
            "ESG_NAME_FORMAT": "{1}Text",
            "ESG_METHOD_NAME": "Describe",
            "ESG_ENCODING": "utf-16",
            "ESG_EMIT_ATTRIBUTES": "no",
        })
        assert config.attribute_namespace == "My.Attributes"
        assert config.default_name_format == "{1}Text"
        assert config.default_method_name == "Describe"
        assert config.encoding == "utf-16"
        assert config.emit_attribute_sources is False

    @pytest.mark.parametrize("flag, expected", [
        ("1", True), ("TRUE", True), ("on", True),
        ("0", False), ("False", False), ("off", False),
    ])
    def test_emit_attributes_flag(self, flag, expected):
        assert GeneratorConfig.from_env({"ESG_EMIT_ATTRIBUTES": flag}).emit_attribute_sources is expected

    def test_unrecognised_flag_warns_and_keeps_default(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = GeneratorConfig.from_env({"ESG_EMIT_ATTRIBUTES": "maybe"})
        assert config.emit_attribute_sources is True
        assert "ESG_EMIT_ATTRIBUTES" in caplog.text

    def test_blank_values_ignored(self):
        config = GeneratorConfig.from_env({"ESG_METHOD_NAME": "   ", "ESG_NAME_FORMAT": ""})
        assert config == GeneratorConfig()

    def test_from_env_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("ESG_METHOD_NAME", "ToText")
        assert GeneratorConfig.from_env().default_method_name == "ToText"

    def test_with_overrides_skips_none(self):
        base = GeneratorConfig(default_method_name="Describe")
        config = base.with_overrides(default_method_name=None, attribute_namespace="X")
        assert config.default_method_name == "Describe"
        assert config.attribute_namespace == "X"
        assert base.attribute_namespace == DEFAULT_ATTRIBUTE_NAMESPACE
