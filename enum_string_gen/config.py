"""Runtime configuration for a generation pass."""

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

__all__ = [
    "DEFAULT_NAME_FORMAT",
    "DEFAULT_METHOD_NAME",
    "DEFAULT_ATTRIBUTE_NAMESPACE",
    "GeneratorConfig",
]

logger = logging.getLogger(__name__)

DEFAULT_NAME_FORMAT         = "{0}{1}Description"     # {0} = enum type, {1} = value
DEFAULT_METHOD_NAME         = "GetDescription"
DEFAULT_ATTRIBUTE_NAMESPACE = "EnumStringGenerator"

_TRUE_VALUES  = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings shared by every enum in one generation pass."""
    attribute_namespace:    str  = DEFAULT_ATTRIBUTE_NAMESPACE
    emit_attribute_sources: bool = True
    default_name_format:    str  = DEFAULT_NAME_FORMAT
    default_method_name:    str  = DEFAULT_METHOD_NAME
    encoding:               str  = "utf-8"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GeneratorConfig":
        """
        Build a config from ESG_* environment variables, falling back to defaults.

        ESG_ATTRIBUTE_NAMESPACE, ESG_EMIT_ATTRIBUTES, ESG_NAME_FORMAT,
        ESG_METHOD_NAME, ESG_ENCODING
        """
        env = os.environ if environ is None else environ
        config = cls()
        overrides: dict = {}

        if env.get("ESG_ATTRIBUTE_NAMESPACE", "").strip():
            overrides["attribute_namespace"] = env["ESG_ATTRIBUTE_NAMESPACE"].strip()
        if env.get("ESG_NAME_FORMAT", "").strip():
            overrides["default_name_format"] = env["ESG_NAME_FORMAT"].strip()
        if env.get("ESG_METHOD_NAME", "").strip():
            overrides["default_method_name"] = env["ESG_METHOD_NAME"].strip()
        if env.get("ESG_ENCODING", "").strip():
            overrides["encoding"] = env["ESG_ENCODING"].strip()

        flag = env.get("ESG_EMIT_ATTRIBUTES", "").strip().lower()
        if flag in _TRUE_VALUES:
            overrides["emit_attribute_sources"] = True
        elif flag in _FALSE_VALUES:
            overrides["emit_attribute_sources"] = False
        elif flag:
            logger.warning("Ignoring unrecognised ESG_EMIT_ATTRIBUTES value: %r", flag)

        return replace(config, **overrides)

    def with_overrides(self, **overrides) -> "GeneratorConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
