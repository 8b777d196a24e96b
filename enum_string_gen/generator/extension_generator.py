"""
ExtensionGenerator — one generation pass over a Compilation.

Pipeline per annotated enum
───────────────────────────
  localisation_attributes(enum)         recognised attributes by FormattingMode
  → read_attribute_config(attr, mode)   AttributeConfig
  → type_members_for(...)               TypeMembers of the resource type
  → resolve_localisation(...)           (ResolvedMapping | None, [GenerationError])
  → ExtensionSourceBuilder.build(...)   one GeneratedSource per mapping

Errors from resolution are reported at the enum declaration.  Anything
raised while processing one enum becomes a single UnspecifiedInternalError
for that enum; the pass always continues with the next enum.
"""

import logging
from typing import Optional

from enum_string_gen.config import GeneratorConfig
from enum_string_gen.diagnostics import GenerationError
from enum_string_gen.emitter import ExtensionSourceBuilder, attribute_file_name, attribute_source
from enum_string_gen.resolver import (
    FormattingMode,
    ResolvedMapping,
    bind_constants,
    describe_enum,
    localisation_attributes,
    read_attribute_config,
    resolve_localisation,
    type_members_for,
)
from enum_string_gen.syntax.models import Compilation, EnumDeclaration
from .models import GeneratedSource, GeneratorResult

__all__ = ["ExtensionGenerator"]

logger = logging.getLogger(__name__)


class ExtensionGenerator:
    """
    Produces extension-method sources and diagnostics for a Compilation.

    Usage::

        result = ExtensionGenerator(GeneratorConfig()).execute(compilation)
        for source in result.sources:
            print(source.hint_name)
        for diagnostic in result.diagnostics:
            print(format_diagnostic(diagnostic))
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        builder: Optional[ExtensionSourceBuilder] = None,
    ) -> None:
        self._config = config or GeneratorConfig()
        self._builder = builder or ExtensionSourceBuilder()

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def execute(self, compilation: Compilation) -> GeneratorResult:
        """Run one pass. Never raises for problems with individual enums."""
        result = GeneratorResult()
        candidates = [e for e in compilation.enums() if e.attributes]
        if not candidates:
            logger.debug("No enums with attributes; nothing to generate")
            return result

        if self._config.emit_attribute_sources:
            for mode in FormattingMode:
                result.sources.append(GeneratedSource(
                    hint_name=attribute_file_name(mode),
                    text=attribute_source(mode, self._config.attribute_namespace),
                ))

        used_names = {s.hint_name for s in result.sources}
        for declaration in candidates:
            for source in self._process_enum(compilation, declaration, result):
                hint_name = self._unique_hint_name(source.hint_name, declaration, used_names)
                used_names.add(hint_name)
                result.sources.append(GeneratedSource(hint_name, source.text))

        logger.info(
            "Generated %d source(s) for %d annotated enum(s); %d error(s)",
            len(result.sources), len(candidates), result.diagnostics.error_count,
        )
        return result

    # ── per-enum pass ─────────────────────────────────────────────────────────

    def _process_enum(
        self,
        compilation: Compilation,
        declaration: EnumDeclaration,
        result: GeneratorResult,
    ) -> list[GeneratedSource]:
        """
        Resolve and render every localisation attribute of one enum.

        Diagnostics are only added to *result* once the whole enum has been
        processed, so a failure part-way through reports the internal error
        alone.
        """
        try:
            errors, mappings = self._resolve_enum(compilation, declaration)
            sources = [
                GeneratedSource(self._builder.file_name(m), self._builder.build(m))
                for m in mappings
            ]
        except Exception as exc:  # one enum must never abort the pass
            logger.debug("Failed to process %s", declaration.qualified_name, exc_info=True)
            error = GenerationError.internal(declaration.name, f"{type(exc).__name__}: {exc}")
            result.diagnostics.report_error(error, None)
            return []

        for error in errors:
            result.diagnostics.report_error(error, declaration.location)
        return sources

    def _resolve_enum(
        self,
        compilation: Compilation,
        declaration: EnumDeclaration,
    ) -> tuple[list[GenerationError], list[ResolvedMapping]]:
        attributes = localisation_attributes(declaration)
        if not attributes:
            return [], []

        enum = describe_enum(declaration)
        errors: list[GenerationError] = []
        mappings: list[ResolvedMapping] = []
        for mode, attribute in attributes.items():
            attribute = bind_constants(compilation, attribute, declaration)
            config = read_attribute_config(attribute, mode)
            members = type_members_for(compilation, config.resource_type_name, declaration)
            mapping, found = resolve_localisation(
                enum,
                config,
                members,
                default_name_format=self._config.default_name_format,
                default_method_name=self._config.default_method_name,
            )
            errors.extend(found)
            if mapping is not None:
                mappings.append(mapping)
            else:
                logger.debug("%s [%s]: nothing to generate", declaration.qualified_name, mode.value)
        return errors, mappings

    @staticmethod
    def _unique_hint_name(hint_name: str, declaration: EnumDeclaration, used: set[str]) -> str:
        if hint_name not in used:
            return hint_name
        prefix = declaration.namespace or "global"
        candidate = f"{prefix}.{hint_name}"
        counter = 2
        while candidate in used:
            candidate = f"{prefix}.{counter}.{hint_name}"
            counter += 1
        logger.debug("Hint name %s already used; renamed to %s", hint_name, candidate)
        return candidate
