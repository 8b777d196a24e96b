"""
Data models for the generator module.

Key concepts
────────────
GeneratedSource  — one named source text added to the compilation
GeneratorResult  — everything one generation pass produced
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from enum_string_gen.diagnostics import DiagnosticBag

__all__ = ["GeneratedSource", "GeneratorResult"]


@dataclass(frozen=True)
class GeneratedSource:
    """A source file produced by the generator, identified by its hint name."""
    hint_name: str                     # e.g. "ColourLocalizationExtensions.cs"
    text:      str

    def __str__(self) -> str:
        return f"{self.hint_name} ({len(self.text)} chars)"


@dataclass
class GeneratorResult:
    """
    Output of one ExtensionGenerator pass.

    sources keep a stable order: attribute definitions first, then one
    file per resolved enum/variant in enum declaration order.
    """
    sources:     list[GeneratedSource] = field(default_factory=list)
    diagnostics: DiagnosticBag = field(default_factory=DiagnosticBag)

    @property
    def has_errors(self) -> bool:
        return self.diagnostics.has_errors

    def hint_names(self) -> list[str]:
        return [s.hint_name for s in self.sources]

    def source(self, hint_name: str) -> Optional[GeneratedSource]:
        return next((s for s in self.sources if s.hint_name == hint_name), None)

    def __iter__(self) -> Iterator[GeneratedSource]:
        return iter(self.sources)

    def __str__(self) -> str:
        return (
            f"GeneratorResult({len(self.sources)} sources, "
            f"{self.diagnostics.error_count} errors)"
        )
